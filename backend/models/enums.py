import enum


# Database columns store the human readable value ("Pending"), not the member name
def enum_values(enum_cls):
    return [member.value for member in enum_cls]


class Role(str, enum.Enum):
    ADMIN = "Admin"
    USER = "User"


class EmployeeStatus(str, enum.Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    ON_LEAVE = "OnLeave"
    TERMINATED = "Terminated"


class RequestType(str, enum.Enum):
    EQUIPMENT = "Equipment"
    LEAVE = "Leave"
    RESOURCES = "Resources"


class RequestStatus(str, enum.Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class WorkflowType(str, enum.Enum):
    ONBOARDING = "Onboarding"
    DEPARTMENT_CHANGE = "DepartmentChange"
    TERMINATION = "Termination"
    EQUIPMENT_REQUEST = "EquipmentRequest"
    LEAVE_REQUEST = "LeaveRequest"
    RESOURCE_REQUEST = "ResourceRequest"


# Workflow statuses share the request approval states
WorkflowStatus = RequestStatus

REQUEST_WORKFLOW_TYPES = {
    RequestType.EQUIPMENT: WorkflowType.EQUIPMENT_REQUEST,
    RequestType.LEAVE: WorkflowType.LEAVE_REQUEST,
    RequestType.RESOURCES: WorkflowType.RESOURCE_REQUEST,
}
