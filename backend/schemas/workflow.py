from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime
from models.enums import WorkflowType, WorkflowStatus


# Schema for creating a workflow by hand (admin)
class WorkflowCreate(BaseModel):
    employee_id: int
    type: WorkflowType
    status: WorkflowStatus = WorkflowStatus.PENDING
    details: Optional[str] = None


# Schema for starting an onboarding workflow
class OnboardingCreate(BaseModel):
    employee_id: int
    details: Optional[str] = None


class WorkflowStatusUpdate(BaseModel):
    status: WorkflowStatus


# Output schema for workflow rows
class WorkflowOut(BaseModel):
    id: int
    type: WorkflowType
    status: WorkflowStatus
    details: Optional[str] = None
    employee_id: Optional[int] = None
    request_id: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
