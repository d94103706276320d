# services/employee_service.py
import logging
from sqlalchemy.orm import Session, joinedload

from models.account import Account
from models.employee import Employee
from models.enums import EmployeeStatus, WorkflowType, WorkflowStatus
from services import department_service, workflow_service
from utils.errors import AppError

logger = logging.getLogger(__name__)

# Columns that cannot be cleared; a null in an update leaves them unchanged
REQUIRED_FIELDS = ("employee_id", "position", "hire_date", "status")


def _query(db: Session):
    return db.query(Employee).options(
        joinedload(Employee.user),
        joinedload(Employee.department),
        joinedload(Employee.manager),
    )


def create(db: Session, params: dict) -> Employee:
    _ensure_unique_code(db, params["employee_id"])
    if params.get("user_id") is not None:
        _check_account(db, params["user_id"])
    if params.get("department_id") is not None:
        department_service.get_by_id(db, params["department_id"])
    if params.get("reporting_to") is not None:
        _get_employee(db, params["reporting_to"], "Manager not found")

    employee = Employee(**params)
    db.add(employee)
    db.flush()

    workflow_service.record(
        db,
        type=WorkflowType.ONBOARDING,
        status=WorkflowStatus.PENDING,
        employee_id=employee.id,
        details=f"Onboarding for {employee.position} {employee.employee_id}",
    )
    db.commit()
    logger.info("Employee %s (%s) created", employee.id, employee.employee_id)
    return get_by_id(db, employee.id)


def get_all(db: Session):
    return _query(db).order_by(Employee.id).all()


def get_by_id(db: Session, employee_id: int) -> Employee:
    employee = _query(db).filter(Employee.id == employee_id).first()
    if not employee:
        raise AppError.not_found("Employee not found")
    return employee


def update(db: Session, employee_id: int, params: dict) -> Employee:
    employee = get_by_id(db, employee_id)

    code = params.get("employee_id")
    if code and code != employee.employee_id:
        _ensure_unique_code(db, code)
    if params.get("user_id") is not None and params["user_id"] != employee.user_id:
        _check_account(db, params["user_id"])
    if params.get("reporting_to") is not None:
        if params["reporting_to"] == employee.id:
            raise AppError.validation("An employee cannot report to themselves")
        _get_employee(db, params["reporting_to"], "Manager not found")

    # Resolve the target department before anything changes
    new_department_id = params.pop("department_id", employee.department_id)
    new_department = None
    if new_department_id is not None and new_department_id != employee.department_id:
        new_department = department_service.get_by_id(db, new_department_id)

    old_status = employee.status
    for field, value in params.items():
        if value is None and field in REQUIRED_FIELDS:
            continue
        setattr(employee, field, value)

    if new_department is not None:
        department_service.move_employee(db, employee, new_department)
    elif new_department_id is None:
        employee.department = None

    if employee.status == EmployeeStatus.TERMINATED and old_status != EmployeeStatus.TERMINATED:
        workflow_service.record(
            db,
            type=WorkflowType.TERMINATION,
            status=WorkflowStatus.APPROVED,
            employee_id=employee.id,
            details=f"Employee {employee.employee_id} terminated",
        )
    db.commit()
    return get_by_id(db, employee.id)


def transfer(db: Session, employee_id: int, department_id: int) -> Employee:
    employee, _ = department_service.assign_department(db, employee_id, department_id)
    return get_by_id(db, employee.id)


def delete(db: Session, employee_id: int):
    employee = get_by_id(db, employee_id)
    # Subordinates, requests and workflows keep their rows with the link cleared
    db.delete(employee)
    db.commit()
    logger.info("Employee %s deleted", employee_id)


def _ensure_unique_code(db: Session, code: str):
    if db.query(Employee).filter(Employee.employee_id == code).first():
        raise AppError.conflict(f'Employee ID "{code}" is already in use')


def _check_account(db: Session, account_id: int):
    account = db.query(Account).filter(Account.id == account_id).first()
    if not account:
        raise AppError.not_found("Account not found")
    if account.employee is not None:
        raise AppError.conflict("Account is already linked to an employee")


def _get_employee(db: Session, employee_id: int, message: str = "Employee not found") -> Employee:
    employee = db.query(Employee).filter(Employee.id == employee_id).first()
    if not employee:
        raise AppError.not_found(message)
    return employee
