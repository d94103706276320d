# services/workflow_service.py
import logging
from sqlalchemy.orm import Session

from models.employee import Employee
from models.workflow import Workflow
from models.enums import WorkflowType, WorkflowStatus
from utils.errors import AppError

logger = logging.getLogger(__name__)


def record(db: Session, *, type: WorkflowType, employee_id=None, request_id=None,
           status: WorkflowStatus = WorkflowStatus.PENDING, details: str = None) -> Workflow:
    """Append a workflow row to the session; the caller commits."""
    workflow = Workflow(type=type, status=status, employee_id=employee_id, request_id=request_id, details=details)
    db.add(workflow)
    return workflow


def create(db: Session, params: dict) -> Workflow:
    _get_employee(db, params["employee_id"])
    workflow = record(
        db,
        type=params["type"],
        status=params.get("status") or WorkflowStatus.PENDING,
        employee_id=params["employee_id"],
        details=params.get("details"),
    )
    db.commit()
    db.refresh(workflow)
    return workflow


def initiate_onboarding(db: Session, employee_id: int, details: str = None) -> Workflow:
    employee = _get_employee(db, employee_id)
    workflow = record(
        db,
        type=WorkflowType.ONBOARDING,
        employee_id=employee.id,
        details=details or f"Onboarding started for employee {employee.employee_id}",
    )
    db.commit()
    db.refresh(workflow)
    logger.info("Onboarding workflow %s started for employee %s", workflow.id, employee.id)
    return workflow


def get_all(db: Session):
    return db.query(Workflow).order_by(Workflow.id).all()


def get_by_id(db: Session, workflow_id: int) -> Workflow:
    workflow = db.query(Workflow).filter(Workflow.id == workflow_id).first()
    if not workflow:
        raise AppError.not_found("Workflow not found")
    return workflow


def get_by_employee_id(db: Session, employee_id: int):
    return (
        db.query(Workflow)
        .filter(Workflow.employee_id == employee_id)
        .order_by(Workflow.id)
        .all()
    )


def get_by_request_id(db: Session, request_id: int):
    return (
        db.query(Workflow)
        .filter(Workflow.request_id == request_id)
        .order_by(Workflow.id)
        .all()
    )


def update_status(db: Session, workflow_id: int, status: WorkflowStatus) -> Workflow:
    workflow = get_by_id(db, workflow_id)
    # Request workflows are an append-only audit trail; decisions go through the request
    if workflow.request_id is not None:
        raise AppError.invalid_state("Request workflows change only through their request")
    workflow.status = status
    db.commit()
    db.refresh(workflow)
    return workflow


def _get_employee(db: Session, employee_id: int) -> Employee:
    employee = db.query(Employee).filter(Employee.id == employee_id).first()
    if not employee:
        raise AppError.not_found("Employee not found")
    return employee
