# services/department_service.py
import logging
from sqlalchemy import func
from sqlalchemy.orm import Session

from models.department import Department
from models.employee import Employee
from models.enums import WorkflowType, WorkflowStatus
from services import workflow_service
from utils.errors import AppError

logger = logging.getLogger(__name__)


def _ensure_unique_name(db: Session, name: str):
    if db.query(Department).filter(Department.name == name).first():
        raise AppError.conflict(f'Department "{name}" already exists')


def create(db: Session, params: dict) -> Department:
    _ensure_unique_name(db, params["name"])
    department = Department(name=params["name"], description=params.get("description"))
    db.add(department)
    db.commit()
    db.refresh(department)
    return department


def get_all(db: Session):
    """Departments with the number of employees assigned to each."""
    employee_count = func.count(Employee.id).label("employee_count")
    rows = (
        db.query(Department, employee_count)
        .outerjoin(Employee, Employee.department_id == Department.id)
        .group_by(Department.id)
        .order_by(Department.id)
        .all()
    )
    return [
        {
            "id": d.id,
            "name": d.name,
            "description": d.description,
            "created_at": d.created_at,
            "updated_at": d.updated_at,
            "employee_count": int(count or 0),
        }
        for d, count in rows
    ]


def get_by_id(db: Session, department_id: int) -> Department:
    department = db.query(Department).filter(Department.id == department_id).first()
    if not department:
        raise AppError.not_found("Department not found")
    return department


def update(db: Session, department_id: int, params: dict) -> Department:
    department = get_by_id(db, department_id)

    name = params.get("name")
    if name and name != department.name:
        _ensure_unique_name(db, name)

    for field in ("name", "description"):
        if field in params and params[field] is not None:
            setattr(department, field, params[field])

    db.commit()
    db.refresh(department)
    return department


def delete(db: Session, department_id: int):
    department = get_by_id(db, department_id)
    # Employees keep their records, only the link is cleared
    db.delete(department)
    db.commit()
    logger.info("Department %s deleted", department_id)


def assign_department(db: Session, employee_id: int, department_id: int):
    employee = db.query(Employee).filter(Employee.id == employee_id).first()
    if not employee:
        raise AppError.not_found("Employee not found")
    department = get_by_id(db, department_id)

    if move_employee(db, employee, department):
        db.commit()
        db.refresh(employee)
    return employee, department


def move_employee(db: Session, employee: Employee, department: Department) -> bool:
    """Move the employee and record a DepartmentChange workflow; the caller commits.

    Returns False when the employee is already in that department.
    """
    previous = employee.department
    if previous is not None and previous.id == department.id:
        return False

    employee.department = department
    workflow_service.record(
        db,
        type=WorkflowType.DEPARTMENT_CHANGE,
        status=WorkflowStatus.APPROVED,
        employee_id=employee.id,
        details=f"Transferred from {previous.name if previous else 'no department'} to {department.name}",
    )
    return True
