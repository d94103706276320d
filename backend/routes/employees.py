# backend/routes/employees.py
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database import get_db
from models.account import Account
from services import employee_service
from utils.permissions import Action, Resource
from utils.tokenJWT import permission_required
from schemas.account import MessageResponse
from schemas.employee import EmployeeCreate, EmployeeUpdate, EmployeeTransfer, EmployeeOut

router = APIRouter(prefix="/employees", tags=["Employees"])


# Create an employee record and start its onboarding workflow (Admin only)
@router.post("", response_model=EmployeeOut)
def create_employee(
    payload: EmployeeCreate,
    db: Session = Depends(get_db),
    current_user: Account = Depends(permission_required(Resource.EMPLOYEE, Action.CREATE))
):
    return employee_service.create(db, payload.model_dump())


@router.get("", response_model=List[EmployeeOut])
def list_employees(
    db: Session = Depends(get_db),
    current_user: Account = Depends(permission_required(Resource.EMPLOYEE, Action.LIST_ALL))
):
    return employee_service.get_all(db)


@router.get("/{employee_id}", response_model=EmployeeOut)
def get_employee(
    employee_id: int,
    db: Session = Depends(get_db),
    current_user: Account = Depends(permission_required(Resource.EMPLOYEE, Action.VIEW))
):
    return employee_service.get_by_id(db, employee_id)


# Partial update; department and termination changes are recorded as workflows
@router.put("/{employee_id}", response_model=EmployeeOut)
def update_employee(
    employee_id: int,
    payload: EmployeeUpdate,
    db: Session = Depends(get_db),
    current_user: Account = Depends(permission_required(Resource.EMPLOYEE, Action.UPDATE))
):
    return employee_service.update(db, employee_id, payload.model_dump(exclude_unset=True))


@router.delete("/{employee_id}", response_model=MessageResponse)
def delete_employee(
    employee_id: int,
    db: Session = Depends(get_db),
    current_user: Account = Depends(permission_required(Resource.EMPLOYEE, Action.DELETE))
):
    employee_service.delete(db, employee_id)
    return {"message": "Employee deleted successfully"}


# Move an employee to another department (Admin only)
@router.post("/{employee_id}/transfer", response_model=EmployeeOut)
def transfer_employee(
    employee_id: int,
    payload: EmployeeTransfer,
    db: Session = Depends(get_db),
    current_user: Account = Depends(permission_required(Resource.EMPLOYEE, Action.UPDATE))
):
    return employee_service.transfer(db, employee_id, payload.department_id)
