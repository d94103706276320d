# backend/routes/departments.py
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database import get_db
from models.account import Account
from services import department_service
from utils.permissions import Action, Resource
from utils.tokenJWT import permission_required
from schemas.account import MessageResponse
from schemas.department import DepartmentCreate, DepartmentUpdate, DepartmentOut, DepartmentWithCount

router = APIRouter(prefix="/departments", tags=["Departments"])


@router.post("", response_model=DepartmentOut)
def create_department(
    payload: DepartmentCreate,
    db: Session = Depends(get_db),
    current_user: Account = Depends(permission_required(Resource.DEPARTMENT, Action.CREATE))
):
    return department_service.create(db, payload.model_dump())


# Departments with their employee counts
@router.get("", response_model=List[DepartmentWithCount])
def list_departments(
    db: Session = Depends(get_db),
    current_user: Account = Depends(permission_required(Resource.DEPARTMENT, Action.LIST_ALL))
):
    return department_service.get_all(db)


@router.get("/{department_id}", response_model=DepartmentOut)
def get_department(
    department_id: int,
    db: Session = Depends(get_db),
    current_user: Account = Depends(permission_required(Resource.DEPARTMENT, Action.VIEW))
):
    return department_service.get_by_id(db, department_id)


@router.put("/{department_id}", response_model=DepartmentOut)
def update_department(
    department_id: int,
    payload: DepartmentUpdate,
    db: Session = Depends(get_db),
    current_user: Account = Depends(permission_required(Resource.DEPARTMENT, Action.UPDATE))
):
    return department_service.update(db, department_id, payload.model_dump(exclude_unset=True))


@router.delete("/{department_id}", response_model=MessageResponse)
def delete_department(
    department_id: int,
    db: Session = Depends(get_db),
    current_user: Account = Depends(permission_required(Resource.DEPARTMENT, Action.DELETE))
):
    department_service.delete(db, department_id)
    return {"message": "Department deleted successfully"}
