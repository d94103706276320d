# backend/routes/workflows.py
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database import get_db
from models.account import Account
from services import workflow_service
from utils.permissions import Action, Resource, authorize
from utils.tokenJWT import get_current_user, current_employee_id, permission_required
from schemas.workflow import WorkflowCreate, OnboardingCreate, WorkflowStatusUpdate, WorkflowOut

router = APIRouter(prefix="/workflows", tags=["Workflows"])


@router.post("", response_model=WorkflowOut)
def create_workflow(
    payload: WorkflowCreate,
    db: Session = Depends(get_db),
    current_user: Account = Depends(permission_required(Resource.WORKFLOW, Action.CREATE))
):
    return workflow_service.create(db, payload.model_dump())


@router.get("", response_model=List[WorkflowOut])
def list_workflows(
    db: Session = Depends(get_db),
    current_user: Account = Depends(permission_required(Resource.WORKFLOW, Action.LIST_ALL))
):
    return workflow_service.get_all(db)


@router.post("/onboarding", response_model=WorkflowOut)
def start_onboarding(
    payload: OnboardingCreate,
    db: Session = Depends(get_db),
    current_user: Account = Depends(permission_required(Resource.WORKFLOW, Action.CREATE))
):
    return workflow_service.initiate_onboarding(db, payload.employee_id, payload.details)


# Workflow history of one employee; visible to that employee and admins
@router.get("/employee/{employee_id}", response_model=List[WorkflowOut])
def employee_workflows(employee_id: int, db: Session = Depends(get_db), current_user: Account = Depends(get_current_user)):
    authorize(Resource.WORKFLOW, Action.VIEW, current_user.role,
              is_owner=employee_id == current_employee_id(current_user))
    return workflow_service.get_by_employee_id(db, employee_id)


@router.put("/{workflow_id}/status", response_model=WorkflowOut)
def update_workflow_status(
    workflow_id: int,
    payload: WorkflowStatusUpdate,
    db: Session = Depends(get_db),
    current_user: Account = Depends(permission_required(Resource.WORKFLOW, Action.SET_STATUS))
):
    return workflow_service.update_status(db, workflow_id, payload.status)
