# backend/routes/requests.py
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database import get_db
from models.account import Account
from models.request import Request
from services import request_service
from utils.errors import AppError
from utils.permissions import Action, Resource, authorize
from utils.tokenJWT import get_current_user, current_employee_id
from schemas.account import MessageResponse
from schemas.request import RequestCreate, RequestUpdate, RequestOut, RequestItemCreate, RequestItemOut

router = APIRouter(prefix="/requests", tags=["Requests"])

# Load a request and check the caller against the permission table
def _authorized_request(db: Session, request_id: int, user: Account, action: Action, check_state: bool = False) -> Request:
    request = request_service.get_by_id(db, request_id)
    is_owner = request.employee_id is not None and request.employee_id == current_employee_id(user)
    authorize(Resource.REQUEST, action, user.role, is_owner=is_owner,
              state=request.status if check_state else None)
    return request

def _require_employee(user: Account) -> int:
    employee_id = current_employee_id(user)
    if employee_id is None:
        raise AppError.invalid_state("No employee record is linked to this account")
    return employee_id


# Submit a new request for the caller's employee record
@router.post("", response_model=RequestOut)
def create_request(
    payload: RequestCreate,
    db: Session = Depends(get_db),
    current_user: Account = Depends(get_current_user)
):
    employee_id = _require_employee(current_user)
    return request_service.create(db, employee_id, payload.model_dump())


# List every request (Admin only)
@router.get("", response_model=List[RequestOut])
def list_requests(db: Session = Depends(get_db), current_user: Account = Depends(get_current_user)):
    authorize(Resource.REQUEST, Action.LIST_ALL, current_user.role)
    return request_service.get_all(db)


# List the caller's own requests
@router.get("/my-requests", response_model=List[RequestOut])
def my_requests(db: Session = Depends(get_db), current_user: Account = Depends(get_current_user)):
    employee_id = _require_employee(current_user)
    return request_service.get_by_employee_id(db, employee_id)


@router.get("/{request_id}", response_model=RequestOut)
def get_request(request_id: int, db: Session = Depends(get_db), current_user: Account = Depends(get_current_user)):
    return _authorized_request(db, request_id, current_user, Action.VIEW)


# Update description (owner/Admin) or status (Admin only); status changes are audited
@router.put("/{request_id}", response_model=RequestOut)
def update_request(
    request_id: int,
    payload: RequestUpdate,
    db: Session = Depends(get_db),
    current_user: Account = Depends(get_current_user)
):
    request_service.get_by_id(db, request_id)
    params = payload.model_dump(exclude_unset=True)
    if params.get("status") is not None:
        authorize(Resource.REQUEST, Action.SET_STATUS, current_user.role)
    else:
        params.pop("status", None)
    _authorized_request(db, request_id, current_user, Action.UPDATE)
    return request_service.update(db, request_id, params)


# Delete a request; non-admins only while it is pending
@router.delete("/{request_id}", response_model=MessageResponse)
def delete_request(request_id: int, db: Session = Depends(get_db), current_user: Account = Depends(get_current_user)):
    _authorized_request(db, request_id, current_user, Action.DELETE, check_state=True)
    request_service.delete(db, request_id)
    return {"message": "Request deleted successfully"}


@router.post("/{request_id}/items", response_model=RequestItemOut)
def add_item(
    request_id: int,
    payload: RequestItemCreate,
    db: Session = Depends(get_db),
    current_user: Account = Depends(get_current_user)
):
    _authorized_request(db, request_id, current_user, Action.ADD_ITEM, check_state=True)
    return request_service.add_item(db, request_id, payload.model_dump())


@router.delete("/{request_id}/items/{item_id}", response_model=MessageResponse)
def delete_item(
    request_id: int,
    item_id: int,
    db: Session = Depends(get_db),
    current_user: Account = Depends(get_current_user)
):
    _authorized_request(db, request_id, current_user, Action.DELETE_ITEM, check_state=True)
    request_service.delete_item(db, request_id, item_id)
    return {"message": "Item deleted successfully"}
