# services/request_service.py
"""Request lifecycle: creation with items, partial updates with an audit
workflow row per status change, and deletion of a request with its trail."""
import logging
from sqlalchemy.orm import Session, joinedload

from models.employee import Employee
from models.request import Request, RequestItem
from models.enums import RequestType, RequestStatus, REQUEST_WORKFLOW_TYPES
from services import workflow_service
from utils.errors import AppError

logger = logging.getLogger(__name__)


def _query(db: Session):
    return db.query(Request).options(
        joinedload(Request.items),
        joinedload(Request.employee).joinedload(Employee.user),
    )


def create(db: Session, employee_id: int, params: dict) -> Request:
    request_type = RequestType(params["type"])
    request = Request(
        type=request_type,
        description=params.get("description"),
        employee_id=employee_id,
    )
    db.add(request)
    db.flush()

    items = params.get("items") or []
    if items:
        db.add_all([
            RequestItem(
                name=item["name"],
                quantity=item.get("quantity", 1),
                details=item.get("details"),
                request_id=request.id,
            )
            for item in items
        ])

    workflow_service.record(
        db,
        type=REQUEST_WORKFLOW_TYPES[request_type],
        status=RequestStatus.PENDING,
        employee_id=employee_id,
        request_id=request.id,
        details=f"New {request_type.value} request created",
    )
    db.commit()
    logger.info("Request %s (%s) created by employee %s with %d items",
                request.id, request_type.value, employee_id, len(items))
    return get_by_id(db, request.id)


def get_all(db: Session):
    return _query(db).order_by(Request.id).all()


def get_by_id(db: Session, request_id: int) -> Request:
    request = _query(db).filter(Request.id == request_id).first()
    if not request:
        raise AppError.not_found("Request not found")
    return request


def get_by_employee_id(db: Session, employee_id: int):
    return _query(db).filter(Request.employee_id == employee_id).order_by(Request.id).all()


def update(db: Session, request_id: int, params: dict) -> Request:
    request = get_by_id(db, request_id)

    for field in ("description", "status"):
        if field in params:
            setattr(request, field, params[field])

    # Every status change is audited, even when the value is unchanged
    new_status = params.get("status")
    if new_status:
        new_status = RequestStatus(new_status)
        workflow_service.record(
            db,
            type=REQUEST_WORKFLOW_TYPES[request.type],
            status=new_status,
            employee_id=request.employee_id,
            request_id=request.id,
            details=f"Request {new_status.value.lower()}",
        )

    db.commit()
    if new_status:
        logger.info("Request %s status set to %s", request.id, new_status.value)
    return get_by_id(db, request.id)


def delete(db: Session, request_id: int):
    request = get_by_id(db, request_id)

    # Audit rows reference the request, remove them first
    for workflow in workflow_service.get_by_request_id(db, request.id):
        db.delete(workflow)
    db.flush()

    # Items are removed with the request (delete-orphan cascade)
    db.delete(request)
    db.commit()
    logger.info("Request %s deleted", request_id)


def add_item(db: Session, request_id: int, params: dict) -> RequestItem:
    request = get_by_id(db, request_id)
    item = RequestItem(
        name=params["name"],
        quantity=params.get("quantity", 1),
        details=params.get("details"),
        request_id=request.id,
    )
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


def delete_item(db: Session, request_id: int, item_id: int):
    item = (
        db.query(RequestItem)
        .filter(RequestItem.id == item_id, RequestItem.request_id == request_id)
        .first()
    )
    if not item:
        raise AppError.not_found("Item not found")
    db.delete(item)
    db.commit()
