"""Declarative permission table.

Every protected operation is looked up by (resource, action). A grant lists the
roles it applies to, whether the caller must own the record, and which record
states the action is allowed in (``None`` means any state). Role/ownership
denials raise ``AppError.forbidden`` (401); a state denial raises
``AppError.invalid_state`` (400).
"""
import enum
from dataclasses import dataclass
from typing import FrozenSet, Optional, Tuple

from models.enums import Role, RequestStatus
from utils.errors import AppError


class Resource(str, enum.Enum):
    REQUEST = "request"
    ACCOUNT = "account"
    EMPLOYEE = "employee"
    DEPARTMENT = "department"
    WORKFLOW = "workflow"


class Action(str, enum.Enum):
    LIST_ALL = "list_all"
    VIEW = "view"
    CREATE = "create"
    UPDATE = "update"
    SET_STATUS = "set_status"
    SET_ROLE = "set_role"
    DELETE = "delete"
    ADD_ITEM = "add_item"
    DELETE_ITEM = "delete_item"
    REVOKE_TOKEN = "revoke_token"


@dataclass(frozen=True)
class Grant:
    roles: FrozenSet[Role]
    owner_only: bool = False
    states: Optional[FrozenSet[enum.Enum]] = None


ADMIN = frozenset({Role.ADMIN})
ANYONE = frozenset({Role.ADMIN, Role.USER})
PENDING = frozenset({RequestStatus.PENDING})

PERMISSIONS = {
    # Requests
    (Resource.REQUEST, Action.LIST_ALL): (Grant(ADMIN),),
    (Resource.REQUEST, Action.VIEW): (Grant(ADMIN), Grant(ANYONE, owner_only=True)),
    (Resource.REQUEST, Action.UPDATE): (Grant(ADMIN), Grant(ANYONE, owner_only=True)),
    (Resource.REQUEST, Action.SET_STATUS): (Grant(ADMIN),),
    (Resource.REQUEST, Action.DELETE): (Grant(ADMIN), Grant(ANYONE, owner_only=True, states=PENDING)),
    (Resource.REQUEST, Action.ADD_ITEM): (Grant(ADMIN, states=PENDING), Grant(ANYONE, owner_only=True, states=PENDING)),
    (Resource.REQUEST, Action.DELETE_ITEM): (Grant(ADMIN, states=PENDING), Grant(ANYONE, owner_only=True, states=PENDING)),
    # Accounts
    (Resource.ACCOUNT, Action.LIST_ALL): (Grant(ADMIN),),
    (Resource.ACCOUNT, Action.CREATE): (Grant(ADMIN),),
    (Resource.ACCOUNT, Action.VIEW): (Grant(ADMIN), Grant(ANYONE, owner_only=True)),
    (Resource.ACCOUNT, Action.UPDATE): (Grant(ADMIN), Grant(ANYONE, owner_only=True)),
    (Resource.ACCOUNT, Action.SET_ROLE): (Grant(ADMIN),),
    (Resource.ACCOUNT, Action.DELETE): (Grant(ADMIN), Grant(ANYONE, owner_only=True)),
    # Refresh tokens are owned by the account that holds them
    (Resource.ACCOUNT, Action.REVOKE_TOKEN): (Grant(ADMIN), Grant(ANYONE, owner_only=True)),
    # Employees and departments
    (Resource.EMPLOYEE, Action.LIST_ALL): (Grant(ANYONE),),
    (Resource.EMPLOYEE, Action.VIEW): (Grant(ANYONE),),
    (Resource.EMPLOYEE, Action.CREATE): (Grant(ADMIN),),
    (Resource.EMPLOYEE, Action.UPDATE): (Grant(ADMIN),),
    (Resource.EMPLOYEE, Action.DELETE): (Grant(ADMIN),),
    (Resource.DEPARTMENT, Action.LIST_ALL): (Grant(ANYONE),),
    (Resource.DEPARTMENT, Action.VIEW): (Grant(ANYONE),),
    (Resource.DEPARTMENT, Action.CREATE): (Grant(ADMIN),),
    (Resource.DEPARTMENT, Action.UPDATE): (Grant(ADMIN),),
    (Resource.DEPARTMENT, Action.DELETE): (Grant(ADMIN),),
    # Workflows
    (Resource.WORKFLOW, Action.LIST_ALL): (Grant(ADMIN),),
    (Resource.WORKFLOW, Action.VIEW): (Grant(ADMIN), Grant(ANYONE, owner_only=True)),
    (Resource.WORKFLOW, Action.CREATE): (Grant(ADMIN),),
    (Resource.WORKFLOW, Action.SET_STATUS): (Grant(ADMIN),),
}

# Message used when a grant exists for the caller but not in the record's state
STATE_MESSAGES = {
    (Resource.REQUEST, Action.DELETE): "Can only delete pending requests",
    (Resource.REQUEST, Action.ADD_ITEM): "Can only add items to pending requests",
    (Resource.REQUEST, Action.DELETE_ITEM): "Can only delete items from pending requests",
}

DENIED_MESSAGES = {
    (Resource.REQUEST, Action.SET_STATUS): "Only admins can update request status",
    (Resource.ACCOUNT, Action.SET_ROLE): "Only admins can change account roles",
}


def _grants(resource: Resource, action: Action) -> Tuple[Grant, ...]:
    return PERMISSIONS.get((resource, action), ())


def authorize(resource: Resource, action: Action, role: Role, is_owner: bool = False, state=None) -> None:
    """Raise unless the caller may perform ``action``; ownership is checked before state."""
    applicable = [
        g for g in _grants(resource, action)
        if role in g.roles and (is_owner or not g.owner_only)
    ]
    if not applicable:
        raise AppError.forbidden(DENIED_MESSAGES.get((resource, action), "Unauthorized"))

    if state is None:
        return
    if any(g.states is None or state in g.states for g in applicable):
        return
    raise AppError.invalid_state(STATE_MESSAGES.get((resource, action), f"Not allowed while {getattr(state, 'value', state)}"))
