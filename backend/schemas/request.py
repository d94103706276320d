from pydantic import BaseModel, Field, ConfigDict
from typing import List, Optional
from datetime import datetime
from models.enums import RequestType, RequestStatus
from schemas.account import AccountBrief


# Input schema for a single request line
class RequestItemCreate(BaseModel):
    name: str = Field(min_length=1)
    quantity: int = Field(ge=1)
    details: Optional[str] = None


# Input schema for submitting a request; the owner comes from the token
class RequestCreate(BaseModel):
    type: RequestType
    description: Optional[str] = None
    items: List[RequestItemCreate]


# Partial update; setting status is restricted to admins
class RequestUpdate(BaseModel):
    status: Optional[RequestStatus] = None
    description: Optional[str] = None


# Output schema for a request line
class RequestItemOut(BaseModel):
    id: int
    name: str
    quantity: int
    details: Optional[str] = None
    request_id: int

    model_config = ConfigDict(from_attributes=True)


class RequestEmployee(BaseModel):
    id: int
    employee_id: str
    position: str
    user: Optional[AccountBrief] = None

    model_config = ConfigDict(from_attributes=True)


# Output schema representing the full request details
class RequestOut(BaseModel):
    id: int
    type: RequestType
    status: RequestStatus
    description: Optional[str] = None
    employee_id: Optional[int] = None
    created_at: datetime
    updated_at: datetime
    items: List[RequestItemOut] = []
    employee: Optional[RequestEmployee] = None

    model_config = ConfigDict(from_attributes=True)
