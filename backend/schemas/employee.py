from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import date, datetime
from models.enums import EmployeeStatus
from schemas.account import AccountBrief


# Input schema for creating an employee record
class EmployeeCreate(BaseModel):
    employee_id: str = Field(min_length=1)
    user_id: Optional[int] = None
    position: str
    hire_date: date
    department_id: Optional[int] = None
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    job_title: Optional[str] = None
    reporting_to: Optional[int] = None


# Partial update; only fields present in the body are applied
class EmployeeUpdate(BaseModel):
    employee_id: Optional[str] = Field(default=None, min_length=1)
    user_id: Optional[int] = None
    position: Optional[str] = None
    hire_date: Optional[date] = None
    department_id: Optional[int] = None
    status: Optional[EmployeeStatus] = None
    job_title: Optional[str] = None
    reporting_to: Optional[int] = None


class EmployeeTransfer(BaseModel):
    department_id: int


class DepartmentBrief(BaseModel):
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class ManagerBrief(BaseModel):
    id: int
    employee_id: str
    position: str

    model_config = ConfigDict(from_attributes=True)


# Output schema for employee details
class EmployeeOut(BaseModel):
    id: int
    employee_id: str
    user_id: Optional[int] = None
    position: str
    hire_date: date
    status: EmployeeStatus
    job_title: Optional[str] = None
    department_id: Optional[int] = None
    reporting_to: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    user: Optional[AccountBrief] = None
    department: Optional[DepartmentBrief] = None
    manager: Optional[ManagerBrief] = None

    model_config = ConfigDict(from_attributes=True)
