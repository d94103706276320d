from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from datetime import datetime


# Schema for creating a department
class DepartmentCreate(BaseModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None


# Schema for updating department information
class DepartmentUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None


# Schema for displaying department details
class DepartmentOut(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


# List view with the number of employees in each department
class DepartmentWithCount(DepartmentOut):
    employee_count: int = 0
