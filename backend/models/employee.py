from sqlalchemy import Column, Integer, String, DateTime, Date, ForeignKey, Enum, func
from sqlalchemy.orm import relationship
from database import Base
from models.enums import EmployeeStatus, enum_values

# Represents an employee record linked to an account and a department
class Employee(Base):
    __tablename__ = "employees"

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(String(50), unique=True, nullable=False, index=True) # HR employee code
    position = Column(String(100), nullable=False)
    hire_date = Column(Date, nullable=False)
    status = Column(Enum(EmployeeStatus, values_callable=enum_values), nullable=False, default=EmployeeStatus.ACTIVE)
    job_title = Column(String(100), nullable=True)

    user_id = Column(Integer, ForeignKey("accounts.id", ondelete="SET NULL"), nullable=True, unique=True)
    department_id = Column(Integer, ForeignKey("departments.id", ondelete="SET NULL"), nullable=True, index=True)
    reporting_to = Column(Integer, ForeignKey("employees.id", ondelete="SET NULL"), nullable=True)

    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    user = relationship("Account", back_populates="employee")
    department = relationship("Department", back_populates="employees")
    manager = relationship("Employee", remote_side=[id], back_populates="subordinates")
    subordinates = relationship("Employee", back_populates="manager")
    workflows = relationship("Workflow", back_populates="employee")
    requests = relationship("Request", back_populates="employee")
