from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey, Enum, func
from sqlalchemy.orm import relationship
from database import Base
from models.enums import WorkflowType, WorkflowStatus, enum_values

# Audit/process record for onboarding, transfers, terminations and request decisions
class Workflow(Base):
    __tablename__ = "workflows"

    id = Column(Integer, primary_key=True, index=True)
    type = Column(Enum(WorkflowType, values_callable=enum_values), nullable=False)
    status = Column(Enum(WorkflowStatus, values_callable=enum_values), nullable=False, default=WorkflowStatus.PENDING)
    details = Column(Text, nullable=True)

    employee_id = Column(Integer, ForeignKey("employees.id", ondelete="SET NULL"), nullable=True, index=True)
    request_id = Column(Integer, ForeignKey("requests.id"), nullable=True, index=True)

    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    employee = relationship("Employee", back_populates="workflows")
    request = relationship("Request", back_populates="workflows")
