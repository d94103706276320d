from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Enum, func
from sqlalchemy.orm import relationship
from database import Base
from models.enums import RequestType, RequestStatus, enum_values

# Employee-submitted request for equipment, leave or resources
class Request(Base):
    __tablename__ = "requests"

    id = Column(Integer, primary_key=True, index=True)
    type = Column(Enum(RequestType, values_callable=enum_values), nullable=False)
    status = Column(Enum(RequestStatus, values_callable=enum_values), nullable=False, default=RequestStatus.PENDING)
    description = Column(Text, nullable=True)
    employee_id = Column(Integer, ForeignKey("employees.id", ondelete="SET NULL"), nullable=True, index=True)

    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    employee = relationship("Employee", back_populates="requests")
    # Items never outlive their request
    items = relationship("RequestItem", back_populates="request", cascade="all, delete-orphan", order_by="RequestItem.id")
    workflows = relationship("Workflow", back_populates="request")


# A single line (name + quantity) within a request
class RequestItem(Base):
    __tablename__ = "request_items"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    details = Column(Text, nullable=True)
    request_id = Column(Integer, ForeignKey("requests.id", ondelete="CASCADE", onupdate="CASCADE"), nullable=False, index=True)

    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    request = relationship("Request", back_populates="items")
