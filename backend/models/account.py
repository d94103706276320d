from datetime import datetime

from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, Enum, func
from sqlalchemy.orm import relationship
from database import Base
from models.enums import Role, enum_values

# Represents a login account with verification/reset state and system role
class Account(Base):
    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    title = Column(String(50), nullable=True)
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    accept_terms = Column(Boolean, default=False)
    role = Column(Enum(Role, values_callable=enum_values), nullable=False, default=Role.USER)

    # Email verification and password reset tokens
    verification_token = Column(String(255), nullable=True, index=True)
    verified = Column(DateTime, nullable=True)
    reset_token = Column(String(255), nullable=True, index=True)
    reset_token_expires = Column(DateTime, nullable=True)
    password_reset = Column(DateTime, nullable=True)

    created = Column(DateTime, server_default=func.now(), nullable=False)
    updated = Column(DateTime, nullable=True)

    refresh_tokens = relationship("RefreshToken", back_populates="account", cascade="all, delete-orphan")
    employee = relationship("Employee", back_populates="user", uselist=False)

    @property
    def is_verified(self) -> bool:
        return bool(self.verified or self.password_reset)


# Long lived token used to obtain new JWTs; rotated on every refresh
class RefreshToken(Base):
    __tablename__ = "refresh_tokens"

    id = Column(Integer, primary_key=True, index=True)
    account_id = Column(Integer, ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False, index=True)
    token = Column(String(255), unique=True, nullable=False, index=True)
    expires = Column(DateTime, nullable=False)
    created = Column(DateTime, server_default=func.now(), nullable=False)
    created_by_ip = Column(String(64), nullable=True)
    revoked = Column(DateTime, nullable=True)
    revoked_by_ip = Column(String(64), nullable=True)
    replaced_by_token = Column(String(255), nullable=True)

    account = relationship("Account", back_populates="refresh_tokens")

    @property
    def is_expired(self) -> bool:
        return datetime.utcnow() >= self.expires

    @property
    def is_active(self) -> bool:
        return not self.revoked and not self.is_expired
