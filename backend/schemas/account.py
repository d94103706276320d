from pydantic import BaseModel, EmailStr, Field, ConfigDict, model_validator
from typing import Optional
from datetime import datetime
from models.enums import Role

# Shared properties for account models
class AccountBase(BaseModel):
    title: str
    first_name: str
    last_name: str
    email: EmailStr

# Credentials posted to /accounts/authenticate
class AuthenticateRequest(BaseModel):
    email: EmailStr
    password: str

# Self-service registration
class RegisterRequest(AccountBase):
    password: str = Field(min_length=6)
    confirm_password: str
    accept_terms: bool

    @model_validator(mode="after")
    def _check(self):
        if self.password != self.confirm_password:
            raise ValueError("Passwords must match")
        if not self.accept_terms:
            raise ValueError("Terms must be accepted")
        return self

# Admin-created account; verified immediately
class AccountCreate(AccountBase):
    password: str = Field(min_length=6)
    confirm_password: str
    role: Role

    @model_validator(mode="after")
    def _check(self):
        if self.password != self.confirm_password:
            raise ValueError("Passwords must match")
        return self

# Partial account update; password fields are optional but must match
class AccountUpdate(BaseModel):
    title: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(default=None, min_length=6)
    confirm_password: Optional[str] = None
    role: Optional[Role] = None

    @model_validator(mode="after")
    def _check(self):
        if self.password and self.password != self.confirm_password:
            raise ValueError("Passwords must match")
        return self

class TokenRequest(BaseModel):
    token: str

class RevokeTokenRequest(BaseModel):
    token: Optional[str] = None

class EmailRequest(BaseModel):
    email: EmailStr

class ResetPasswordRequest(BaseModel):
    token: str
    password: str = Field(min_length=6)
    confirm_password: str

    @model_validator(mode="after")
    def _check(self):
        if self.password != self.confirm_password:
            raise ValueError("Passwords must match")
        return self

# Output schema for account details
class AccountResponse(BaseModel):
    id: int
    title: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: str
    role: Role
    created: datetime
    updated: Optional[datetime] = None
    is_verified: bool

    model_config = ConfigDict(from_attributes=True)

# Account details plus a freshly issued access token
class AuthenticateResponse(AccountResponse):
    jwt_token: str

# Name-and-email view embedded in employee/request responses
class AccountBrief(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: str

    model_config = ConfigDict(from_attributes=True)

class MessageResponse(BaseModel):
    message: str
