# backend/routes/accounts.py
from typing import List, Optional
from fastapi import APIRouter, Cookie, Depends, Request, Response
from sqlalchemy.orm import Session

from config import settings
from database import get_db
from models.account import Account
from services import account_service
from utils.errors import AppError
from utils.permissions import Action, Resource, authorize
from utils.tokenJWT import get_current_user
from schemas import account as schemas

router = APIRouter(prefix="/accounts", tags=["Accounts"])

REFRESH_COOKIE = "refreshToken"

def _ip(request: Request) -> Optional[str]:
    return request.client.host if request.client else None

def _origin(request: Request) -> Optional[str]:
    return request.headers.get("origin") or settings.FRONTEND_URL

def _set_token_cookie(response: Response, token: str):
    # httpOnly cookie with refresh token that expires with the token itself
    response.set_cookie(
        key=REFRESH_COOKIE,
        value=token,
        httponly=True,
        max_age=settings.REFRESH_TOKEN_EXPIRE_DAYS * 24 * 60 * 60,
        secure=settings.is_production,
        samesite="lax",
    )

def _auth_response(account: Account, jwt_token: str) -> dict:
    data = schemas.AccountResponse.model_validate(account).model_dump()
    data["jwt_token"] = jwt_token
    return data


# Authenticate with email/password; returns a JWT and sets the refresh cookie
@router.post("/authenticate", response_model=schemas.AuthenticateResponse)
def authenticate(payload: schemas.AuthenticateRequest, request: Request, response: Response, db: Session = Depends(get_db)):
    account, jwt_token, refresh = account_service.authenticate(db, payload.email, payload.password, _ip(request))
    _set_token_cookie(response, refresh)
    return _auth_response(account, jwt_token)


# Exchange the refresh cookie for a new JWT, rotating the refresh token
@router.post("/refresh-token", response_model=schemas.AuthenticateResponse)
def refresh_token(
    request: Request,
    response: Response,
    refresh: Optional[str] = Cookie(None, alias=REFRESH_COOKIE),
    db: Session = Depends(get_db)
):
    if not refresh:
        raise AppError.forbidden("Invalid token")
    account, jwt_token, new_refresh = account_service.refresh_token(db, refresh, _ip(request))
    _set_token_cookie(response, new_refresh)
    return _auth_response(account, jwt_token)


# Revoke a refresh token from the body or the cookie
@router.post("/revoke-token", response_model=schemas.MessageResponse)
def revoke_token(
    payload: schemas.RevokeTokenRequest,
    request: Request,
    refresh: Optional[str] = Cookie(None, alias=REFRESH_COOKIE),
    db: Session = Depends(get_db),
    current_user: Account = Depends(get_current_user)
):
    token = payload.token or refresh
    if not token:
        raise AppError.validation("Token is required")
    authorize(Resource.ACCOUNT, Action.REVOKE_TOKEN, current_user.role,
              is_owner=account_service.owns_token(db, current_user, token))
    account_service.revoke_token(db, token, _ip(request))
    return {"message": "Token revoked"}


@router.post("/register", response_model=schemas.MessageResponse)
def register(payload: schemas.RegisterRequest, request: Request, db: Session = Depends(get_db)):
    account_service.register(db, payload.model_dump(), _origin(request))
    return {"message": "Registration successful, please check your email for verification instructions"}


@router.post("/verify-email", response_model=schemas.MessageResponse)
def verify_email(payload: schemas.TokenRequest, db: Session = Depends(get_db)):
    account_service.verify_email(db, payload.token)
    return {"message": "Verification successful, you can now login"}


@router.post("/forgot-password", response_model=schemas.MessageResponse)
def forgot_password(payload: schemas.EmailRequest, request: Request, db: Session = Depends(get_db)):
    account_service.forgot_password(db, payload.email, _origin(request))
    return {"message": "Please check your email for password reset instructions"}


@router.post("/validate-reset-token", response_model=schemas.MessageResponse)
def validate_reset_token(payload: schemas.TokenRequest, db: Session = Depends(get_db)):
    account_service.validate_reset_token(db, payload.token)
    return {"message": "Token is valid"}


@router.post("/reset-password", response_model=schemas.MessageResponse)
def reset_password(payload: schemas.ResetPasswordRequest, db: Session = Depends(get_db)):
    account_service.reset_password(db, payload.token, payload.password)
    return {"message": "Password reset successful, you can now login"}


# List all accounts (Admin only)
@router.get("", response_model=List[schemas.AccountResponse])
def list_accounts(db: Session = Depends(get_db), current_user: Account = Depends(get_current_user)):
    authorize(Resource.ACCOUNT, Action.LIST_ALL, current_user.role)
    return account_service.get_all(db)


@router.get("/{account_id}", response_model=schemas.AccountResponse)
def get_account(account_id: int, db: Session = Depends(get_db), current_user: Account = Depends(get_current_user)):
    authorize(Resource.ACCOUNT, Action.VIEW, current_user.role, is_owner=account_id == current_user.id)
    return account_service.get_by_id(db, account_id)


# Create a pre-verified account (Admin only)
@router.post("", response_model=schemas.AccountResponse)
def create_account(payload: schemas.AccountCreate, db: Session = Depends(get_db), current_user: Account = Depends(get_current_user)):
    authorize(Resource.ACCOUNT, Action.CREATE, current_user.role)
    return account_service.create(db, payload.model_dump())


@router.put("/{account_id}", response_model=schemas.AccountResponse)
def update_account(
    account_id: int,
    payload: schemas.AccountUpdate,
    db: Session = Depends(get_db),
    current_user: Account = Depends(get_current_user)
):
    authorize(Resource.ACCOUNT, Action.UPDATE, current_user.role, is_owner=account_id == current_user.id)
    params = payload.model_dump(exclude_unset=True)
    if params.get("role") is not None:
        authorize(Resource.ACCOUNT, Action.SET_ROLE, current_user.role)
    return account_service.update(db, account_id, params)


@router.delete("/{account_id}", response_model=schemas.MessageResponse)
def delete_account(account_id: int, db: Session = Depends(get_db), current_user: Account = Depends(get_current_user)):
    authorize(Resource.ACCOUNT, Action.DELETE, current_user.role, is_owner=account_id == current_user.id)
    account_service.delete(db, account_id)
    return {"message": "Account deleted successfully"}
