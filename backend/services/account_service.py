# services/account_service.py
"""Account lifecycle: registration with email verification, authentication with
rotating refresh tokens, password reset and admin CRUD."""
import logging
from datetime import datetime, timedelta
from sqlalchemy import func
from sqlalchemy.orm import Session

from config import settings
from models.account import Account, RefreshToken
from models.enums import Role
from utils.errors import AppError
from utils.hashing import get_password_hash, verify_password
from utils.mailer import send_email
from utils.tokenJWT import create_access_token, random_token_string

logger = logging.getLogger(__name__)


def authenticate(db: Session, email: str, password: str, ip_address: str):
    """Returns (account, jwt_token, refresh_token) for valid, verified credentials."""
    account = _get_by_email(db, email)
    if not account or not account.is_verified or not verify_password(password, account.password_hash):
        logger.info("Failed login for %s from %s", email, ip_address)
        raise AppError.forbidden("Email or password is incorrect")

    jwt_token = create_access_token(account)
    refresh_token = _generate_refresh_token(account, ip_address)
    db.add(refresh_token)
    db.commit()
    return account, jwt_token, refresh_token.token


def refresh_token(db: Session, token: str, ip_address: str):
    """Rotate an active refresh token; returns (account, jwt_token, new_refresh_token)."""
    old = _get_refresh_token(db, token)
    account = old.account

    new = _generate_refresh_token(account, ip_address)
    old.revoked = datetime.utcnow()
    old.revoked_by_ip = ip_address
    old.replaced_by_token = new.token
    db.add(new)
    db.commit()

    return account, create_access_token(account), new.token


def revoke_token(db: Session, token: str, ip_address: str):
    refresh = _get_refresh_token(db, token)
    refresh.revoked = datetime.utcnow()
    refresh.revoked_by_ip = ip_address
    db.commit()


def owns_token(db: Session, account: Account, token: str) -> bool:
    return db.query(RefreshToken).filter(
        RefreshToken.account_id == account.id, RefreshToken.token == token
    ).first() is not None


def register(db: Session, params: dict, origin: str = None):
    if _get_by_email(db, params["email"]):
        # Same response either way so registered emails cannot be probed
        _send_already_registered_email(params["email"], origin)
        return

    account = Account(
        title=params["title"],
        first_name=params["first_name"],
        last_name=params["last_name"],
        email=_normalize(params["email"]),
        accept_terms=params.get("accept_terms", False),
        password_hash=get_password_hash(params["password"]),
        verification_token=random_token_string(),
    )
    # First registered account is the admin
    account.role = Role.ADMIN if db.query(Account).count() == 0 else Role.USER
    db.add(account)
    db.commit()
    db.refresh(account)

    logger.info("Account %s registered as %s", account.id, account.role.value)
    _send_verification_email(account, origin)


def verify_email(db: Session, token: str):
    account = db.query(Account).filter(Account.verification_token == token).first()
    if not account:
        raise AppError.validation("Verification failed")
    account.verified = datetime.utcnow()
    account.verification_token = None
    db.commit()


def forgot_password(db: Session, email: str, origin: str = None):
    account = _get_by_email(db, email)
    # Always succeeds to avoid revealing registered emails
    if not account:
        return
    account.reset_token = random_token_string()
    account.reset_token_expires = datetime.utcnow() + timedelta(hours=settings.RESET_TOKEN_EXPIRE_HOURS)
    db.commit()
    _send_password_reset_email(account, origin)


def validate_reset_token(db: Session, token: str) -> Account:
    account = db.query(Account).filter(
        Account.reset_token == token,
        Account.reset_token_expires > datetime.utcnow(),
    ).first()
    if not account:
        raise AppError.validation("Invalid token")
    return account


def reset_password(db: Session, token: str, password: str):
    account = validate_reset_token(db, token)
    account.password_hash = get_password_hash(password)
    account.password_reset = datetime.utcnow()
    account.reset_token = None
    account.reset_token_expires = None
    db.commit()


def get_all(db: Session):
    return db.query(Account).order_by(Account.id).all()


def get_by_id(db: Session, account_id: int) -> Account:
    account = db.query(Account).filter(Account.id == account_id).first()
    if not account:
        raise AppError.not_found("Account not found")
    return account


def create(db: Session, params: dict) -> Account:
    if _get_by_email(db, params["email"]):
        raise AppError.conflict(f'Email "{params["email"]}" is already registered')

    account = Account(
        title=params["title"],
        first_name=params["first_name"],
        last_name=params["last_name"],
        email=_normalize(params["email"]),
        role=params["role"],
        password_hash=get_password_hash(params["password"]),
        # Accounts created by an admin skip email verification
        verified=datetime.utcnow(),
    )
    db.add(account)
    db.commit()
    db.refresh(account)
    return account


def update(db: Session, account_id: int, params: dict) -> Account:
    account = get_by_id(db, account_id)

    email = params.get("email")
    if email and _normalize(email) != account.email and _get_by_email(db, email):
        raise AppError.conflict(f'Email "{email}" is already taken')

    password = params.pop("password", None)
    params.pop("confirm_password", None)
    if password:
        account.password_hash = get_password_hash(password)

    for field, value in params.items():
        if value is None:
            continue
        setattr(account, field, _normalize(value) if field == "email" else value)

    account.updated = datetime.utcnow()
    db.commit()
    db.refresh(account)
    return account


def delete(db: Session, account_id: int):
    account = get_by_id(db, account_id)
    db.delete(account)
    db.commit()
    logger.info("Account %s deleted", account_id)


# helper functions

def _normalize(email: str) -> str:
    return email.strip().lower()


def _get_by_email(db: Session, email: str):
    return db.query(Account).filter(func.lower(Account.email) == _normalize(email)).first()


def _get_refresh_token(db: Session, token: str) -> RefreshToken:
    refresh = db.query(RefreshToken).filter(RefreshToken.token == token).first()
    if not refresh or not refresh.is_active:
        raise AppError.forbidden("Invalid token")
    return refresh


def _generate_refresh_token(account: Account, ip_address: str) -> RefreshToken:
    return RefreshToken(
        account=account,
        token=random_token_string(),
        expires=datetime.utcnow() + timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS),
        created_by_ip=ip_address,
    )


def _send_verification_email(account: Account, origin: str = None):
    if origin:
        url = f"{origin}/account/verify-email?token={account.verification_token}"
        body = f'<p>Please click the below link to verify your email address:</p><p><a href="{url}">{url}</a></p>'
    else:
        body = (
            "<p>Please use the below token to verify your email address with the "
            f"<code>/accounts/verify-email</code> api route:</p><p><code>{account.verification_token}</code></p>"
        )
    send_email(account.email, "Sign-up Verification API - Verify Email",
               f"<h4>Verify Email</h4><p>Thanks for registering!</p>{body}")


def _send_already_registered_email(email: str, origin: str = None):
    if origin:
        body = f'<p>If you don\'t know your password please visit the <a href="{origin}/account/forgot-password">forgot password</a> page.</p>'
    else:
        body = "<p>If you don't know your password you can reset it via the <code>/accounts/forgot-password</code> api route.</p>"
    send_email(email, "Sign-up Verification API - Email Already Registered",
               f"<h4>Email Already Registered</h4><p>Your email <strong>{email}</strong> is already registered.</p>{body}")


def _send_password_reset_email(account: Account, origin: str = None):
    if origin:
        url = f"{origin}/account/reset-password?token={account.reset_token}"
        body = f'<p>Please click the below link to reset your password, the link will be valid for 1 day:</p><p><a href="{url}">{url}</a></p>'
    else:
        body = (
            "<p>Please use the below token to reset your password with the "
            f"<code>/accounts/reset-password</code> api route:</p><p><code>{account.reset_token}</code></p>"
        )
    send_email(account.email, "Sign-up Verification API - Reset Password", f"<h4>Reset Password Email</h4>{body}")
