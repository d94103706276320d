# utils/tokenJWT.py
import secrets
from jose import jwt, JWTError
from datetime import datetime, timedelta
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from config import settings
from database import get_db
from models.account import Account
from utils.permissions import Action, Resource, authorize

SECRET_KEY = settings.SECRET_KEY
ALGORITHM = settings.ALGORITHM
ACCESS_TOKEN_EXPIRE_MINUTES = settings.ACCESS_TOKEN_EXPIRE_MINUTES

# Authorization scheme; missing header is reported by get_current_user
bearer_scheme = HTTPBearer(auto_error=False)

# Generate a new JWT access token for an account
def create_access_token(account: Account, expires_delta: timedelta = None) -> str:
    expire = datetime.utcnow() + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode = {"sub": str(account.id), "id": account.id, "role": account.role.value, "exp": expire}
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)

# Random opaque token used for refresh, verification and reset flows
def random_token_string(nbytes: int = 40) -> str:
    return secrets.token_hex(nbytes)

# Retrieve the currently authenticated account based on the JWT token
def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    db: Session = Depends(get_db)
) -> Account:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if credentials is None:
        raise credentials_exception
    try:
        payload = jwt.decode(credentials.credentials, SECRET_KEY, algorithms=[ALGORITHM])
        account_id = payload.get("sub")
        # Ensure the account id is present in the token payload
        if account_id is None:
            raise credentials_exception
    except JWTError:
        raise credentials_exception

    account = db.query(Account).filter(Account.id == int(account_id)).first()
    if account is None:
        raise credentials_exception
    return account

# Dependency factory for role-only entries of the permission table
def permission_required(resource: Resource, action: Action):
    def _checker(current_user: Account = Depends(get_current_user)):
        authorize(resource, action, current_user.role)
        return current_user
    return _checker

# Employee id of the caller, or None when the account has no employee record
def current_employee_id(account: Account):
    return account.employee.id if account.employee else None
