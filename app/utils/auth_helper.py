from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, Request, Response, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from fastapi.security.utils import get_authorization_scheme_param
from jose import JWTError, jwt
from passlib.context import CryptContext

from app.core.config import settings
from app.models.users import User, UserRole

security = HTTPBearer(auto_error=False)

pwd_context = CryptContext(
    schemes=["argon2"],
    deprecated="auto",
)

WILDCARD_PERMISSIONS = {
    "read:all": "read:",
    "write:all": "write:",
    "delete:all": "delete:",
}


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    return pwd_context.verify(password, hashed)


def build_token_claims(user: User) -> dict:
    return {
        "sub": str(user.id),
        "email": user.email,
        "role": UserRole(user.role).value,
        "permissions": list(user.permissions or []),
        "branch": str(user.branch_id) if user.branch_id else None,
    }


def create_access_token(data: dict) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS)
    to_encode.update({"exp": expire, "type": "access"})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> Optional[dict]:
    """Return the token claims, or None when the token is invalid or expired"""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None
    if payload.get("type") != "access":
        return None

    # user ids are integers
    user_id = payload.get("sub")
    if not isinstance(user_id, str) or not user_id.isdigit():
        return None
    return payload


# Cookie session

def set_auth_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="strict",
        max_age=settings.access_token_max_age,
        path="/",
    )


def get_auth_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = None,
) -> Optional[str]:
    """The session cookie wins over an Authorization: Bearer header"""
    token = request.cookies.get(settings.AUTH_COOKIE_NAME)
    if token:
        return token

    if credentials is not None:
        return credentials.credentials or None

    scheme, param = get_authorization_scheme_param(request.headers.get("Authorization"))
    if scheme.lower() == "bearer" and param:
        return param
    return None


def clear_auth_cookie(response: Response) -> None:
    response.delete_cookie(
        key=settings.AUTH_COOKIE_NAME,
        path="/",
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="strict",
    )


def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = None,
) -> Optional[dict]:
    token = get_auth_token(request, credentials)
    if not token:
        return None
    return decode_access_token(token)


# Authorization checks

def has_permission(user: Optional[dict], permission: str) -> bool:
    if not user:
        return False
    if user.get("role") == UserRole.ADMIN.value:
        return True
    if not permission:
        return False

    permissions = user.get("permissions")
    if not isinstance(permissions, list):
        return False

    if permission in permissions:
        return True

    for wildcard, prefix in WILDCARD_PERMISSIONS.items():
        if wildcard in permissions and permission.startswith(prefix):
            return True
    return False


def has_role(user: Optional[dict], role: str) -> bool:
    if not user or not role:
        return False
    return user.get("role") == role


def can_access_branch(user: Optional[dict], branch_id: str) -> bool:
    if not user:
        return False
    if user.get("role") == UserRole.ADMIN.value:
        return True
    if not branch_id:
        return False
    return user.get("branch") == str(branch_id)


# Dependencies

def require_authenticated_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> dict:
    current_user = get_current_user(request, credentials)
    if not current_user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return current_user


def require_admin(
    current_user: dict = Depends(require_authenticated_user),
) -> dict:
    if not has_role(current_user, UserRole.ADMIN.value):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied",
        )
    return current_user
