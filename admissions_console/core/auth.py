from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from typing import Callable, List, Optional, Protocol
from uuid import UUID
from .database import get_db
from .security import verify_token
from ..models.user import UserProfile

security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
):
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if credentials is None:
        raise credentials_exception

    payload = verify_token(credentials.credentials)
    if payload is None:
        raise credentials_exception

    user_id = payload.get("sub")
    if user_id is None:
        raise credentials_exception

    user = db.query(UserProfile).filter(
        UserProfile.id == _as_uuid(user_id)
    ).first()
    if user is None or not user.is_active:
        raise credentials_exception

    return user


def _as_uuid(value: str):
    try:
        return UUID(str(value))
    except ValueError:
        return None


# Role-based access control functions
def require_role(allowed_roles: List[str]) -> Callable:
    """Dependency factory to require specific roles for endpoint access"""
    def role_checker(current_user: UserProfile = Depends(get_current_user)):
        if current_user.role not in allowed_roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Access denied. Required roles: {', '.join(allowed_roles)}"
            )
        return current_user
    return role_checker


def require_manager_or_admin():
    """Require admissions_manager or admin role"""
    return require_role(['admin', 'admissions_manager'])


class IdentityProvider(Protocol):
    """Resolves the user on whose behalf mutations are performed."""

    def get_user(self) -> Optional[UserProfile]:
        ...


class StaticIdentity:
    """Identity bound to a known user (or to nobody)."""

    def __init__(self, user: Optional[UserProfile] = None):
        self.user = user

    def get_user(self) -> Optional[UserProfile]:
        return self.user

