# backend/vcat/api/deps.py
from typing import Annotated, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session, selectinload

from vcat.config import Settings, get_settings
from vcat.database import get_db
from vcat.models.user import User
from vcat.services.guardian import Guardian
from vcat.utils.security import decode_access_token

security = HTTPBearer()
optional_security = HTTPBearer(auto_error=False)


def _load_user(token: str, db: Session) -> User:
    user_id = decode_access_token(token)

    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    # Group memberships feed every permission check
    user = db.query(User).options(selectinload(User.group_memberships)).filter(User.id == user_id).first()
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is deactivated",
        )

    return user


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Extract and validate user from JWT token."""
    return _load_user(credentials.credentials, db)


def get_optional_user(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(optional_security)],
    db: Annotated[Session, Depends(get_db)],
) -> Optional[User]:
    """Like get_current_user, but anonymous visitors get None instead of a 401.

    A token that is present but invalid is still rejected.
    """
    if credentials is None:
        return None
    return _load_user(credentials.credentials, db)


def require_admin():
    """Require user to have admin role."""
    def checker(current_user: Annotated[User, Depends(get_current_user)]) -> User:
        if not current_user.is_admin:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Administrator access required",
            )
        return current_user
    return checker


def get_guardian(
    db: Annotated[Session, Depends(get_db)],
    user: Annotated[Optional[User], Depends(get_optional_user)],
) -> Guardian:
    return Guardian(db, user)


# Type aliases for common dependencies
CurrentUser = Annotated[User, Depends(get_current_user)]
OptionalUser = Annotated[Optional[User], Depends(get_optional_user)]
AdminUser = Annotated[User, Depends(require_admin())]
DBSession = Annotated[Session, Depends(get_db)]
AppSettings = Annotated[Settings, Depends(get_settings)]
ViewerGuardian = Annotated[Guardian, Depends(get_guardian)]
