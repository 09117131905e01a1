import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from adboard.core.principal import Actor, Viewer
from adboard.core.security import decode_access_token
from adboard.database import get_db
from adboard.repos.user_repo import get_by_id, is_admin

logger = logging.getLogger(__name__)
security = HTTPBearer(auto_error=False)


def _resolve_user(db: Session, credentials: HTTPAuthorizationCredentials | None):
    if not credentials:
        logger.info("Auth failed: missing bearer credentials")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    user_id = decode_access_token(credentials.credentials)
    if not user_id:
        logger.info("Auth failed: invalid or expired token")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )
    user = get_by_id(db, user_id)
    if not user:
        logger.info("Auth failed: user from token not found")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )
    if not user.is_active:
        logger.info("Auth failed: account disabled user=%s", user.id)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is disabled",
        )
    return user


def get_current_user(
    db: Session = Depends(get_db),
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
):
    return _resolve_user(db, credentials)


def get_optional_user(
    db: Session = Depends(get_db),
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
):
    """Like get_current_user, but requests without a usable token resolve to None instead of 401.
    A disabled account is still refused."""
    if not credentials:
        return None
    try:
        return _resolve_user(db, credentials)
    except HTTPException as e:
        if e.status_code != status.HTTP_401_UNAUTHORIZED:
            raise
        return None


def get_current_admin(
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    """Require an authenticated user that the users table marks as an active admin."""
    if not is_admin(db, user.id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return user


def actor_for(user) -> Actor:
    return Actor(id=user.id, is_admin=bool(getattr(user, "is_admin", False)))


def get_actor(user=Depends(get_current_user)) -> Actor:
    return actor_for(user)


def get_viewer(user=Depends(get_optional_user)) -> Viewer:
    if user is None:
        return Viewer.anonymous()
    return Viewer.for_actor(actor_for(user))
