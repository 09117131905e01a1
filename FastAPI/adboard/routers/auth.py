import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from adboard.core.security import create_access_token, hash_password, verify_password
from adboard.database import get_db
from adboard.dependencies import get_current_user
from adboard.models.user import User
from adboard.repos.listing_repo import count_by_owner
from adboard.repos.user_repo import (
    create as create_user,
    delete_user,
    get_by_email,
    get_by_id,
    update as update_user,
)
from adboard.schemas.auth import Token, UserLogin, UserProfileUpdate, UserRegister, UserResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["auth"])


def _normalize_email(email: str) -> str:
    return email.strip().lower()


def _account_view(db: Session, user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        email=user.email,
        is_admin=bool(getattr(user, "is_admin", False)),
        listing_count=count_by_owner(db, user.id),
    )


def _session_for(db: Session, user: User) -> Token:
    return Token(access_token=create_access_token(user.id), user=_account_view(db, user))


@router.post("/register", response_model=Token)
def register(data: UserRegister, db: Session = Depends(get_db)):
    """Create a member account. New accounts can post listings but never moderate."""
    email = _normalize_email(data.email)
    try:
        if get_by_email(db, email):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already registered")
        user = create_user(db, email, data.password)
        logger.info("Account created: %s", user.email)
        return _session_for(db, user)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Register failed for email=%s: %s", email, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Registration failed") from e


@router.post("/login", response_model=Token)
def login(data: UserLogin, db: Session = Depends(get_db)):
    email = _normalize_email(data.email)
    try:
        user = get_by_email(db, email)
        if user is None or not verify_password(data.password, user.password_hash):
            logger.info("Login rejected for email=%s", email)
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password")
        if not user.is_active:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Account is disabled")
        return _session_for(db, user)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Login failed for email=%s: %s", email, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Login failed") from e


@router.get("/me", response_model=UserResponse)
def get_me(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return _account_view(db, user)


@router.patch("/me", response_model=UserResponse)
def update_profile(
    data: UserProfileUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Change login email and/or password. A password change needs the current password."""
    changes: dict = {}
    try:
        if data.email is not None:
            email = _normalize_email(data.email)
            if email != user.email:
                if get_by_email(db, email):
                    raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already in use")
                changes["email"] = email
        if data.new_password is not None:
            if not verify_password(data.current_password, user.password_hash):
                raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Current password is incorrect")
            changes["password_hash"] = hash_password(data.new_password)

        if changes:
            update_user(db, user.id, **changes)
            logger.info("Profile updated for user=%s fields=%s", user.id, sorted(changes))
        return _account_view(db, get_by_id(db, user.id))
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Profile update failed for user=%s: %s", user.id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update profile") from e


@router.delete("/account")
def delete_account(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Close the caller's account. Every listing they posted goes with it."""
    try:
        removed = count_by_owner(db, user.id)
        delete_user(db, user.id)
        logger.info("Account closed: %s (%d listings removed)", user.email, removed)
        return {"message": "Account deleted", "listings_removed": removed}
    except Exception as e:
        logger.exception("Account delete failed for user=%s: %s", user.id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to delete account") from e
