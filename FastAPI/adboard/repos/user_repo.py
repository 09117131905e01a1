from sqlalchemy.orm import Session

from adboard.models.user import User
from adboard.core.security import hash_password, generate_id


def get_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email).first()


def get_by_id(db: Session, user_id: str) -> User | None:
    return db.query(User).filter(User.id == user_id).first()


def create(db: Session, email: str, password: str) -> User:
    user = User(
        id=generate_id(),
        email=email,
        password_hash=hash_password(password),
        is_active=True,
        is_admin=False,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def update(
    db: Session,
    user_id: str,
    *,
    email: str | None = None,
    password_hash: str | None = None,
    is_admin: bool | None = None,
    is_active: bool | None = None,
) -> User | None:
    user = get_by_id(db, user_id)
    if not user:
        return None
    if email is not None:
        user.email = email
    if password_hash is not None:
        user.password_hash = password_hash
    if is_admin is not None:
        user.is_admin = is_admin
    if is_active is not None:
        user.is_active = is_active
    db.commit()
    db.refresh(user)
    return user


def is_admin(db: Session, user_id: str) -> bool:
    """Capability check against the role column; unknown or disabled users are never admins."""
    user = get_by_id(db, user_id)
    return bool(user and user.is_active and user.is_admin)


def get_all_users_paginated(
    db: Session,
    search: str | None = None,
    limit: int = 20,
    offset: int = 0,
) -> tuple[list[User], int]:
    """List users with optional email search and pagination. Returns (items, total)."""
    q = db.query(User).order_by(User.created_at.desc())
    if search and search.strip():
        term = f"%{search.strip()}%"
        q = q.filter(User.email.ilike(term))
    total = q.count()
    items = q.offset(offset).limit(limit).all()
    return items, total


def delete_user(db: Session, user_id: str) -> bool:
    """Delete user and their listings (via CASCADE). Returns True if deleted."""
    user = get_by_id(db, user_id)
    if not user:
        return False
    db.delete(user)
    db.commit()
    return True
