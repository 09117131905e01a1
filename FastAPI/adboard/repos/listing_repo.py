import logging

from sqlalchemy import func, or_, update
from sqlalchemy.orm import Session

from adboard.core.security import generate_id
from adboard.core.vocabulary import ALL_CATEGORIES, ListingStatus
from adboard.models.listing import Listing

logger = logging.getLogger(__name__)

CONTENT_FIELDS = (
    "title",
    "description",
    "category",
    "city",
    "experience_level",
    "salary",
    "contact_email",
    "contact_phone",
)


def create_one(db: Session, user_id: str, content: dict) -> Listing:
    """Insert a new listing. Always starts pending with zero views."""
    listing = Listing(
        id=generate_id(),
        user_id=user_id,
        status=ListingStatus.PENDING.value,
        views=0,
        **{field: content.get(field) for field in CONTENT_FIELDS},
    )
    db.add(listing)
    db.commit()
    db.refresh(listing)
    return listing


def get_by_id(db: Session, listing_id: str) -> Listing | None:
    return db.query(Listing).filter(Listing.id == listing_id).first()


def get_all_paginated(
    db: Session,
    status: str | None = None,
    owner_id: str | None = None,
    category: str | None = None,
    search: str | None = None,
    limit: int = 24,
    offset: int = 0,
) -> tuple[list[Listing], int]:
    """Listings matching the filters, newest first, with title/description search. Returns (items, total)."""
    q = db.query(Listing).order_by(Listing.created_at.desc(), Listing.id)
    if status:
        q = q.filter(Listing.status == status)
    if owner_id:
        q = q.filter(Listing.user_id == owner_id)
    if category and category != ALL_CATEGORIES:
        q = q.filter(Listing.category == category)
    if search and search.strip():
        term = f"%{search.strip()}%"
        q = q.filter(
            or_(
                Listing.title.ilike(term),
                Listing.description.ilike(term),
            )
        )
    total = q.count()
    items = q.offset(offset).limit(limit).all()
    return items, total


def update_content(db: Session, listing_id: str, content: dict) -> Listing | None:
    """Replace content fields only; id, owner, status, views and created_at are left alone."""
    listing = get_by_id(db, listing_id)
    if not listing:
        return None
    for field in CONTENT_FIELDS:
        setattr(listing, field, content.get(field))
    db.commit()
    db.refresh(listing)
    return listing


def set_status(db: Session, listing_id: str, status: str) -> Listing | None:
    listing = get_by_id(db, listing_id)
    if not listing:
        return None
    listing.status = status
    db.commit()
    db.refresh(listing)
    return listing


def delete_one(db: Session, listing_id: str) -> bool:
    listing = get_by_id(db, listing_id)
    if not listing:
        return False
    db.delete(listing)
    db.commit()
    return True


def increment_views(db: Session, listing_id: str) -> int | None:
    """Atomically bump the view counter in the database. Returns the new count, or None if the row is gone."""
    result = db.execute(
        update(Listing)
        .where(Listing.id == listing_id)
        .values(views=Listing.views + 1)
        .execution_options(synchronize_session=False)
    )
    db.commit()
    if not result.rowcount:
        return None
    return db.query(Listing.views).filter(Listing.id == listing_id).scalar()


def count_by_status(db: Session) -> dict[str, int]:
    rows = db.query(Listing.status, func.count(Listing.id)).group_by(Listing.status).all()
    counts = {status.value: 0 for status in ListingStatus}
    for status, count in rows:
        counts[status] = count
    return counts


def count_by_owner(db: Session, user_id: str) -> int:
    return db.query(func.count(Listing.id)).filter(Listing.user_id == user_id).scalar() or 0


def total_views(db: Session) -> int:
    return db.query(func.coalesce(func.sum(Listing.views), 0)).scalar() or 0
