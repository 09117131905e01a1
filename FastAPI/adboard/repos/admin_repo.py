"""Admin dashboard counters."""

from sqlalchemy import func
from sqlalchemy.orm import Session

from adboard.models.user import User
from adboard.repos.listing_repo import count_by_status, total_views


def get_stats(db: Session) -> dict:
    """Return admin dashboard stats."""
    user_count = db.query(func.count(User.id)).scalar() or 0
    admin_count = db.query(func.count(User.id)).filter(User.is_admin == True).scalar() or 0  # noqa: E712
    by_status = count_by_status(db)
    return {
        "users_total": user_count,
        "admins": admin_count,
        "listings_total": sum(by_status.values()),
        "listings_pending": by_status.get("pending", 0),
        "listings_approved": by_status.get("approved", 0),
        "listings_rejected": by_status.get("rejected", 0),
        "views_total": total_views(db),
    }
