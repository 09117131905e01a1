import logging

from sqlalchemy.orm import Session

from adboard.repos.listing_repo import increment_views

logger = logging.getLogger(__name__)


def record_view(db: Session, listing_id: str) -> int | None:
    """
    Count one detail view. Every call increments; there is no per-viewer dedup.
    Failures are logged and swallowed so the listing still renders.
    Returns the new count, or None if the increment did not land.
    """
    try:
        return increment_views(db, listing_id)
    except Exception as e:
        db.rollback()
        logger.warning("View count increment failed for listing=%s: %s", listing_id, e)
        return None
