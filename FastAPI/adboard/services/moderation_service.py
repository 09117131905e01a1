"""
Listing lifecycle: create -> pending -> approved | rejected, plus owner/admin
edit and delete.

Each operation takes an explicit Actor, performs at most one write against the
listing store, and raises a ListingError subclass on failure. Store failures are
rolled back and surfaced as StoreUnavailableError.
"""

import logging
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from adboard.config import settings
from adboard.core.errors import (
    ListingConflictError,
    ListingError,
    ListingForbiddenError,
    ListingNotFoundError,
    StoreUnavailableError,
)
from adboard.core.principal import Actor, Viewer
from adboard.core.vocabulary import ListingStatus
from adboard.models.listing import Listing
from adboard.repos import listing_repo
from adboard.schemas.listing import ListingSubmission
from adboard.services.listing_validator import validate_submission
from adboard.services.visibility import can_manage

logger = logging.getLogger(__name__)

PENDING = ListingStatus.PENDING.value
APPROVED = ListingStatus.APPROVED.value
REJECTED = ListingStatus.REJECTED.value

# Status changes an admin may trigger. Re-applying the current status is a no-op.
ALLOWED_TRANSITIONS: dict[str, set[str]] = {
    PENDING: {APPROVED, REJECTED},
    APPROVED: set(),
    REJECTED: set(),
}
EDITABLE_STATES = {PENDING, APPROVED}


@contextmanager
def store_guard(db: Session, operation: str):
    try:
        yield
    except ListingError:
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Listing store failure during %s: %s", operation, e)
        raise StoreUnavailableError("Listing store is unavailable. Please retry shortly.") from e


def validate_transition(from_status: str, to_status: str) -> bool:
    """Return False when the listing is already in to_status; raise when the move is not allowed."""
    if from_status == to_status:
        return False
    allowed = ALLOWED_TRANSITIONS.get(from_status)
    if not allowed or to_status not in allowed:
        raise ListingConflictError(f"Cannot move listing from {from_status} to {to_status}")
    return True


def _require_admin(actor: Actor | None) -> Actor:
    if actor is None or not actor.is_admin:
        raise ListingForbiddenError("Admin access required")
    return actor


def _load(db: Session, listing_id: str) -> Listing:
    listing = listing_repo.get_by_id(db, listing_id)
    if not listing:
        raise ListingNotFoundError("Listing not found")
    return listing


def _load_managed(db: Session, listing_id: str, actor: Actor | None) -> Listing:
    listing = _load(db, listing_id)
    if actor is None or not can_manage(Viewer.for_actor(actor), listing):
        raise ListingForbiddenError("Only the owner or an admin can change this listing")
    return listing


def create_listing(db: Session, submission: ListingSubmission, actor: Actor | None) -> Listing:
    if actor is None:
        raise ListingForbiddenError("Sign in to post a listing")
    content = validate_submission(submission, enforce_gazetteer=settings.enforce_city_gazetteer)
    with store_guard(db, "create"):
        listing = listing_repo.create_one(db, actor.id, content.as_columns())
    logger.info("Listing %s submitted by user=%s (pending)", listing.id, actor.id)
    return listing


def _transition(db: Session, listing_id: str, actor: Actor | None, to_status: str) -> Listing:
    _require_admin(actor)
    with store_guard(db, to_status):
        listing = _load(db, listing_id)
        from_status = listing.status
        if not validate_transition(from_status, to_status):
            logger.info("Listing %s already %s; nothing to do (admin=%s)", listing_id, to_status, actor.id)
            return listing
        updated = listing_repo.set_status(db, listing_id, to_status)
        if not updated:
            raise ListingNotFoundError("Listing not found")
    logger.info("Listing %s moved %s -> %s by admin=%s", listing_id, from_status, to_status, actor.id)
    return updated


def approve_listing(db: Session, listing_id: str, actor: Actor | None) -> Listing:
    return _transition(db, listing_id, actor, APPROVED)


def reject_listing(db: Session, listing_id: str, actor: Actor | None) -> Listing:
    """Reject keeps the row with status=rejected so it drops out of every public view."""
    return _transition(db, listing_id, actor, REJECTED)


def edit_listing(db: Session, listing_id: str, actor: Actor | None, submission: ListingSubmission) -> Listing:
    with store_guard(db, "edit"):
        listing = _load_managed(db, listing_id, actor)
        if listing.status not in EDITABLE_STATES:
            raise ListingConflictError(f"A {listing.status} listing cannot be edited")
        # Fields the caller left out keep their stored values.
        current = ListingSubmission(**{field: getattr(listing, field) for field in listing_repo.CONTENT_FIELDS})
        merged = current.model_copy(update=submission.model_dump(exclude_unset=True))
        content = validate_submission(merged, enforce_gazetteer=settings.enforce_city_gazetteer)
        updated = listing_repo.update_content(db, listing_id, content.as_columns())
        if not updated:
            raise ListingNotFoundError("Listing not found")
    logger.info("Listing %s edited by user=%s", listing_id, actor.id)
    return updated


def delete_listing(db: Session, listing_id: str, actor: Actor | None) -> None:
    with store_guard(db, "delete"):
        _load_managed(db, listing_id, actor)
        if not listing_repo.delete_one(db, listing_id):
            raise ListingNotFoundError("Listing not found")
    logger.info("Listing %s deleted by user=%s", listing_id, actor.id)
