"""Read paths for listings, each filtered through the visibility rules for the given viewer."""

import logging

from sqlalchemy.orm import Session

from adboard.core.errors import ListingNotFoundError
from adboard.core.principal import Viewer
from adboard.models.listing import Listing
from adboard.repos import listing_repo
from adboard.services.moderation_service import store_guard
from adboard.services.view_counter import record_view
from adboard.services.visibility import (
    ListingScope,
    can_view,
    filter_for_scope,
    visible_to,
)

logger = logging.getLogger(__name__)


def list_for_scope(
    db: Session,
    viewer: Viewer,
    scope: ListingScope,
    *,
    status: str | None = None,
    query: str | None = None,
    category: str | None = None,
    page: int = 1,
    page_size: int = 24,
) -> tuple[list[Listing], int]:
    """Return (page items, total) for a scope: public, mine, moderation_queue or all."""
    filters = filter_for_scope(viewer, scope, status=status)
    with store_guard(db, f"list {scope.value}"):
        rows, total = listing_repo.get_all_paginated(
            db,
            status=filters.status,
            owner_id=filters.owner_id,
            category=category,
            search=query,
            limit=page_size,
            offset=(page - 1) * page_size,
        )
    # Store filters already narrow the rows; this keeps the rule in one place.
    return visible_to(viewer, rows), total


def get_listing(db: Session, viewer: Viewer, listing_id: str) -> Listing:
    """Fetch one listing. Non-approved listings look absent to anyone but the owner or an admin."""
    with store_guard(db, "fetch"):
        listing = listing_repo.get_by_id(db, listing_id)
    if not listing or not can_view(viewer, listing):
        raise ListingNotFoundError("Listing not found")
    return listing


def open_listing(db: Session, viewer: Viewer, listing_id: str) -> tuple[Listing, int]:
    """Detail view: fetch under the visibility rules, then count the view. Returns (listing, views)."""
    listing = get_listing(db, viewer, listing_id)
    # Detach so the counter's commit or rollback cannot expire the loaded content.
    db.expunge(listing)
    views = record_view(db, listing_id)
    if views is None:
        logger.debug("Serving listing=%s without an updated view count", listing_id)
        views = listing.views or 0
    return listing, views
