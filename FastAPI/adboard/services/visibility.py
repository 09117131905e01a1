"""
Viewer-aware visibility rules for listings.

Everything here is pure: the repos fetch rows, these functions decide which
rows a given Viewer may see.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Protocol

from adboard.core.errors import ListingForbiddenError
from adboard.core.principal import Viewer
from adboard.core.vocabulary import ListingStatus


class ListingLike(Protocol):
    user_id: str
    status: str


class ListingScope(str, Enum):
    PUBLIC = "public"
    MINE = "mine"
    MODERATION_QUEUE = "moderation_queue"
    ALL = "all"


@dataclass(frozen=True)
class ListingFilter:
    status: str | None = None
    owner_id: str | None = None


def is_owner(viewer: Viewer, listing: ListingLike) -> bool:
    return viewer.is_authenticated and viewer.user_id == listing.user_id


def can_view(viewer: Viewer, listing: ListingLike) -> bool:
    if listing.status == ListingStatus.APPROVED.value:
        return True
    return viewer.is_admin or is_owner(viewer, listing)


def can_manage(viewer: Viewer, listing: ListingLike) -> bool:
    """Owners and admins may edit or delete a listing in any state."""
    return viewer.is_admin or is_owner(viewer, listing)


def filter_for_scope(viewer: Viewer, scope: ListingScope, status: str | None = None) -> ListingFilter:
    """Translate a requested listing scope into store filters, enforcing who may ask for it."""
    if scope is ListingScope.PUBLIC:
        return ListingFilter(status=ListingStatus.APPROVED.value)
    if scope is ListingScope.MINE:
        if not viewer.is_authenticated:
            raise ListingForbiddenError("Sign in to see your listings")
        return ListingFilter(owner_id=viewer.user_id)
    if not viewer.is_admin:
        raise ListingForbiddenError("Admin access required")
    if scope is ListingScope.MODERATION_QUEUE:
        return ListingFilter(status=ListingStatus.PENDING.value)
    return ListingFilter(status=status)


def visible_to(viewer: Viewer, listings: Iterable[ListingLike]) -> list:
    return [listing for listing in listings if can_view(viewer, listing)]
