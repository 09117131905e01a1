import logging

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from adboard.config import settings
from adboard.core.principal import Actor, Viewer
from adboard.core.vocabulary import CATEGORY_LABELS, CITIES, EXPERIENCE_LEVEL_LABELS, Category
from adboard.database import get_db
from adboard.dependencies import get_actor, get_viewer
from adboard.models.listing import Listing
from adboard.schemas.listing import ListingOut, ListingPage, ListingSubmission, ListingVocabulary, VocabularyEntry
from adboard.services.listing_query_service import list_for_scope, open_listing
from adboard.services.moderation_service import create_listing, delete_listing, edit_listing
from adboard.services.visibility import ListingScope

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/listings", tags=["listings"])


def listing_to_response(listing: Listing, views: int | None = None) -> ListingOut:
    out = ListingOut.model_validate(listing)
    try:
        out.category_label = CATEGORY_LABELS[Category(listing.category)]
    except ValueError:
        out.category_label = listing.category
    if views is not None:
        out.views = views
    return out


def clamp_page(page: int, page_size: int | None) -> tuple[int, int]:
    page = max(1, page)
    page_size = page_size or settings.default_page_size
    return page, min(max(1, page_size), settings.max_page_size)


def page_response(items: list[Listing], total: int, page: int, page_size: int) -> ListingPage:
    return ListingPage(
        items=[listing_to_response(listing) for listing in items],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.get("", response_model=ListingPage)
def browse_listings(
    q: str | None = Query(default=None, max_length=200),
    category: str | None = None,
    page: int = 1,
    page_size: int | None = None,
    db: Session = Depends(get_db),
    viewer: Viewer = Depends(get_viewer),
):
    """Approved listings only, newest first. Optional text search and category filter."""
    page, page_size = clamp_page(page, page_size)
    items, total = list_for_scope(
        db, viewer, ListingScope.PUBLIC, query=q, category=category, page=page, page_size=page_size
    )
    return page_response(items, total, page, page_size)


@router.get("/mine", response_model=ListingPage)
def my_listings(
    page: int = 1,
    page_size: int | None = None,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
):
    """Every listing the caller owns, whatever its moderation state."""
    page, page_size = clamp_page(page, page_size)
    items, total = list_for_scope(
        db, Viewer.for_actor(actor), ListingScope.MINE, page=page, page_size=page_size
    )
    return page_response(items, total, page, page_size)


@router.get("/vocabulary", response_model=ListingVocabulary)
def listing_vocabulary():
    return ListingVocabulary(
        categories=[VocabularyEntry(value=c.value, label=label) for c, label in CATEGORY_LABELS.items()],
        experience_levels=[VocabularyEntry(value=e.value, label=label) for e, label in EXPERIENCE_LEVEL_LABELS.items()],
        cities=list(CITIES),
    )


@router.get("/{listing_id}", response_model=ListingOut)
def get_listing_detail(
    listing_id: str,
    db: Session = Depends(get_db),
    viewer: Viewer = Depends(get_viewer),
):
    listing, views = open_listing(db, viewer, listing_id)
    return listing_to_response(listing, views=views)


@router.post("", response_model=ListingOut, status_code=status.HTTP_201_CREATED)
def submit_listing(
    body: ListingSubmission,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
):
    """Submit a listing. It stays pending until an admin approves it."""
    return listing_to_response(create_listing(db, body, actor))


@router.patch("/{listing_id}", response_model=ListingOut)
def update_listing(
    listing_id: str,
    body: ListingSubmission,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
):
    return listing_to_response(edit_listing(db, listing_id, actor, body))


@router.delete("/{listing_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_listing(
    listing_id: str,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
):
    delete_listing(db, listing_id, actor)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
