import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from adboard.core.principal import Viewer
from adboard.core.vocabulary import ListingStatus
from adboard.database import get_db
from adboard.dependencies import actor_for, get_current_admin
from adboard.models.user import User
from adboard.repos.admin_repo import get_stats
from adboard.repos.user_repo import get_all_users_paginated, get_by_id, update as update_user
from adboard.routers.listings import clamp_page, listing_to_response, page_response
from adboard.schemas.listing import ListingOut, ListingPage
from adboard.services.listing_query_service import list_for_scope
from adboard.services.moderation_service import approve_listing, reject_listing
from adboard.services.visibility import ListingScope

logger = logging.getLogger(__name__)


class AdminUserUpdate(BaseModel):
    is_admin: bool | None = None
    is_active: bool | None = None


router = APIRouter(prefix="/admin", tags=["admin"])


def _user_to_response(u: User) -> dict:
    return {
        "id": u.id,
        "email": u.email,
        "is_active": u.is_active,
        "is_admin": getattr(u, "is_admin", False),
        "created_at": u.created_at.isoformat() if u.created_at else None,
    }


@router.get("/stats")
def get_admin_stats(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_admin),
):
    """Return dashboard stats. Admin only."""
    try:
        return get_stats(db)
    except Exception as e:
        logger.exception("Admin stats failed for admin=%s: %s", user.email, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to load admin stats") from e


# ---- Moderation ----
@router.get("/listings/pending", response_model=ListingPage)
def moderation_queue(
    page: int = 1,
    page_size: int | None = None,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_admin),
):
    """Listings waiting for review, newest first. Admin only."""
    page, page_size = clamp_page(page, page_size)
    viewer = Viewer.for_actor(actor_for(user))
    items, total = list_for_scope(db, viewer, ListingScope.MODERATION_QUEUE, page=page, page_size=page_size)
    return page_response(items, total, page, page_size)


@router.get("/listings", response_model=ListingPage)
def list_all_listings(
    listing_status: ListingStatus | None = Query(default=None, alias="status"),
    q: str | None = None,
    category: str | None = None,
    page: int = 1,
    page_size: int | None = None,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_admin),
):
    """Every listing regardless of state, optionally narrowed by status. Admin only."""
    page, page_size = clamp_page(page, page_size)
    viewer = Viewer.for_actor(actor_for(user))
    items, total = list_for_scope(
        db,
        viewer,
        ListingScope.ALL,
        status=listing_status.value if listing_status else None,
        query=q,
        category=category,
        page=page,
        page_size=page_size,
    )
    return page_response(items, total, page, page_size)


@router.post("/listings/{listing_id}/approve", response_model=ListingOut)
def approve(
    listing_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_admin),
):
    """Make a pending listing public. Approving twice is harmless. Admin only."""
    return listing_to_response(approve_listing(db, listing_id, actor_for(user)))


@router.post("/listings/{listing_id}/reject", response_model=ListingOut)
def reject(
    listing_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_admin),
):
    """Reject a pending listing. The row is kept with status=rejected. Admin only."""
    return listing_to_response(reject_listing(db, listing_id, actor_for(user)))


# ---- Users / roles ----
@router.get("/users")
def list_users(
    search: str | None = None,
    page: int = 1,
    page_size: int = 20,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_admin),
):
    """List users with optional email search and pagination. Admin only."""
    page = max(1, page)
    page_size = min(max(1, page_size), 100)
    offset = (page - 1) * page_size
    users, total = get_all_users_paginated(db, search=search, limit=page_size, offset=offset)
    return {"items": [_user_to_response(u) for u in users], "total": total}


@router.patch("/users/{user_id}")
def update_user_admin(
    user_id: str,
    body: AdminUserUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    """Grant or revoke admin, enable or disable an account. Admin only. Cannot demote or disable self."""
    target = get_by_id(db, user_id)
    if not target:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    if target.id == current_user.id and (body.is_admin is False or body.is_active is False):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot remove your own admin status or disable your own account",
        )
    updated = update_user(db, user_id, is_admin=body.is_admin, is_active=body.is_active)
    if not updated:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    logger.info(
        "Admin %s updated user=%s is_admin=%s is_active=%s",
        current_user.email,
        user_id,
        body.is_admin,
        body.is_active,
    )
    return _user_to_response(updated)
