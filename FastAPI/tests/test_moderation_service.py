import pytest
from sqlalchemy.exc import OperationalError

import adboard.services.moderation_service as ms
from adboard.core.errors import (
    ListingConflictError,
    ListingForbiddenError,
    ListingNotFoundError,
    ListingValidationError,
    StoreUnavailableError,
)
from adboard.core.principal import Actor
from adboard.repos import listing_repo
from adboard.schemas.listing import ListingSubmission
from conftest import listing_payload


def _submit(db, user, **overrides):
    return ms.create_listing(db, ListingSubmission.model_validate(listing_payload(**overrides)), Actor(id=user.id))


def _as_admin(user) -> Actor:
    return Actor(id=user.id, is_admin=True)


def test_create_listing_starts_pending_with_zero_views(db, owner):
    listing = _submit(db, owner)
    assert listing.status == "pending"
    assert listing.views == 0
    assert listing.user_id == owner.id
    assert listing.title == "Backend Developer"
    assert listing.city == "Bakı"
    assert listing.created_at is not None


def test_create_listing_requires_signed_in_actor(db):
    with pytest.raises(ListingForbiddenError):
        ms.create_listing(db, ListingSubmission.model_validate(listing_payload()), None)
    assert listing_repo.get_all_paginated(db) == ([], 0)


def test_create_listing_rejects_invalid_content_without_writing(db, owner):
    with pytest.raises(ListingValidationError) as ex:
        _submit(db, owner, title="abc")
    assert ex.value.field == "title"
    assert listing_repo.get_all_paginated(db) == ([], 0)


def test_approve_makes_listing_approved_and_is_idempotent(db, owner, admin):
    listing = _submit(db, owner)
    approved = ms.approve_listing(db, listing.id, _as_admin(admin))
    assert approved.status == "approved"
    again = ms.approve_listing(db, listing.id, _as_admin(admin))
    assert again.status == "approved"
    assert again.views == 0


def test_reject_keeps_row_with_rejected_status(db, owner, admin):
    listing = _submit(db, owner)
    rejected = ms.reject_listing(db, listing.id, _as_admin(admin))
    assert rejected.status == "rejected"
    assert listing_repo.get_by_id(db, listing.id).status == "rejected"
    assert ms.reject_listing(db, listing.id, _as_admin(admin)).status == "rejected"


def test_non_admin_cannot_moderate_and_state_is_unchanged(db, owner):
    listing = _submit(db, owner)
    with pytest.raises(ListingForbiddenError):
        ms.approve_listing(db, listing.id, Actor(id=owner.id))
    with pytest.raises(ListingForbiddenError):
        ms.reject_listing(db, listing.id, None)
    assert listing_repo.get_by_id(db, listing.id).status == "pending"


def test_forbidden_is_reported_before_not_found_for_non_admin(db, owner):
    with pytest.raises(ListingForbiddenError):
        ms.approve_listing(db, "missing", Actor(id=owner.id))


def test_moderating_missing_listing_is_not_found(db, admin):
    with pytest.raises(ListingNotFoundError):
        ms.approve_listing(db, "missing", _as_admin(admin))


def test_terminal_states_refuse_other_transitions(db, owner, admin):
    approved = _submit(db, owner)
    ms.approve_listing(db, approved.id, _as_admin(admin))
    with pytest.raises(ListingConflictError):
        ms.reject_listing(db, approved.id, _as_admin(admin))

    rejected = _submit(db, owner, title="Data Analyst")
    ms.reject_listing(db, rejected.id, _as_admin(admin))
    with pytest.raises(ListingConflictError):
        ms.approve_listing(db, rejected.id, _as_admin(admin))
    assert listing_repo.get_by_id(db, rejected.id).status == "rejected"


def test_validate_transition_table():
    assert ms.validate_transition("pending", "approved") is True
    assert ms.validate_transition("pending", "rejected") is True
    assert ms.validate_transition("approved", "approved") is False
    with pytest.raises(ListingConflictError):
        ms.validate_transition("approved", "pending")
    with pytest.raises(ListingConflictError):
        ms.validate_transition("unknown", "approved")


def test_owner_edit_replaces_content_and_keeps_identity(db, owner, admin):
    listing = _submit(db, owner)
    ms.approve_listing(db, listing.id, _as_admin(admin))
    listing_repo.increment_views(db, listing.id)
    created_at = listing_repo.get_by_id(db, listing.id).created_at

    edited = ms.edit_listing(
        db,
        listing.id,
        Actor(id=owner.id),
        ListingSubmission(title="Senior Backend Developer", city="Gəncə"),
    )
    assert edited.id == listing.id
    assert edited.title == "Senior Backend Developer"
    assert edited.city == "Gəncə"
    assert edited.description == "Build and maintain REST APIs for our platform."
    assert edited.status == "approved"
    assert edited.views == 1
    assert edited.user_id == owner.id
    assert edited.created_at == created_at


def test_admin_may_edit_any_listing(db, owner, admin):
    listing = _submit(db, owner)
    edited = ms.edit_listing(db, listing.id, _as_admin(admin), ListingSubmission(salary="Negotiable"))
    assert edited.salary == "Negotiable"
    assert edited.status == "pending"


def test_non_owner_edit_is_forbidden_and_content_unchanged(db, owner, stranger):
    listing = _submit(db, owner)
    with pytest.raises(ListingForbiddenError):
        ms.edit_listing(db, listing.id, Actor(id=stranger.id), ListingSubmission(title="Hijacked title"))
    assert listing_repo.get_by_id(db, listing.id).title == "Backend Developer"


def test_edit_revalidates_merged_content(db, owner):
    listing = _submit(db, owner)
    with pytest.raises(ListingValidationError) as ex:
        ms.edit_listing(db, listing.id, Actor(id=owner.id), ListingSubmission(description="too short"))
    assert ex.value.field == "description"
    assert listing_repo.get_by_id(db, listing.id).description == "Build and maintain REST APIs for our platform."


def test_rejected_listing_cannot_be_edited(db, owner, admin):
    listing = _submit(db, owner)
    ms.reject_listing(db, listing.id, _as_admin(admin))
    with pytest.raises(ListingConflictError):
        ms.edit_listing(db, listing.id, Actor(id=owner.id), ListingSubmission(title="Second attempt"))


def test_edit_missing_listing_is_not_found(db, owner):
    with pytest.raises(ListingNotFoundError):
        ms.edit_listing(db, "missing", Actor(id=owner.id), ListingSubmission(title="Whatever title"))


def test_owner_delete_then_lookup_is_not_found(db, owner):
    listing_id = _submit(db, owner).id
    ms.delete_listing(db, listing_id, Actor(id=owner.id))
    assert listing_repo.get_by_id(db, listing_id) is None
    with pytest.raises(ListingNotFoundError):
        ms.delete_listing(db, listing_id, Actor(id=owner.id))


def test_stranger_delete_is_forbidden(db, owner, stranger):
    listing = _submit(db, owner)
    with pytest.raises(ListingForbiddenError):
        ms.delete_listing(db, listing.id, Actor(id=stranger.id))
    with pytest.raises(ListingForbiddenError):
        ms.delete_listing(db, listing.id, None)
    assert listing_repo.get_by_id(db, listing.id) is not None


def test_admin_delete_removes_listing(db, owner, admin):
    listing_id = _submit(db, owner).id
    ms.delete_listing(db, listing_id, _as_admin(admin))
    assert listing_repo.get_by_id(db, listing_id) is None


def test_store_failure_surfaces_as_unavailable(monkeypatch, db, owner):
    def _boom(*args, **kwargs):
        raise OperationalError("INSERT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(ms.listing_repo, "create_one", _boom)
    with pytest.raises(StoreUnavailableError):
        _submit(db, owner)


def test_minimal_camel_case_submission_is_created_pending(db, owner):
    submission = ListingSubmission.model_validate(
        {
            "title": "Backend Developer",
            "description": "x" * 25,
            "category": "job",
            "city": "Bakı",
            "contactEmail": "a@b.com",
            "contactPhone": "+994501234567",
        }
    )
    listing = ms.create_listing(db, submission, Actor(id=owner.id))
    assert listing.status == "pending"
    assert listing.views == 0
    assert listing.contact_email == "a@b.com"
    assert listing.experience_level is None
    assert listing.salary is None


def test_oversized_optional_field_is_a_validation_error_not_a_store_error(db, owner):
    with pytest.raises(ListingValidationError) as ex:
        _submit(db, owner, salary="9" * 201)
    assert ex.value.field == "salary"
    assert listing_repo.get_all_paginated(db) == ([], 0)
