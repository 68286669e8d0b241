from datetime import datetime, timezone

import pytest

from listing_app.db import crud
from listing_app.models.reviews import Review
from listing_app.services import reviews as review_service
from listing_app.services.reviews import Err, ErrorKind, Ok
from listing_app.schemas.reviews import ReviewCreate


def _insert(db, **overrides):
    fields = dict(property_id="p1", user_id="u1", user_name="Ann", rating=5, comment="Great stay")
    fields.update(overrides)
    return crud.insert_review(db, **fields)


def test_insert_assigns_id_and_timestamps(db):
    review = _insert(db)

    assert review.id
    assert review.created_at is not None
    assert review.updated_at == review.created_at
    assert review.user_image is None


def test_insert_duplicate_pair_is_rejected_by_index(db):
    _insert(db)

    with pytest.raises(crud.DuplicateKeyError):
        _insert(db, comment="Changed my mind")

    # the session is still usable after the rollback
    stored = crud.find_reviews(db, property_id="p1")
    assert [r.comment for r in stored] == ["Great stay"]


def test_empty_user_image_is_not_stored(db):
    review = _insert(db, user_image="")
    assert review.user_image is None


def test_validation_collects_every_field():
    with pytest.raises(crud.StoreValidationError) as excinfo:
        crud.validate_review_fields(user_name="", rating=6, comment=" ")

    assert set(excinfo.value.errors) == {"rating", "userName", "comment"}
    assert excinfo.value.messages[0] == "Rating must be between 1 and 5"


def test_validation_accepts_bounds():
    crud.validate_review_fields(user_name="Ann", rating=1, comment="ok")
    crud.validate_review_fields(user_name="Ann", rating=5, comment="ok")
    crud.validate_review_fields(user_name="Ann", rating=3.5, comment="ok")


def test_find_reviews_filters_and_orders(db):
    db.add_all(
        [
            Review(property_id="p1", user_id="a", user_name="A", rating=3, comment="a",
                   created_at=datetime(2023, 3, 1, tzinfo=timezone.utc)),
            Review(property_id="p1", user_id="b", user_name="B", rating=4, comment="b",
                   created_at=datetime(2024, 3, 1, tzinfo=timezone.utc)),
            Review(property_id="p2", user_id="a", user_name="A", rating=5, comment="c",
                   created_at=datetime(2025, 3, 1, tzinfo=timezone.utc)),
        ]
    )
    db.commit()

    assert [r.user_id for r in crud.find_reviews(db, property_id="p1")] == ["b", "a"]
    assert len(crud.find_reviews(db, property_id="p2")) == 1
    assert crud.find_reviews(db, property_id="missing") == []


def test_service_results_are_tagged(db):
    payload = ReviewCreate(user_id="u1", user_name="Ann", rating=4, comment="Cosy")

    created = review_service.create_review(db, "p1", payload)
    assert isinstance(created, Ok)
    assert created.status_code == 201

    again = review_service.create_review(db, "p1", payload)
    assert isinstance(again, Err)
    assert again.kind is ErrorKind.duplicate_review
    assert again.status_code == 400

    missing = review_service.list_reviews(db, "")
    assert missing == Err(ErrorKind.invalid_request, "Property ID is required")


def test_error_kind_status_codes():
    assert ErrorKind.invalid_request.status_code == 400
    assert ErrorKind.duplicate_review.status_code == 400
    assert ErrorKind.internal_fault.status_code == 500
    assert ErrorKind.method_not_allowed.status_code == 405


def test_in_memory_engine_keeps_one_connection():
    from sqlalchemy.pool import StaticPool

    from listing_app.db.session import make_engine

    assert isinstance(make_engine("sqlite://").pool, StaticPool)
    assert not isinstance(make_engine("sqlite:///./somewhere.db").pool, StaticPool)
