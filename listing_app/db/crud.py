"""Review record store.

Thin layer over the ``reviews`` table. Uniqueness of (property_id, user_id) is
owned by the database: :func:`insert_review` is a single conditional write and
a lost race surfaces as :class:`DuplicateKeyError`.
"""
from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from listing_app.core.config import settings
from listing_app.models.reviews import Review, utcnow

logger = logging.getLogger(__name__)

USER_NAME_MAX_LENGTH = 120


class StoreValidationError(Exception):
    """Field-level validation failure raised before anything is written."""

    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = errors
        super().__init__(", ".join(errors.values()))

    @property
    def messages(self) -> list[str]:
        return list(self.errors.values())


class DuplicateKeyError(Exception):
    """The unique index on (property_id, user_id) rejected the insert."""


def validate_review_fields(*, user_name: str, rating: float, comment: str) -> None:
    errors: dict[str, str] = {}

    lo, hi = settings.review_rating_min, settings.review_rating_max
    if not lo <= rating <= hi:
        errors["rating"] = f"Rating must be between {lo:g} and {hi:g}"

    if not user_name.strip():
        errors["userName"] = "User name is required"
    elif len(user_name) > USER_NAME_MAX_LENGTH:
        errors["userName"] = f"User name cannot be more than {USER_NAME_MAX_LENGTH} characters"

    if not comment.strip():
        errors["comment"] = "Comment is required"
    elif len(comment) > settings.review_comment_max_length:
        errors["comment"] = f"Comment cannot be more than {settings.review_comment_max_length} characters"

    if errors:
        raise StoreValidationError(errors)


def find_reviews(db: Session, *, property_id: str) -> list[Review]:
    stmt = (
        select(Review)
        .where(Review.property_id == property_id)
        .order_by(Review.created_at.desc())
    )
    return list(db.scalars(stmt).all())


def _is_unique_violation(exc: IntegrityError) -> bool:
    orig = exc.orig
    # psycopg / asyncpg expose the SQLSTATE, sqlite only the message
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if code == "23505":
        return True
    text = str(orig).lower()
    return "unique" in text or "duplicate" in text


def insert_review(
    db: Session,
    *,
    property_id: str,
    user_id: str,
    user_name: str,
    rating: float,
    comment: str,
    user_image: str | None = None,
) -> Review:
    validate_review_fields(user_name=user_name, rating=rating, comment=comment)

    now = utcnow()
    review = Review(
        property_id=property_id,
        user_id=user_id,
        user_name=user_name,
        user_image=user_image or None,
        rating=rating,
        comment=comment,
        created_at=now,
        updated_at=now,
    )
    db.add(review)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        if _is_unique_violation(exc):
            raise DuplicateKeyError(f"review by {user_id!r} for {property_id!r} already exists") from exc
        raise
    db.refresh(review)
    logger.info("Review %s stored for property %s", review.id, property_id)
    return review
