"""Review read/write operations.

Both operations return a tagged result instead of raising: :class:`Ok` with
the reviews to send back, or :class:`Err` with an :class:`ErrorKind` and a
human readable message. Turning a result into an HTTP response is left to the
router.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from listing_app.db import crud
from listing_app.models.reviews import Review
from listing_app.schemas.reviews import ReviewCreate

logger = logging.getLogger(__name__)

MSG_PROPERTY_ID_REQUIRED = "Property ID is required"
MSG_MISSING_FIELDS = "Missing required fields"
MSG_ALREADY_REVIEWED = "You have already reviewed this property"
MSG_FETCH_FAILED = "Failed to fetch reviews"
MSG_CREATE_FAILED = "Failed to create review"
MSG_CREATED = "Review submitted successfully"


class ErrorKind(str, Enum):
    invalid_request = "InvalidRequest"
    duplicate_review = "DuplicateReview"
    internal_fault = "InternalFault"
    method_not_allowed = "MethodNotAllowed"

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self]


_STATUS_CODES = {
    ErrorKind.invalid_request: 400,
    ErrorKind.duplicate_review: 400,
    ErrorKind.internal_fault: 500,
    ErrorKind.method_not_allowed: 405,
}


@dataclass(frozen=True)
class Ok:
    data: list[Review] = field(default_factory=list)
    message: str | None = None
    status_code: int = 200


@dataclass(frozen=True)
class Err:
    kind: ErrorKind
    message: str

    @property
    def status_code(self) -> int:
        return self.kind.status_code


ReviewResult = Union[Ok, Err]


def _clean_property_id(property_id: str | None) -> str:
    return (property_id or "").strip()


def describe_validation_errors(errors: Iterable[dict[str, Any]]) -> Err:
    """Collapse pydantic request errors into a single InvalidRequest."""
    errors = list(errors)
    if any(e.get("type") in ("missing", "string_too_short") for e in errors):
        return Err(ErrorKind.invalid_request, MSG_MISSING_FIELDS)

    parts = []
    for e in errors:
        loc = [str(p) for p in e.get("loc", ()) if p != "body"]
        parts.append(f"{'.'.join(loc)}: {e.get('msg')}" if loc else str(e.get("msg")))
    return Err(ErrorKind.invalid_request, f"Invalid request: {', '.join(parts)}")


def list_reviews(db: Session, property_id: str | None) -> ReviewResult:
    pid = _clean_property_id(property_id)
    if not pid:
        return Err(ErrorKind.invalid_request, MSG_PROPERTY_ID_REQUIRED)

    try:
        reviews = crud.find_reviews(db, property_id=pid)
    except SQLAlchemyError:
        logger.exception("Error fetching reviews for property %s", pid)
        return Err(ErrorKind.internal_fault, MSG_FETCH_FAILED)
    return Ok(data=reviews)


def create_review(db: Session, property_id: str | None, payload: ReviewCreate) -> ReviewResult:
    pid = _clean_property_id(property_id)
    if not pid:
        return Err(ErrorKind.invalid_request, MSG_MISSING_FIELDS)

    try:
        review = crud.insert_review(
            db,
            property_id=pid,
            user_id=payload.user_id,
            user_name=payload.user_name,
            user_image=payload.user_image,
            rating=payload.rating,
            comment=payload.comment,
        )
    except crud.StoreValidationError as exc:
        logger.info("Rejected review for property %s: %s", pid, exc)
        return Err(ErrorKind.invalid_request, f"Validation error: {', '.join(exc.messages)}")
    except crud.DuplicateKeyError:
        logger.info("Duplicate review by %s for property %s", payload.user_id, pid)
        return Err(ErrorKind.duplicate_review, MSG_ALREADY_REVIEWED)
    except SQLAlchemyError:
        logger.exception("Error creating review for property %s", pid)
        return Err(ErrorKind.internal_fault, MSG_CREATE_FAILED)

    try:
        others = [r for r in crud.find_reviews(db, property_id=pid) if r.id != review.id]
    except SQLAlchemyError:
        logger.exception("Error refreshing reviews for property %s", pid)
        return Err(ErrorKind.internal_fault, MSG_CREATE_FAILED)

    return Ok(data=[review, *others], message=MSG_CREATED, status_code=201)
