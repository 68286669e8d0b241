from __future__ import annotations

import logging
import re

from fastapi import APIRouter, Depends, Request
from fastapi.exception_handlers import http_exception_handler as default_http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from listing_app.db.session import get_db
from listing_app.models.reviews import Review
from listing_app.schemas.reviews import ReviewCreate, ReviewEnvelope, ReviewResponse
from listing_app.services import reviews as review_service
from listing_app.services.reviews import Err, ErrorKind, ReviewResult

logger = logging.getLogger(__name__)

ALLOWED_METHODS = ("GET", "POST")

router = APIRouter(prefix="/api/properties/{property_id}/reviews", tags=["reviews"])
_REVIEWS_PATH = re.compile(r"^/api/properties/[^/]+/reviews/?$")


def _to_review_response(r: Review) -> ReviewResponse:
    return ReviewResponse.model_validate(r)


def envelope_response(result: ReviewResult, *, headers: dict[str, str] | None = None) -> JSONResponse:
    if isinstance(result, Err):
        envelope = ReviewEnvelope(success=False, message=result.message)
    else:
        envelope = ReviewEnvelope(
            success=True,
            data=[_to_review_response(r) for r in result.data],
            message=result.message,
        )
    return JSONResponse(status_code=result.status_code, content=envelope.to_wire(), headers=headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    result = review_service.describe_validation_errors(exc.errors())
    logger.info("%s %s rejected: %s", request.method, request.url.path, result.message)
    return envelope_response(result)


@router.get("")
def list_reviews(property_id: str, db: Session = Depends(get_db)) -> JSONResponse:
    return envelope_response(review_service.list_reviews(db, property_id))


@router.post("", status_code=201)
def create_review(
    property_id: str,
    payload: ReviewCreate,
    db: Session = Depends(get_db),
) -> JSONResponse:
    return envelope_response(review_service.create_review(db, property_id, payload))


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    # Starlette answers unknown methods itself; keep the envelope and Allow header here.
    if exc.status_code == 405 and _REVIEWS_PATH.match(request.url.path):
        result = Err(ErrorKind.method_not_allowed, f"Method {request.method} not allowed")
        return envelope_response(result, headers={"Allow": ", ".join(ALLOWED_METHODS)})
    return await default_http_exception_handler(request, exc)
