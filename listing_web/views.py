"""View models for the review list.

Templates stay free of logic: everything conditional about a review (avatar
fallback, star fill, "updated on" annotation) is decided here.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from listing_web.api import APIError

logger = logging.getLogger(__name__)

STAR_COUNT = 5

MSG_NO_PROPERTY_ID = "No property ID provided"
MSG_LOAD_FAILED = "Failed to load reviews"
MSG_FETCH_ERROR = "An error occurred while fetching reviews. Please try again later."


@dataclass
class ReviewEntry:
    id: str
    user_name: str
    user_image: Optional[str]
    initial: str
    stars: list[bool]
    created_on: str
    comment: str
    updated_on: Optional[str] = None


@dataclass
class ReviewListView:
    state: str  # "error" | "empty" | "ready"
    reviews: list[ReviewEntry] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def heading(self) -> str:
        n = len(self.reviews)
        return f"{n} {'Review' if n == 1 else 'Reviews'}"


def render_stars(rating: Any) -> list[bool]:
    """Five slots; slot ``i`` is filled when ``i < rating`` (3.5 fills four)."""
    try:
        value = float(rating)
    except (TypeError, ValueError):
        value = 0.0
    if math.isnan(value):
        value = 0.0
    return [i < value for i in range(STAR_COUNT)]


def format_date(value: str) -> str:
    """ISO-8601 timestamp -> 'October 19, 2026'. Unparseable input is returned as is."""
    try:
        d = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (AttributeError, ValueError):
        return str(value or "")
    return f"{d:%B} {d.day}, {d.year}"


def build_entry(raw: dict) -> ReviewEntry:
    user_name = raw.get("userName") or ""
    created_at = raw.get("createdAt") or ""
    updated_at = raw.get("updatedAt")

    return ReviewEntry(
        id=str(raw.get("id", "")),
        user_name=user_name,
        user_image=raw.get("userImage") or None,
        initial=user_name[:1].upper() or "?",
        stars=render_stars(raw.get("rating")),
        created_on=format_date(created_at),
        comment=raw.get("comment") or "",
        updated_on=format_date(updated_at) if updated_at and updated_at != created_at else None,
    )


def load_review_list(api, property_id: str) -> ReviewListView:
    if not property_id:
        return ReviewListView(state="error", error=MSG_NO_PROPERTY_ID)

    try:
        payload = api.list_reviews(property_id)
    except APIError as e:
        # Envelope-carrying HTTP errors keep the handler's message
        if isinstance(e.details, dict) and "success" in e.details:
            logger.warning("Reviews for %s failed: %s %s", property_id, e.status_code, e.message)
            return ReviewListView(state="error", error=e.details.get("message") or MSG_LOAD_FAILED)
        logger.error("Error fetching reviews for %s: %s", property_id, e.message)
        return ReviewListView(state="error", error=MSG_FETCH_ERROR)

    if not isinstance(payload, dict):
        logger.error("Unexpected reviews payload for %s: %r", property_id, payload)
        return ReviewListView(state="error", error=MSG_FETCH_ERROR)

    if not payload.get("success") or payload.get("data") is None:
        return ReviewListView(state="error", error=payload.get("message") or MSG_LOAD_FAILED)

    entries = [build_entry(r) for r in payload["data"]]
    if not entries:
        return ReviewListView(state="empty")
    return ReviewListView(state="ready", reviews=entries)
