from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class ReviewCreate(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True)

    user_id: str = Field(min_length=1, max_length=64)
    user_name: str = Field(min_length=1)
    user_image: str | None = None
    # Numeric strings are accepted and coerced ("4" -> 4.0)
    rating: float = Field(allow_inf_nan=False)
    comment: str = Field(min_length=1)


class ReviewResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: str
    property_id: str
    user_id: str
    user_name: str
    user_image: str | None = None
    rating: float
    comment: str
    created_at: datetime
    updated_at: datetime | None = None

    @field_validator("created_at", "updated_at")
    @classmethod
    def _assume_utc(cls, value: datetime | None) -> datetime | None:
        # SQLite hands timestamps back naive; they were written as UTC.
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class ReviewEnvelope(BaseModel):
    """Wire shape of every response on the review endpoint."""

    success: bool
    data: list[ReviewResponse] = Field(default_factory=list)
    message: str | None = None

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
