from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Float, Index, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from listing_app.db.base import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Review(Base):
    __tablename__ = "reviews"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    # Properties live outside this database: no foreign key.
    property_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)

    # Snapshot of the reviewer at the time of writing
    user_name: Mapped[str] = mapped_column(String(120), nullable=False)
    user_image: Mapped[str | None] = mapped_column(String(500), nullable=True)

    rating: Mapped[float] = mapped_column(Float, nullable=False)
    comment: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True, onupdate=utcnow)

    __table_args__ = (
        UniqueConstraint("property_id", "user_id", name="uq_reviews_property_user"),
    )


Index("ix_reviews_property_created_at", Review.property_id, Review.created_at)
