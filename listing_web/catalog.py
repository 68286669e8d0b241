"""Static property catalog backing the listing pages."""
from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)


class Property(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    description: str = ""
    # Older exports use imageUrl/address/bedrooms/bathrooms
    image: str = Field(validation_alias=AliasChoices("image", "imageUrl"))
    price: float
    location: str = Field(validation_alias=AliasChoices("location", "address"))
    rating: float = 0
    review_count: int = Field(default=0, validation_alias=AliasChoices("reviewCount", "review_count"))
    type: str
    beds: int = Field(validation_alias=AliasChoices("beds", "bedrooms"))
    baths: int = Field(validation_alias=AliasChoices("baths", "bathrooms"))
    area: float
    amenities: list[str] = Field(default_factory=list)
    featured: bool = False


def load_properties(path: str | Path) -> list[Property]:
    """Read the catalog; a missing file is an empty catalog, bad entries are skipped."""
    path = Path(path)
    if not path.exists():
        logger.warning("Properties file %s not found", path)
        return []

    raw = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(raw, list):
        raise ValueError(f"{path}: expected a JSON list of properties")

    properties = []
    for i, item in enumerate(raw):
        try:
            properties.append(Property.model_validate(item))
        except ValidationError as e:
            logger.warning("Skipping property #%s in %s: %s", i, path, e.errors()[0].get("msg"))
    return properties


def find_property(properties: list[Property], property_id: str) -> Property | None:
    return next((p for p in properties if p.id == property_id), None)
