"""Image resource attached to a listing."""

from __future__ import annotations

from typing import Any, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, SkipValidation

from etsy_listings.services.finders import get_all
from etsy_listings.services.request import EtsyRequest


class Image(BaseModel):
    """One photo of a listing, in the sizes the API exposes. Values are kept verbatim."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: SkipValidation[Optional[int]] = Field(default=None, alias="listing_image_id")
    listing_id: SkipValidation[Optional[int]] = None
    square: SkipValidation[Optional[str]] = Field(default=None, alias="url_75x75")
    small: SkipValidation[Optional[str]] = Field(default=None, alias="url_170x135")
    thumbnail: SkipValidation[Optional[str]] = Field(default=None, alias="url_570xN")
    full: SkipValidation[Optional[str]] = Field(default=None, alias="url_fullxfull")
    rank: SkipValidation[Optional[int]] = None

    @classmethod
    def from_payload(cls, data: Mapping[str, Any], client: EtsyRequest | None = None) -> "Image":
        return cls.model_validate(dict(data))

    @classmethod
    def find_all_by_listing_id(
        cls, listing_id: int, client: EtsyRequest | None = None, **options: Any
    ) -> List["Image"]:
        return get_all(f"/listings/{listing_id}/images", cls.from_payload, options, client)
