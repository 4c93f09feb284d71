"""Listing resource of the Etsy API."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, SkipValidation

from etsy_listings.models.image import Image
from etsy_listings.services.finders import find_one_or_more, flatten_result, get_all
from etsy_listings.services.request import CREDENTIAL_OPTIONS, EtsyRequest, default_client


logger = logging.getLogger(__name__)


class InvalidStateError(ValueError):
    """Raised for a shop listing state the API does not filter on."""


class ShopListingState(str, Enum):
    """States accepted by ``Listing.find_all_by_shop_id``."""

    ACTIVE = "active"
    EXPIRED = "expired"
    INACTIVE = "inactive"
    SOLD_OUT = "sold_out"
    FEATURED = "featured"


STATES = ("active", "removed", "sold_out", "expired", "alchemy")
VALID_STATES = tuple(s.value for s in ShopListingState)


def _timestamp(value: Optional[float]) -> Optional[datetime]:
    if value is None:
        return None
    return datetime.fromtimestamp(value, tz=timezone.utc)


class Listing(BaseModel):
    """A single Etsy listing.

    Fields are read verbatim from the API payload: the annotations document
    the expected types but nothing is coerced or rejected. The aliases map
    the API's key names onto ours (``listing_id`` -> ``id``, ``views`` ->
    ``view_count`` and so on). Instances are read-only; two listings are equal
    when their fields are, whether or not their images were loaded.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: SkipValidation[Optional[int]] = Field(default=None, alias="listing_id")
    title: SkipValidation[Optional[str]] = None
    description: SkipValidation[Optional[str]] = None
    view_count: SkipValidation[Optional[int]] = Field(default=None, alias="views")
    created: SkipValidation[Optional[Union[int, float]]] = Field(default=None, alias="creation_tsz")
    ending: SkipValidation[Optional[Union[int, float]]] = Field(default=None, alias="ending_tsz")
    currency: SkipValidation[Optional[str]] = Field(default=None, alias="currency_code")
    state: SkipValidation[Optional[str]] = None
    url: SkipValidation[Optional[str]] = None
    price: SkipValidation[Optional[Union[str, float]]] = None
    quantity: SkipValidation[Optional[int]] = None
    tags: SkipValidation[Optional[List[str]]] = None
    materials: SkipValidation[Optional[List[str]]] = None

    _client: Optional[EtsyRequest] = PrivateAttr(default=None)
    _images: Optional[List[Image]] = PrivateAttr(default=None)

    @classmethod
    def from_payload(cls, data: Mapping[str, Any], client: EtsyRequest | None = None) -> "Listing":
        listing = cls.model_validate(dict(data))
        listing._client = client
        return listing

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Listing):
            return NotImplemented
        return self.__dict__ == other.__dict__

    def __hash__(self) -> int:
        return hash((type(self), self.id))

    # Finders

    @classmethod
    def find(cls, *identifiers: Any, client: EtsyRequest | None = None, **options: Any):
        """Retrieve one or more listings by id.

            Listing.find(123)          # -> Listing
            Listing.find(123, 456)     # -> [Listing, Listing]
            Listing.find([123, 456])   # -> [Listing, Listing]
        """
        return find_one_or_more("listings", identifiers, cls.from_payload, options, client)

    @classmethod
    def find_all_by_shop_id(
        cls,
        shop_id: int | str,
        state: ShopListingState | str = ShopListingState.ACTIVE,
        client: EtsyRequest | None = None,
        **options: Any,
    ) -> List["Listing"]:
        """Retrieve listings for a shop, by default its active ones.

        ``limit``, ``offset``, ``token``, ``secret`` and any other query
        options are passed through. ``featured`` is a subset of the others.
        """
        state = cls._validate_state(state or ShopListingState.ACTIVE)
        if state is ShopListingState.SOLD_OUT:
            return cls.sold_listings(shop_id, client=client, **options)
        return get_all(f"/shops/{shop_id}/listings/{state.value}", cls.from_payload, options, client)

    @classmethod
    def sold_listings(cls, shop_id: int | str, client: EtsyRequest | None = None, **options: Any) -> List["Listing"]:
        """Sold-out listings, rebuilt from the shop's transaction history."""
        client = client or default_client()
        response = client.get(f"/shops/{shop_id}/transactions", {**options, "fields": "listing_id"})
        records = flatten_result(response.result)
        ids = [data["listing_id"] for data in records if data.get("listing_id") is not None]
        if len(ids) < len(records):
            logger.debug("Skipped %d transactions without a listing_id", len(records) - len(ids))
        logger.debug("Shop %s has %d sold listing transactions", shop_id, len(ids))
        if not ids:
            return []
        credentials = {k: options[k] for k in CREDENTIAL_OPTIONS if k in options}
        return cls.find(ids, client=client, **credentials)

    @staticmethod
    def _validate_state(state: ShopListingState | str) -> ShopListingState:
        try:
            return ShopListingState(state)
        except ValueError:
            raise InvalidStateError(
                f"The state '{getattr(state, 'value', state)}' is invalid. "
                f"Must be one of {', '.join(VALID_STATES)}"
            ) from None

    # Related resources

    @property
    def images(self) -> List[Image]:
        """The images of this listing, fetched once and then kept."""
        if self._images is None:
            self._images = Image.find_all_by_listing_id(self.id, client=self._client)
        return self._images

    @property
    def image(self) -> Optional[Image]:
        """The primary image of this listing."""
        images = self.images
        return images[0] if images else None

    # State predicates

    def _state_is(self, name: str) -> bool:
        return (self.state or "").replace("_", "") == name.replace("_", "")

    @property
    def is_active(self) -> bool:
        return self._state_is("active")

    @property
    def is_removed(self) -> bool:
        return self._state_is("removed")

    @property
    def is_sold_out(self) -> bool:
        return self._state_is("sold_out")

    @property
    def is_expired(self) -> bool:
        return self._state_is("expired")

    @property
    def is_alchemy(self) -> bool:
        """Listing made on request of an Etsy buyer."""
        return self._state_is("alchemy")

    # Timestamps

    @property
    def created_at(self) -> Optional[datetime]:
        return _timestamp(self.created)

    @property
    def ending_at(self) -> Optional[datetime]:
        """When the listing will be removed from the store."""
        return _timestamp(self.ending)
