"""Typed resources of the Etsy API."""

from .image import Image
from .listing import InvalidStateError, Listing, ShopListingState

__all__ = ["Image", "InvalidStateError", "Listing", "ShopListingState"]
