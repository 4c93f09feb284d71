"""Typed, read-only bindings for Etsy listings."""

from .models import Image, Listing, ShopListingState
from .services import EtsyConfig, EtsyError, EtsyRequest, RequestError

__version__ = "1.0.0"

__all__ = [
    "EtsyConfig",
    "EtsyError",
    "EtsyRequest",
    "Image",
    "Listing",
    "RequestError",
    "ShopListingState",
]
