from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from etsy_listings.models import Listing


def to_jsonable(obj: Any, include_images: bool = False) -> Any:
    """Convert models (or lists of them) to JSON-serializable structures.

    - Calls ``model_dump(mode="json")`` so every value serializes cleanly;
      fields hold raw API values, so type-mismatch warnings are silenced.
    - Listings also get their derived ``created_at``/``ending_at`` as ISO
      strings and, on request, the URLs of their images.
    - Anything else is returned untouched.
    """
    if isinstance(obj, list):
        return [to_jsonable(o, include_images) for o in obj]
    if isinstance(obj, Listing):
        data = obj.model_dump(mode="json", warnings=False)
        for key in ("created_at", "ending_at"):
            value = getattr(obj, key)
            data[key] = value.isoformat() if value is not None else None
        if include_images:
            data["images"] = [img.model_dump(mode="json", warnings=False) for img in obj.images]
        return data
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json", warnings=False)
    return obj
