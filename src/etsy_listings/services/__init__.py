"""HTTP access to the Etsy API."""

from .finders import find_one_or_more, flatten_result, get_all
from .request import EtsyConfig, EtsyRequest, default_client, make_client, set_default_client
from .response import EtsyError, InvalidJSONError, RequestError, Response

__all__ = [
    "EtsyConfig",
    "EtsyError",
    "EtsyRequest",
    "InvalidJSONError",
    "RequestError",
    "Response",
    "default_client",
    "find_one_or_more",
    "flatten_result",
    "get_all",
    "make_client",
    "set_default_client",
]
