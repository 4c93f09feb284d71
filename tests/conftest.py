from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Optional, Tuple

import pytest

from etsy_listings.services import EtsyConfig, EtsyRequest, RequestError, Response


def envelope(results: List[Dict[str, Any]], status_code: int = 200) -> Response:
    body = json.dumps({"count": len(results), "results": results, "params": {}, "type": "Listing"})
    return Response(status_code, body)


class FakeEtsy(EtsyRequest):
    """Client that serves canned results per path and records every call."""

    def __init__(self, routes: Optional[Mapping[str, List[Dict[str, Any]]]] = None) -> None:
        super().__init__(EtsyConfig(api_key=None))
        self.routes = dict(routes or {})
        self.calls: List[Tuple[str, Dict[str, Any]]] = []

    def get(self, path: str, options: Optional[Mapping[str, Any]] = None) -> Response:
        self.calls.append((path, dict(options or {})))
        if path not in self.routes:
            raise RequestError(f"No route for {path}", 404, path)
        return envelope(self.routes[path]).validate()

    @property
    def paths(self) -> List[str]:
        return [path for path, _ in self.calls]


@pytest.fixture
def fake_etsy() -> FakeEtsy:
    return FakeEtsy()
