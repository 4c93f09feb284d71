from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Optional


class EtsyError(RuntimeError):
    """Base class for failures reported by the Etsy API or its transport."""


class RequestError(EtsyError):
    def __init__(self, message: str, status_code: int, url: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class InvalidJSONError(EtsyError):
    def __init__(self, body: str) -> None:
        super().__init__(f"Received invalid JSON response: {body[:200]!r}")
        self.body = body


class Response:
    """Envelope returned by the Etsy API.

    A successful body looks like ``{"count": 2, "results": [...], "params": {...},
    "type": "Listing"}``. ``result`` mirrors the API's habit of collapsing a
    one-element result set into the bare object.
    """

    def __init__(
        self,
        status_code: int,
        body: str,
        url: str = "",
        headers: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.status_code = status_code
        self.body = body
        self.url = url
        self.headers: Dict[str, str] = dict(headers or {})
        self._data: Optional[Dict[str, Any]] = None

    @property
    def success(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def data(self) -> Dict[str, Any]:
        if self._data is None:
            try:
                parsed = json.loads(self.body)
            except ValueError:
                raise InvalidJSONError(self.body) from None
            if not isinstance(parsed, dict):
                raise InvalidJSONError(self.body)
            self._data = parsed
        return self._data

    @property
    def results(self) -> List[Any]:
        results = self.data.get("results")
        if results is None:
            return []
        return results if isinstance(results, list) else [results]

    @property
    def count(self) -> int:
        count = self.data.get("count")
        return int(count) if count is not None else len(self.results)

    @property
    def result(self) -> Any:
        results = self.results
        if self.count == 1 and results:
            return results[0]
        return results

    @property
    def error_message(self) -> str:
        detail = self.headers.get("X-Error-Detail") or self.headers.get("x-error-detail")
        if detail:
            return detail
        text = (self.body or "").strip()
        return text or f"HTTP {self.status_code}"

    def validate(self) -> "Response":
        """Raise for API failures; return ``self`` so calls can be chained."""
        if not self.success:
            raise RequestError(self.error_message, self.status_code, self.url)
        # Force a parse so malformed bodies fail here rather than at first access.
        self.data
        return self

    def __repr__(self) -> str:
        return f"<Response {self.status_code} {self.url}>"
