from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional

import requests
from requests.auth import AuthBase

from .response import EtsyError, Response


logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = os.environ.get("ETSY_BASE_URL", "https://openapi.etsy.com/v2")
DEFAULT_TIMEOUT = float(os.environ.get("ETSY_TIMEOUT_SECS", "15"))

# Options that identify the caller rather than filter the query.
CREDENTIAL_OPTIONS = ("token", "secret")


@dataclass
class EtsyConfig:
    api_key: Optional[str] = os.environ.get("ETSY_API_KEY")
    base_url: str = DEFAULT_BASE_URL
    timeout_secs: float = DEFAULT_TIMEOUT
    user_agent: str = os.environ.get("HTTP_USER_AGENT", "etsy-listings/1.0")
    # Builds a requests auth object (e.g. OAuth1) from a per-call token/secret.
    auth_factory: Optional[Callable[[str, str], AuthBase]] = None


class EtsyRequest:
    """Thin GET-only client for the Etsy API.

    - Authentication: ``api_key`` query parameter from the config; per-call
      ``token``/``secret`` are handed to ``auth_factory`` when one is set.
    - Errors: every non-2xx answer or transport failure raises ``EtsyError``.
      Nothing is retried or cached here.
    """

    def __init__(self, config: EtsyConfig | None = None, session: requests.Session | None = None) -> None:
        self.config = config or EtsyConfig()
        self.session = session or requests.Session()
        self.session.headers["User-Agent"] = self.config.user_agent

    def __enter__(self) -> "EtsyRequest":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()

    def url_for(self, path: str) -> str:
        return f"{self.config.base_url.rstrip('/')}/{path.lstrip('/')}"

    def build_params(self, options: Mapping[str, Any]) -> Dict[str, Any]:
        params: Dict[str, Any] = {}
        for key, value in options.items():
            if key in CREDENTIAL_OPTIONS or value is None:
                continue
            if isinstance(value, (list, tuple)):
                value = ",".join(str(v) for v in value)
            params[key] = value
        if self.config.api_key:
            params["api_key"] = self.config.api_key
        return params

    def _auth_for(self, options: Mapping[str, Any]) -> Optional[AuthBase]:
        token = options.get("token")
        secret = options.get("secret")
        if not (token and secret):
            return None
        if self.config.auth_factory is None:
            logger.debug("Ignoring token/secret: no auth_factory configured")
            return None
        return self.config.auth_factory(token, secret)

    def get(self, path: str, options: Optional[Mapping[str, Any]] = None) -> Response:
        """GET ``path`` and return the validated response envelope."""
        options = options or {}
        url = self.url_for(path)
        params = self.build_params(options)
        logger.debug("GET %s params=%s", url, params)
        try:
            resp = self.session.get(
                url,
                params=params,
                auth=self._auth_for(options),
                timeout=self.config.timeout_secs,
            )
        except requests.RequestException as e:
            raise EtsyError(f"Request to {url} failed: {e}") from e

        response = Response(resp.status_code, resp.text, url=resp.url or url, headers=resp.headers)
        if not response.success:
            logger.warning("GET %s returned %s: %s", url, response.status_code, response.error_message)
        return response.validate()


_default_client: EtsyRequest | None = None


def make_client(config: EtsyConfig | None = None) -> EtsyRequest:
    return EtsyRequest(config or EtsyConfig())


def default_client() -> EtsyRequest:
    """Process-wide client used by finders called without ``client=``."""
    global _default_client
    if _default_client is None:
        _default_client = make_client()
    return _default_client


def set_default_client(client: EtsyRequest | None) -> None:
    global _default_client
    _default_client = client
