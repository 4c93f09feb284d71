"""Finder helpers shared by the resource models.

Each helper takes the resource path and a ``hydrate`` callable that turns one
payload mapping into a model instance, so models need no common base class.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, List, Mapping, Optional, TypeVar

from .request import EtsyRequest, default_client


T = TypeVar("T")
Hydrate = Callable[[Mapping[str, Any], EtsyRequest], T]


def flatten_result(result: Any) -> List[Any]:
    """Normalize ``Response.result`` (a mapping or a list) to a list."""
    if result is None:
        return []
    if isinstance(result, list):
        return list(result)
    return [result]


def flatten_identifiers(identifiers: Iterable[Any]) -> List[Any]:
    ids: List[Any] = []
    for ident in identifiers:
        if isinstance(ident, (list, tuple)):
            ids.extend(flatten_identifiers(ident))
        elif "," in str(ident):
            raise ValueError(f"Identifier {ident!r} contains a comma; pass several identifiers instead")
        else:
            ids.append(ident)
    return ids


def get_all(
    path: str,
    hydrate: Hydrate[T],
    options: Optional[Mapping[str, Any]] = None,
    client: EtsyRequest | None = None,
) -> List[T]:
    """GET ``path`` and hydrate every returned record."""
    client = client or default_client()
    response = client.get(path, dict(options or {}))
    return [hydrate(data, client) for data in flatten_result(response.result)]


def find_one_or_more(
    endpoint: str,
    identifiers: Iterable[Any],
    hydrate: Hydrate[T],
    options: Optional[Mapping[str, Any]] = None,
    client: EtsyRequest | None = None,
) -> T | List[T] | None:
    """Look up one or many records of ``endpoint`` by id in a single request.

    A lone scalar identifier yields a single instance (``None`` when nothing
    came back). Several identifiers, or any sequence, yield a list in the
    order the API returned them.
    """
    identifiers = list(identifiers)
    single = len(identifiers) == 1 and not isinstance(identifiers[0], (list, tuple))
    ids = flatten_identifiers(identifiers)
    if not ids:
        raise ValueError(f"At least one identifier is required to find {endpoint}")

    path = f"/{endpoint}/{','.join(str(i) for i in ids)}"
    objects = get_all(path, hydrate, options, client)
    if single:
        return objects[0] if objects else None
    return objects
