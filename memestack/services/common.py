"""Query-parameter helpers shared by the resource services."""
from __future__ import annotations

from typing import Any, Iterable

from ..clients.http import ApiClient


def resolve_limit(client: ApiClient, limit: int | None) -> int:
    value = client.settings.page_size if limit is None else int(limit)
    if value < 1:
        raise ValueError("limit must be at least 1")
    return value


def require_page(page: int) -> int:
    if int(page) < 1:
        raise ValueError("page must be at least 1")
    return int(page)


def require_sort(sort: str | None, allowed: Iterable[str]) -> str | None:
    if sort is None:
        return None
    options = tuple(allowed)
    if sort not in options:
        raise ValueError(f"Unsupported sort {sort!r}; expected one of {', '.join(options)}")
    return sort


def clean_filter(value: Any) -> Any:
    """Drop the UI's "all" sentinel and blank strings."""

    if isinstance(value, str):
        stripped = value.strip()
        if not stripped or stripped == "all":
            return None
        return stripped
    return value


def list_params(
    client: ApiClient,
    *,
    page: int,
    limit: int | None,
    **filters: Any,
) -> dict[str, Any]:
    params: dict[str, Any] = {"page": require_page(page), "limit": resolve_limit(client, limit)}
    for key, value in filters.items():
        cleaned = clean_filter(value)
        if cleaned is not None:
            params[key] = cleaned
    return params


__all__ = ["clean_filter", "list_params", "require_page", "require_sort", "resolve_limit"]
