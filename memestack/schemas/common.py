"""Shared pydantic building blocks for MemeStack API payloads."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Generic, Mapping, TypeVar

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, model_validator
from pydantic.alias_generators import to_camel

from ..errors import ResponseFormatError

logger = logging.getLogger(__name__)

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)


class ApiModel(BaseModel):
    """Base for server payloads: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


def _coerce_reference(value: Any) -> Any:
    # Unpopulated Mongo references arrive as bare id strings.
    if isinstance(value, str):
        return {"_id": value}
    return value


class UserSummary(ApiModel):
    """Author/owner reference, either populated or a bare id."""

    id: str = Field(validation_alias=AliasChoices("_id", "id"))
    username: str | None = None
    email: str | None = None
    display_name: str | None = None
    avatar: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _flatten_profile(cls, data: Any) -> Any:
        data = _coerce_reference(data)
        if isinstance(data, Mapping):
            profile = data.get("profile")
            if isinstance(profile, Mapping):
                merged = dict(data)
                merged.setdefault("displayName", profile.get("displayName"))
                merged.setdefault("avatar", profile.get("avatar"))
                return merged
        return data


class Pagination(BaseModel):
    """Normalised pagination block."""

    current_page: int = 1
    total_pages: int = 0
    total_items: int = 0
    has_next: bool = False
    has_prev: bool = False

    @classmethod
    def from_meta(cls, meta: Mapping[str, Any], *, item_count: int, fallback_page: int = 1) -> "Pagination":
        current = _as_int(meta.get("currentPage"), fallback_page)
        total_items = _total_from_meta(meta, item_count)
        total_pages = _as_int(meta.get("totalPages"), 1 if item_count else 0)
        has_next = meta.get("hasNext", meta.get("hasNextPage"))
        has_prev = meta.get("hasPrev", meta.get("hasPrevPage"))
        return cls(
            current_page=current,
            total_pages=total_pages,
            total_items=total_items,
            has_next=bool(has_next) if has_next is not None else current < total_pages,
            has_prev=bool(has_prev) if has_prev is not None else current > 1,
        )


@dataclass(slots=True)
class Page(Generic[T]):
    """One page of a remote collection."""

    items: list[T] = field(default_factory=list)
    pagination: Pagination = field(default_factory=Pagination)


def _as_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _total_from_meta(meta: Mapping[str, Any], item_count: int) -> int:
    if "total" in meta:
        return _as_int(meta.get("total"), item_count)
    # Endpoints name the counter after the resource (totalTemplates, totalFolders, ...).
    for key, value in meta.items():
        if key.startswith("total") and key != "totalPages":
            return _as_int(value, item_count)
    return item_count


def unwrap(payload: Any, key: str) -> Any:
    """Return ``payload[key]`` from the envelope shapes the API uses."""

    if not isinstance(payload, Mapping):
        return payload
    if key in payload:
        return payload[key]
    data = payload.get("data")
    if isinstance(data, Mapping):
        return data.get(key, data)
    return payload


def parse_model(model: type[M], payload: Any) -> M:
    """Validate one response object, raising :class:`ResponseFormatError` on mismatch."""

    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        logger.warning("Response parsing failed | model=%s errors=%s", model.__name__, exc.error_count())
        raise ResponseFormatError(f"Unexpected {model.__name__} payload", payload) from exc


def parse_page(
    payload: Any,
    key: str,
    model: type[BaseModel],
    *,
    fallback_page: int = 1,
) -> Page[Any]:
    """Parse any of the list envelopes into a :class:`Page`.

    Accepted shapes: ``{key: [...], pagination: {...}}``,
    ``{key: [...], totalPages, currentPage, total}``,
    ``{data: {key: [...], pagination: {...}}}`` and bare lists.
    """

    body: Any = payload
    if isinstance(body, Mapping) and key not in body and isinstance(body.get("data"), Mapping):
        body = body["data"]

    meta: Mapping[str, Any]
    if isinstance(body, list):
        raw_items: list[Any] = body
        meta = {}
    elif isinstance(body, Mapping):
        raw_items = list(body.get(key) or [])
        nested = body.get("pagination")
        meta = nested if isinstance(nested, Mapping) else body
    else:
        raw_items = []
        meta = {}

    items = [parse_model(model, item) for item in raw_items]
    pagination = Pagination.from_meta(meta, item_count=len(items), fallback_page=fallback_page)
    return Page(items=items, pagination=pagination)


__all__ = ["ApiModel", "Page", "Pagination", "UserSummary", "parse_model", "parse_page", "unwrap"]
