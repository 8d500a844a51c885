"""Fetch/filter/paginate lifecycle for one remote collection view."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Awaitable, Callable, Generic, Iterable, Mapping, TypeVar

from ..errors import MemestackError, user_message
from ..schemas.common import Page

logger = logging.getLogger(__name__)

T = TypeVar("T")

Listener = Callable[[], None]


def _freeze(filters: Mapping[str, Any] | None) -> tuple[tuple[str, Any], ...]:
    if not filters:
        return ()
    return tuple(sorted((key, value) for key, value in filters.items() if value not in (None, "")))


@dataclass(frozen=True)
class Query:
    """One request parameter tuple; equal queries mean identical requests."""

    page: int = 1
    limit: int = 12
    sort: str | None = None
    filters: tuple[tuple[str, Any], ...] = field(default_factory=tuple)

    @property
    def search(self) -> str | None:
        return dict(self.filters).get("search")

    def filter_value(self, key: str) -> Any:
        return dict(self.filters).get(key)

    def with_filter(self, key: str, value: Any) -> "Query":
        current = dict(self.filters)
        if value is None or value == "":
            current.pop(key, None)
        else:
            current[key] = value
        return replace(self, filters=_freeze(current), page=1)

    def as_kwargs(self) -> dict[str, Any]:
        kwargs: dict[str, Any] = {"page": self.page, "limit": self.limit}
        if self.sort is not None:
            kwargs["sort"] = self.sort
        kwargs.update(dict(self.filters))
        return kwargs


class PaginatedResourceController(Generic[T]):
    """Mirror a server-side paginated collection.

    ``items`` is a cache of the latest query result, never a source of
    truth. Each fetch takes a sequence number and only the response to the
    most recently issued request is applied; older responses are dropped
    when they resolve (requests are not cancelled).
    """

    def __init__(
        self,
        fetch: Callable[[Query], Awaitable[Page[T]]],
        *,
        limit: int = 12,
        sort: str | None = None,
        sorts: Iterable[str] = (),
        filters: Mapping[str, Any] | None = None,
        clear_on_error: bool = True,
        key: Callable[[T], Any] = lambda item: getattr(item, "id"),
    ) -> None:
        if limit < 1:
            raise ValueError("limit must be at least 1")
        self.sorts = tuple(sorts)
        if sort is not None and self.sorts and sort not in self.sorts:
            raise ValueError(f"Unsupported sort {sort!r}")
        self._fetch = fetch
        self._key = key
        self.clear_on_error = clear_on_error
        self.query = Query(page=1, limit=limit, sort=sort, filters=_freeze(filters))
        self.items: list[T] = []
        self.loading = False
        self.error: str | None = None
        self.total_pages = 0
        self.total_items = 0
        self._sequence = 0
        self._last_requested: Query | None = None
        self._listeners: list[Listener] = []

    @property
    def page(self) -> int:
        return self.query.page

    @property
    def fetch_count(self) -> int:
        return self._sequence

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` after every state change; returns an unsubscribe callable."""

        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()

    async def load(self) -> bool:
        """Initial fetch when the view mounts."""

        return await self._request(self.query)

    async def refresh(self) -> bool:
        return await self._request(self.query)

    async def set_filter(self, key: str, value: Any) -> bool:
        return await self._change(self.query.with_filter(key, value))

    async def set_search(self, text: str | None) -> bool:
        return await self.set_filter("search", (text or "").strip() or None)

    async def set_sort(self, sort: str) -> bool:
        if self.sorts and sort not in self.sorts:
            raise ValueError(f"Unsupported sort {sort!r}; expected one of {', '.join(self.sorts)}")
        return await self._change(replace(self.query, sort=sort, page=1))

    async def set_page(self, page: int) -> bool:
        if page < 1:
            raise ValueError("page must be at least 1")
        return await self._change(replace(self.query, page=page))

    async def next_page(self) -> bool:
        if self.page >= self.total_pages:
            return False
        return await self.set_page(self.page + 1)

    async def previous_page(self) -> bool:
        if self.page <= 1:
            return False
        return await self.set_page(self.page - 1)

    async def _change(self, query: Query) -> bool:
        if query == self._last_requested:
            return False
        self.query = query
        return await self._request(query)

    async def _request(self, query: Query) -> bool:
        self._sequence += 1
        sequence = self._sequence
        self._last_requested = query
        self.loading = True
        self.error = None
        self._notify()
        try:
            page = await self._fetch(query)
        except MemestackError as exc:
            if sequence != self._sequence:
                logger.debug("Dropping superseded failure | seq=%s latest=%s", sequence, self._sequence)
                return False
            logger.warning("Collection fetch failed | query=%s error=%s", query, exc)
            self.error = user_message(exc)
            if self.clear_on_error:
                self.items = []
                self.total_pages = 0
                self.total_items = 0
            self.loading = False
            self._notify()
            return False
        except Exception:
            if sequence == self._sequence:
                self.loading = False
            raise

        if sequence != self._sequence:
            logger.debug("Dropping superseded response | seq=%s latest=%s", sequence, self._sequence)
            return False
        self.items = list(page.items)
        self.total_pages = page.pagination.total_pages
        self.total_items = page.pagination.total_items
        self.loading = False
        self._notify()
        return True

    def patch(self, fn: Callable[[list[T]], list[T]]) -> None:
        """Replace ``items`` with ``fn(items)``; used after a confirmed mutation."""

        before = len(self.items)
        self.items = list(fn(list(self.items)))
        removed = before - len(self.items)
        if removed > 0:
            self.total_items = max(0, self.total_items - removed)
        self._notify()

    def find(self, item_id: Any) -> T | None:
        for item in self.items:
            if self._key(item) == item_id:
                return item
        return None

    def remove(self, item_id: Any) -> None:
        self.patch(lambda items: [item for item in items if self._key(item) != item_id])

    def replace_item(self, updated: T) -> None:
        target = self._key(updated)
        self.patch(lambda items: [updated if self._key(item) == target else item for item in items])

    def prepend(self, item: T) -> None:
        self.items = [item, *self.items]
        self.total_items += 1
        self._notify()


__all__ = ["PaginatedResourceController", "Query"]
