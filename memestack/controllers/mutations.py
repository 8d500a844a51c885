"""Apply-after-success mutation helper.

Handlers wait for the server to confirm a mutation, then either patch the
cached list directly or re-fetch it. Nothing is applied before the call
resolves, so a failure leaves local state untouched and needs no rollback.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, TypeVar

from ..errors import MemestackError, user_message
from .paginated import PaginatedResourceController

logger = logging.getLogger(__name__)

R = TypeVar("R")


@dataclass(slots=True)
class MutationResult(Generic[R]):
    ok: bool
    value: R | None = None
    error: str | None = None


async def apply_after_success(
    controller: PaginatedResourceController[Any] | None,
    mutate: Callable[[], Awaitable[R]],
    *,
    patch: Callable[[list[Any]], list[Any]] | None = None,
    refetch: bool = False,
) -> MutationResult[R]:
    try:
        value = await mutate()
    except MemestackError as exc:
        logger.warning("Mutation failed | error=%s", exc)
        return MutationResult(ok=False, error=user_message(exc))

    if controller is not None:
        if patch is not None:
            controller.patch(patch)
        if refetch:
            await controller.refresh()
    return MutationResult(ok=True, value=value)


def without(item_id: Any, *, key: Callable[[Any], Any] = lambda item: item.id) -> Callable[[list[Any]], list[Any]]:
    """Patch that drops exactly one id from a list."""

    def _patch(items: list[Any]) -> list[Any]:
        return [item for item in items if key(item) != item_id]

    return _patch


__all__ = ["MutationResult", "apply_after_success", "without"]
