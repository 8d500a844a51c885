from __future__ import annotations

import asyncio
from dataclasses import dataclass

from memestack.controllers import PaginatedResourceController, Query, apply_after_success, without
from memestack.errors import NotFoundError
from memestack.schemas import Page, Pagination


@dataclass
class Row:
    id: str


async def _three_rows(query: Query) -> Page[Row]:
    return Page(items=[Row("a"), Row("b"), Row("c")], pagination=Pagination(total_pages=1, total_items=3))


def test_patch_applies_only_after_the_call_resolves() -> None:
    controller = PaginatedResourceController(_three_rows)
    seen_during_call: list[list[str]] = []

    async def delete_b() -> None:
        seen_during_call.append([row.id for row in controller.items])
        await asyncio.sleep(0)

    async def scenario() -> bool:
        await controller.load()
        result = await apply_after_success(controller, delete_b, patch=without("b"))
        return result.ok

    assert asyncio.run(scenario()) is True
    assert seen_during_call == [["a", "b", "c"]]
    assert [row.id for row in controller.items] == ["a", "c"]
    assert controller.total_items == 2


def test_failed_mutation_leaves_state_untouched() -> None:
    controller = PaginatedResourceController(_three_rows)

    async def delete_missing() -> None:
        raise NotFoundError(404, "Template not found")

    async def scenario():  # type: ignore[no-untyped-def]
        await controller.load()
        return await apply_after_success(controller, delete_missing, patch=without("b"))

    result = asyncio.run(scenario())

    assert result.ok is False
    assert result.error == "Template not found"
    assert [row.id for row in controller.items] == ["a", "b", "c"]


def test_refetch_mode_reloads_current_query() -> None:
    calls: list[Query] = []

    async def fetch(query: Query) -> Page[Row]:
        calls.append(query)
        return await _three_rows(query)

    controller = PaginatedResourceController(fetch)

    async def noop() -> str:
        return "done"

    async def scenario():  # type: ignore[no-untyped-def]
        await controller.load()
        return await apply_after_success(controller, noop, refetch=True)

    result = asyncio.run(scenario())

    assert result.value == "done"
    assert len(calls) == 2


def test_without_drops_exactly_one_id() -> None:
    rows = [Row("a"), Row("b"), Row("c")]
    assert [row.id for row in without("b")(rows)] == ["a", "c"]
    assert [row.id for row in without("zzz")(rows)] == ["a", "b", "c"]
