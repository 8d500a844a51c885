"""Group endpoints; groups are addressed by slug."""
from __future__ import annotations

from typing import Any

from ..clients.http import ApiClient
from ..constants import GROUP_SORTS
from ..schemas import Group, Page, parse_model, parse_page, unwrap
from .common import list_params, require_sort


async def list_groups(
    client: ApiClient,
    *,
    page: int = 1,
    limit: int | None = None,
    sort: str | None = "popular",
    search: str | None = None,
    category: str | None = None,
) -> Page[Group]:
    params = list_params(
        client,
        page=page,
        limit=limit,
        sort=require_sort(sort, GROUP_SORTS),
        search=search,
        category=category,
    )
    data = await client.get("/groups", params=params)
    return parse_page(data, "groups", Group, fallback_page=page)


async def list_my_groups(client: ApiClient) -> list[Group]:
    data = await client.get("/groups/user/groups")
    return parse_page(data, "groups", Group).items


async def get_group(client: ApiClient, slug: str) -> Group:
    data = await client.get(f"/groups/{slug}")
    return parse_model(Group, unwrap(data, "group"))


async def create_group(
    client: ApiClient,
    *,
    name: str,
    category: str = "general",
    description: str = "",
    privacy: str = "public",
) -> Group:
    payload = {"name": name, "category": category, "description": description, "privacy": privacy}
    data = await client.post("/groups", json=payload)
    return parse_model(Group, unwrap(data, "group"))


async def update_group(client: ApiClient, slug: str, **changes: Any) -> Group:
    data = await client.put(f"/groups/{slug}", json=changes)
    return parse_model(Group, unwrap(data, "group"))


async def delete_group(client: ApiClient, slug: str) -> None:
    await client.delete(f"/groups/{slug}")


async def join_group(client: ApiClient, slug: str, *, message: str | None = None) -> None:
    await client.post(f"/groups/{slug}/join", json={"message": message} if message else None)


async def leave_group(client: ApiClient, slug: str) -> None:
    await client.post(f"/groups/{slug}/leave")


__all__ = [
    "create_group",
    "delete_group",
    "get_group",
    "join_group",
    "leave_group",
    "list_groups",
    "list_my_groups",
    "update_group",
]
