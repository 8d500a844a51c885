"""Folder endpoints and folder membership actions."""
from __future__ import annotations

from typing import Any, Sequence

from ..clients.http import ApiClient
from ..constants import FOLDER_SORTS
from ..schemas import BulkAddResult, Folder, Page, ShareLink, parse_model, parse_page, unwrap
from .common import list_params, require_sort


async def list_folders(
    client: ApiClient,
    *,
    page: int = 1,
    limit: int | None = None,
    sort: str | None = "createdAt",
    sort_order: str = "desc",
) -> Page[Folder]:
    params = list_params(
        client,
        page=page,
        limit=limit,
        sortBy=require_sort(sort, FOLDER_SORTS),
        sortOrder=sort_order,
    )
    data = await client.get("/folders", params=params)
    return parse_page(data, "folders", Folder, fallback_page=page)


async def get_folder(client: ApiClient, folder_id: str) -> Folder:
    data = await client.get(f"/folders/{folder_id}")
    return parse_model(Folder, unwrap(data, "folder"))


async def create_folder(
    client: ApiClient,
    *,
    name: str,
    description: str = "",
    color: str | None = None,
    icon: str | None = None,
    is_private: bool = True,
) -> Folder:
    payload: dict[str, Any] = {"name": name, "description": description, "isPrivate": is_private}
    if color:
        payload["color"] = color
    if icon:
        payload["icon"] = icon
    data = await client.post("/folders", json=payload)
    return parse_model(Folder, unwrap(data, "folder"))


async def update_folder(client: ApiClient, folder_id: str, **changes: Any) -> Folder:
    """Update folder fields; keyword names use the API's camelCase (``isPrivate``)."""

    data = await client.put(f"/folders/{folder_id}", json=changes)
    return parse_model(Folder, unwrap(data, "folder"))


async def delete_folder(client: ApiClient, folder_id: str) -> None:
    await client.delete(f"/folders/{folder_id}")


async def add_meme_to_folder(client: ApiClient, folder_id: str, meme_id: str) -> None:
    await client.post(f"/folders/{folder_id}/memes/{meme_id}")


async def remove_meme_from_folder(client: ApiClient, folder_id: str, meme_id: str) -> None:
    await client.delete(f"/folders/{folder_id}/memes/{meme_id}")


async def bulk_add_memes(client: ApiClient, folder_id: str, meme_ids: Sequence[str]) -> BulkAddResult:
    if not meme_ids:
        raise ValueError("meme_ids must not be empty")
    data = await client.post(f"/folders/{folder_id}/memes/bulk", json={"memeIds": list(meme_ids)})
    return parse_model(BulkAddResult, data)


async def generate_share_link(client: ApiClient, folder_id: str) -> ShareLink:
    data = await client.post(f"/folders/{folder_id}/share")
    return parse_model(ShareLink, data)


__all__ = [
    "add_meme_to_folder",
    "bulk_add_memes",
    "create_folder",
    "delete_folder",
    "generate_share_link",
    "get_folder",
    "list_folders",
    "remove_meme_from_folder",
    "update_folder",
]
