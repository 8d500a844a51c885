"""Meme endpoints."""
from __future__ import annotations

import logging

from ..clients.http import ApiClient
from ..constants import MEME_SORTS
from ..schemas import LikeState, Meme, Page, parse_model, parse_page, unwrap
from .common import list_params, require_sort

logger = logging.getLogger(__name__)

# Upper bound for list_all_memes so a huge catalogue cannot spin forever.
_MAX_PAGES = 50


async def list_memes(
    client: ApiClient,
    *,
    page: int = 1,
    limit: int | None = None,
    sort: str | None = "createdAt",
    sort_order: str = "desc",
    search: str | None = None,
    category: str | None = None,
    tags: list[str] | None = None,
) -> Page[Meme]:
    params = list_params(
        client,
        page=page,
        limit=limit,
        sortBy=require_sort(sort, MEME_SORTS),
        sortOrder=sort_order,
        search=search,
        category=category,
        tags=",".join(tags) if tags else None,
    )
    data = await client.get("/memes", params=params)
    return parse_page(data, "memes", Meme, fallback_page=page)


async def list_my_memes(client: ApiClient, *, page: int = 1, limit: int | None = None) -> Page[Meme]:
    data = await client.get("/memes/my-memes", params=list_params(client, page=page, limit=limit))
    return parse_page(data, "memes", Meme, fallback_page=page)


async def list_all_memes(client: ApiClient, *, mine: bool = True, limit: int = 50) -> list[Meme]:
    """Walk every page of memes.

    Used to compute "not yet in folder" client-side; this grows linearly with
    the catalogue and should become a server-side filter.
    """

    fetch = list_my_memes if mine else list_memes
    collected: list[Meme] = []
    page = 1
    while page <= _MAX_PAGES:
        result = await fetch(client, page=page, limit=limit)
        collected.extend(result.items)
        if page >= result.pagination.total_pages or not result.items:
            break
        page += 1
    else:
        logger.warning("Stopped walking memes after %d pages", _MAX_PAGES)
    return collected


async def get_meme(client: ApiClient, meme_id: str) -> Meme:
    data = await client.get(f"/memes/{meme_id}")
    return parse_model(Meme, unwrap(data, "meme"))


async def delete_meme(client: ApiClient, meme_id: str) -> None:
    await client.delete(f"/memes/{meme_id}")


async def toggle_like_meme(client: ApiClient, meme_id: str) -> LikeState:
    data = await client.post(f"/memes/{meme_id}/like")
    return parse_model(LikeState, unwrap(data, "data"))


async def share_meme(client: ApiClient, meme_id: str, *, platform: str | None = None) -> None:
    await client.post(f"/memes/{meme_id}/share", json={"platform": platform} if platform else None)


__all__ = [
    "delete_meme",
    "get_meme",
    "list_all_memes",
    "list_memes",
    "list_my_memes",
    "share_meme",
    "toggle_like_meme",
]
