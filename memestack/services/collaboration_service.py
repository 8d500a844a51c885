"""Collaboration endpoints: browsing, invites, forks and publishing."""
from __future__ import annotations

import logging
from typing import Any

from ..clients.http import ApiClient
from ..constants import COLLABORATION_SORTS
from ..schemas import Collaboration, CollaborationStatus, Page, parse_model, parse_page, unwrap
from .common import list_params, require_sort

logger = logging.getLogger(__name__)


async def list_collaborations(
    client: ApiClient,
    *,
    page: int = 1,
    limit: int | None = None,
    sort: str | None = "recent",
    search: str | None = None,
    type: str | None = None,
    status: str | None = None,
) -> Page[Collaboration]:
    params = list_params(
        client,
        page=page,
        limit=limit,
        sort=require_sort(sort, COLLABORATION_SORTS),
        search=search,
        type=type,
        status=status,
    )
    data = await client.get("/collaborations", params=params)
    return parse_page(data, "collaborations", Collaboration, fallback_page=page)


async def list_my_collaborations(
    client: ApiClient,
    *,
    page: int = 1,
    limit: int | None = None,
    status: str | None = None,
) -> Page[Collaboration]:
    params = list_params(client, page=page, limit=limit, status=status)
    data = await client.get("/collaborations/user/collaborations", params=params)
    return parse_page(data, "collaborations", Collaboration, fallback_page=page)


async def list_pending_invites(client: ApiClient, *, page: int = 1, limit: int | None = None) -> Page[Collaboration]:
    """Collaborations the current user has been invited to but not yet answered."""

    data = await client.get("/collaborations/user/invites", params=list_params(client, page=page, limit=limit))
    return parse_page(data, "collaborations", Collaboration, fallback_page=page)


async def get_collaboration(client: ApiClient, collaboration_id: str) -> Collaboration:
    data = await client.get(f"/collaborations/{collaboration_id}")
    return parse_model(Collaboration, unwrap(data, "collaboration"))


async def create_collaboration(
    client: ApiClient,
    *,
    title: str,
    type: str,
    description: str = "",
    original_meme: str | None = None,
    tags: list[str] | None = None,
    is_public: bool = True,
) -> Collaboration:
    payload: dict[str, Any] = {
        "title": title,
        "type": type,
        "description": description,
        "settings": {"isPublic": is_public},
    }
    if original_meme:
        payload["originalMeme"] = original_meme
    if tags:
        payload["tags"] = tags
    data = await client.post("/collaborations", json=payload)
    return parse_model(Collaboration, unwrap(data, "collaboration"))


async def update_collaboration(client: ApiClient, collaboration_id: str, **changes: Any) -> Collaboration:
    data = await client.put(f"/collaborations/{collaboration_id}", json=changes)
    return parse_model(Collaboration, unwrap(data, "collaboration"))


async def set_status(client: ApiClient, collaboration_id: str, status: CollaborationStatus) -> Collaboration:
    return await update_collaboration(client, collaboration_id, status=status.value)


async def publish_collaboration(client: ApiClient, collaboration_id: str) -> Collaboration:
    """Activate a draft and make it public with a single update call."""

    return await update_collaboration(
        client,
        collaboration_id,
        status=CollaborationStatus.ACTIVE.value,
        settings={"isPublic": True},
    )


async def delete_collaboration(client: ApiClient, collaboration_id: str) -> None:
    await client.delete(f"/collaborations/{collaboration_id}")


async def join_collaboration(client: ApiClient, collaboration_id: str, *, message: str | None = None) -> None:
    await client.post(f"/collaborations/{collaboration_id}/join", json={"message": message} if message else None)


async def invite_user(
    client: ApiClient,
    collaboration_id: str,
    *,
    user_id: str,
    role: str = "contributor",
    message: str | None = None,
) -> None:
    payload: dict[str, Any] = {"userId": user_id, "role": role}
    if message:
        payload["message"] = message
    await client.post(f"/collaborations/{collaboration_id}/invite", json=payload)


async def accept_invite(client: ApiClient, collaboration_id: str) -> None:
    await client.post(f"/collaborations/{collaboration_id}/invites/accept")
    logger.info("Accepted collaboration invite | id=%s", collaboration_id)


async def decline_invite(client: ApiClient, collaboration_id: str) -> None:
    await client.post(f"/collaborations/{collaboration_id}/invites/decline")


async def fork_collaboration(client: ApiClient, collaboration_id: str, *, title: str | None = None) -> Collaboration:
    data = await client.post(f"/collaborations/{collaboration_id}/fork", json={"title": title} if title else None)
    return parse_model(Collaboration, unwrap(data, "collaboration"))


__all__ = [
    "accept_invite",
    "create_collaboration",
    "decline_invite",
    "delete_collaboration",
    "fork_collaboration",
    "get_collaboration",
    "invite_user",
    "join_collaboration",
    "list_collaborations",
    "list_my_collaborations",
    "list_pending_invites",
    "publish_collaboration",
    "set_status",
    "update_collaboration",
]
