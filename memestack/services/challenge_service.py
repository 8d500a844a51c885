"""Challenge and contest endpoints."""
from __future__ import annotations

from datetime import datetime
from typing import Any, Sequence

from ..clients.http import ApiClient
from ..constants import CHALLENGE_SORTS
from ..schemas import Challenge, Page, parse_model, parse_page, unwrap
from .common import list_params, require_sort


async def list_challenges(
    client: ApiClient,
    *,
    page: int = 1,
    limit: int | None = None,
    sort: str | None = "recent",
    search: str | None = None,
    status: str | None = None,
    category: str | None = None,
    type: str | None = None,
) -> Page[Challenge]:
    params = list_params(
        client,
        page=page,
        limit=limit,
        sort=require_sort(sort, CHALLENGE_SORTS),
        search=search,
        status=status,
        category=category,
        type=type,
    )
    data = await client.get("/challenges", params=params)
    return parse_page(data, "challenges", Challenge, fallback_page=page)


async def list_my_challenges(client: ApiClient) -> list[Challenge]:
    data = await client.get("/challenges/user/challenges")
    return parse_page(data, "challenges", Challenge).items


async def get_challenge(client: ApiClient, challenge_id: str) -> Challenge:
    data = await client.get(f"/challenges/{challenge_id}")
    return parse_model(Challenge, unwrap(data, "challenge"))


def _challenge_payload(**fields: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {}
    for key, value in fields.items():
        if value is None:
            continue
        payload[key] = value.isoformat() if isinstance(value, datetime) else value
    return payload


async def create_challenge(
    client: ApiClient,
    *,
    title: str,
    end_date: datetime,
    description: str = "",
    category: str = "freestyle",
    type: str = "challenge",
    rules: Sequence[str] = (),
    start_date: datetime | None = None,
    max_participants: int | None = None,
    template: str | None = None,
) -> Challenge:
    payload = _challenge_payload(
        title=title,
        description=description,
        category=category,
        type=type,
        rules=list(rules),
        startDate=start_date,
        endDate=end_date,
        maxParticipants=max_participants,
        template=template,
    )
    data = await client.post("/challenges", json=payload)
    return parse_model(Challenge, unwrap(data, "challenge"))


async def update_challenge(client: ApiClient, challenge_id: str, **changes: Any) -> Challenge:
    data = await client.put(f"/challenges/{challenge_id}", json=_challenge_payload(**changes))
    return parse_model(Challenge, unwrap(data, "challenge"))


async def delete_challenge(client: ApiClient, challenge_id: str) -> None:
    await client.delete(f"/challenges/{challenge_id}")


async def join_challenge(client: ApiClient, challenge_id: str) -> None:
    await client.post(f"/challenges/{challenge_id}/join")


async def submit_meme(client: ApiClient, challenge_id: str, *, meme_id: str) -> None:
    await client.post(f"/challenges/{challenge_id}/submit", json={"memeId": meme_id})


async def vote_submission(client: ApiClient, challenge_id: str, submission_id: str) -> None:
    await client.post(f"/challenges/{challenge_id}/submissions/{submission_id}/vote")


__all__ = [
    "create_challenge",
    "delete_challenge",
    "get_challenge",
    "join_challenge",
    "list_challenges",
    "list_my_challenges",
    "submit_meme",
    "update_challenge",
    "vote_submission",
]
