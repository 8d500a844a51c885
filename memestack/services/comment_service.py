"""Comment endpoints: threads, replies, likes and reports."""
from __future__ import annotations

from ..clients.http import ApiClient
from ..constants import COMMENT_MAX_LENGTH, COMMENT_SORTS, REPORT_REASONS
from ..schemas import Comment, LikeState, Page, parse_model, parse_page, unwrap
from .common import list_params, require_sort


def _clean_content(content: str) -> str:
    text = (content or "").strip()
    if not text:
        raise ValueError("Comment content is required")
    if len(text) > COMMENT_MAX_LENGTH:
        raise ValueError(f"Comment cannot exceed {COMMENT_MAX_LENGTH} characters")
    return text


async def list_comments(
    client: ApiClient,
    meme_id: str,
    *,
    page: int = 1,
    limit: int | None = None,
    sort: str | None = "createdAt",
    sort_order: str = "desc",
) -> Page[Comment]:
    params = list_params(
        client,
        page=page,
        limit=limit,
        sortBy=require_sort(sort, COMMENT_SORTS),
        sortOrder=sort_order,
    )
    data = await client.get(f"/comments/memes/{meme_id}/comments", params=params)
    return parse_page(data, "comments", Comment, fallback_page=page)


async def list_replies(
    client: ApiClient,
    comment_id: str,
    *,
    page: int = 1,
    limit: int | None = None,
) -> Page[Comment]:
    data = await client.get(f"/comments/{comment_id}/replies", params=list_params(client, page=page, limit=limit))
    return parse_page(data, "replies", Comment, fallback_page=page)


async def add_comment(
    client: ApiClient,
    meme_id: str,
    *,
    content: str,
    parent_comment: str | None = None,
) -> Comment:
    payload: dict[str, str] = {"content": _clean_content(content)}
    if parent_comment:
        payload["parentComment"] = parent_comment
    data = await client.post(f"/comments/memes/{meme_id}/comments", json=payload)
    return parse_model(Comment, unwrap(data, "comment"))


async def update_comment(client: ApiClient, comment_id: str, *, content: str) -> Comment:
    data = await client.put(f"/comments/{comment_id}", json={"content": _clean_content(content)})
    return parse_model(Comment, unwrap(data, "comment"))


async def delete_comment(client: ApiClient, comment_id: str) -> None:
    await client.delete(f"/comments/{comment_id}")


async def toggle_like_comment(client: ApiClient, comment_id: str) -> LikeState:
    data = await client.post(f"/comments/{comment_id}/like")
    return parse_model(LikeState, unwrap(data, "data"))


async def report_comment(
    client: ApiClient,
    comment_id: str,
    *,
    reason: str,
    description: str | None = None,
) -> None:
    if reason not in REPORT_REASONS:
        raise ValueError(f"Unsupported report reason {reason!r}")
    payload = {"reason": reason}
    if description:
        payload["description"] = description.strip()
    await client.post(f"/comments/{comment_id}/report", json=payload)


__all__ = [
    "add_comment",
    "delete_comment",
    "list_comments",
    "list_replies",
    "report_comment",
    "toggle_like_comment",
    "update_comment",
]
