"""Meme browsing: public feed or the current user's memes."""
from __future__ import annotations

from ..clients.http import ApiClient
from ..constants import MEME_SORTS
from ..controllers import PaginatedResourceController, Query, apply_after_success, without
from ..schemas import LikeState, Meme, Page
from ..services import meme_service
from .base import Confirm, View


class MemesView(View):
    def __init__(self, client: ApiClient, *, confirm: Confirm | None = None, mine: bool = False) -> None:
        super().__init__(client, confirm=confirm)
        self.mine = mine
        self.memes: PaginatedResourceController[Meme] = PaginatedResourceController(
            self._fetch,
            limit=self.settings.page_size,
            sort=None if mine else "createdAt",
            sorts=() if mine else MEME_SORTS,
        )

    async def _fetch(self, query: Query) -> Page[Meme]:
        if self.mine:
            return await meme_service.list_my_memes(self.client, page=query.page, limit=query.limit)
        return await meme_service.list_memes(self.client, **query.as_kwargs())

    async def load(self) -> None:
        await self.memes.load()

    async def toggle_like(self, meme_id: str) -> LikeState | None:
        result = await apply_after_success(None, lambda: meme_service.toggle_like_meme(self.client, meme_id))
        if not self.record(result) or result.value is None:
            return None
        state = result.value
        current = self.memes.find(meme_id)
        if current is not None:
            stats = current.stats.model_copy(update={"likes_count": state.likes_count})
            self.memes.replace_item(current.model_copy(update={"is_liked": state.is_liked, "stats": stats}))
        return state

    async def share(self, meme_id: str, *, platform: str | None = None) -> bool:
        result = await apply_after_success(
            None, lambda: meme_service.share_meme(self.client, meme_id, platform=platform)
        )
        return self.record(result)

    async def delete(self, meme_id: str) -> bool:
        if not self.confirmed("Are you sure you want to delete this meme?"):
            return False
        result = await apply_after_success(
            self.memes,
            lambda: meme_service.delete_meme(self.client, meme_id),
            patch=without(meme_id),
        )
        return self.record(result)


__all__ = ["MemesView"]
