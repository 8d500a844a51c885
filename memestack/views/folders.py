"""Folders page and folder detail page."""
from __future__ import annotations

import asyncio
import logging
from typing import Sequence

from ..clients.http import ApiClient
from ..constants import FOLDER_SORTS
from ..controllers import FormSubmission, PaginatedResourceController, Query, apply_after_success, without
from ..errors import MemestackError, user_message
from ..forms import FolderForm
from ..schemas import BulkAddResult, Folder, Meme, Page, ShareLink
from ..services import folder_service, meme_service
from .base import Confirm, View

logger = logging.getLogger(__name__)


class FoldersView(View):
    def __init__(self, client: ApiClient, *, confirm: Confirm | None = None) -> None:
        super().__init__(client, confirm=confirm)
        self.folders: PaginatedResourceController[Folder] = PaginatedResourceController(
            self._fetch,
            limit=self.settings.page_size,
            sort="createdAt",
            sorts=FOLDER_SORTS,
        )
        self.create_form: FormSubmission[FolderForm, Folder] = FormSubmission(
            FolderForm,
            self._create,
            close_delay=self.settings.success_close_delay,
        )

    async def _fetch(self, query: Query) -> Page[Folder]:
        return await folder_service.list_folders(self.client, **query.as_kwargs())

    async def load(self) -> None:
        await self.folders.load()

    async def _create(self, form: FolderForm) -> Folder:
        folder = await folder_service.create_folder(
            self.client,
            name=form.name,
            description=form.description,
            color=form.color,
            icon=form.icon,
            is_private=form.is_private,
        )
        self.folders.prepend(folder)
        return folder

    async def rename(self, folder_id: str, name: str) -> bool:
        result = await apply_after_success(None, lambda: folder_service.update_folder(self.client, folder_id, name=name))
        if result.ok and result.value is not None:
            self.folders.replace_item(result.value)
        return self.record(result)

    async def delete(self, folder_id: str) -> bool:
        if not self.confirmed("Are you sure you want to delete this folder? Memes inside it are kept."):
            return False
        result = await apply_after_success(
            self.folders,
            lambda: folder_service.delete_folder(self.client, folder_id),
            patch=without(folder_id),
        )
        return self.record(result)


class FolderDetailView(View):
    """One folder with its memes and the memes that could be added to it."""

    def __init__(self, client: ApiClient, folder_id: str, *, confirm: Confirm | None = None) -> None:
        super().__init__(client, confirm=confirm)
        self.folder_id = folder_id
        self.folder: Folder | None = None
        self.all_memes: list[Meme] = []
        self.loading = False
        self.share_link: ShareLink | None = None

    @property
    def available_memes(self) -> list[Meme]:
        """Memes the user owns that are not in this folder yet."""

        if self.folder is None:
            return []
        present = set(self.folder.meme_ids)
        return [meme for meme in self.all_memes if meme.id not in present]

    async def load(self) -> bool:
        self.loading = True
        self.error = None
        try:
            folder, memes = await asyncio.gather(
                folder_service.get_folder(self.client, self.folder_id),
                meme_service.list_all_memes(self.client),
                return_exceptions=True,
            )
        finally:
            self.loading = False
        for outcome in (folder, memes):
            if isinstance(outcome, MemestackError):
                logger.warning("Folder load failed | folder_id=%s error=%s", self.folder_id, outcome)
                self.error = user_message(outcome)
                return False
            if isinstance(outcome, BaseException):
                raise outcome
        self.folder, self.all_memes = folder, memes
        return True

    def _with_memes(self, memes: list[Meme]) -> None:
        if self.folder is not None:
            self.folder = self.folder.model_copy(update={"memes": memes, "meme_count": len(memes)})

    def _meme(self, meme_id: str) -> Meme:
        for meme in self.all_memes:
            if meme.id == meme_id:
                return meme
        return Meme(id=meme_id)

    async def add_meme(self, meme_id: str) -> bool:
        result = await apply_after_success(
            None, lambda: folder_service.add_meme_to_folder(self.client, self.folder_id, meme_id)
        )
        if result.ok and self.folder is not None and meme_id not in self.folder.meme_ids:
            self._with_memes([*self.folder.memes, self._meme(meme_id)])
        return self.record(result)

    async def remove_meme(self, meme_id: str) -> bool:
        if not self.confirmed("Remove this meme from the folder?"):
            return False
        result = await apply_after_success(
            None, lambda: folder_service.remove_meme_from_folder(self.client, self.folder_id, meme_id)
        )
        if result.ok and self.folder is not None:
            self._with_memes(without(meme_id)(self.folder.memes))
        return self.record(result)

    async def bulk_add(self, meme_ids: Sequence[str]) -> BulkAddResult | None:
        ids = list(dict.fromkeys(meme_ids))
        if not ids:
            return None
        result = await apply_after_success(
            None, lambda: folder_service.bulk_add_memes(self.client, self.folder_id, ids)
        )
        if not self.record(result):
            return None
        if self.folder is not None:
            present = set(self.folder.meme_ids)
            added = [self._meme(meme_id) for meme_id in ids if meme_id not in present]
            self._with_memes([*self.folder.memes, *added])
        return result.value

    async def share(self) -> ShareLink | None:
        result = await apply_after_success(None, lambda: folder_service.generate_share_link(self.client, self.folder_id))
        if not self.record(result):
            return None
        self.share_link = result.value
        if self.folder is not None and result.value is not None:
            self.folder = self.folder.model_copy(update={"share_url": result.value.share_url})
        return result.value


__all__ = ["FolderDetailView", "FoldersView"]
