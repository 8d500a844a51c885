"""Templates page: browse, favorite, track and upload templates."""
from __future__ import annotations

from ..clients.http import ApiClient
from ..constants import TEMPLATE_SORTS, TEMPLATE_TABS
from ..controllers import FormSubmission, PaginatedResourceController, Query, apply_after_success, without
from ..forms import TemplateForm
from ..schemas import Page, Template
from ..services import template_service
from .base import Confirm, View


class TemplatesView(View):
    """One tab of the templates page: ``all``, ``favorites`` or ``mine``.

    Favorite membership comes from the server's favorites list, loaded
    alongside the first page, and flips only after a favorite call succeeds.
    """

    def __init__(self, client: ApiClient, *, confirm: Confirm | None = None, tab: str = "all") -> None:
        if tab not in TEMPLATE_TABS:
            raise ValueError(f"Unknown templates tab {tab!r}")
        super().__init__(client, confirm=confirm)
        self.tab = tab
        browsing = tab == "all"
        self.templates: PaginatedResourceController[Template] = PaginatedResourceController(
            self._fetch,
            limit=self.settings.page_size,
            sort="createdAt" if browsing else None,
            sorts=TEMPLATE_SORTS if browsing else (),
        )
        self.favorites: set[str] = set()
        self._favorite_pending: set[str] = set()
        self.create_form: FormSubmission[TemplateForm, Template] = FormSubmission(
            TemplateForm,
            self._create,
            close_delay=self.settings.success_close_delay,
            context=lambda: {"max_upload_bytes": self.settings.max_upload_bytes},
        )

    async def _fetch(self, query: Query) -> Page[Template]:
        if self.tab == "mine":
            return await template_service.list_my_templates(self.client, page=query.page, limit=query.limit)
        if self.tab == "favorites":
            return await template_service.list_favorite_templates(self.client, page=query.page, limit=query.limit)
        return await template_service.list_templates(self.client, **query.as_kwargs())

    async def load(self) -> None:
        await self.load_favorites()
        await self.templates.load()

    async def load_favorites(self) -> bool:
        result = await apply_after_success(None, lambda: template_service.favorite_template_ids(self.client))
        if not self.record(result) or result.value is None:
            return False
        self.favorites = result.value
        return True

    async def set_category(self, category: str | None) -> None:
        await self.templates.set_filter("category", None if category == "all" else category)

    async def search(self, text: str | None) -> None:
        await self.templates.set_search(text)

    def is_favorite(self, template_id: str) -> bool:
        return template_id in self.favorites

    async def toggle_favorite(self, template_id: str) -> bool:
        if template_id in self._favorite_pending:
            return False
        favorited = template_id in self.favorites
        call = template_service.unfavorite_template if favorited else template_service.favorite_template
        self._favorite_pending.add(template_id)
        try:
            result = await apply_after_success(None, lambda: call(self.client, template_id))
        finally:
            self._favorite_pending.discard(template_id)
        if not self.record(result):
            return False

        if favorited:
            self.favorites.discard(template_id)
        else:
            self.favorites.add(template_id)
        if favorited and self.tab == "favorites":
            self.templates.remove(template_id)
            return True
        current = self.templates.find(template_id)
        if current is not None:
            delta = -1 if favorited else 1
            stats = current.stats.model_copy(update={"favorites": max(0, current.stats.favorites + delta)})
            self.templates.replace_item(current.model_copy(update={"is_favorited": not favorited, "stats": stats}))
        return True

    async def delete(self, template_id: str) -> bool:
        if not self.confirmed("Are you sure you want to delete this template?"):
            return False
        result = await apply_after_success(
            self.templates,
            lambda: template_service.delete_template(self.client, template_id),
            patch=without(template_id),
        )
        if result.ok:
            self.favorites.discard(template_id)
        return self.record(result)

    async def download(self, template_id: str) -> bool:
        result = await apply_after_success(None, lambda: template_service.track_download(self.client, template_id))
        if result.ok:
            self._bump(template_id, "download_count")
        return self.record(result)

    async def use(self, template_id: str) -> bool:
        result = await apply_after_success(None, lambda: template_service.track_usage(self.client, template_id))
        if result.ok:
            self._bump(template_id, "usage_count")
        return self.record(result)

    async def rate(self, template_id: str, rating: int) -> bool:
        result = await apply_after_success(
            self.templates,
            lambda: template_service.rate_template(self.client, template_id, rating),
            refetch=True,
        )
        return self.record(result)

    def _bump(self, template_id: str, counter: str) -> None:
        current = self.templates.find(template_id)
        if current is None:
            return
        stats = current.stats.model_copy(update={counter: getattr(current.stats, counter) + 1})
        self.templates.replace_item(current.model_copy(update={"stats": stats}))

    async def _create(self, form: TemplateForm) -> Template:
        template = await template_service.create_template(
            self.client,
            image=form.image,
            name=form.name,
            category=form.category,
            description=form.description,
            text_areas=form.text_areas,
            is_public=form.is_public,
        )
        if self.tab != "favorites":
            self.templates.prepend(template)
        return template


__all__ = ["TemplatesView"]
