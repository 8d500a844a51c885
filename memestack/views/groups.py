"""Groups page; groups are keyed by slug."""
from __future__ import annotations

from ..clients.http import ApiClient
from ..constants import GROUP_SORTS
from ..controllers import FormSubmission, PaginatedResourceController, Query, apply_after_success
from ..forms import GroupForm
from ..schemas import Group, Page
from ..services import group_service
from .base import Confirm, View


class GroupsView(View):
    def __init__(self, client: ApiClient, *, confirm: Confirm | None = None) -> None:
        super().__init__(client, confirm=confirm)
        self.groups: PaginatedResourceController[Group] = PaginatedResourceController(
            self._fetch,
            limit=self.settings.page_size,
            sort="popular",
            sorts=GROUP_SORTS,
            key=lambda group: group.slug,
        )
        self.create_form: FormSubmission[GroupForm, Group] = FormSubmission(
            GroupForm,
            self._create,
            close_delay=self.settings.success_close_delay,
        )

    async def _fetch(self, query: Query) -> Page[Group]:
        return await group_service.list_groups(self.client, **query.as_kwargs())

    async def load(self) -> None:
        await self.groups.load()

    def _membership(self, slug: str, is_member: bool) -> None:
        current = self.groups.find(slug)
        if current is None or current.is_member == is_member:
            return
        delta = 1 if is_member else -1
        stats = current.stats.model_copy(update={"member_count": max(0, current.stats.member_count + delta)})
        self.groups.replace_item(current.model_copy(update={"is_member": is_member, "stats": stats}))

    async def join(self, slug: str, *, message: str | None = None) -> bool:
        result = await apply_after_success(None, lambda: group_service.join_group(self.client, slug, message=message))
        if result.ok:
            self._membership(slug, True)
        return self.record(result)

    async def leave(self, slug: str) -> bool:
        if not self.confirmed("Leave this group?"):
            return False
        result = await apply_after_success(None, lambda: group_service.leave_group(self.client, slug))
        if result.ok:
            self._membership(slug, False)
        return self.record(result)

    async def _create(self, form: GroupForm) -> Group:
        group = await group_service.create_group(
            self.client,
            name=form.name,
            category=form.category,
            description=form.description,
            privacy=form.privacy,
        )
        self.groups.prepend(group)
        return group


__all__ = ["GroupsView"]
