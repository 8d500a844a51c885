"""Collaborations page: browse, mine and pending invites tabs."""
from __future__ import annotations

import logging
from typing import Literal

from ..clients.http import ApiClient
from ..constants import COLLABORATION_SORTS
from ..controllers import (
    FormSubmission,
    PaginatedResourceController,
    Query,
    apply_after_success,
    require_transition,
    without,
)
from ..errors import WorkflowError
from ..forms import CollaborationForm
from ..schemas import Collaboration, CollaborationStatus, Page
from ..services import collaboration_service
from .base import Confirm, View

logger = logging.getLogger(__name__)

Tab = Literal["browse", "mine", "invites"]


class CollaborationsView(View):
    """Three independently paginated tabs over collaborations.

    With ``strict_workflow`` enabled, status changes outside the
    draft -> active -> reviewing -> completed path (or to cancelled) are
    refused locally before any call is made.
    """

    def __init__(self, client: ApiClient, *, confirm: Confirm | None = None, strict_workflow: bool = False) -> None:
        super().__init__(client, confirm=confirm)
        self.strict_workflow = strict_workflow
        limit = self.settings.page_size
        self.browse: PaginatedResourceController[Collaboration] = PaginatedResourceController(
            self._fetch_browse, limit=limit, sort="recent", sorts=COLLABORATION_SORTS
        )
        self.mine: PaginatedResourceController[Collaboration] = PaginatedResourceController(
            self._fetch_mine, limit=limit
        )
        self.invites: PaginatedResourceController[Collaboration] = PaginatedResourceController(
            self._fetch_invites, limit=limit
        )
        self.tab: Tab = "browse"
        self.create_form: FormSubmission[CollaborationForm, Collaboration] = FormSubmission(
            CollaborationForm,
            self._create,
            close_delay=self.settings.success_close_delay,
        )

    async def _fetch_browse(self, query: Query) -> Page[Collaboration]:
        return await collaboration_service.list_collaborations(self.client, **query.as_kwargs())

    async def _fetch_mine(self, query: Query) -> Page[Collaboration]:
        return await collaboration_service.list_my_collaborations(self.client, **query.as_kwargs())

    async def _fetch_invites(self, query: Query) -> Page[Collaboration]:
        return await collaboration_service.list_pending_invites(self.client, page=query.page, limit=query.limit)

    @property
    def current(self) -> PaginatedResourceController[Collaboration]:
        return {"browse": self.browse, "mine": self.mine, "invites": self.invites}[self.tab]

    async def load(self) -> None:
        await self.current.load()

    async def switch_tab(self, tab: Tab) -> None:
        if tab not in ("browse", "mine", "invites"):
            raise ValueError(f"Unknown tab {tab!r}")
        self.tab = tab
        await self.current.refresh()

    async def accept_invite(self, collaboration_id: str) -> bool:
        result = await apply_after_success(
            self.invites,
            lambda: collaboration_service.accept_invite(self.client, collaboration_id),
            patch=without(collaboration_id),
        )
        if result.ok:
            await self.mine.refresh()
        return self.record(result)

    async def decline_invite(self, collaboration_id: str) -> bool:
        result = await apply_after_success(
            self.invites,
            lambda: collaboration_service.decline_invite(self.client, collaboration_id),
            patch=without(collaboration_id),
        )
        return self.record(result)

    async def join(self, collaboration_id: str, *, message: str | None = None) -> bool:
        result = await apply_after_success(
            self.browse,
            lambda: collaboration_service.join_collaboration(self.client, collaboration_id, message=message),
            refetch=True,
        )
        return self.record(result)

    def _find(self, collaboration_id: str) -> Collaboration | None:
        for controller in (self.mine, self.browse, self.invites):
            found = controller.find(collaboration_id)
            if found is not None:
                return found
        return None

    def _apply(self, updated: Collaboration) -> None:
        for controller in (self.mine, self.browse):
            if controller.find(updated.id) is not None:
                controller.replace_item(updated)

    def _check(self, collaboration_id: str, target: CollaborationStatus) -> bool:
        if not self.strict_workflow:
            return True
        current = self._find(collaboration_id)
        if current is None:
            return True
        try:
            require_transition(current.status, target)
        except WorkflowError as exc:
            logger.info("Refusing status change | id=%s error=%s", collaboration_id, exc)
            self.error = str(exc)
            return False
        return True

    async def publish(self, collaboration_id: str) -> bool:
        """Make a draft active and public in one update."""

        if not self._check(collaboration_id, CollaborationStatus.ACTIVE):
            return False
        result = await apply_after_success(
            None, lambda: collaboration_service.publish_collaboration(self.client, collaboration_id)
        )
        if result.ok and result.value is not None:
            self._apply(result.value)
        return self.record(result)

    async def transition(self, collaboration_id: str, target: CollaborationStatus | str) -> bool:
        status = CollaborationStatus(target)
        if not self._check(collaboration_id, status):
            return False
        result = await apply_after_success(
            None, lambda: collaboration_service.set_status(self.client, collaboration_id, status)
        )
        if result.ok and result.value is not None:
            self._apply(result.value)
        return self.record(result)

    async def fork(self, collaboration_id: str, *, title: str | None = None) -> Collaboration | None:
        result = await apply_after_success(
            None, lambda: collaboration_service.fork_collaboration(self.client, collaboration_id, title=title)
        )
        if not self.record(result):
            return None
        if result.value is not None:
            self.mine.prepend(result.value)
        return result.value

    async def delete(self, collaboration_id: str) -> bool:
        if not self.confirmed("Are you sure you want to delete this collaboration?"):
            return False
        result = await apply_after_success(
            None, lambda: collaboration_service.delete_collaboration(self.client, collaboration_id)
        )
        if result.ok:
            self.mine.remove(collaboration_id)
            self.browse.remove(collaboration_id)
        return self.record(result)

    async def _create(self, form: CollaborationForm) -> Collaboration:
        collaboration = await collaboration_service.create_collaboration(
            self.client,
            title=form.title,
            type=form.type,
            description=form.description,
            original_meme=form.original_meme,
            tags=form.tags,
            is_public=form.is_public,
        )
        self.mine.prepend(collaboration)
        return collaboration


__all__ = ["CollaborationsView", "Tab"]
