"""Challenges page."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

from ..clients.http import ApiClient
from ..constants import CHALLENGE_SORTS
from ..controllers import FormSubmission, PaginatedResourceController, Query, apply_after_success, without
from ..forms import ChallengeForm
from ..schemas import Challenge, Page
from ..services import challenge_service
from .base import Confirm, View


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ChallengesView(View):
    def __init__(
        self,
        client: ApiClient,
        *,
        confirm: Confirm | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        super().__init__(client, confirm=confirm)
        self._clock = clock
        self.challenges: PaginatedResourceController[Challenge] = PaginatedResourceController(
            self._fetch,
            limit=self.settings.page_size,
            sort="recent",
            sorts=CHALLENGE_SORTS,
        )
        self.create_form: FormSubmission[ChallengeForm, Challenge] = FormSubmission(
            ChallengeForm,
            self._create,
            close_delay=self.settings.success_close_delay,
            context=lambda: {"now": self._clock()},
        )

    async def _fetch(self, query: Query) -> Page[Challenge]:
        return await challenge_service.list_challenges(self.client, **query.as_kwargs())

    async def load(self) -> None:
        await self.challenges.load()

    async def set_status(self, status: str | None) -> None:
        await self.challenges.set_filter("status", None if status == "all" else status)

    async def set_category(self, category: str | None) -> None:
        await self.challenges.set_filter("category", None if category == "all" else category)

    async def join(self, challenge_id: str) -> bool:
        # Participant counts are server-computed, so re-read the page.
        result = await apply_after_success(
            self.challenges,
            lambda: challenge_service.join_challenge(self.client, challenge_id),
            refetch=True,
        )
        return self.record(result)

    async def submit(self, challenge_id: str, meme_id: str) -> bool:
        result = await apply_after_success(
            self.challenges,
            lambda: challenge_service.submit_meme(self.client, challenge_id, meme_id=meme_id),
            refetch=True,
        )
        return self.record(result)

    async def vote(self, challenge_id: str, submission_id: str) -> bool:
        result = await apply_after_success(
            None, lambda: challenge_service.vote_submission(self.client, challenge_id, submission_id)
        )
        return self.record(result)

    async def delete(self, challenge_id: str) -> bool:
        if not self.confirmed("Are you sure you want to delete this challenge?"):
            return False
        result = await apply_after_success(
            self.challenges,
            lambda: challenge_service.delete_challenge(self.client, challenge_id),
            patch=without(challenge_id),
        )
        return self.record(result)

    async def _create(self, form: ChallengeForm) -> Challenge:
        challenge = await challenge_service.create_challenge(
            self.client,
            title=form.title,
            description=form.description,
            category=form.category,
            type=form.type,
            rules=form.rules,
            start_date=form.start_date,
            end_date=form.end_date,
            max_participants=form.max_participants,
        )
        self.challenges.prepend(challenge)
        return challenge


__all__ = ["ChallengesView"]
