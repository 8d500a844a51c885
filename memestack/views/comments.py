"""Comment thread under a single meme."""
from __future__ import annotations

import logging

from ..clients.http import ApiClient
from ..constants import COMMENT_SORTS
from ..controllers import FormSubmission, PaginatedResourceController, Query, apply_after_success
from ..errors import FormValidationError
from ..forms import CommentForm, ReportForm, validate_form
from ..schemas import Comment, LikeState, Page
from ..services import comment_service
from .base import Confirm, View

logger = logging.getLogger(__name__)


def _with_like(comment: Comment, state: LikeState) -> Comment:
    stats = comment.stats.model_copy(update={"likes_count": state.likes_count})
    return comment.model_copy(update={"is_liked": state.is_liked, "stats": stats})


class CommentThreadView(View):
    def __init__(self, client: ApiClient, meme_id: str, *, confirm: Confirm | None = None) -> None:
        super().__init__(client, confirm=confirm)
        self.meme_id = meme_id
        self.comments: PaginatedResourceController[Comment] = PaginatedResourceController(
            self._fetch,
            limit=self.settings.page_size,
            sort="createdAt",
            sorts=COMMENT_SORTS,
        )
        self.field_errors: dict[str, str] = {}
        self.posting = False
        self.reporting: str | None = None
        self.report_dialog: FormSubmission[ReportForm, None] = FormSubmission(
            ReportForm,
            self._report,
            close_delay=self.settings.success_close_delay,
        )

    async def _fetch(self, query: Query) -> Page[Comment]:
        return await comment_service.list_comments(self.client, self.meme_id, **query.as_kwargs())

    async def load(self) -> None:
        await self.comments.load()

    def _content(self, content: str) -> str | None:
        self.field_errors = {}
        try:
            return validate_form(CommentForm, {"content": content}).content
        except FormValidationError as exc:
            self.field_errors = exc.field_errors
            return None

    async def post(self, content: str) -> Comment | None:
        text = self._content(content)
        if text is None or self.posting:
            return None
        self.posting = True
        try:
            result = await apply_after_success(
                None, lambda: comment_service.add_comment(self.client, self.meme_id, content=text)
            )
        finally:
            self.posting = False
        if not self.record(result):
            return None
        if result.value is not None:
            self.comments.prepend(result.value)
        return result.value

    async def reply(self, parent_id: str, content: str) -> Comment | None:
        text = self._content(content)
        if text is None or self.posting:
            return None
        self.posting = True
        try:
            # Reply counters live on the parent, so re-read the thread.
            result = await apply_after_success(
                self.comments,
                lambda: comment_service.add_comment(self.client, self.meme_id, content=text, parent_comment=parent_id),
                refetch=True,
            )
        finally:
            self.posting = False
        if not self.record(result):
            return None
        return result.value

    def _patch_comment(self, comment_id: str, state: LikeState) -> None:
        def _patch(items: list[Comment]) -> list[Comment]:
            patched: list[Comment] = []
            for comment in items:
                if comment.id == comment_id:
                    patched.append(_with_like(comment, state))
                elif any(reply.id == comment_id for reply in comment.replies):
                    replies = [_with_like(r, state) if r.id == comment_id else r for r in comment.replies]
                    patched.append(comment.model_copy(update={"replies": replies}))
                else:
                    patched.append(comment)
            return patched

        self.comments.patch(_patch)

    async def toggle_like(self, comment_id: str) -> LikeState | None:
        result = await apply_after_success(None, lambda: comment_service.toggle_like_comment(self.client, comment_id))
        if not self.record(result):
            return None
        if result.value is not None:
            self._patch_comment(comment_id, result.value)
        return result.value

    async def edit(self, comment_id: str, content: str) -> Comment | None:
        text = self._content(content)
        if text is None:
            return None
        result = await apply_after_success(
            self.comments,
            lambda: comment_service.update_comment(self.client, comment_id, content=text),
            refetch=True,
        )
        if not self.record(result):
            return None
        return result.value

    async def delete(self, comment_id: str) -> bool:
        if not self.confirmed("Are you sure you want to delete this comment?"):
            return False
        # Deleting a parent removes its replies server-side.
        result = await apply_after_success(
            self.comments,
            lambda: comment_service.delete_comment(self.client, comment_id),
            refetch=True,
        )
        return self.record(result)

    async def load_replies(self, comment_id: str, *, page: int = 1) -> list[Comment]:
        result = await apply_after_success(
            None, lambda: comment_service.list_replies(self.client, comment_id, page=page)
        )
        if not self.record(result) or result.value is None:
            return []
        replies = result.value.items
        parent = self.comments.find(comment_id)
        if parent is not None:
            merged = replies if page == 1 else [*parent.replies, *replies]
            self.comments.replace_item(
                parent.model_copy(update={"replies": merged, "has_more_replies": result.value.pagination.has_next})
            )
        return replies

    def open_report(self, comment_id: str) -> None:
        self.reporting = comment_id
        self.report_dialog.open()

    def close_report(self) -> None:
        self.reporting = None
        self.report_dialog.close()

    async def _report(self, form: ReportForm) -> None:
        if self.reporting is None:
            raise FormValidationError({"form": "No comment selected"})
        await comment_service.report_comment(
            self.client, self.reporting, reason=form.reason, description=form.description or None
        )
        logger.info("Comment reported | comment_id=%s reason=%s", self.reporting, form.reason)


__all__ = ["CommentThreadView"]
