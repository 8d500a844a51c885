"""Form/dialog submission flow: validate, submit once, report, auto-close."""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Generic, Mapping, TypeVar

from pydantic import BaseModel

from ..errors import FormValidationError, MemestackError, user_message
from ..forms import validate_form

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=BaseModel)
R = TypeVar("R")


class FormSubmission(Generic[F, R]):
    """State machine behind a create/edit dialog.

    Client-side validation failures fill ``field_errors`` and never reach
    the network. Server failures become a single ``error`` string and the
    form is re-enabled for a manual retry. On success the dialog closes
    after ``close_delay`` seconds.
    """

    def __init__(
        self,
        model: type[F],
        submit: Callable[[F], Awaitable[R]],
        *,
        close_delay: float | None = None,
        on_close: Callable[[R], Any] | None = None,
        context: Callable[[], Mapping[str, Any]] | None = None,
    ) -> None:
        self.model = model
        self._submit = submit
        self.close_delay = close_delay
        self._on_close = on_close
        self._context = context
        self._close_task: asyncio.Task[None] | None = None
        self.is_open = False
        self.submitting = False
        self.success = False
        self.error: str | None = None
        self.field_errors: dict[str, str] = {}
        self.result: R | None = None

    @property
    def can_submit(self) -> bool:
        return not self.submitting

    def open(self) -> None:
        self.reset()
        self.is_open = True

    def reset(self) -> None:
        if self._close_task is not None and not self._close_task.done():
            self._close_task.cancel()
        self._close_task = None
        self.submitting = False
        self.success = False
        self.error = None
        self.field_errors = {}
        self.result = None

    def close(self) -> None:
        self.is_open = False

    def dismiss_error(self) -> None:
        self.error = None

    async def submit(self, data: Mapping[str, Any]) -> R | None:
        if self.submitting:
            logger.debug("Ignoring submit while a submission is in flight | form=%s", self.model.__name__)
            return None
        self.error = None
        self.success = False
        self.field_errors = {}

        context = dict(self._context()) if self._context is not None else None
        try:
            form = validate_form(self.model, data, context=context)
        except FormValidationError as exc:
            self.field_errors = exc.field_errors
            return None

        self.submitting = True
        try:
            result = await self._submit(form)
        except FormValidationError as exc:
            self.field_errors = exc.field_errors
            return None
        except MemestackError as exc:
            logger.warning("Form submission failed | form=%s error=%s", self.model.__name__, exc)
            self.error = user_message(exc)
            return None
        finally:
            self.submitting = False

        self.success = True
        self.result = result
        if self.close_delay is not None:
            self._close_task = asyncio.create_task(self._close_after(result, self.close_delay))
            self._close_task.add_done_callback(self._log_close_failure)
        return result

    async def _close_after(self, result: R, delay: float) -> None:
        await asyncio.sleep(delay)
        self.is_open = False
        if self._on_close is not None:
            self._on_close(result)

    def _log_close_failure(self, task: asyncio.Task[None]) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Dialog close callback failed | form=%s error=%s", self.model.__name__, exc, exc_info=exc)

    async def wait_closed(self) -> None:
        """Await the pending auto-close, if any."""

        if self._close_task is not None:
            await self._close_task


__all__ = ["FormSubmission"]
