"""Shared plumbing for page view models."""
from __future__ import annotations

import logging
from typing import Any, Callable

from ..clients.http import ApiClient
from ..controllers.mutations import MutationResult

logger = logging.getLogger(__name__)

Confirm = Callable[[str], bool]


def _always(_message: str) -> bool:
    return True


class View:
    """A page surface: owns its controllers and a dismissible alert string.

    Errors from the calls a view issues stop here and end up in ``error``.
    Destructive actions first ask ``confirm(message)``; a declined prompt
    makes no call.
    """

    def __init__(self, client: ApiClient, *, confirm: Confirm | None = None) -> None:
        self.client = client
        self.settings = client.settings
        self._confirm = confirm or _always
        self.error: str | None = None

    def dismiss_error(self) -> None:
        self.error = None

    def confirmed(self, message: str) -> bool:
        if self._confirm(message):
            return True
        logger.debug("Action cancelled at confirmation | prompt=%s", message)
        return False

    def record(self, result: MutationResult[Any]) -> bool:
        if not result.ok:
            self.error = result.error
        return result.ok


__all__ = ["Confirm", "View"]
