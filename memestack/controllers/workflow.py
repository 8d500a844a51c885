"""Collaboration status workflow."""
from __future__ import annotations

from typing import Final

from ..errors import WorkflowError
from ..schemas.collaborations import CollaborationStatus

_TERMINAL: Final[frozenset[CollaborationStatus]] = frozenset(
    {CollaborationStatus.COMPLETED, CollaborationStatus.CANCELLED}
)

TRANSITIONS: Final[dict[CollaborationStatus, frozenset[CollaborationStatus]]] = {
    CollaborationStatus.DRAFT: frozenset({CollaborationStatus.ACTIVE, CollaborationStatus.CANCELLED}),
    CollaborationStatus.ACTIVE: frozenset({CollaborationStatus.REVIEWING, CollaborationStatus.CANCELLED}),
    CollaborationStatus.REVIEWING: frozenset({CollaborationStatus.COMPLETED, CollaborationStatus.CANCELLED}),
    CollaborationStatus.COMPLETED: frozenset(),
    CollaborationStatus.CANCELLED: frozenset(),
}


def can_transition(current: CollaborationStatus | str, target: CollaborationStatus | str) -> bool:
    src = CollaborationStatus(current)
    dst = CollaborationStatus(target)
    return dst in TRANSITIONS[src]


def require_transition(current: CollaborationStatus | str, target: CollaborationStatus | str) -> CollaborationStatus:
    if not can_transition(current, target):
        raise WorkflowError(
            f"Cannot move a collaboration from {CollaborationStatus(current).value} to {CollaborationStatus(target).value}"
        )
    return CollaborationStatus(target)


def is_terminal(status: CollaborationStatus | str) -> bool:
    return CollaborationStatus(status) in _TERMINAL


__all__ = ["TRANSITIONS", "can_transition", "is_terminal", "require_transition"]
