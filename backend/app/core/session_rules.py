"""Session Rules: pure state-machine checks for workout sessions.

Invariants:
    - Functions are PURE: they take statuses/flags and return a status or raise,
      the service applies the mutation
    - COMPLETED is terminal: no exercise mutation is accepted afterwards
    - derive_status never returns COMPLETED; only complete_session sets it
"""

from collections.abc import Iterable

from app.core.domain_types import SessionStatus
from app.core.errors import ConflictError


def ensure_mutable(status: SessionStatus) -> None:
    """Reject exercise updates on a completed session."""
    if status == SessionStatus.COMPLETED:
        raise ConflictError(
            "Workout session is already completed and cannot be changed",
        )


def derive_status(
    current: SessionStatus, completed_flags: Iterable[bool],
) -> SessionStatus:
    """Status after an exercise has been marked."""
    if current == SessionStatus.COMPLETED:
        return current
    if any(completed_flags):
        return SessionStatus.IN_PROGRESS
    return SessionStatus.CREATED


def is_ready_to_complete(completed_flags: Iterable[bool]) -> bool:
    """True when every exercise in the session has been marked completed.

    A session whose exercises were all deleted from the workout is trivially ready.
    """
    return all(completed_flags)


def check_completion(
    completed_flags: Iterable[bool], require_all_exercises: bool,
) -> None:
    """Gate for complete_session when the all-exercises policy is enabled."""
    flags = list(completed_flags)
    if require_all_exercises and not is_ready_to_complete(flags):
        pending = sum(1 for f in flags if not f)
        raise ConflictError(
            f"Workout session has {pending} exercise(s) not completed",
        )
