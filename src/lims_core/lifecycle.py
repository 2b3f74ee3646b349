"""Request lifecycle status resolution."""

from collections.abc import Sequence

from .schemas.common import (
    PRE_TESTING_STATUSES,
    TERMINAL_STATUSES,
    CompletionState,
    LifecycleStatus,
)
from .schemas.request import AnalysisLine


def resolve_status(
    current_status: LifecycleStatus,
    analyses: Sequence[AnalysisLine],
) -> LifecycleStatus:
    """Compute the next lifecycle status from the current one and its analyses.

    Rules, first match wins:
    - Published/Rejected are terminal and returned unchanged
    - All lines Complete promotes to Verified
    - Received/Collected/In Lab move to Testing once entry has begun
    - Anything else keeps its current status

    An empty analysis list never counts as fully complete. Flagged lines are
    not complete.
    """
    if current_status in TERMINAL_STATUSES:
        return current_status

    if all_complete(analyses):
        return LifecycleStatus.VERIFIED

    if current_status in PRE_TESTING_STATUSES:
        return LifecycleStatus.TESTING

    return current_status


def all_complete(analyses: Sequence[AnalysisLine]) -> bool:
    """True when there is at least one line and every line is Complete."""
    return bool(analyses) and all(
        a.completion_state == CompletionState.COMPLETE for a in analyses
    )


def completion_for(value: str | None) -> CompletionState:
    """Completion state implied by an entered result value."""
    if value is not None and value.strip():
        return CompletionState.COMPLETE
    return CompletionState.PENDING


def is_terminal(status: LifecycleStatus) -> bool:
    return status in TERMINAL_STATUSES
