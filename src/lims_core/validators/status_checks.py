"""Checks for explicit (user-requested) status changes.

Automatic transitions driven by result entry go through
``lims_core.lifecycle.resolve_status`` and are not checked here.
"""

from collections.abc import Sequence

from ..lifecycle import all_complete
from ..schemas.common import (
    CompletionState,
    LifecycleStatus,
    ValidationResult,
    ValidationSeverity,
    ValidationStatus,
)
from ..schemas.request import AnalysisLine

S = LifecycleStatus

ALLOWED_TRANSITIONS: dict[LifecycleStatus, frozenset[LifecycleStatus]] = {
    S.RECEIVED: frozenset({S.COLLECTED, S.IN_LAB, S.REJECTED}),
    S.COLLECTED: frozenset({S.IN_LAB, S.REJECTED}),
    S.IN_LAB: frozenset({S.VERIFIED, S.REJECTED}),
    S.TESTING: frozenset({S.VERIFIED, S.REJECTED}),
    S.VERIFIED: frozenset({S.PUBLISHED, S.REJECTED}),
    S.PUBLISHED: frozenset(),
    # Restore bypasses the resolver and sends the sample back to the queue
    S.REJECTED: frozenset({S.RECEIVED}),
}


def run_status_checks(
    current: LifecycleStatus,
    target: LifecycleStatus,
    analyses: Sequence[AnalysisLine],
    reason: str | None = None,
) -> list[ValidationResult]:
    """Check an explicit status change requested by a user.

    Checks:
    - illegal_transition: Target is not reachable from the current status
    - incomplete_analyses: Verification requested while lines are not Complete
    - missing_rejection_reason: Rejection requested without a reason
    """
    results: list[ValidationResult] = []

    if target not in ALLOWED_TRANSITIONS[current]:
        results.append(
            ValidationResult(
                check_name="illegal_transition",
                status=ValidationStatus.ERROR,
                severity=ValidationSeverity.HIGH,
                detail=f"Cannot move a request from {current.value} to {target.value}.",
                recommendation=_transition_hint(current),
            )
        )
        return results

    if target == S.VERIFIED and not all_complete(analyses):
        pending = [
            a.code for a in analyses if a.completion_state != CompletionState.COMPLETE
        ]
        results.append(
            ValidationResult(
                check_name="incomplete_analyses",
                status=ValidationStatus.ERROR,
                severity=ValidationSeverity.HIGH,
                detail=f"Cannot verify: results outstanding for {', '.join(pending) or 'no analyses'}.",
                recommendation="Enter all results before verifying",
            )
        )

    if target == S.REJECTED and not (reason and reason.strip()):
        results.append(
            ValidationResult(
                check_name="missing_rejection_reason",
                status=ValidationStatus.ERROR,
                severity=ValidationSeverity.MEDIUM,
                detail="A rejection reason is required.",
                recommendation="Describe why the sample is being rejected",
            )
        )

    return results


def _transition_hint(current: LifecycleStatus) -> str:
    allowed = ALLOWED_TRANSITIONS[current]
    if not allowed:
        return f"{current.value} is final"
    return "Allowed next: " + ", ".join(sorted(s.value for s in allowed))
