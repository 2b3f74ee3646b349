"""Validation checks for request accessioning, payments and status changes."""

from collections.abc import Sequence

from ..schemas.common import ValidationResult, ValidationSeverity
from ..schemas.request import AnalysisLine
from .billing_checks import run_billing_checks, run_payment_checks
from .request_checks import run_request_checks
from .status_checks import ALLOWED_TRANSITIONS, run_status_checks

__all__ = [
    "ALLOWED_TRANSITIONS",
    "run_all_validations",
    "run_billing_checks",
    "run_payment_checks",
    "run_request_checks",
    "run_status_checks",
    "has_blocking",
    "sort_by_severity",
]

SEVERITY_ORDER = {
    ValidationSeverity.HIGH: 0,
    ValidationSeverity.MEDIUM: 1,
    ValidationSeverity.LOW: 2,
    ValidationSeverity.INFO: 3,
}


def run_all_validations(
    analyses: Sequence[AnalysisLine],
    discount: float = 0.0,
    paid: float = 0.0,
) -> list[ValidationResult]:
    """Run every accessioning check for a new request and return sorted results.

    The subtotal is the sum of the line prices. Results are sorted by
    severity (HIGH first, then MEDIUM, LOW, INFO).
    """
    results: list[ValidationResult] = []

    subtotal = sum(line.price for line in analyses)
    results.extend(run_request_checks(analyses))
    results.extend(run_billing_checks(subtotal, discount, paid))

    return sort_by_severity(results)


def sort_by_severity(results: list[ValidationResult]) -> list[ValidationResult]:
    return sorted(results, key=lambda r: SEVERITY_ORDER.get(r.severity, 4))


def has_blocking(results: Sequence[ValidationResult]) -> bool:
    return any(r.is_blocking for r in results)
