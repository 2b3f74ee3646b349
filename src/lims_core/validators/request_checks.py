"""Structural checks on a request's analysis lines."""

from collections import Counter
from collections.abc import Sequence

from ..schemas.common import ValidationResult, ValidationSeverity, ValidationStatus
from ..schemas.request import AnalysisLine


def run_request_checks(analyses: Sequence[AnalysisLine]) -> list[ValidationResult]:
    """Check the analysis lines of a new request.

    Checks:
    - no_analyses: Request has no tests selected
    - duplicate_analysis_code: The same test code appears more than once
    - negative_price: A line carries a negative price
    """
    results: list[ValidationResult] = []

    if not analyses:
        results.append(
            ValidationResult(
                check_name="no_analyses",
                status=ValidationStatus.ERROR,
                severity=ValidationSeverity.HIGH,
                detail="A request must contain at least one analysis.",
                recommendation="Select one or more tests before saving",
            )
        )
        return results

    counts = Counter(line.code for line in analyses)
    for code, count in counts.items():
        if count > 1:
            results.append(
                ValidationResult(
                    check_name="duplicate_analysis_code",
                    status=ValidationStatus.ERROR,
                    severity=ValidationSeverity.MEDIUM,
                    detail=f"Test {code} was selected {count} times.",
                    recommendation=f"Remove the duplicate {code} lines",
                )
            )

    for line in analyses:
        if line.price < 0:
            results.append(
                ValidationResult(
                    check_name="negative_price",
                    status=ValidationStatus.ERROR,
                    severity=ValidationSeverity.MEDIUM,
                    detail=f"Test {line.code} has a negative price ({line.price:.2f}).",
                    recommendation="Fix the test definition price",
                )
            )

    return results
