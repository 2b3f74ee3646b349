"""Typed exceptions raised by the request service.

The lifecycle resolver and billing engine never raise. Only the service
layer, which reads and writes requests, reports failures this way.
"""

from .schemas.common import LifecycleStatus, ValidationResult


class LimsError(Exception):
    """Base exception for request service errors.

    Every subclass carries a machine-readable ``code``.
    """

    code: str = "LIMS_ERROR"


class RequestNotFoundError(LimsError):
    """No request exists with the given id."""

    code: str = "REQUEST_NOT_FOUND"

    def __init__(self, request_id: str):
        self.request_id = request_id
        super().__init__(f"Request not found: {request_id}")


class AnalysisNotFoundError(LimsError):
    """The request has no analysis line with the given code."""

    code: str = "ANALYSIS_NOT_FOUND"

    def __init__(self, request_id: str, analysis_code: str):
        self.request_id = request_id
        self.analysis_code = analysis_code
        super().__init__(f"Request {request_id} has no analysis {analysis_code}")


class ValidationFailedError(LimsError):
    """User input was rejected before reaching the core calculators."""

    code: str = "VALIDATION_FAILED"

    def __init__(self, results: list[ValidationResult]):
        self.results = results
        details = "; ".join(r.detail for r in results)
        super().__init__(f"Validation failed: {details}")

    @property
    def check_names(self) -> list[str]:
        return [r.check_name for r in self.results]


class InvalidStatusTransitionError(ValidationFailedError):
    """An explicit status change is not allowed from the current status."""

    code: str = "INVALID_STATUS_TRANSITION"

    def __init__(
        self,
        current: LifecycleStatus,
        target: LifecycleStatus,
        results: list[ValidationResult],
    ):
        self.current = current
        self.target = target
        super().__init__(results)
