"""Shared types for laboratory request schemas."""

from enum import Enum

from pydantic import BaseModel


class LifecycleStatus(str, Enum):
    """Processing stage of an analysis request."""

    RECEIVED = "Received"
    COLLECTED = "Collected"
    IN_LAB = "In Lab"
    TESTING = "Testing"
    VERIFIED = "Verified"
    PUBLISHED = "Published"
    REJECTED = "Rejected"


TERMINAL_STATUSES = frozenset({LifecycleStatus.PUBLISHED, LifecycleStatus.REJECTED})

PRE_TESTING_STATUSES = frozenset(
    {LifecycleStatus.RECEIVED, LifecycleStatus.COLLECTED, LifecycleStatus.IN_LAB}
)


class CompletionState(str, Enum):
    """Completion state of a single analysis line."""

    PENDING = "Pending"
    COMPLETE = "Complete"
    FLAGGED = "Flagged"


class Priority(str, Enum):
    """Turnaround priority chosen at accessioning."""

    NORMAL = "Normal"
    URGENT = "Urgent"
    EMERGENCY = "Emergency"


class PaymentStatus(str, Enum):
    """Settlement state of a request's bill."""

    PAID = "Paid"
    PARTIAL = "Partial"
    UNPAID = "Unpaid"


class ValidationSeverity(str, Enum):
    """Severity level for validation findings."""

    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"
    INFO = "INFO"


class ValidationStatus(str, Enum):
    """Status outcome of a validation check."""

    PASS = "PASS"
    WARNING = "WARNING"
    ERROR = "ERROR"
    INFO = "INFO"


class ValidationResult(BaseModel):
    """Result of a single validation check."""

    check_name: str
    status: ValidationStatus
    severity: ValidationSeverity
    detail: str
    recommendation: str | None = None

    @property
    def is_blocking(self) -> bool:
        return self.status == ValidationStatus.ERROR
