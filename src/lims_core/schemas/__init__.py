"""Laboratory request schemas for lifecycle tracking and billing."""

from .audit import AuditAction, AuditRecord
from .billing import BillingBreakdown, FinancialSummary, PaymentUpdate
from .common import (
    PRE_TESTING_STATUSES,
    TERMINAL_STATUSES,
    CompletionState,
    LifecycleStatus,
    PaymentStatus,
    Priority,
    ValidationResult,
    ValidationSeverity,
    ValidationStatus,
)
from .request import AnalysisLine, AnalysisRequest, ResultImportRow

__all__ = [
    # Common
    "LifecycleStatus",
    "CompletionState",
    "Priority",
    "PaymentStatus",
    "TERMINAL_STATUSES",
    "PRE_TESTING_STATUSES",
    "ValidationSeverity",
    "ValidationStatus",
    "ValidationResult",
    # Request
    "AnalysisLine",
    "AnalysisRequest",
    "ResultImportRow",
    # Billing
    "BillingBreakdown",
    "PaymentUpdate",
    "FinancialSummary",
    # Audit
    "AuditAction",
    "AuditRecord",
]
