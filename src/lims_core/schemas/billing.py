"""Billing value objects returned by the billing engine."""

from pydantic import BaseModel


class BillingBreakdown(BaseModel):
    """Normalized bill: every field already clamped to its legal range."""

    subtotal: float
    discount: float
    total: float
    paid: float
    balance: float


class PaymentUpdate(BaseModel):
    """Outcome of applying an incremental payment."""

    applied: float
    new_paid: float
    new_due: float


class FinancialSummary(BaseModel):
    """Aggregated billing figures across requests."""

    request_count: int = 0
    total_billed: float = 0.0
    total_discount: float = 0.0
    total_net: float = 0.0
    total_collected: float = 0.0
    total_outstanding: float = 0.0
    paid_count: int = 0
    partial_count: int = 0
    unpaid_count: int = 0
