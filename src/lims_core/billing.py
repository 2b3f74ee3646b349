"""Billing engine: clamped totals and incremental payments.

Both calculators are lenient by policy. Out-of-range input is clamped, never
rejected, so the same functions serve the live preview while a form is being
edited and the commit path when it is saved. Rejecting bad input with a
message is the job of ``lims_core.validators``.
"""

from .schemas.billing import BillingBreakdown, PaymentUpdate
from .schemas.common import PaymentStatus


def _clamp(value: float, low: float, high: float) -> float:
    return min(max(low, value), high)


def normalize_billing(subtotal: float, discount: float, paid: float) -> BillingBreakdown:
    """Normalize billing inputs so no figure is negative or over-applied.

    - subtotal is floored at 0
    - discount is clamped to [0, subtotal]
    - paid is clamped to [0, total]
    """
    safe_subtotal = max(0.0, subtotal)
    safe_discount = _clamp(discount, 0.0, safe_subtotal)
    total = safe_subtotal - safe_discount
    safe_paid = _clamp(paid, 0.0, total)
    balance = max(0.0, total - safe_paid)

    return BillingBreakdown(
        subtotal=safe_subtotal,
        discount=safe_discount,
        total=total,
        paid=safe_paid,
        balance=balance,
    )


def apply_payment(current_paid: float, net_total: float, amount: float) -> PaymentUpdate:
    """Apply a payment, capping it at the remaining balance.

    Non-positive amounts apply nothing. Overpayments are capped to exactly
    what is still owed.
    """
    safe_net_total = max(0.0, net_total)
    safe_current_paid = max(0.0, current_paid)
    remaining = max(0.0, safe_net_total - safe_current_paid)
    applied = _clamp(amount, 0.0, remaining)
    new_paid = safe_current_paid + applied
    new_due = max(0.0, safe_net_total - new_paid)

    return PaymentUpdate(applied=applied, new_paid=new_paid, new_due=new_due)


def payment_status(net_total: float, paid: float) -> PaymentStatus:
    """Invoice settlement state for a net total and the amount paid so far."""
    due = max(0.0, net_total - paid)
    if due <= 0:
        return PaymentStatus.PAID
    if paid > 0:
        return PaymentStatus.PARTIAL
    return PaymentStatus.UNPAID
