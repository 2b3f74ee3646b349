"""Billing input checks run before the billing engine clamps anything."""

from ..config import BillingConfig
from ..schemas.common import ValidationResult, ValidationSeverity, ValidationStatus


def run_billing_checks(
    subtotal: float, discount: float, paid: float
) -> list[ValidationResult]:
    """Check raw bill figures entered at accessioning.

    Checks:
    - negative_subtotal: Subtotal below zero
    - negative_discount: Discount below zero
    - negative_payment: Upfront payment below zero
    - discount_exceeds_subtotal: Discount larger than the subtotal
    - payment_exceeds_total: Upfront payment larger than subtotal minus discount
    """
    results: list[ValidationResult] = []

    if subtotal < 0:
        results.append(
            ValidationResult(
                check_name="negative_subtotal",
                status=ValidationStatus.ERROR,
                severity=ValidationSeverity.HIGH,
                detail=f"Subtotal cannot be negative (got {subtotal:.2f}).",
                recommendation="Check the prices of the selected tests",
            )
        )

    if discount < 0:
        results.append(
            ValidationResult(
                check_name="negative_discount",
                status=ValidationStatus.ERROR,
                severity=ValidationSeverity.HIGH,
                detail="Discount cannot be negative.",
                recommendation="Enter a discount of zero or more",
            )
        )

    if paid < 0:
        results.append(
            ValidationResult(
                check_name="negative_payment",
                status=ValidationStatus.ERROR,
                severity=ValidationSeverity.HIGH,
                detail="Payment amount cannot be negative.",
                recommendation="Enter a payment of zero or more",
            )
        )

    if discount > subtotal:
        results.append(
            ValidationResult(
                check_name="discount_exceeds_subtotal",
                status=ValidationStatus.ERROR,
                severity=ValidationSeverity.HIGH,
                detail=f"Discount cannot exceed subtotal amount ({discount:.2f} > {subtotal:.2f}).",
                recommendation="Reduce the discount to at most the subtotal",
            )
        )

    if paid > subtotal - discount:
        results.append(
            ValidationResult(
                check_name="payment_exceeds_total",
                status=ValidationStatus.ERROR,
                severity=ValidationSeverity.HIGH,
                detail=f"Payment amount cannot exceed the total payable ({paid:.2f} > {subtotal - discount:.2f}).",
                recommendation="Record only the amount actually owed",
            )
        )

    return results


def run_payment_checks(
    amount: float,
    due_amount: float,
    tolerance: float | None = None,
) -> list[ValidationResult]:
    """Check an incremental payment against the outstanding balance.

    Checks:
    - non_positive_payment: Amount is zero or negative
    - payment_exceeds_due: Amount is above the balance by more than the tolerance
    """
    results: list[ValidationResult] = []
    if tolerance is None:
        tolerance = BillingConfig().payment_tolerance

    if amount <= 0:
        results.append(
            ValidationResult(
                check_name="non_positive_payment",
                status=ValidationStatus.ERROR,
                severity=ValidationSeverity.HIGH,
                detail="Invalid payment amount: must be positive.",
                recommendation="Enter an amount greater than zero",
            )
        )
    elif amount > due_amount + tolerance:
        results.append(
            ValidationResult(
                check_name="payment_exceeds_due",
                status=ValidationStatus.ERROR,
                severity=ValidationSeverity.HIGH,
                detail=f"Payment amount cannot exceed the outstanding balance ({amount:.2f} > {due_amount:.2f}).",
                recommendation=f"Collect at most {due_amount:.2f}",
            )
        )

    return results
