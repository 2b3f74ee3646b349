"""Lab request lifecycle and billing core."""

from .billing import apply_payment, normalize_billing, payment_status
from .lifecycle import resolve_status
from .request_service import RequestService

__all__ = [
    "resolve_status",
    "normalize_billing",
    "apply_payment",
    "payment_status",
    "RequestService",
]
