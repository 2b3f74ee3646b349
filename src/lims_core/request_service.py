"""Request service: applies result entry, status changes and payments.

Each operation reads a request snapshot from the repository, runs the
validators and the pure lifecycle/billing functions against it, saves the
new snapshot and appends an audit record.

The read-compute-write sequence is not guarded against concurrent writers.
A multi-user deployment needs a version check around ``save``.
"""

import logging
import uuid
from collections.abc import Callable, Iterable, Sequence
from datetime import datetime, timezone
from typing import Any

from .billing import apply_payment, normalize_billing, payment_status
from .config import LimsConfig
from .exceptions import (
    AnalysisNotFoundError,
    InvalidStatusTransitionError,
    RequestNotFoundError,
    ValidationFailedError,
)
from .lifecycle import completion_for, resolve_status
from .repository import AuditLog, RequestRepository
from .schemas import (
    AnalysisLine,
    AnalysisRequest,
    AuditAction,
    AuditRecord,
    CompletionState,
    FinancialSummary,
    LifecycleStatus,
    PaymentStatus,
    PaymentUpdate,
    Priority,
    ResultImportRow,
)
from .validators import has_blocking, run_all_validations, run_payment_checks, run_status_checks

logger = logging.getLogger(__name__)


def _new_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:8].upper()}"


class RequestService:
    """Orchestrates mutations of analysis requests."""

    def __init__(
        self,
        repository: RequestRepository,
        audit_log: AuditLog,
        config: LimsConfig | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.repository = repository
        self.audit_log = audit_log
        self.config = config or LimsConfig()
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    # --- Queries ---

    def get_request(self, request_id: str) -> AnalysisRequest:
        request = self.repository.get(request_id)
        if request is None:
            raise RequestNotFoundError(request_id)
        return request

    def list_requests(
        self, status: LifecycleStatus | None = None
    ) -> list[AnalysisRequest]:
        requests = self.repository.list()
        if status is not None:
            requests = [r for r in requests if r.status == status]
        return requests

    def financial_summary(self) -> FinancialSummary:
        """Aggregate billing figures across every stored request."""
        summary = FinancialSummary()

        for request in self.repository.list():
            summary.request_count += 1
            summary.total_billed += request.billed_amount
            summary.total_discount += request.discount_amount
            summary.total_net += request.net_total
            summary.total_collected += request.paid_amount
            summary.total_outstanding += request.due_amount

            state = payment_status(request.net_total, request.paid_amount)
            if state == PaymentStatus.PAID:
                summary.paid_count += 1
            elif state == PaymentStatus.PARTIAL:
                summary.partial_count += 1
            else:
                summary.unpaid_count += 1

        return summary

    # --- Accessioning ---

    def create_request(
        self,
        patient_id: str,
        analyses: Sequence[AnalysisLine],
        discount: float = 0.0,
        paid: float = 0.0,
        client_id: str | None = None,
        sample_type: str | None = None,
        priority: Priority = Priority.NORMAL,
        referrer: str | None = None,
        actor: str | None = None,
    ) -> AnalysisRequest:
        """Accession a new request in Received status.

        The billed amount is the sum of the line prices. Raises
        ValidationFailedError when the lines or bill figures are rejected.
        """
        lines = [
            line.model_copy(
                update={"completion_state": CompletionState.PENDING, "result_value": None}
            )
            for line in analyses
        ]

        results = run_all_validations(lines, discount, paid)
        if has_blocking(results):
            logger.warning(
                "Rejected new request for patient %s: %s",
                patient_id,
                ", ".join(r.check_name for r in results),
            )
            raise ValidationFailedError(results)

        bill = normalize_billing(sum(line.price for line in lines), discount, paid)
        now = self._clock()
        request = AnalysisRequest(
            id=_new_id("AR"),
            patient_id=patient_id,
            client_id=client_id or "WALK-IN",
            sample_type=sample_type,
            priority=priority,
            referrer=referrer,
            date_received=now.date(),
            status=LifecycleStatus.RECEIVED,
            analyses=lines,
            billed_amount=bill.subtotal,
            discount_amount=bill.discount,
            paid_amount=bill.paid,
            created_at=now,
            updated_at=now,
            created_by=actor or self.config.audit.default_actor,
        )

        self._commit(
            None, request, AuditAction.CREATE, f"Accessioning: {patient_id}", actor
        )
        logger.info(
            "Created request %s with %d analyses, net total %.2f",
            request.id,
            len(lines),
            request.net_total,
        )
        return request

    # --- Result entry ---

    def enter_result(
        self,
        request_id: str,
        code: str,
        value: str | None,
        actor: str | None = None,
    ) -> AnalysisRequest:
        """Record a result value and recompute the request status.

        Editing any result on a Verified request first drops it back to
        Testing, so the request is only Verified again if every line is
        still complete.
        """
        request = self.get_request(request_id)
        line = request.find_analysis(code)
        if line is None:
            raise AnalysisNotFoundError(request_id, code)

        before = request.model_copy(deep=True)
        line.result_value = value
        line.completion_state = completion_for(value)

        current = request.status
        if (
            current == LifecycleStatus.VERIFIED
            and self.config.lifecycle.reopen_verified_on_edit
        ):
            current = LifecycleStatus.TESTING
        request.status = resolve_status(current, request.analyses)

        self._commit(before, request, AuditAction.RESULT_ENTRY, f"Entered {code}", actor)
        if request.status != before.status:
            logger.info(
                "Request %s moved %s -> %s after result entry",
                request_id,
                before.status.value,
                request.status.value,
            )
        return request

    def import_results(
        self, rows: Iterable[ResultImportRow], actor: str | None = None
    ) -> tuple[int, int]:
        """Enter a batch of instrument results.

        Rows naming an unknown request or analysis code are counted as failed
        and skipped; the rest go through ``enter_result``. Returns
        ``(success, failed)``. One IMPORT audit record summarises the batch
        when at least one row was applied.
        """
        success = 0
        failed = 0
        for row in rows:
            try:
                self.enter_result(row.request_id, row.code, row.result, actor=actor)
            except (RequestNotFoundError, AnalysisNotFoundError) as exc:
                logger.warning("Skipped import row %s/%s: %s", row.request_id, row.code, exc)
                failed += 1
            else:
                success += 1

        if success > 0:
            self._audit(
                AuditAction.IMPORT,
                "BATCH",
                f"Imported {success} results",
                actor,
                resource_type="Instrument",
                after={"success": success, "failed": failed},
            )
        logger.info("Instrument import: %d applied, %d failed", success, failed)
        return success, failed

    # --- Explicit status changes ---

    def mark_collected(self, request_id: str, actor: str | None = None) -> AnalysisRequest:
        return self._transition(request_id, LifecycleStatus.COLLECTED, actor=actor)

    def send_to_lab(self, request_id: str, actor: str | None = None) -> AnalysisRequest:
        return self._transition(request_id, LifecycleStatus.IN_LAB, actor=actor)

    def verify(self, request_id: str, actor: str | None = None) -> AnalysisRequest:
        return self._transition(request_id, LifecycleStatus.VERIFIED, actor=actor)

    def publish(self, request_id: str, actor: str | None = None) -> AnalysisRequest:
        return self._transition(request_id, LifecycleStatus.PUBLISHED, actor=actor)

    def reject(
        self, request_id: str, reason: str, actor: str | None = None
    ) -> AnalysisRequest:
        return self._transition(
            request_id,
            LifecycleStatus.REJECTED,
            action=AuditAction.REJECT,
            detail=f"Sample rejected: {reason}",
            reason=reason,
            actor=actor,
        )

    def restore(self, request_id: str, actor: str | None = None) -> AnalysisRequest:
        """Send a rejected request back to the Received queue."""
        return self._transition(
            request_id,
            LifecycleStatus.RECEIVED,
            action=AuditAction.RESET,
            detail="Status reset to Received",
            actor=actor,
        )

    # --- Payments ---

    def record_payment(
        self, request_id: str, amount: float, actor: str | None = None
    ) -> PaymentUpdate:
        """Apply an incremental payment. The request status is not touched.

        Raises ValidationFailedError for non-positive amounts or amounts above
        the balance (beyond the configured tolerance).
        """
        request = self.get_request(request_id)

        results = run_payment_checks(
            amount, request.due_amount, self.config.billing.payment_tolerance
        )
        if has_blocking(results):
            logger.warning(
                "Payment of %.2f on %s rejected: %s",
                amount,
                request_id,
                results[0].detail,
            )
            raise ValidationFailedError(results)

        before = request.model_copy(deep=True)
        update = apply_payment(request.paid_amount, request.net_total, amount)
        if update.applied <= 0:
            logger.info(
                "Payment of %.2f on %s applied nothing, already settled",
                amount,
                request_id,
            )
            return update

        request.paid_amount = update.new_paid

        self._commit(
            before,
            request,
            AuditAction.FINANCE,
            f"Payment: {update.applied:.2f} {self.config.billing.currency}",
            actor,
        )
        logger.info(
            "Recorded payment of %.2f on %s, %.2f still due",
            update.applied,
            request_id,
            update.new_due,
        )
        return update

    # --- Internals ---

    def _transition(
        self,
        request_id: str,
        target: LifecycleStatus,
        action: AuditAction = AuditAction.STATUS_CHANGE,
        detail: str | None = None,
        reason: str | None = None,
        actor: str | None = None,
    ) -> AnalysisRequest:
        request = self.get_request(request_id)

        results = run_status_checks(request.status, target, request.analyses, reason)
        if has_blocking(results):
            logger.warning(
                "Refused %s -> %s on %s: %s",
                request.status.value,
                target.value,
                request_id,
                ", ".join(r.check_name for r in results),
            )
            raise InvalidStatusTransitionError(request.status, target, results)

        before = request.model_copy(deep=True)
        request.status = target
        self._commit(before, request, action, detail or f"Moved to {target.value}", actor)
        logger.info(
            "Request %s moved %s -> %s", request_id, before.status.value, target.value
        )
        return request

    def _commit(
        self,
        before: AnalysisRequest | None,
        after: AnalysisRequest,
        action: AuditAction,
        detail: str,
        actor: str | None,
    ) -> None:
        now = self._clock()
        if before is not None:
            after.updated_at = now
        self.repository.save(after)
        self._audit(
            action,
            after.id,
            detail,
            actor,
            before=before.model_dump(mode="json") if before else None,
            after=after.model_dump(mode="json"),
        )

    def _audit(
        self,
        action: AuditAction,
        resource_id: str,
        detail: str,
        actor: str | None,
        resource_type: str = "AnalysisRequest",
        before: dict[str, Any] | None = None,
        after: dict[str, Any] | None = None,
    ) -> None:
        self.audit_log.record(
            AuditRecord(
                id=_new_id("LOG"),
                timestamp=self._clock(),
                actor=actor or self.config.audit.default_actor,
                action=action,
                resource_type=resource_type,
                resource_id=resource_id,
                detail=detail,
                correlation_id=_new_id("CID"),
                before=before,
                after=after,
            )
        )
