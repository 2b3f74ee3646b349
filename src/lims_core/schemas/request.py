"""Analysis request and analysis line schemas."""

from datetime import date, datetime

from pydantic import BaseModel, computed_field

from .common import CompletionState, LifecycleStatus, Priority


class AnalysisLine(BaseModel):
    """Single ordered test within a request."""

    code: str
    title: str | None = None
    price: float = 0.0
    unit: str | None = None
    reference_range: str | None = None
    completion_state: CompletionState = CompletionState.PENDING
    result_value: str | None = None
    notes: str | None = None

    @property
    def is_entered(self) -> bool:
        """True when a non-blank result has been recorded."""
        return bool(self.result_value and self.result_value.strip())


class AnalysisRequest(BaseModel):
    """A lab test order: lifecycle status, analysis lines and billing state.

    ``due_amount`` is derived from the other billing fields on every read so
    it can never drift from ``(billed - discount) - paid``.
    """

    id: str
    patient_id: str
    client_id: str = "WALK-IN"
    sample_type: str | None = None
    priority: Priority = Priority.NORMAL
    referrer: str | None = None
    date_received: date | None = None
    status: LifecycleStatus = LifecycleStatus.RECEIVED
    analyses: list[AnalysisLine] = []
    billed_amount: float = 0.0
    discount_amount: float = 0.0
    paid_amount: float = 0.0
    created_at: datetime | None = None
    updated_at: datetime | None = None
    created_by: str | None = None

    @computed_field
    @property
    def net_total(self) -> float:
        return self.billed_amount - self.discount_amount

    @computed_field
    @property
    def due_amount(self) -> float:
        return max(0.0, self.net_total - self.paid_amount)

    def find_analysis(self, code: str) -> AnalysisLine | None:
        for line in self.analyses:
            if line.code == code:
                return line
        return None


class ResultImportRow(BaseModel):
    """One result row from an instrument export."""

    request_id: str
    code: str
    result: str
