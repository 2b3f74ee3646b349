"""Storage interfaces used by the request service, with in-memory versions."""

from typing import Protocol

from .schemas.audit import AuditRecord
from .schemas.request import AnalysisRequest


class RequestRepository(Protocol):
    """Pluggable store for analysis requests."""

    def get(self, request_id: str) -> AnalysisRequest | None:
        """Return a copy of the stored request, or None."""
        ...

    def save(self, request: AnalysisRequest) -> None:
        """Insert or replace a request."""
        ...

    def list(self) -> list[AnalysisRequest]:
        """Return copies of all stored requests, newest first."""
        ...


class AuditLog(Protocol):
    """Sink for audit records."""

    def record(self, entry: AuditRecord) -> None:
        ...


class InMemoryRequestRepository:
    """Dict-backed request store. Hands out deep copies only."""

    def __init__(self) -> None:
        self._requests: dict[str, AnalysisRequest] = {}

    def get(self, request_id: str) -> AnalysisRequest | None:
        request = self._requests.get(request_id)
        return request.model_copy(deep=True) if request else None

    def save(self, request: AnalysisRequest) -> None:
        self._requests[request.id] = request.model_copy(deep=True)

    def list(self) -> list[AnalysisRequest]:
        return [r.model_copy(deep=True) for r in reversed(self._requests.values())]


class InMemoryAuditLog:
    """Keeps audit records in memory, newest first."""

    def __init__(self) -> None:
        self.entries: list[AuditRecord] = []

    def record(self, entry: AuditRecord) -> None:
        self.entries.insert(0, entry)

    def for_resource(self, resource_id: str) -> list[AuditRecord]:
        return [e for e in self.entries if e.resource_id == resource_id]
