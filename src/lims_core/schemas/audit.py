"""Audit trail schema."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel


class AuditAction(str, Enum):
    """Kinds of request mutations recorded in the audit trail."""

    CREATE = "CREATE"
    RESULT_ENTRY = "RESULT_ENTRY"
    STATUS_CHANGE = "STATUS_CHANGE"
    REJECT = "REJECT"
    RESET = "RESET"
    FINANCE = "FINANCE"
    IMPORT = "IMPORT"


class AuditRecord(BaseModel):
    """One entry in the audit trail, with before/after snapshots."""

    id: str
    timestamp: datetime
    actor: str
    action: AuditAction
    resource_type: str = "AnalysisRequest"
    resource_id: str
    detail: str
    correlation_id: str
    before: dict[str, Any] | None = None
    after: dict[str, Any] | None = None
