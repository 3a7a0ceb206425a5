"""Diagnostic entries emitted alongside normalized records."""
from __future__ import annotations

from pydantic import BaseModel

from offshore_logistics.models.base import DiagnosticReasonEnum, SeverityEnum, SourceTypeEnum


class Diagnostic(BaseModel):
    model_config = {"frozen": True}

    source_type: SourceTypeEnum
    row_index: int
    field: str | None = None
    reason: DiagnosticReasonEnum
    severity: SeverityEnum = SeverityEnum.WARNING
    detail: str | None = None
