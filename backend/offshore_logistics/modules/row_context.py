"""Per-row extraction helpers that record diagnostics as they go.

Each record normalizer creates one RowContext per raw row. The context wraps
field extraction, value parsing, name resolution and LC pinning so that every
absent field, parse failure, unresolved name or LC conflict lands in
``ctx.diagnostics`` with the row index and field it came from.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping

from offshore_logistics.models.base import (
    DiagnosticReasonEnum,
    LCClassificationEnum,
    SeverityEnum,
    SourceTypeEnum,
)
from offshore_logistics.modules.catalog import ReferenceCatalog
from offshore_logistics.modules.field_extractor import extract, extract_text
from offshore_logistics.modules.lc_classifier import classify_lc, owning_facility
from offshore_logistics.modules.location_resolver import resolve_facility
from offshore_logistics.modules.normalize import parse_date, parse_number
from offshore_logistics.modules.vessel_resolver import is_in_fleet, resolve_vessel
from offshore_logistics.schemas.diagnostic import Diagnostic


class RowRejected(Exception):
    """Raised inside a normalizer when a row cannot produce a record at all."""

    def __init__(self, field: str | None, detail: str):
        super().__init__(detail)
        self.field = field
        self.detail = detail


class RowContext:
    def __init__(self, row: Mapping[str, Any], row_index: int, source_type: SourceTypeEnum,
                 catalog: ReferenceCatalog):
        self.row = row
        self.row_index = row_index
        self.source_type = source_type
        self.catalog = catalog
        self.diagnostics: list[Diagnostic] = []

    def note(
        self,
        field: str | None,
        reason: DiagnosticReasonEnum,
        severity: SeverityEnum = SeverityEnum.WARNING,
        detail: str | None = None,
    ) -> None:
        self.diagnostics.append(Diagnostic(
            source_type=self.source_type,
            row_index=self.row_index,
            field=field,
            reason=reason,
            severity=severity,
            detail=detail,
        ))

    def text(self, field: str) -> str | None:
        return extract_text(self.row, field)

    def required_text(self, field: str) -> str:
        value = self.text(field)
        if value is None:
            raise RowRejected(field, f"required field '{field}' is absent")
        return value

    def number(self, field: str, default: float | None = None) -> float | None:
        raw = extract(self.row, field)
        if raw is None:
            return default
        value = parse_number(raw)
        if value is None:
            self.note(field, DiagnosticReasonEnum.FIELD_ABSENT, SeverityEnum.INFO,
                      f"non-numeric value {raw!r} treated as absent")
            return default
        return value

    def date(self, field: str) -> datetime | None:
        """Parsed date, or None. A present but unparseable value is a DateParseFailure."""
        raw = extract(self.row, field)
        if raw is None:
            return None
        value = parse_date(raw)
        if value is None:
            self.note(field, DiagnosticReasonEnum.DATE_PARSE_FAILURE, SeverityEnum.WARNING,
                      f"unparseable date {raw!r}")
        return value

    def location(self, field: str) -> tuple[str | None, str | None, bool]:
        """(raw text, facility id or None, is_port) for a location field."""
        text = self.text(field)
        if text is None:
            return None, None, False
        if self.catalog.is_port_location(text):
            return text, None, True
        facility_id = resolve_facility(text, self.catalog)
        if facility_id is None:
            self.note(field, DiagnosticReasonEnum.UNRESOLVED_LOCATION, SeverityEnum.WARNING,
                      f"no facility matches {text!r}")
        return text, facility_id, False

    def vessel(self, field: str) -> tuple[str | None, str | None, bool]:
        """(raw name, vessel id or None, in_fleet) for a vessel field."""
        name = self.text(field)
        if name is None:
            return None, None, False
        vessel_id = resolve_vessel(name, self.catalog)
        if vessel_id is None:
            self.note(field, DiagnosticReasonEnum.UNRESOLVED_VESSEL, SeverityEnum.INFO,
                      f"{name!r} retained as third-party/unknown vessel")
        return name, vessel_id, is_in_fleet(vessel_id, self.catalog)

    def pin_facility(self, field: str, lc: str, facility_id: str | None) -> str | None:
        """Facility that bills *lc*, overriding the location-resolved *facility_id*.

        An integrated parent narrows to its billing child without a diagnostic.
        An unresolved location takes the owner (info); an unrelated location is
        overridden with an lc_location_mismatch warning.
        """
        owner = owning_facility(lc, facility_id, self.catalog)
        if owner is None or owner == facility_id:
            return facility_id
        if facility_id is None:
            self.note(field, DiagnosticReasonEnum.UNRESOLVED_LOCATION, SeverityEnum.INFO,
                      f"facility taken from LC {lc} owner '{owner}'")
        elif owner not in self.catalog.children(facility_id):
            self.note(field, DiagnosticReasonEnum.LC_LOCATION_MISMATCH, SeverityEnum.WARNING,
                      f"location resolves to '{facility_id}' but LC {lc} belongs to '{owner}'")
        return owner

    def classify_lc(self, field: str, lc: str, facility_id: str) -> LCClassificationEnum:
        """classify_lc, with an ambiguous result reported at error severity."""
        result = classify_lc(lc, facility_id, self.catalog)
        if result == LCClassificationEnum.AMBIGUOUS:
            self.note(field, DiagnosticReasonEnum.AMBIGUOUS_LC_CLASSIFICATION, SeverityEnum.ERROR,
                      f"LC {lc} is in both drilling and production pools of '{facility_id}'")
        return result
