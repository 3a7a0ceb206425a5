"""Cost allocation normalizer: one raw cost row -> CostAllocationRecord.

Facility and classification are decided in this order:
1. The location text is resolved to a facility (ports resolve to none).
2. If the LC is declared by a facility, that facility wins: an integrated
   parent is narrowed to the child that bills the LC, an unresolved location
   takes the LC owner, and a contradicting location is overridden with an
   lc_location_mismatch diagnostic.
3. The LC is classified against the facility's pools (drilling / production
   / ambiguous / unknown).
4. Unknown LCs at a port in the logistics LC list become LOGISTICS.
5. Remaining unknown LCs at a resolved facility fall back to the row's
   Project Type, tagged DEPARTMENT_FALLBACK with a warning diagnostic.
"""
from __future__ import annotations

import logging
from typing import Any, Mapping

from offshore_logistics.models.base import (
    ClassificationSourceEnum,
    DiagnosticReasonEnum,
    LCClassificationEnum,
    OperationTypeEnum,
    SeverityEnum,
    SourceTypeEnum,
)
from offshore_logistics.models.records import CostAllocationRecord
from offshore_logistics.modules.catalog import ReferenceCatalog
from offshore_logistics.modules.field_extractor import extract
from offshore_logistics.modules.lc_classifier import (
    LC_TO_OPERATION,
    department_fallback,
    normalize_lc,
)
from offshore_logistics.modules.normalize import parse_month_bucket
from offshore_logistics.modules.row_context import RowContext, RowRejected
from offshore_logistics.schemas.diagnostic import Diagnostic

logger = logging.getLogger(__name__)


def _classify(
    ctx: RowContext,
    lc: str,
    facility_id: str | None,
    is_port: bool,
    project_type: str | None,
) -> tuple[OperationTypeEnum, ClassificationSourceEnum]:
    if facility_id is not None:
        result = ctx.classify_lc("lc_number", lc, facility_id)
        if result != LCClassificationEnum.UNKNOWN:
            return LC_TO_OPERATION[result], ClassificationSourceEnum.LC_REFERENCE

    if is_port and lc in ctx.catalog.logistics_lcs:
        return OperationTypeEnum.LOGISTICS, ClassificationSourceEnum.LOGISTICS_LC

    if facility_id is not None:
        fallback = department_fallback(project_type)
        if fallback is not None:
            logger.warning(
                "LC %s unknown for facility %s; falling back to project type '%s' -> %s",
                lc, facility_id, project_type, fallback.value,
            )
            ctx.note("project_type", DiagnosticReasonEnum.LC_DEPARTMENT_FALLBACK, SeverityEnum.WARNING,
                     f"LC {lc} not in reference pools; project type {project_type!r} -> {fallback.value}")
            return fallback, ClassificationSourceEnum.DEPARTMENT_FALLBACK

    return OperationTypeEnum.UNCLASSIFIED, ClassificationSourceEnum.NONE


def normalize_cost_allocation_row(
    row: Mapping[str, Any],
    row_index: int,
    catalog: ReferenceCatalog,
) -> tuple[CostAllocationRecord | None, list[Diagnostic]]:
    ctx = RowContext(row, row_index, SourceTypeEnum.COST_ALLOCATION, catalog)
    try:
        lc = normalize_lc(ctx.required_text("lc_number"))
    except RowRejected as exc:
        ctx.note(exc.field, DiagnosticReasonEnum.ROW_REJECTED, SeverityEnum.ERROR, exc.detail)
        return None, ctx.diagnostics

    location_text, facility_id, is_port = ctx.location("rig_location")
    if location_text is None:
        ctx.note("rig_location", DiagnosticReasonEnum.FIELD_ABSENT, SeverityEnum.INFO)
    if not is_port:
        facility_id = ctx.pin_facility("lc_number", lc, facility_id)

    project_type = ctx.text("project_type")
    classification, source = _classify(ctx, lc, facility_id, is_port, project_type)

    raw_month = extract(row, "month_year")
    month = parse_month_bucket(raw_month) if raw_month is not None else None
    if raw_month is not None and month is None:
        ctx.note("month_year", DiagnosticReasonEnum.DATE_PARSE_FAILURE, SeverityEnum.WARNING,
                 f"unparseable period {raw_month!r}")

    days = ctx.number("allocated_days")
    cost = ctx.number("total_cost")
    if cost is not None and days:
        daily_rate = cost / days
    else:
        daily_rate = ctx.number("average_daily_rate")

    record = CostAllocationRecord(
        row_index=row_index,
        lc_number=lc,
        location_text=location_text,
        facility_id=facility_id,
        is_port=is_port,
        classification=classification,
        classification_source=source,
        month=month,
        allocated_days=days,
        total_cost=cost,
        daily_rate=daily_rate,
        project_type=project_type,
        description=ctx.text("description"),
    )
    return record, ctx.diagnostics


def business_key(record: CostAllocationRecord) -> tuple:
    return (record.lc_number, record.month, (record.location_text or "").casefold())
