"""Rig schedule normalizer: one raw schedule activity -> RigScheduleRecord.

Rows need an Activity ID, a rig name and a known activity type code; rows
missing any of these are rejected. Unparseable start/finish dates are kept as
absent with a diagnostic, but a finish before the start rejects the row.
"""
from __future__ import annotations

from typing import Any, Mapping

from offshore_logistics.models.base import DiagnosticReasonEnum, SeverityEnum, SourceTypeEnum
from offshore_logistics.models.records import RigScheduleRecord
from offshore_logistics.modules.catalog import ReferenceCatalog
from offshore_logistics.modules.row_context import RowContext, RowRejected
from offshore_logistics.schemas.diagnostic import Diagnostic

ACTIVITY_TYPES = frozenset({"RSU", "DRL", "CPL", "RM", "WWP", "WS", "P&A", "MOB", "WWI", "TAR"})

SCENARIO_EARLY = "EARLY"  # P10
SCENARIO_MEAN = "MEAN"  # P50


def parse_scenario(text: str | None) -> str:
    lowered = (text or "").casefold()
    if "early" in lowered or "p10" in lowered:
        return SCENARIO_EARLY
    return SCENARIO_MEAN


def normalize_rig_schedule_row(
    row: Mapping[str, Any],
    row_index: int,
    catalog: ReferenceCatalog,
) -> tuple[RigScheduleRecord | None, list[Diagnostic]]:
    ctx = RowContext(row, row_index, SourceTypeEnum.RIG_SCHEDULE, catalog)
    try:
        activity_id = ctx.required_text("activity_id")
        ctx.required_text("rig_name")
        activity_type = ctx.required_text("rig_activity_type").upper()
        if activity_type not in ACTIVITY_TYPES:
            raise RowRejected(
                "rig_activity_type",
                f"invalid activity type {activity_type!r}; expected one of {sorted(ACTIVITY_TYPES)}",
            )
        start = ctx.date("schedule_start")
        finish = ctx.date("schedule_finish")
        if start is not None and finish is not None and finish <= start:
            raise RowRejected("schedule_finish", "finish must be after start")
    except RowRejected as exc:
        ctx.note(exc.field, DiagnosticReasonEnum.ROW_REJECTED, SeverityEnum.ERROR, exc.detail)
        return None, ctx.diagnostics

    rig_name, facility_id, _ = ctx.location("rig_name")

    duration = ctx.number("actual_duration")
    if duration is None:
        duration = ctx.number("original_duration")
    if duration is None and start is not None and finish is not None:
        duration = (finish - start).total_seconds() / 3600.0

    record = RigScheduleRecord(
        row_index=row_index,
        activity_id=activity_id,
        activity_name=ctx.text("activity_name"),
        status=ctx.text("activity_status"),
        rig_name=rig_name,
        facility_id=facility_id,
        start=start,
        finish=finish,
        duration_hours=duration,
        activity_type=activity_type,
        scenario=parse_scenario(ctx.text("scenario")),
        well_type=ctx.text("well_type"),
        asset=ctx.text("asset"),
        region=ctx.text("region"),
    )
    return record, ctx.diagnostics


def business_key(record: RigScheduleRecord) -> tuple:
    return (record.activity_id, record.scenario)
