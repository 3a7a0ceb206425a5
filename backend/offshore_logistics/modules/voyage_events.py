"""Voyage event normalizer: one raw event row -> VoyageEventRecord.

Hours come from the Hours cell, or from To - From when Hours is absent or 0.
Each "Cost Dedicated to" LC is classified against the facility that bills it
(the event location does not change); logistics LCs at a port are LOGISTICS.
"""
from __future__ import annotations

from typing import Any, Mapping

from offshore_logistics.models.base import (
    DiagnosticReasonEnum,
    LCClassificationEnum,
    OperationTypeEnum,
    SeverityEnum,
    SourceTypeEnum,
)
from offshore_logistics.models.records import LCAllocation, VoyageEventRecord
from offshore_logistics.modules.activity_classifier import (
    classify_activity,
    has_weather_marker,
    is_waiting_event,
)
from offshore_logistics.modules.catalog import ReferenceCatalog
from offshore_logistics.modules.lc_allocation import parse_lc_allocation, split_hours
from offshore_logistics.modules.lc_classifier import LC_TO_OPERATION, owning_facility
from offshore_logistics.modules.normalize import month_key
from offshore_logistics.modules.row_context import RowContext
from offshore_logistics.schemas.diagnostic import Diagnostic


def _allocation_operation(ctx: RowContext, lc: str, facility_id: str | None, is_port: bool) -> OperationTypeEnum:
    if is_port and lc in ctx.catalog.logistics_lcs:
        return OperationTypeEnum.LOGISTICS
    target = owning_facility(lc, facility_id, ctx.catalog) or facility_id
    if target is None:
        return OperationTypeEnum.UNCLASSIFIED
    result = ctx.classify_lc("cost_dedicated_to", lc, target)
    if result == LCClassificationEnum.UNKNOWN:
        return OperationTypeEnum.UNCLASSIFIED
    return LC_TO_OPERATION[result]


def _event_hours(ctx: RowContext, started_at, ended_at) -> float:
    hours = ctx.number("hours")
    if not hours and started_at is not None and ended_at is not None:
        hours = (ended_at - started_at).total_seconds() / 3600.0
    if hours is None:
        return 0.0
    if hours < 0:
        ctx.note("hours", DiagnosticReasonEnum.FIELD_ABSENT, SeverityEnum.WARNING,
                 f"negative duration {hours:.2f}h treated as absent")
        return 0.0
    return hours


def normalize_voyage_event_row(
    row: Mapping[str, Any],
    row_index: int,
    catalog: ReferenceCatalog,
) -> tuple[VoyageEventRecord | None, list[Diagnostic]]:
    ctx = RowContext(row, row_index, SourceTypeEnum.VOYAGE_EVENT, catalog)
    event = ctx.text("event")
    parent_event = ctx.text("parent_event")
    if event is None and parent_event is None:
        ctx.note("parent_event", DiagnosticReasonEnum.ROW_REJECTED, SeverityEnum.ERROR,
                 "neither event nor parent event is present")
        return None, ctx.diagnostics

    vessel_name, vessel_id, in_fleet = ctx.vessel("vessel_name")
    port_type = ctx.text("port_type")
    location_text, facility_id, is_port = ctx.location("event_location")
    if port_type and port_type.casefold() == "base":
        is_port = True

    started_at = ctx.date("from_time")
    ended_at = ctx.date("to_time")
    hours = _event_hours(ctx, started_at, ended_at)

    allocations = tuple(
        LCAllocation(
            lc_number=lc,
            percentage=pct,
            hours=lc_hours,
            classification=_allocation_operation(ctx, lc, facility_id, is_port),
        )
        for lc, pct, lc_hours in split_hours(hours, parse_lc_allocation(ctx.text("cost_dedicated_to")))
    )

    is_weather = has_weather_marker(parent_event, event)
    record = VoyageEventRecord(
        row_index=row_index,
        vessel_name=vessel_name,
        vessel_id=vessel_id,
        in_fleet=in_fleet,
        voyage_number=ctx.text("voyage_number"),
        mission=ctx.text("mission"),
        event=event,
        parent_event=parent_event,
        activity_category=classify_activity(parent_event, event),
        is_waiting=is_waiting_event(parent_event, event) and not is_weather,
        is_weather=is_weather,
        location_text=location_text,
        facility_id=facility_id,
        is_port=is_port,
        port_type=port_type,
        started_at=started_at,
        ended_at=ended_at,
        hours=hours,
        month=month_key(started_at),
        allocations=allocations,
        remarks=ctx.text("remarks"),
    )
    return record, ctx.diagnostics


def business_key(record: VoyageEventRecord) -> tuple:
    return (
        record.vessel_id or (record.vessel_name or "").casefold(),
        record.voyage_number,
        record.event,
        record.parent_event,
        record.started_at,
    )
