"""Bulk fluid action normalizer: one raw bulk transfer row -> BulkActionRecord.

Quantities are normalized to barrels (gallons / 42). The facility is the
destination for the transfer: "Destination Port" when present, otherwise
"At Port". Fluid text is tagged FUEL ahead of any other category so diesel
never reaches the production chemical volume metric.
"""
from __future__ import annotations

from typing import Any, Mapping

from offshore_logistics.models.base import BulkDirectionEnum, SourceTypeEnum
from offshore_logistics.models.records import BulkActionRecord
from offshore_logistics.modules.catalog import ReferenceCatalog
from offshore_logistics.modules.fluid_classifier import classify_fluid
from offshore_logistics.modules.manifests import GALLONS_PER_BARREL
from offshore_logistics.modules.normalize import month_key
from offshore_logistics.modules.row_context import RowContext
from offshore_logistics.schemas.diagnostic import Diagnostic
from offshore_logistics.utils.text import tokenize

_OFFLOAD_TOKENS = frozenset({"offload", "offloaded", "offloading", "discharge", "discharged"})
_LOAD_TOKENS = frozenset({"load", "loaded", "loading", "onload", "onloaded"})


def parse_direction(action: str | None) -> BulkDirectionEnum:
    tokens = set(tokenize(action))
    if tokens & _OFFLOAD_TOKENS:
        return BulkDirectionEnum.OFFLOAD
    if tokens & _LOAD_TOKENS:
        return BulkDirectionEnum.LOAD
    return BulkDirectionEnum.UNKNOWN


def normalize_bulk_action_row(
    row: Mapping[str, Any],
    row_index: int,
    catalog: ReferenceCatalog,
) -> tuple[BulkActionRecord | None, list[Diagnostic]]:
    ctx = RowContext(row, row_index, SourceTypeEnum.BULK_ACTION, catalog)

    vessel_name, vessel_id, in_fleet = ctx.vessel("bulk_vessel")
    action_date = ctx.date("bulk_date")
    direction = parse_direction(ctx.text("action"))

    location_field = "destination_port" if ctx.text("destination_port") else "at_port"
    location_text, facility_id, is_port = ctx.location(location_field)

    quantity = ctx.number("qty", 0.0)
    unit = (ctx.text("unit") or "bbl").casefold()
    if unit.startswith("gal"):
        quantity = quantity / GALLONS_PER_BARREL

    bulk_type = ctx.text("bulk_type")
    description = ctx.text("bulk_description")
    remarks = ctx.text("remarks") or ""

    record = BulkActionRecord(
        row_index=row_index,
        vessel_name=vessel_name,
        vessel_id=vessel_id,
        in_fleet=in_fleet,
        action_date=action_date,
        month=month_key(action_date),
        direction=direction,
        bulk_type=bulk_type,
        description=description,
        fluid_category=classify_fluid(bulk_type, description),
        quantity_bbls=quantity,
        location_text=location_text,
        facility_id=facility_id,
        is_port=is_port,
        is_return="return" in remarks.casefold(),
        tank=ctx.text("tank"),
    )
    return record, ctx.diagnostics


def transfer_key(record: BulkActionRecord) -> tuple:
    """Identity of one physical transfer; the load and offload legs share it.

    The tank is part of the identity, so same-sized offloads from different
    tanks on the same day stay separate transfers.
    """
    return (
        record.vessel_id or (record.vessel_name or "").casefold(),
        record.action_date.date() if record.action_date else None,
        (record.bulk_type or "").casefold(),
        round(record.quantity_bbls, 2),
        record.facility_id or (record.location_text or "").casefold(),
        record.tank,
    )


def business_key(record: BulkActionRecord) -> tuple:
    return (
        record.vessel_id or (record.vessel_name or "").casefold(),
        record.action_date,
        record.direction,
        (record.bulk_type or "").casefold(),
        round(record.quantity_bbls, 4),
        record.tank,
    )
