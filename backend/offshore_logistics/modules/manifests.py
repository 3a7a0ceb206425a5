"""Vessel manifest normalizer: one raw manifest row -> ManifestRecord.

Cargo type rules:
  - any wet bulk (bbl or gal)        -> LIQUID_BULK
  - else deck tons / lbs / sqft > 0  -> DECK_CARGO
  - else lifts > 0                   -> LIFT_ONLY
  - else                             -> OTHER

The cost code pins the facility the same way cost allocations do: the LC
owner overrides the location text, and conflicts are reported.
"""
from __future__ import annotations

from typing import Any, Mapping

from offshore_logistics.models.base import (
    CargoTypeEnum,
    LCClassificationEnum,
    OperationTypeEnum,
    SourceTypeEnum,
)
from offshore_logistics.models.records import ManifestRecord
from offshore_logistics.modules.catalog import ReferenceCatalog
from offshore_logistics.modules.lc_classifier import LC_TO_OPERATION, normalize_lc
from offshore_logistics.modules.normalize import month_key
from offshore_logistics.modules.row_context import RowContext
from offshore_logistics.schemas.diagnostic import Diagnostic

LBS_PER_METRIC_TON = 2204.62
GALLONS_PER_BARREL = 42.0


def cargo_type(wet_bulk_bbls: float, deck_tons: float, deck_sqft: float, lifts: float) -> CargoTypeEnum:
    if wet_bulk_bbls > 0:
        return CargoTypeEnum.LIQUID_BULK
    if deck_tons > 0 or deck_sqft > 0:
        return CargoTypeEnum.DECK_CARGO
    if lifts > 0:
        return CargoTypeEnum.LIFT_ONLY
    return CargoTypeEnum.OTHER


def normalize_manifest_row(
    row: Mapping[str, Any],
    row_index: int,
    catalog: ReferenceCatalog,
) -> tuple[ManifestRecord | None, list[Diagnostic]]:
    ctx = RowContext(row, row_index, SourceTypeEnum.MANIFEST, catalog)

    vessel_name, vessel_id, in_fleet = ctx.vessel("transporter")
    manifest_date = ctx.date("manifest_date")
    location_text, facility_id, is_port = ctx.location("offshore_location")

    cost_code = ctx.text("cost_code")
    classification = OperationTypeEnum.UNCLASSIFIED
    if cost_code is not None:
        cost_code = normalize_lc(cost_code)
        if not is_port:
            facility_id = ctx.pin_facility("cost_code", cost_code, facility_id)
        if facility_id is not None:
            result = ctx.classify_lc("cost_code", cost_code, facility_id)
            if result != LCClassificationEnum.UNKNOWN:
                classification = LC_TO_OPERATION[result]

    deck_tons = ctx.number("deck_tons", 0.0)
    if not deck_tons:
        deck_tons = ctx.number("deck_lbs", 0.0) / LBS_PER_METRIC_TON
    wet_bulk_bbls = ctx.number("wet_bulk_bbls", 0.0)
    if not wet_bulk_bbls:
        wet_bulk_bbls = ctx.number("wet_bulk_gal", 0.0) / GALLONS_PER_BARREL
    deck_sqft = ctx.number("deck_sqft", 0.0)
    lifts = ctx.number("lifts", 0.0)

    record = ManifestRecord(
        row_index=row_index,
        manifest_number=ctx.text("manifest_number"),
        voyage_id=ctx.text("voyage_id"),
        vessel_name=vessel_name,
        vessel_id=vessel_id,
        in_fleet=in_fleet,
        manifest_date=manifest_date,
        month=month_key(manifest_date),
        origin=ctx.text("origin"),
        location_text=location_text,
        facility_id=facility_id,
        is_port=is_port,
        cost_code=cost_code,
        classification=classification,
        cargo_type=cargo_type(wet_bulk_bbls, deck_tons, deck_sqft, lifts),
        deck_tons=deck_tons,
        rt_tons=ctx.number("rt_tons", 0.0),
        lifts=lifts,
        rt_lifts=ctx.number("rt_lifts", 0.0),
        wet_bulk_bbls=wet_bulk_bbls,
        deck_sqft=deck_sqft,
    )
    return record, ctx.diagnostics


def business_key(record: ManifestRecord) -> tuple:
    if record.manifest_number:
        return ("manifest", record.manifest_number)
    return ("row", record.row_index)
