"""Normalized domain entities, one per accepted raw row.

Records are frozen: normalizers build them once and nothing mutates them
afterwards. A ``None`` facility_id or vessel_id is the unresolved sentinel;
the raw text is always kept next to it so unresolved rows stay auditable.
"""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from offshore_logistics.models.base import (
    ActivityCategoryEnum,
    BulkDirectionEnum,
    CargoTypeEnum,
    ClassificationSourceEnum,
    FluidCategoryEnum,
    OperationTypeEnum,
    SourceTypeEnum,
)


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True)

    source_type: SourceTypeEnum
    row_index: int


class CostAllocationRecord(_Record):
    source_type: SourceTypeEnum = SourceTypeEnum.COST_ALLOCATION

    lc_number: str
    location_text: str | None = None
    facility_id: str | None = None
    is_port: bool = False
    classification: OperationTypeEnum = OperationTypeEnum.UNCLASSIFIED
    classification_source: ClassificationSourceEnum = ClassificationSourceEnum.NONE
    month: str | None = None  # YYYY-MM
    allocated_days: float | None = None
    total_cost: float | None = None
    daily_rate: float | None = None
    project_type: str | None = None
    description: str | None = None


class LCAllocation(BaseModel):
    model_config = ConfigDict(frozen=True)

    lc_number: str
    percentage: float
    hours: float = 0.0
    classification: OperationTypeEnum = OperationTypeEnum.UNCLASSIFIED


class VoyageEventRecord(_Record):
    source_type: SourceTypeEnum = SourceTypeEnum.VOYAGE_EVENT

    vessel_name: str | None = None
    vessel_id: str | None = None
    in_fleet: bool = False
    voyage_number: str | None = None
    mission: str | None = None
    event: str | None = None
    parent_event: str | None = None
    activity_category: ActivityCategoryEnum = ActivityCategoryEnum.UNCATEGORIZED
    is_waiting: bool = False
    is_weather: bool = False
    location_text: str | None = None
    facility_id: str | None = None
    is_port: bool = False
    port_type: str | None = None
    started_at: datetime | None = None
    ended_at: datetime | None = None
    hours: float = 0.0
    month: str | None = None
    allocations: tuple[LCAllocation, ...] = ()
    remarks: str | None = None


class ManifestRecord(_Record):
    source_type: SourceTypeEnum = SourceTypeEnum.MANIFEST

    manifest_number: str | None = None
    voyage_id: str | None = None
    vessel_name: str | None = None
    vessel_id: str | None = None
    in_fleet: bool = False
    manifest_date: datetime | None = None
    month: str | None = None
    origin: str | None = None
    location_text: str | None = None
    facility_id: str | None = None
    is_port: bool = False
    cost_code: str | None = None
    classification: OperationTypeEnum = OperationTypeEnum.UNCLASSIFIED
    cargo_type: CargoTypeEnum = CargoTypeEnum.OTHER
    deck_tons: float = 0.0
    rt_tons: float = 0.0
    lifts: float = 0.0
    rt_lifts: float = 0.0
    wet_bulk_bbls: float = 0.0
    deck_sqft: float = 0.0


class BulkActionRecord(_Record):
    source_type: SourceTypeEnum = SourceTypeEnum.BULK_ACTION

    vessel_name: str | None = None
    vessel_id: str | None = None
    in_fleet: bool = False
    action_date: datetime | None = None
    month: str | None = None
    direction: BulkDirectionEnum = BulkDirectionEnum.UNKNOWN
    bulk_type: str | None = None
    description: str | None = None
    fluid_category: FluidCategoryEnum = FluidCategoryEnum.OTHER
    quantity_bbls: float = 0.0
    location_text: str | None = None
    facility_id: str | None = None
    is_port: bool = False
    is_return: bool = False
    tank: str | None = None

    @property
    def is_fuel(self) -> bool:
        return self.fluid_category == FluidCategoryEnum.FUEL


class RigScheduleRecord(_Record):
    source_type: SourceTypeEnum = SourceTypeEnum.RIG_SCHEDULE

    activity_id: str
    activity_name: str | None = None
    status: str | None = None
    rig_name: str | None = None
    facility_id: str | None = None
    start: datetime | None = None
    finish: datetime | None = None
    duration_hours: float | None = None
    activity_type: str | None = None
    scenario: str | None = None
    well_type: str | None = None
    asset: str | None = None
    region: str | None = None


NormalizedRecord = (
    CostAllocationRecord
    | VoyageEventRecord
    | ManifestRecord
    | BulkActionRecord
    | RigScheduleRecord
)
