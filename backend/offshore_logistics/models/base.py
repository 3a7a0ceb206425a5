"""Shared enums for reference data, normalized records and diagnostics."""
from __future__ import annotations

import enum


class FacilityTypeEnum(str, enum.Enum):
    DRILLING_RIG = "drilling_rig"
    PRODUCTION_PLATFORM = "production_platform"
    INTEGRATED = "integrated"


class VesselClassEnum(str, enum.Enum):
    PSV = "psv"
    OSV = "osv"
    FSV = "fsv"  # fast supply vessel
    OTHER = "other"


class LCClassificationEnum(str, enum.Enum):
    """Result of looking an LC number up in one facility's cost pools."""
    DRILLING = "drilling"
    PRODUCTION = "production"
    AMBIGUOUS = "ambiguous"
    UNKNOWN = "unknown"


class OperationTypeEnum(str, enum.Enum):
    """Operation type carried by a normalized record."""
    DRILLING = "drilling"
    PRODUCTION = "production"
    LOGISTICS = "logistics"
    AMBIGUOUS = "ambiguous"
    UNCLASSIFIED = "unclassified"


class ClassificationSourceEnum(str, enum.Enum):
    LC_REFERENCE = "lc_reference"
    LOGISTICS_LC = "logistics_lc"
    DEPARTMENT_FALLBACK = "department_fallback"
    NONE = "none"


class SourceTypeEnum(str, enum.Enum):
    COST_ALLOCATION = "cost_allocation"
    VOYAGE_EVENT = "voyage_event"
    MANIFEST = "manifest"
    BULK_ACTION = "bulk_action"
    RIG_SCHEDULE = "rig_schedule"


class ActivityCategoryEnum(str, enum.Enum):
    PRODUCTIVE = "productive"
    NON_PRODUCTIVE = "non_productive"
    UNCATEGORIZED = "uncategorized"


class FluidCategoryEnum(str, enum.Enum):
    DRILLING = "drilling"
    COMPLETION = "completion"
    PRODUCTION_CHEMICAL = "production_chemical"
    FUEL = "fuel"
    UTILITY = "utility"
    OTHER = "other"


class BulkDirectionEnum(str, enum.Enum):
    LOAD = "load"
    OFFLOAD = "offload"
    UNKNOWN = "unknown"


class CargoTypeEnum(str, enum.Enum):
    LIQUID_BULK = "liquid_bulk"
    DECK_CARGO = "deck_cargo"
    LIFT_ONLY = "lift_only"
    OTHER = "other"


class DiagnosticReasonEnum(str, enum.Enum):
    FIELD_ABSENT = "field_absent"
    UNRESOLVED_LOCATION = "unresolved_location"
    UNRESOLVED_VESSEL = "unresolved_vessel"
    AMBIGUOUS_LC_CLASSIFICATION = "ambiguous_lc_classification"
    DATE_PARSE_FAILURE = "date_parse_failure"
    LC_DEPARTMENT_FALLBACK = "lc_department_fallback"
    LC_LOCATION_MISMATCH = "lc_location_mismatch"
    ROW_REJECTED = "row_rejected"
    DUPLICATE_DROPPED = "duplicate_dropped"


class SeverityEnum(str, enum.Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
