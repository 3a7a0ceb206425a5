"""Reference data and normalized record models."""
from offshore_logistics.models.base import (
    ActivityCategoryEnum,
    BulkDirectionEnum,
    CargoTypeEnum,
    ClassificationSourceEnum,
    DiagnosticReasonEnum,
    FacilityTypeEnum,
    FluidCategoryEnum,
    LCClassificationEnum,
    OperationTypeEnum,
    SeverityEnum,
    SourceTypeEnum,
    VesselClassEnum,
)
from offshore_logistics.models.reference import CatalogDocument, Facility, Vessel
from offshore_logistics.models.records import (
    BulkActionRecord,
    CostAllocationRecord,
    LCAllocation,
    ManifestRecord,
    NormalizedRecord,
    RigScheduleRecord,
    VoyageEventRecord,
)
