"""Facility and vessel reference data.

Both are immutable and loaded once per process by modules.catalog.
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from offshore_logistics.models.base import FacilityTypeEnum, VesselClassEnum


class Facility(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    facility_type: FacilityTypeEnum
    aliases: frozenset[str] = frozenset()
    drilling_lcs: frozenset[str] = frozenset()
    production_lcs: frozenset[str] = frozenset()
    region: str = "Gulf of Mexico"
    # Integrated facilities are parents of a drilling and a production identity
    parent_id: str | None = None
    sort_order: int = 0

    @field_validator("drilling_lcs", "production_lcs", mode="before")
    @classmethod
    def _lc_numbers_as_strings(cls, v):
        if v is None:
            return frozenset()
        return frozenset(str(lc).strip() for lc in v)

    @property
    def is_production_capable(self) -> bool:
        return self.facility_type in (
            FacilityTypeEnum.PRODUCTION_PLATFORM,
            FacilityTypeEnum.INTEGRATED,
        )

    @property
    def is_drilling_capable(self) -> bool:
        return self.facility_type in (
            FacilityTypeEnum.DRILLING_RIG,
            FacilityTypeEnum.INTEGRATED,
        )


class Vessel(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    aliases: frozenset[str] = frozenset()
    in_fleet: bool = False
    vessel_class: VesselClassEnum = VesselClassEnum.OTHER
    company: str | None = None
    active: bool = True


class CatalogDocument(BaseModel):
    """Shape of the reference catalog YAML document."""

    facilities: list[Facility]
    vessels: list[Vessel] = Field(default_factory=list)
    baseline_fleet: list[str] = Field(default_factory=list)
    port_markers: list[str] = Field(default_factory=list)
    logistics_lcs: list[str] = Field(default_factory=list)

    @field_validator("logistics_lcs", mode="before")
    @classmethod
    def _logistics_lcs_as_strings(cls, v):
        return [str(lc).strip() for lc in (v or [])]
