"""Derived metric calculators.

Every metric is a pure fold over the normalized records passed in: no state
is kept between calls, so identical inputs always give identical results.
Records of other source types are ignored, which lets callers pass one mixed
collection.

Event metrics (NPT, waiting, weather) group hours by resolved facility and
month. Events at a port or with an unresolved location are reported in the
"port" / "unresolved" breakdown entries and are not part of the value.
"""
from __future__ import annotations

import logging
from collections import defaultdict
from typing import Callable, Iterable

from offshore_logistics.config import settings
from offshore_logistics.models.base import BulkDirectionEnum, FluidCategoryEnum
from offshore_logistics.models.records import (
    BulkActionRecord,
    ManifestRecord,
    NormalizedRecord,
    VoyageEventRecord,
)
from offshore_logistics.modules.activity_classifier import is_npt_eligible
from offshore_logistics.modules.bulk_actions import transfer_key
from offshore_logistics.modules.catalog import ReferenceCatalog, get_catalog
from offshore_logistics.modules.normalize import month_range
from offshore_logistics.schemas.metric import MetricResult, ScopeFilter

logger = logging.getLogger(__name__)

NPT = "npt"
WAITING_TIME_EXCL_WEATHER = "waiting_time_excl_weather"
WEATHER_IMPACT = "weather_impact"
PRODUCTION_CHEMICAL_VOLUME = "production_chemical_volume"
VESSEL_DELIVERY_CAPABILITY = "vessel_delivery_capability"

UNRESOLVED_KEY = "unresolved"
PORT_KEY = "port"


class UnknownMetricError(ValueError):
    pass


def _scope_filters(scope: ScopeFilter, use_months: bool = True) -> list[str]:
    filters = []
    if scope.facility_ids:
        filters.append("facility in " + ",".join(sorted(scope.facility_ids)))
    if use_months and scope.months:
        filters.append("month in " + ",".join(sorted(scope.months)))
    if scope.vessel_ids:
        filters.append("vessel in " + ",".join(sorted(scope.vessel_ids)))
    return filters


def _describe_scope(scope: ScopeFilter) -> str:
    parts = _scope_filters(scope)
    return "; ".join(parts) if parts else "fleet-wide"


def _in_scope(record, scope: ScopeFilter, use_months: bool = True) -> bool:
    if scope.facility_ids and record.facility_id not in scope.facility_ids:
        return False
    if use_months and scope.months and record.month not in scope.months:
        return False
    if scope.vessel_ids and record.vessel_id not in scope.vessel_ids:
        return False
    return True


def _group_key(facility_id: str, month: str | None) -> str:
    return f"{facility_id}|{month or 'undated'}"


def _event_hours_metric(
    name: str,
    records: Iterable[NormalizedRecord],
    scope: ScopeFilter,
    predicate: Callable[[VoyageEventRecord], bool],
    predicate_filters: list[str],
) -> MetricResult:
    breakdown: dict[str, float] = defaultdict(float)
    total = 0.0
    for record in records:
        if not isinstance(record, VoyageEventRecord) or not predicate(record):
            continue
        if record.facility_id is None:
            # Reported fleet-wide only; a facility filter never matches these rows
            if not scope.facility_ids and _in_scope(record, scope):
                breakdown[PORT_KEY if record.is_port else UNRESOLVED_KEY] += record.hours
            continue
        if not _in_scope(record, scope):
            continue
        breakdown[_group_key(record.facility_id, record.month)] += record.hours
        total += record.hours

    return MetricResult(
        metric_name=name,
        scope=_describe_scope(scope),
        value=total,
        unit="hours",
        filters_applied=predicate_filters + ["facility resolved"] + _scope_filters(scope),
        breakdown=dict(breakdown),
    )


def npt_hours(records, scope: ScopeFilter | None = None) -> MetricResult:
    return _event_hours_metric(
        NPT, records, scope or ScopeFilter(),
        lambda r: is_npt_eligible(r.activity_category),
        ["activity_category=non_productive"],
    )


def waiting_time_excl_weather(records, scope: ScopeFilter | None = None) -> MetricResult:
    return _event_hours_metric(
        WAITING_TIME_EXCL_WEATHER, records, scope or ScopeFilter(),
        lambda r: r.is_waiting and not r.is_weather,
        ["waiting event", "weather excluded"],
    )


def weather_impact(records, scope: ScopeFilter | None = None) -> MetricResult:
    return _event_hours_metric(
        WEATHER_IMPACT, records, scope or ScopeFilter(),
        lambda r: r.is_weather,
        ["weather marker"],
    )


def production_chemical_volume(
    records,
    scope: ScopeFilter | None = None,
    catalog: ReferenceCatalog | None = None,
) -> MetricResult:
    """Offloaded production chemical volume (bbl) at production-capable facilities.

    Fuel, drilling/completion fluids, loads, returns and drilling-rig
    destinations are excluded. Duplicate legs of one transfer count once.
    """
    scope = scope or ScopeFilter()
    catalog = catalog or get_catalog()
    breakdown: dict[str, float] = defaultdict(float)
    seen: set[tuple] = set()
    total = 0.0
    for record in records:
        if not isinstance(record, BulkActionRecord):
            continue
        if record.direction != BulkDirectionEnum.OFFLOAD or record.is_fuel or record.is_return:
            continue
        if record.fluid_category != FluidCategoryEnum.PRODUCTION_CHEMICAL:
            continue
        facility = catalog.facility(record.facility_id) if record.facility_id else None
        if facility is None or not facility.is_production_capable:
            continue
        if not _in_scope(record, scope):
            continue
        key = transfer_key(record)
        if key in seen:
            continue
        seen.add(key)
        breakdown[_group_key(facility.id, record.month)] += record.quantity_bbls
        total += record.quantity_bbls

    return MetricResult(
        metric_name=PRODUCTION_CHEMICAL_VOLUME,
        scope=_describe_scope(scope),
        value=total,
        unit="bbl",
        filters_applied=[
            "direction=offload",
            "fuel excluded",
            "returns excluded",
            "fluid_category=production_chemical",
            "production facilities only",
            "one count per transfer",
        ] + _scope_filters(scope),
        breakdown=dict(breakdown),
    )


def vessel_delivery_capability(
    records,
    scope: ScopeFilter | None = None,
    catalog: ReferenceCatalog | None = None,
) -> MetricResult:
    """Baseline monthly deliveries per (vessel, facility) over the analysis window.

    A delivery is one unique (vessel, facility, voyage) manifest; manifests
    without a voyage id are told apart by manifest date. The baseline is
    total deliveries divided by the number of months in the window, idle
    months included. The value is the fleet total per month, i.e. the sum of
    the pair baselines.
    """
    scope = scope or ScopeFilter()
    catalog = catalog or get_catalog()
    window = month_range(
        scope.window_start or settings.ANALYSIS_WINDOW_START,
        scope.window_months or settings.ANALYSIS_WINDOW_MONTHS,
    )
    window_set = set(window)

    deliveries: dict[str, set[tuple]] = defaultdict(set)
    for record in records:
        if not isinstance(record, ManifestRecord):
            continue
        if record.vessel_id not in catalog.baseline_fleet:
            continue
        if record.is_port or record.facility_id is None:
            continue
        if record.month not in window_set or not _in_scope(record, scope, use_months=False):
            continue
        voyage = record.voyage_id or (record.manifest_date.date() if record.manifest_date else None)
        deliveries[record.month].add((record.vessel_id, record.facility_id, voyage))

    monthly: dict[str, dict[str, float]] = {}
    for month in window:
        for vessel_id, facility_id, _ in sorted(deliveries.get(month, ()), key=str):
            pair = f"{vessel_id}|{facility_id}"
            series = monthly.setdefault(pair, {m: 0.0 for m in window})
            series[month] += 1

    breakdown = {pair: sum(series.values()) / len(window) for pair, series in monthly.items()}
    total_deliveries = sum(len(found) for found in deliveries.values())

    return MetricResult(
        metric_name=VESSEL_DELIVERY_CAPABILITY,
        scope=_describe_scope(scope),
        value=total_deliveries / len(window) if window else 0.0,
        unit="deliveries/month",
        filters_applied=[
            "baseline fleet only",
            "offshore destinations only",
            f"window {window[0]}..{window[-1]} ({len(window)} months)" if window else "empty window",
            "unique vessel/facility/voyage",
        ] + _scope_filters(scope, use_months=False),
        breakdown=breakdown,
        monthly=monthly,
    )


_METRICS: dict[str, Callable[..., MetricResult]] = {
    NPT: lambda records, scope, catalog: npt_hours(records, scope),
    WAITING_TIME_EXCL_WEATHER: lambda records, scope, catalog: waiting_time_excl_weather(records, scope),
    WEATHER_IMPACT: lambda records, scope, catalog: weather_impact(records, scope),
    PRODUCTION_CHEMICAL_VOLUME: production_chemical_volume,
    VESSEL_DELIVERY_CAPABILITY: vessel_delivery_capability,
}

METRIC_NAMES = tuple(_METRICS)


def compute_metric(
    metric_name: str,
    records: Iterable[NormalizedRecord],
    scope: ScopeFilter | None = None,
    catalog: ReferenceCatalog | None = None,
) -> MetricResult:
    """Compute one derived metric over normalized records."""
    calculator = _METRICS.get(metric_name)
    if calculator is None:
        raise UnknownMetricError(
            f"Unknown metric '{metric_name}' (expected one of: {', '.join(METRIC_NAMES)})"
        )
    result = calculator(list(records), scope or ScopeFilter(), catalog)
    logger.debug("Computed %s = %.3f %s", metric_name, result.value, result.unit)
    return result
