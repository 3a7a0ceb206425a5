"""Metric scope filter and result schemas."""
from __future__ import annotations

from pydantic import BaseModel, Field


class ScopeFilter(BaseModel):
    """Restricts which normalized records a metric folds over.

    Empty sets mean "no restriction". ``window_start``/``window_months`` define
    the analysis window for vessel delivery capability; when omitted the
    configured default window is used.
    """

    model_config = {"frozen": True}

    facility_ids: frozenset[str] = frozenset()
    months: frozenset[str] = frozenset()
    vessel_ids: frozenset[str] = frozenset()
    window_start: str | None = None
    window_months: int | None = None


class MetricResult(BaseModel):
    metric_name: str
    scope: str
    value: float
    unit: str
    filters_applied: list[str] = Field(default_factory=list)
    breakdown: dict[str, float] = Field(default_factory=dict)
    # Per-key monthly series; only vessel_delivery_capability fills this in
    monthly: dict[str, dict[str, float]] = Field(default_factory=dict)
