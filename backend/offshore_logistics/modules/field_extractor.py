"""Canonical field lookup over raw tabular rows.

Exports from different systems (and different years of the same system) name
the same column differently. Each canonical field has an ordered alias list;
the first alias whose cell holds a usable value wins. Header comparison
ignores case and surrounding whitespace.
"""
from __future__ import annotations

import math
from typing import Any, Mapping

# Cell values that mean "no value" even though the cell is populated
_ABSENT_MARKERS = frozenset({"", "n/a", "#n/a", "na", "nan", "null", "none", "-"})

FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    # Cost allocation
    "lc_number": ("LC Number", "LC", "LC No", "Cost Code"),
    "rig_location": ("Rig Location", "Location Reference", "Rig Reference", "Location"),
    "month_year": ("Month-Year", "Month Year", "Month", "Period"),
    "allocated_days": ("Alloc (days)", "Total Allocated Days", "Allocated Days", "Days"),
    "total_cost": ("Total Cost", "Amount", "Cost"),
    "average_daily_rate": ("Average Vessel Cost Per Day", "Day Rate", "Daily Rate"),
    "project_type": ("Project Type", "Department", "Dept"),
    "description": ("Description", "LC Description"),
    # Voyage events
    "vessel_name": ("Vessel", "Vessel Name", "Transporter"),
    "voyage_number": ("Voyage #", "Voyage Number", "Voyage No", "Voyage Id", "Voyage ID"),
    "mission": ("Mission",),
    "event": ("Event", "Event Type"),
    "parent_event": ("Parent Event", "Parent Event Type"),
    "event_location": ("Location", "Rig Location", "Offshore Location"),
    "port_type": ("Port Type",),
    "from_time": ("From", "Start", "Start Time", "Start Date"),
    "to_time": ("To", "End", "End Time", "End Date"),
    "hours": ("Hours", "Duration", "Duration (h)"),
    "cost_dedicated_to": ("Cost Dedicated to", "Cost Dedicated To", "LC Allocation"),
    "remarks": ("Remarks", "Comments"),
    # Manifests
    "manifest_number": ("Manifest Number", "Manifest #", "Manifest No"),
    "voyage_id": ("Voyage Id", "Voyage ID", "Voyage #"),
    "transporter": ("Transporter", "Vessel", "Vessel Name"),
    "manifest_date": ("Manifest Date", "Date"),
    "cost_code": ("Cost Code", "LC Number", "LC"),
    "origin": ("From", "Origin"),
    "offshore_location": ("Offshore Location", "Destination", "Location"),
    "deck_lbs": ("Deck Lbs", "Deck Weight (lbs)"),
    "deck_tons": ("deck tons (metric)", "Deck Tons", "Deck Tons (metric)"),
    "rt_tons": ("RT Tons", "Return Tons"),
    "lifts": ("Lifts",),
    "rt_lifts": ("RTLifts", "RT Lifts"),
    "wet_bulk_bbls": ("Wet Bulk (bbls)", "Wet Bulk bbls"),
    "wet_bulk_gal": ("Wet Bulk Gal", "Wet Bulk (gal)"),
    "deck_sqft": ("Deck Sqft", "Deck Sq Ft"),
    # Bulk actions
    "bulk_vessel": ("Vessel Name", "Vessel", "Transporter"),
    "bulk_date": ("Start Date", "Date", "Action Date"),
    "action": ("Action", "Direction"),
    "qty": ("Qty", "Quantity", "Volume"),
    "unit": ("Unit", "UOM"),
    "bulk_type": ("Bulk Type", "Fluid Type", "Fluid"),
    "bulk_description": ("Bulk Description", "Fluid Description"),
    "at_port": ("At Port", "Location"),
    "destination_port": ("Destination Port", "Destination"),
    "tank": ("Tank",),
    # Rig schedule
    "activity_id": ("Activity ID", "Activity Id", "ID"),
    "activity_name": ("Activity Name", "Name"),
    "activity_status": ("Activity Status", "Status"),
    "schedule_start": ("(*)Start", "Start", "Start Date"),
    "schedule_finish": ("(*)Finish", "Finish", "Finish Date"),
    "original_duration": ("Original Duration(h)", "Original Duration"),
    "actual_duration": ("(*)Actual Duration(h)", "Actual Duration(h)", "Actual Duration"),
    "rig_name": ("GWDXAG-Rig Name", "Rig Name", "Rig"),
    "asset": ("GWDXAG-Asset", "Asset"),
    "region": ("GWDXAG-Region", "Region"),
    "well_type": ("GWDXAG-Well Type", "Well Type"),
    "rig_activity_type": ("GWDXAG-Rig Activity Type", "Rig Activity Type", "Activity Type"),
    "scenario": ("Scenario", "scenario"),
}


def is_absent(value: Any) -> bool:
    """True for None, NaN, blank strings and the usual placeholder markers."""
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    if isinstance(value, str):
        return value.strip().casefold() in _ABSENT_MARKERS
    return False


def _header_key(header: str) -> str:
    return " ".join(str(header).split()).casefold()


def extract(
    row: Mapping[str, Any],
    field: str,
    aliases: tuple[str, ...] | None = None,
) -> Any | None:
    """Return the first present value among *field*'s aliases, or None if absent.

    String values come back stripped. Unknown canonical field names raise
    KeyError unless an explicit alias list is given.
    """
    candidates = aliases if aliases is not None else FIELD_ALIASES[field]
    folded: dict[str, Any] | None = None
    for alias in candidates:
        if alias in row:
            value = row[alias]
        else:
            if folded is None:
                folded = {_header_key(k): v for k, v in row.items()}
            value = folded.get(_header_key(alias))
        if is_absent(value):
            continue
        return value.strip() if isinstance(value, str) else value
    return None


def extract_text(row: Mapping[str, Any], field: str) -> str | None:
    value = extract(row, field)
    if value is None:
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()
