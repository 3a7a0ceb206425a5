"""Voyage event activity classification.

Classifies (parent event, event) pairs as productive / non-productive and
tags waiting and weather events for the waiting-time and weather-impact
metrics. Weather always wins: an event with a weather marker in either its
event or parent event text is a weather event and never counts as waiting.
"""
from __future__ import annotations

from offshore_logistics.models.base import ActivityCategoryEnum
from offshore_logistics.utils.text import contains_tokens, normalize_name, tokenize

_NON_PRODUCTIVE_PARENTS = frozenset({
    "waiting on weather",
    "waiting on installation",
    "waiting on quay",
    "port or supply base closed",
})

# Parent events that are productive when the sub-event is blank
_PRODUCTIVE_PARENTS_NULL_EVENT = frozenset({
    "end voyage",
    "standby inside 500m zone",
    "standby close",
    "cargo ops",
    "marine trial",
})

_PRODUCTIVE_COMBINATIONS = frozenset({
    ("rov operations", "rov operational duties"),
    ("cargo ops", "load fuel water or methanol"),
    ("cargo ops", "offload fuel water or methanol"),
    ("cargo ops", "cargo loading or discharging"),
    ("cargo ops", "simops"),
    ("installation productive time", "bulk displacement"),
    ("installation productive time", "floating storage"),
    ("maintenance", "vessel under maintenance"),
    ("maintenance", "training"),
    ("maneuvering", "shifting"),
    ("maneuvering", "set up"),
    ("maneuvering", "pilotage"),
    ("standby", "close standby"),
    ("standby", "standby close"),
    ("standby", "emergency response standby"),
    ("transit", "steam from port"),
    ("transit", "steam to port"),
    ("transit", "steam infield"),
    ("transit", "enter 500 mtr zone setup maneuver"),
    ("stop the job", "installation vessel supply base"),
    ("tank cleaning", "tank cleaning"),
})

# "Waiting on Installation" and the names other exports use for the same thing
WAITING_EVENTS = frozenset({
    "waiting on installation",
    "waiting on rig",
    "waiting on platform",
    "waiting on location",
    "waiting on facility",
})

WEATHER_MARKERS: tuple[tuple[str, ...], ...] = (
    ("weather",),
    ("wow",),
    ("wind",),
    ("swell",),
    ("sea", "state"),
    ("storm",),
    ("hurricane",),
)


def classify_activity(parent_event: str | None, event: str | None) -> ActivityCategoryEnum:
    parent = normalize_name(parent_event)
    child = normalize_name(event)
    if not parent:
        return ActivityCategoryEnum.UNCATEGORIZED
    if not child:
        if parent in _PRODUCTIVE_PARENTS_NULL_EVENT:
            return ActivityCategoryEnum.PRODUCTIVE
    elif (parent, child) in _PRODUCTIVE_COMBINATIONS:
        return ActivityCategoryEnum.PRODUCTIVE
    if parent in _NON_PRODUCTIVE_PARENTS:
        return ActivityCategoryEnum.NON_PRODUCTIVE
    return ActivityCategoryEnum.UNCATEGORIZED


def is_npt_eligible(category: ActivityCategoryEnum) -> bool:
    return category == ActivityCategoryEnum.NON_PRODUCTIVE


def has_weather_marker(*texts: str | None) -> bool:
    for text in texts:
        tokens = tokenize(text)
        if any(contains_tokens(tokens, marker) for marker in WEATHER_MARKERS):
            return True
    return False


def is_waiting_event(parent_event: str | None, event: str | None) -> bool:
    """Nominal waiting category, before weather exclusion."""
    return normalize_name(parent_event) in WAITING_EVENTS or normalize_name(event) in WAITING_EVENTS
