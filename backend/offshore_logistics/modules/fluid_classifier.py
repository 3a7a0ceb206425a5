"""Bulk fluid classification.

Categories are checked in order and the first match wins, except that fuel
always takes precedence: anything whose text names diesel, fuel, gas oil,
marine gas oil or MGO is FUEL, never a production chemical.
"""
from __future__ import annotations

import re

from offshore_logistics.models.base import FluidCategoryEnum

_FUEL = re.compile(r"\b(diesel|fuel|gas\s*oil|marine\s+gas\s+oil|mgo)\b", re.I)

_CATEGORY_PATTERNS: list[tuple[FluidCategoryEnum, re.Pattern[str]]] = [
    (FluidCategoryEnum.DRILLING, re.compile(
        r"\b(wbm|sbm|obm|premix|base\s*oil|mud|drilling\s+fluid)\b", re.I)),
    (FluidCategoryEnum.COMPLETION, re.compile(
        r"calcium\s+(bromide|chloride)|\b(cabr2?|cacl2?|nacl|kcl|clayfix|brine|completion\s+fluid)\b", re.I)),
    (FluidCategoryEnum.PRODUCTION_CHEMICAL, re.compile(
        r"asphaltene|calcium\s+nitrate|petrocare|methanol|xylene|corrosion\s+inhibitor"
        r"|scale\s+inhibitor|inhibitor|\bldhi\b|subsea\s*525|chemical", re.I)),
    (FluidCategoryEnum.UTILITY, re.compile(r"\b(water|potable|drill\s*water)\b", re.I)),
]


def is_fuel(text: str | None) -> bool:
    return bool(text and _FUEL.search(text))


def classify_fluid(*texts: str | None) -> FluidCategoryEnum:
    """Classify bulk type / description text into a fluid category."""
    combined = " ".join(t for t in texts if t)
    if not combined.strip():
        return FluidCategoryEnum.OTHER
    if is_fuel(combined):
        return FluidCategoryEnum.FUEL
    for category, pattern in _CATEGORY_PATTERNS:
        if pattern.search(combined):
            return category
    return FluidCategoryEnum.OTHER
