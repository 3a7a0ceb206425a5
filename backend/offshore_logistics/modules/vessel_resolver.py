"""Vessel resolution: maps free-text transporter/vessel names to catalog vessels.

Strategy (in order):
1. Compressed exact match: case-folded, punctuation and spacing removed, with
   "M/V"-style prefixes dropped ("Pelican Island", "PELICANISLAND", "M/V Pelican-Island").
2. Token containment: the longest catalog alias present in the input as a
   contiguous run of whole tokens ("Pelican Island (HOS)" -> pelican-island,
   but "HOS Chamberlain" never matches "Amber"). Multi-word aliases also match
   their compressed single-token form. Aliases shorter than 5 characters are
   not used for containment.
3. Fuzzy name match via rapidfuzz (settings.VESSEL_FUZZY_THRESHOLD).
4. Return None. Callers keep the row as a third-party/unknown vessel.
"""
from __future__ import annotations

import functools
import logging
from typing import NamedTuple

from rapidfuzz import fuzz

from offshore_logistics.config import settings
from offshore_logistics.modules.catalog import ReferenceCatalog
from offshore_logistics.utils.text import contains_tokens, tokenize

logger = logging.getLogger(__name__)

_PREFIXES = (("mv",), ("m", "v"), ("osv",), ("psv",), ("fsv",))
_MIN_CONTAINMENT_LENGTH = 5


class VesselMatch(NamedTuple):
    vessel_id: str
    match_type: str
    confidence: int


def _vessel_tokens(name: str | None) -> tuple[str, ...]:
    tokens = tokenize(name)
    for prefix in _PREFIXES:
        if len(tokens) > len(prefix) and tokens[:len(prefix)] == prefix:
            return tokens[len(prefix):]
    return tokens


def _vessel_key(name: str | None) -> str:
    return "".join(_vessel_tokens(name))


@functools.lru_cache(maxsize=8)
def _alias_keys(catalog: ReferenceCatalog) -> tuple[tuple[str, str], ...]:
    """(compressed alias, vessel id) pairs, longest alias first."""
    pairs = set()
    for vessel in catalog.vessels.values():
        for alias in {vessel.name, *vessel.aliases}:
            key = _vessel_key(alias)
            if key:
                pairs.add((key, vessel.id))
    return tuple(sorted(pairs, key=lambda p: (-len(p[0]), p[0])))


@functools.lru_cache(maxsize=8)
def _alias_tokens(catalog: ReferenceCatalog) -> tuple[tuple[tuple[str, ...], str], ...]:
    """(alias token tuple, vessel id) pairs usable for containment, longest alias first."""
    pairs = set()
    for vessel in catalog.vessels.values():
        for alias in {vessel.name, *vessel.aliases}:
            tokens = _vessel_tokens(alias)
            if len("".join(tokens)) < _MIN_CONTAINMENT_LENGTH:
                continue
            pairs.add((tokens, vessel.id))
            if len(tokens) > 1:
                pairs.add((("".join(tokens),), vessel.id))
    return tuple(sorted(pairs, key=lambda p: (-len(" ".join(p[0])), p[0], p[1])))


def match_vessel(
    name: str | None,
    catalog: ReferenceCatalog,
    threshold: int | None = None,
) -> VesselMatch | None:
    """Return (vessel_id, match_type, confidence) for the best match, or None."""
    tokens = _vessel_tokens(name)
    key = "".join(tokens)
    if not key:
        return None
    alias_keys = _alias_keys(catalog)

    for alias, vessel_id in alias_keys:
        if alias == key:
            return VesselMatch(vessel_id, "exact", 100)

    for alias, vessel_id in _alias_tokens(catalog):
        if contains_tokens(tokens, alias):
            return VesselMatch(vessel_id, "contains", 95)

    effective_threshold = threshold if threshold is not None else settings.VESSEL_FUZZY_THRESHOLD
    best_id: str | None = None
    best_score = 0.0
    for alias, vessel_id in alias_keys:
        score = fuzz.ratio(key, alias)
        if score > best_score:
            best_score = score
            best_id = vessel_id

    if best_id is not None and best_score >= effective_threshold:
        if best_score < 95:
            logger.warning(
                "Low-confidence vessel match: '%s' -> '%s' (score=%.1f)",
                name, best_id, best_score,
            )
        return VesselMatch(best_id, "fuzzy_name", int(best_score))
    return None


def resolve_vessel(name: str | None, catalog: ReferenceCatalog) -> str | None:
    """Resolve free text to a vessel id, or None when the vessel is not in the catalog."""
    match = match_vessel(name, catalog)
    return match.vessel_id if match else None


def is_in_fleet(vessel_id: str | None, catalog: ReferenceCatalog) -> bool:
    """Fleet membership; unresolved vessels count as third-party."""
    if vessel_id is None:
        return False
    vessel = catalog.vessel(vessel_id)
    return bool(vessel and vessel.in_fleet)
