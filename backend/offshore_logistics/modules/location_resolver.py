"""Location resolution: maps free-text rig/location strings to facility ids.

Strategy (in order):
1. Port/base check: text naming a shore base (Fourchon, any "port", ...) never
   resolves to an offshore facility.
2. Token-aware alias match: an alias matches only as a contiguous run of whole
   tokens ("md" matches "MD Drilling" but not "MDX"). Multi-word aliases also
   match their compressed single-token form ("thunderhorse").
3. Longest matching alias wins.
4. Tie on length: prefer facilities whose own name carries a qualifier
   (drilling / production) that also appears in the input.
5. Still tied, or nothing matched: return None (unresolved). Callers keep the
   record and mark it unclassified rather than guessing.
"""
from __future__ import annotations

import functools
import logging
from typing import NamedTuple

from offshore_logistics.modules.catalog import ReferenceCatalog
from offshore_logistics.utils.text import contains_tokens, tokenize

logger = logging.getLogger(__name__)

# Qualifier token -> operational side it names
_QUALIFIERS: dict[str, str] = {
    "drilling": "drilling",
    "drill": "drilling",
    "drl": "drilling",
    "prod": "production",
    "production": "production",
    "producing": "production",
}


class FacilityMatch(NamedTuple):
    facility_id: str
    alias: str
    alias_length: int
    qualifier_match: bool


def _qualifiers(tokens: tuple[str, ...]) -> frozenset[str]:
    return frozenset(_QUALIFIERS[t] for t in tokens if t in _QUALIFIERS)


@functools.lru_cache(maxsize=8)
def _alias_index(catalog: ReferenceCatalog) -> tuple[tuple[str, tuple[tuple[str, ...], ...], frozenset[str]], ...]:
    """Per facility: (id, alias token tuples, qualifier sides named by the facility itself)."""
    index = []
    for facility in catalog.facilities.values():
        alias_tokens: set[tuple[str, ...]] = set()
        for alias in {facility.name, *facility.aliases}:
            tokens = tokenize(alias)
            if not tokens:
                continue
            alias_tokens.add(tokens)
            if len(tokens) > 1:
                alias_tokens.add(("".join(tokens),))
        own_qualifiers = _qualifiers(tokenize(facility.name))
        index.append((facility.id, tuple(sorted(alias_tokens)), own_qualifiers))
    return tuple(index)


def match_candidates(text: str | None, catalog: ReferenceCatalog) -> list[FacilityMatch]:
    """All facilities with at least one alias in *text*, best alias per facility, best first."""
    tokens = tokenize(text)
    if not tokens:
        return []
    input_qualifiers = _qualifiers(tokens)

    matches: list[FacilityMatch] = []
    for facility_id, alias_list, own_qualifiers in _alias_index(catalog):
        best: tuple[str, ...] | None = None
        for alias in alias_list:
            if contains_tokens(tokens, alias):
                if best is None or len(" ".join(alias)) > len(" ".join(best)):
                    best = alias
        if best is not None:
            joined = " ".join(best)
            matches.append(FacilityMatch(
                facility_id=facility_id,
                alias=joined,
                alias_length=len(joined),
                qualifier_match=bool(own_qualifiers & input_qualifiers),
            ))
    matches.sort(key=lambda m: (m.alias_length, m.qualifier_match), reverse=True)
    return matches


def resolve_facility(text: str | None, catalog: ReferenceCatalog) -> str | None:
    """Resolve free text to a facility id, or None when unresolved.

    Args:
        text: Raw location/rig reference cell.
        catalog: Reference catalog to resolve against.

    Returns:
        Facility id or None.
    """
    if not text or catalog.is_port_location(text):
        return None

    matches = match_candidates(text, catalog)
    if not matches:
        return None

    top = matches[0]
    if len(matches) > 1:
        runner_up = matches[1]
        if (runner_up.alias_length, runner_up.qualifier_match) == (top.alias_length, top.qualifier_match):
            logger.debug(
                "Ambiguous location '%s': %s and %s tie on alias '%s'",
                text, top.facility_id, runner_up.facility_id, top.alias,
            )
            return None
    return top.facility_id
