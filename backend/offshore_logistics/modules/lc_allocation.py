"""Multi-LC allocation strings ("Cost Dedicated to").

Voyage events can bill several LCs at once, e.g. "9358 45, 10137 12, 10101":
  - ";" and "|" are accepted as separators alongside ","
  - a lone LC with no percentage takes 100%
  - LCs without a percentage share the remainder equally (0% if none is left)
  - percentages that do not total 100 are scaled so they do
  - final percentages are rounded to 2 decimals
"""
from __future__ import annotations

import logging
import re

from offshore_logistics.modules.lc_classifier import normalize_lc

logger = logging.getLogger(__name__)

_SEPARATORS = re.compile(r"[;|,]")


def parse_lc_allocation(text: str | None) -> list[tuple[str, float]]:
    """Parse an allocation string into [(lc_number, percentage), ...] in input order."""
    if not text or not str(text).strip():
        return []
    parts = [p.strip() for p in _SEPARATORS.split(str(text)) if p.strip()]
    if not parts:
        return []

    entries: list[tuple[str, float | None]] = []
    for part in parts:
        tokens = part.split()
        lc = normalize_lc(tokens[0])
        percentage: float | None = None
        if len(tokens) >= 2:
            try:
                percentage = float(tokens[1].rstrip("%"))
            except ValueError:
                percentage = None
            if percentage is not None and not 0 <= percentage <= 100:
                logger.warning("Invalid percentage '%s' for LC %s in '%s'", tokens[1], lc, text)
                percentage = None
        entries.append((lc, percentage))

    if len(entries) == 1 and entries[0][1] is None:
        return [(entries[0][0], 100.0)]

    assigned = sum(p for _, p in entries if p is not None)
    unassigned = [lc for lc, p in entries if p is None]
    remainder = max(0.0, 100.0 - assigned)
    share = remainder / len(unassigned) if unassigned else 0.0
    if unassigned and remainder == 0:
        logger.warning("No remaining percentage for LC(s) %s in '%s'", ", ".join(unassigned), text)

    resolved = [(lc, p if p is not None else share) for lc, p in entries]
    total = sum(p for _, p in resolved)
    if total > 0 and abs(total - 100.0) > 0.01:
        logger.warning("LC percentages total %.2f%% in '%s'; normalizing to 100%%", total, text)
        resolved = [(lc, p * 100.0 / total) for lc, p in resolved]

    return [(lc, round(p, 2)) for lc, p in resolved]


def split_hours(hours: float, allocations: list[tuple[str, float]]) -> list[tuple[str, float, float]]:
    """Distribute *hours* across allocations: [(lc_number, percentage, hours), ...]."""
    return [(lc, pct, hours * pct / 100.0) for lc, pct in allocations]
