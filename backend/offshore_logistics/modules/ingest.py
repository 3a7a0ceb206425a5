"""Tabular ingestion: raw rows -> (normalized records, diagnostics).

Row-level problems never abort the batch. Rejected rows are logged and
reported as diagnostics; every other row produces exactly one record, which
is then de-duplicated by business key (the last occurrence in source order
wins, earlier copies are reported as duplicate_dropped).
"""
from __future__ import annotations

import io
import logging
from collections import Counter
from pathlib import Path
from typing import Any, Callable, Iterable, Mapping

import polars as pl

from offshore_logistics.models.base import DiagnosticReasonEnum, SeverityEnum, SourceTypeEnum
from offshore_logistics.models.records import NormalizedRecord
from offshore_logistics.modules import bulk_actions, cost_allocation, manifests, rig_schedule, voyage_events
from offshore_logistics.modules.catalog import ReferenceCatalog, get_catalog
from offshore_logistics.schemas.diagnostic import Diagnostic

logger = logging.getLogger(__name__)

RowNormalizer = Callable[[Mapping[str, Any], int, ReferenceCatalog], tuple[Any, list[Diagnostic]]]

_NORMALIZERS: dict[SourceTypeEnum, tuple[RowNormalizer, Callable[[Any], tuple]]] = {
    SourceTypeEnum.COST_ALLOCATION: (
        cost_allocation.normalize_cost_allocation_row, cost_allocation.business_key),
    SourceTypeEnum.VOYAGE_EVENT: (
        voyage_events.normalize_voyage_event_row, voyage_events.business_key),
    SourceTypeEnum.MANIFEST: (manifests.normalize_manifest_row, manifests.business_key),
    SourceTypeEnum.BULK_ACTION: (bulk_actions.normalize_bulk_action_row, bulk_actions.business_key),
    SourceTypeEnum.RIG_SCHEDULE: (rig_schedule.normalize_rig_schedule_row, rig_schedule.business_key),
}


class UnknownSourceTypeError(ValueError):
    pass


def _source_type(source_type: SourceTypeEnum | str) -> SourceTypeEnum:
    try:
        return SourceTypeEnum(source_type)
    except ValueError:
        valid = ", ".join(s.value for s in SourceTypeEnum)
        raise UnknownSourceTypeError(f"Unknown source type '{source_type}' (expected one of: {valid})") from None


def deduplicate(
    records: list[NormalizedRecord],
    key: Callable[[Any], tuple],
    source_type: SourceTypeEnum,
) -> tuple[list[NormalizedRecord], list[Diagnostic]]:
    """Keep the last record per business key; report the others."""
    last_by_key: dict[tuple, NormalizedRecord] = {}
    for record in records:
        last_by_key[key(record)] = record
    kept_ids = {id(r) for r in last_by_key.values()}

    kept: list[NormalizedRecord] = []
    dropped: list[Diagnostic] = []
    for record in records:
        if id(record) in kept_ids:
            kept.append(record)
        else:
            survivor = last_by_key[key(record)]
            dropped.append(Diagnostic(
                source_type=source_type,
                row_index=record.row_index,
                reason=DiagnosticReasonEnum.DUPLICATE_DROPPED,
                severity=SeverityEnum.INFO,
                detail=f"superseded by row {survivor.row_index}",
            ))
    return kept, dropped


def normalize(
    raw_rows: Iterable[Mapping[str, Any]],
    source_type: SourceTypeEnum | str,
    catalog: ReferenceCatalog | None = None,
    dedupe: bool = True,
) -> tuple[list[NormalizedRecord], list[Diagnostic]]:
    """Normalize one source's raw rows.

    Args:
        raw_rows: Ordered rows, each a mapping of column header -> cell value.
        source_type: Which record normalizer to apply.
        catalog: Reference catalog; defaults to the process-wide catalog.
        dedupe: Apply last-occurrence-wins de-duplication by business key.

    Returns:
        ``(records, diagnostics)``; diagnostics are ordered by row index.
    """
    source = _source_type(source_type)
    if catalog is None:
        catalog = get_catalog()
    normalize_row, business_key = _NORMALIZERS[source]

    records: list[NormalizedRecord] = []
    diagnostics: list[Diagnostic] = []
    row_count = 0
    for row_index, row in enumerate(raw_rows):
        row_count += 1
        record, row_diagnostics = normalize_row(row, row_index, catalog)
        diagnostics.extend(row_diagnostics)
        if record is None:
            reasons = "; ".join(d.detail or d.reason.value for d in row_diagnostics
                                if d.reason == DiagnosticReasonEnum.ROW_REJECTED)
            logger.warning("Rejected %s row %d: %s | row: %s", source.value, row_index, reasons, dict(row))
            continue
        records.append(record)

    if dedupe:
        records, dropped = deduplicate(records, business_key, source)
        diagnostics.extend(dropped)
        diagnostics.sort(key=lambda d: d.row_index)

    logger.info(
        "Normalized %d %s row(s) into %d record(s) with %d diagnostic(s)",
        row_count,
        source.value, len(records), len(diagnostics),
    )
    return records, diagnostics


def read_csv_rows(source: str | Path | bytes) -> list[dict[str, Any]]:
    """Read a CSV export into row dicts, all cells as strings (or None)."""
    raw: Any = source
    if isinstance(source, (str, Path)):
        raw = Path(source).read_bytes()
    if raw[:3] == b"\xef\xbb\xbf":
        raw = raw[3:]
    df = pl.read_csv(io.BytesIO(raw), infer_schema_length=0)
    df = df.rename({col: col.strip() for col in df.columns})
    return list(df.iter_rows(named=True))


def summarize(records: list[NormalizedRecord], diagnostics: list[Diagnostic]) -> dict[str, Any]:
    """Counts for reporting: records, diagnostics by reason and severity."""
    by_reason = Counter(d.reason.value for d in diagnostics)
    by_severity = Counter(d.severity.value for d in diagnostics)
    rejected = by_reason.get(DiagnosticReasonEnum.ROW_REJECTED.value, 0)
    return {
        "records": len(records),
        "rejected": rejected,
        "duplicates": by_reason.get(DiagnosticReasonEnum.DUPLICATE_DROPPED.value, 0),
        "by_reason": dict(by_reason),
        "by_severity": dict(by_severity),
    }
