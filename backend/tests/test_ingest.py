"""Tests for batch normalization, de-duplication and CSV reading (ingest.py)."""
import logging

import pytest

from offshore_logistics.models.base import DiagnosticReasonEnum, SeverityEnum, SourceTypeEnum
from offshore_logistics.models.records import CostAllocationRecord
from offshore_logistics.modules.ingest import (
    UnknownSourceTypeError,
    normalize,
    read_csv_rows,
    summarize,
)


def _cost_rows():
    return [
        {"LC Number": "100", "Rig Location": "Alpha Prod", "Month-Year": "Jan-25", "Alloc (days)": "10"},
        {"LC Number": "300", "Rig Location": "Bravo Rig", "Month-Year": "Jan-25", "Alloc (days)": "4"},
        {"LC Number": "", "Rig Location": "Bravo Rig", "Month-Year": "Jan-25", "Alloc (days)": "1"},
        {"LC Number": "777", "Rig Location": "Nowhere", "Month-Year": "Feb-25", "Alloc (days)": "2"},
    ]


class TestNormalize:
    def test_one_record_per_accepted_row(self, catalog):
        records, diagnostics = normalize(_cost_rows(), SourceTypeEnum.COST_ALLOCATION, catalog)
        assert [r.row_index for r in records] == [0, 1, 3]
        assert all(isinstance(r, CostAllocationRecord) for r in records)
        rejected = [d for d in diagnostics if d.reason == DiagnosticReasonEnum.ROW_REJECTED]
        assert [d.row_index for d in rejected] == [2]

    def test_unresolved_row_is_retained_with_diagnostic(self, catalog):
        records, diagnostics = normalize(_cost_rows(), "cost_allocation", catalog)
        unresolved = records[-1]
        assert unresolved.facility_id is None
        assert unresolved.location_text == "Nowhere"
        assert any(d.row_index == 3 and d.reason == DiagnosticReasonEnum.UNRESOLVED_LOCATION
                   for d in diagnostics)

    def test_deterministic(self, catalog):
        first = normalize(_cost_rows(), "cost_allocation", catalog)
        second = normalize(_cost_rows(), "cost_allocation", catalog)
        assert first == second

    def test_diagnostics_ordered_by_row(self, catalog):
        _, diagnostics = normalize(_cost_rows(), "cost_allocation", catalog)
        indexes = [d.row_index for d in diagnostics]
        assert indexes == sorted(indexes)

    def test_rejected_row_logged(self, catalog, caplog):
        with caplog.at_level(logging.WARNING, logger="offshore_logistics.modules.ingest"):
            normalize(_cost_rows(), "cost_allocation", catalog)
        assert "Rejected cost_allocation row 2" in caplog.text

    def test_unknown_source_type(self, catalog):
        with pytest.raises(UnknownSourceTypeError, match="Unknown source type 'invoices'"):
            normalize([], "invoices", catalog)

    def test_empty_input(self, catalog):
        assert normalize([], "manifest", catalog) == ([], [])


class TestDeduplicate:
    def test_last_occurrence_wins(self, catalog):
        rows = [
            {"LC Number": "100", "Rig Location": "Alpha Prod", "Month-Year": "Jan-25", "Alloc (days)": "10"},
            {"LC Number": "300", "Rig Location": "Bravo Rig", "Month-Year": "Jan-25", "Alloc (days)": "4"},
            {"LC Number": "100", "Rig Location": "alpha prod", "Month-Year": "01-25", "Alloc (days)": "12"},
        ]
        records, diagnostics = normalize(rows, "cost_allocation", catalog)
        assert [(r.row_index, r.allocated_days) for r in records] == [(1, 4.0), (2, 12.0)]
        (dropped,) = diagnostics
        assert dropped.reason == DiagnosticReasonEnum.DUPLICATE_DROPPED
        assert dropped.severity == SeverityEnum.INFO
        assert dropped.row_index == 0
        assert "row 2" in dropped.detail

    def test_dedupe_disabled(self, catalog):
        rows = [_cost_rows()[0], _cost_rows()[0]]
        records, diagnostics = normalize(rows, "cost_allocation", catalog, dedupe=False)
        assert len(records) == 2
        assert diagnostics == []


class TestReadCsvRows:
    def test_reads_strings_and_strips_bom(self, tmp_path):
        path = tmp_path / "costs.csv"
        path.write_bytes(b"\xef\xbb\xbfLC Number, Rig Location ,Alloc (days)\n10140,Mad Dog,12.5\n,Argos,\n")
        rows = read_csv_rows(path)
        assert rows == [
            {"LC Number": "10140", "Rig Location": "Mad Dog", "Alloc (days)": "12.5"},
            {"LC Number": None, "Rig Location": "Argos", "Alloc (days)": None},
        ]

    def test_reads_bytes(self):
        rows = read_csv_rows(b"Vessel,Event\nSea Hawk,Transit\n")
        assert rows == [{"Vessel": "Sea Hawk", "Event": "Transit"}]

    def test_csv_through_normalize(self, tmp_path, bundled_catalog):
        path = tmp_path / "costs.csv"
        path.write_text("LC Number,Rig Location,Month-Year,Alloc (days)\n10140,Mad Dog,Jun-25,12.5\n")
        records, _ = normalize(read_csv_rows(path), "cost_allocation", bundled_catalog)
        assert records[0].facility_id == "deepwater-invictus"
        assert records[0].allocated_days == 12.5


def test_summarize(catalog):
    records, diagnostics = normalize(_cost_rows(), "cost_allocation", catalog)
    summary = summarize(records, diagnostics)
    assert summary["records"] == 3
    assert summary["rejected"] == 1
    assert summary["duplicates"] == 0
    assert summary["by_reason"]["row_rejected"] == 1
