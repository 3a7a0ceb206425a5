"""Tests for offshore-logistics CLI commands."""
from __future__ import annotations

import pytest
from typer.testing import CliRunner

from offshore_logistics.cli import app

runner = CliRunner()


@pytest.fixture
def cost_csv(tmp_path):
    path = tmp_path / "costs.csv"
    path.write_text(
        "LC Number,Rig Location,Month-Year,Alloc (days)\n"
        "10140,Mad Dog Drilling,Jun-25,12.5\n"
        "10052,Thunder Horse PDQ,Jun-25,30\n"
        ",Argos,Jun-25,4\n"
    )
    return path


@pytest.fixture
def bulk_csv(tmp_path):
    path = tmp_path / "bulk.csv"
    path.write_text(
        "Vessel Name,Start Date,Action,Qty,Unit,Bulk Type,At Port\n"
        "Pelican Island,2025-02-10,Offload,100,bbl,Methanol,Argos\n"
        "Pelican Island,2025-02-10,Offload,500,bbl,Diesel,Argos\n"
        "Lightning,2025-02-11,Offload,50,bbl,Methanol,Ocean BlackLion\n"
    )
    return path


# ---------------------------------------------------------------------------
# normalize
# ---------------------------------------------------------------------------


def test_normalize_summary(cost_csv):
    result = runner.invoke(app, ["normalize", str(cost_csv), "--source", "cost_allocation"])
    assert result.exit_code == 0
    assert "2 record(s)" in result.output
    assert "1 rejected" in result.output
    assert "Diagnostics" in result.output


def test_normalize_missing_file(tmp_path):
    result = runner.invoke(app, ["normalize", str(tmp_path / "nope.csv"), "--source", "manifest"])
    assert result.exit_code == 1
    assert "File not found" in result.output


def test_normalize_unknown_source(cost_csv):
    result = runner.invoke(app, ["normalize", str(cost_csv), "--source", "invoices"])
    assert result.exit_code == 1
    assert "Unknown source type" in result.output


# ---------------------------------------------------------------------------
# metric
# ---------------------------------------------------------------------------


def test_metric_production_chemical_volume(bulk_csv):
    result = runner.invoke(app, ["metric", "production_chemical_volume", str(bulk_csv), "--source", "bulk_action"])
    assert result.exit_code == 0
    assert "100.00" in result.output
    assert "bbl" in result.output


def test_metric_unknown_name(bulk_csv):
    result = runner.invoke(app, ["metric", "fuel_burn", str(bulk_csv), "--source", "bulk_action"])
    assert result.exit_code == 1
    assert "Unknown metric" in result.output


# ---------------------------------------------------------------------------
# catalog
# ---------------------------------------------------------------------------


def test_catalog_lists_facilities():
    result = runner.invoke(app, ["catalog"])
    assert result.exit_code == 0
    assert "Facilities (17)" in result.output
    assert "Argos" in result.output


def test_bad_catalog_file_exits_2(tmp_path):
    bad = tmp_path / "bad.yaml"
    bad.write_text("facilities: [unclosed\n")
    result = runner.invoke(app, ["--catalog", str(bad), "catalog"])
    assert result.exit_code == 2
    assert "Cannot load reference catalog" in result.output
