"""Tests for LC classification against facility cost pools (lc_classifier.py).

Covers:
- Every LC in a drilling/production set classifies to that pool
- Ambiguous LCs (in both pools of an integrated parent) are flagged, never coerced
- Unknown LCs and unknown facilities
- LC 10140 belongs to Deepwater Invictus and never to Mad Dog
- Department fallback mapping
"""
import logging

import pytest

from offshore_logistics.models.base import FacilityTypeEnum, LCClassificationEnum, OperationTypeEnum
from offshore_logistics.models.reference import Facility
from offshore_logistics.modules.catalog import ReferenceCatalog
from offshore_logistics.modules.lc_classifier import (
    classify_lc,
    department_fallback,
    normalize_lc,
    owning_facility,
)


class TestCatalogPools:
    def test_every_declared_lc_classifies_to_its_pool(self, bundled_catalog):
        for facility in bundled_catalog.facilities.values():
            for lc in facility.drilling_lcs:
                assert classify_lc(lc, facility.id, bundled_catalog) == LCClassificationEnum.DRILLING
            for lc in facility.production_lcs:
                assert classify_lc(lc, facility.id, bundled_catalog) == LCClassificationEnum.PRODUCTION

    def test_synthetic_pools(self, catalog):
        assert classify_lc("200", "alpha-drilling", catalog) == LCClassificationEnum.DRILLING
        assert classify_lc("100", "alpha-prod", catalog) == LCClassificationEnum.PRODUCTION

    def test_parent_sees_children_pools(self, catalog):
        assert classify_lc("200", "alpha", catalog) == LCClassificationEnum.DRILLING
        assert classify_lc("101", "alpha", catalog) == LCClassificationEnum.PRODUCTION

    def test_numeric_and_float_lc_input(self, catalog):
        assert classify_lc(300, "bravo", catalog) == LCClassificationEnum.DRILLING
        assert classify_lc("300.0", "bravo", catalog) == LCClassificationEnum.DRILLING


class TestUnknownAndAmbiguous:
    def test_unknown_lc(self, catalog):
        assert classify_lc("555", "bravo", catalog) == LCClassificationEnum.UNKNOWN

    def test_unknown_facility(self, catalog):
        assert classify_lc("300", "nowhere", catalog) == LCClassificationEnum.UNKNOWN

    def test_lc_from_other_facility_is_unknown(self, catalog):
        assert classify_lc("300", "charlie", catalog) == LCClassificationEnum.UNKNOWN

    def test_overlap_between_children_is_ambiguous_at_parent(self, caplog):
        catalog = ReferenceCatalog(facilities=[
            Facility(id="p", name="P", facility_type=FacilityTypeEnum.INTEGRATED),
            Facility(id="p-d", name="P Drilling", facility_type=FacilityTypeEnum.DRILLING_RIG,
                     drilling_lcs=frozenset({"7"}), parent_id="p"),
            Facility(id="p-p", name="P Prod", facility_type=FacilityTypeEnum.PRODUCTION_PLATFORM,
                     production_lcs=frozenset({"7"}), parent_id="p"),
        ])
        with caplog.at_level(logging.WARNING):
            assert classify_lc("7", "p", catalog) == LCClassificationEnum.AMBIGUOUS
        assert "both drilling and production" in caplog.text
        # each child on its own is unambiguous
        assert classify_lc("7", "p-d", catalog) == LCClassificationEnum.DRILLING


class TestDeepwaterInvictusScenario:
    def test_10140_is_invictus_drilling(self, bundled_catalog):
        assert classify_lc("10140", "deepwater-invictus", bundled_catalog) == LCClassificationEnum.DRILLING

    @pytest.mark.parametrize("facility_id", ["mad-dog", "mad-dog-prod", "mad-dog-drilling"])
    def test_10140_is_not_mad_dog(self, bundled_catalog, facility_id):
        assert classify_lc("10140", facility_id, bundled_catalog) == LCClassificationEnum.UNKNOWN

    def test_owner_overrides_wrong_location(self, bundled_catalog):
        assert owning_facility("10140", "mad-dog", bundled_catalog) == "deepwater-invictus"


class TestOwningFacility:
    def test_narrows_parent_to_child(self, catalog):
        assert owning_facility("100", "alpha", catalog) == "alpha-prod"

    def test_no_owner(self, catalog):
        assert owning_facility("555", "alpha", catalog) is None

    def test_unresolved_location_uses_owner(self, catalog):
        assert owning_facility("400", None, catalog) == "charlie"


class TestDepartmentFallback:
    @pytest.mark.parametrize("text,expected", [
        ("Drilling", OperationTypeEnum.DRILLING),
        ("Completions", OperationTypeEnum.DRILLING),
        ("Production", OperationTypeEnum.PRODUCTION),
        ("maintenance", OperationTypeEnum.PRODUCTION),
        ("Operator Sharing", OperationTypeEnum.LOGISTICS),
    ])
    def test_mapping(self, text, expected):
        assert department_fallback(text) == expected

    @pytest.mark.parametrize("text", [None, "", "Marketing"])
    def test_unrecognised(self, text):
        assert department_fallback(text) is None

    def test_normalize_lc(self):
        assert normalize_lc(" 9358 ") == "9358"
        assert normalize_lc(10140.0) == "10140"
