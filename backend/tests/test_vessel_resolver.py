"""Tests for vessel name resolution (vessel_resolver.py)."""
import logging

import pytest

from offshore_logistics.modules.vessel_resolver import is_in_fleet, match_vessel, resolve_vessel


class TestExactAndCompressed:
    @pytest.mark.parametrize("text", [
        "Pelican Island",
        "pelican island",
        "PELICANISLAND",
        "pelicanisland",
        "M/V Pelican-Island",
        "  Pelican   Island ",
    ])
    def test_pelican_island_variants(self, bundled_catalog, text):
        assert resolve_vessel(text, bundled_catalog) == "pelican-island"

    def test_exact_match_type(self, catalog):
        assert match_vessel("Sea Hawk", catalog).match_type == "exact"

    def test_alias(self, catalog):
        assert resolve_vessel("B. Marlin", catalog) == "blue-marlin"


class TestContainment:
    def test_suffix_noise(self, bundled_catalog):
        assert resolve_vessel("Pelican Island (HOS)", bundled_catalog) == "pelican-island"

    def test_longest_alias_preferred(self, bundled_catalog):
        assert resolve_vessel("Fast Goliath 2025", bundled_catalog) == "fast-goliath"

    def test_compressed_alias_as_token(self, bundled_catalog):
        assert resolve_vessel("PelicanIsland HOS", bundled_catalog) == "pelican-island"

    @pytest.mark.parametrize("text", [
        "HOS Chamberlain",
        "Squalling Star",
        "Fast Giantess",
        "Shipislander",
    ])
    def test_alias_inside_longer_word_does_not_match(self, bundled_catalog, text):
        assert resolve_vessel(text, bundled_catalog) is None

    def test_whole_token_matches_but_embedded_prefix_does_not(self, bundled_catalog):
        match = match_vessel("Squall Runner Two", bundled_catalog)
        assert match is not None and match.match_type == "contains"
        assert match_vessel("Squallmaster", bundled_catalog) is None


class TestFuzzy:
    def test_typo_matches_with_warning(self, catalog, caplog):
        with caplog.at_level(logging.WARNING):
            match = match_vessel("Blue Marlim", catalog, threshold=85)
        assert match is not None
        assert match.vessel_id == "blue-marlin"
        assert match.match_type == "fuzzy_name"
        assert "Low-confidence" in caplog.text

    def test_below_threshold_unresolved(self, catalog):
        assert match_vessel("Completely Different", catalog) is None


class TestUnresolvedAndFleet:
    @pytest.mark.parametrize("text", [None, "", "   "])
    def test_blank(self, catalog, text):
        assert resolve_vessel(text, catalog) is None

    def test_fleet_membership(self, catalog):
        assert is_in_fleet("sea-hawk", catalog) is True
        assert is_in_fleet("tramp", catalog) is False
        assert is_in_fleet(None, catalog) is False
        assert is_in_fleet("ghost", catalog) is False
