"""Tests for bulk fluid categorisation (fluid_classifier.py)."""
import pytest

from offshore_logistics.models.base import FluidCategoryEnum
from offshore_logistics.modules.fluid_classifier import classify_fluid, is_fuel


class TestFuel:
    @pytest.mark.parametrize("text", ["Diesel", "DIESEL", "Fuel", "Gas Oil", "Marine Gas Oil", "MGO", "fuel oil"])
    def test_fuel_variants(self, text):
        assert is_fuel(text)
        assert classify_fluid(text) == FluidCategoryEnum.FUEL

    def test_fuel_overrides_chemical(self):
        assert classify_fluid("Methanol", "diesel blend") == FluidCategoryEnum.FUEL

    @pytest.mark.parametrize("text", ["Base Oil", "Methanol", "Brine", "", None])
    def test_not_fuel(self, text):
        assert not is_fuel(text)


class TestCategories:
    @pytest.mark.parametrize("bulk_type,description,expected", [
        ("SBM", None, FluidCategoryEnum.DRILLING),
        ("Base Oil", None, FluidCategoryEnum.DRILLING),
        ("WBM Premix", None, FluidCategoryEnum.DRILLING),
        ("Calcium Bromide", None, FluidCategoryEnum.COMPLETION),
        ("KCl Brine", None, FluidCategoryEnum.COMPLETION),
        ("Methanol", None, FluidCategoryEnum.PRODUCTION_CHEMICAL),
        ("Chemical", "Scale Inhibitor", FluidCategoryEnum.PRODUCTION_CHEMICAL),
        ("Xylene", None, FluidCategoryEnum.PRODUCTION_CHEMICAL),
        ("Calcium Nitrate", None, FluidCategoryEnum.PRODUCTION_CHEMICAL),
        ("Potable Water", None, FluidCategoryEnum.UTILITY),
        ("Cement", None, FluidCategoryEnum.OTHER),
        (None, None, FluidCategoryEnum.OTHER),
    ])
    def test_category(self, bulk_type, description, expected):
        assert classify_fluid(bulk_type, description) == expected
