"""Shared fixtures: a small synthetic catalog and the bundled reference catalog."""
import pytest

from offshore_logistics.models.base import FacilityTypeEnum, VesselClassEnum
from offshore_logistics.models.reference import Facility, Vessel
from offshore_logistics.modules.catalog import ReferenceCatalog, load_catalog


def make_catalog(**overrides) -> ReferenceCatalog:
    """Synthetic catalog with one integrated facility split into drilling and production."""
    facilities = [
        Facility(id="alpha", name="Alpha", facility_type=FacilityTypeEnum.INTEGRATED,
                 aliases=frozenset({"alpha"})),
        Facility(id="alpha-prod", name="Alpha Prod", facility_type=FacilityTypeEnum.PRODUCTION_PLATFORM,
                 aliases=frozenset({"alpha prod", "ap"}), production_lcs=frozenset({"100", "101"}),
                 parent_id="alpha"),
        Facility(id="alpha-drilling", name="Alpha Drilling", facility_type=FacilityTypeEnum.DRILLING_RIG,
                 aliases=frozenset({"alpha drilling", "ad"}), drilling_lcs=frozenset({"200"}),
                 parent_id="alpha"),
        Facility(id="bravo", name="Bravo", facility_type=FacilityTypeEnum.DRILLING_RIG,
                 aliases=frozenset({"bravo rig"}), drilling_lcs=frozenset({"300", "301"})),
        Facility(id="charlie", name="Charlie", facility_type=FacilityTypeEnum.PRODUCTION_PLATFORM,
                 production_lcs=frozenset({"400"})),
    ]
    vessels = [
        Vessel(id="sea-hawk", name="Sea Hawk", in_fleet=True, vessel_class=VesselClassEnum.PSV),
        Vessel(id="blue-marlin", name="Blue Marlin", in_fleet=True, vessel_class=VesselClassEnum.OSV,
               aliases=frozenset({"B. Marlin"})),
        Vessel(id="tramp", name="Tramp Star", in_fleet=False),
    ]
    kwargs = dict(
        facilities=facilities,
        vessels=vessels,
        baseline_fleet=["sea-hawk"],
        port_markers=["fourchon", "port", "dock"],
        logistics_lcs=["999"],
    )
    kwargs.update(overrides)
    return ReferenceCatalog(**kwargs)


@pytest.fixture
def catalog():
    return make_catalog()


@pytest.fixture(scope="session")
def bundled_catalog():
    return load_catalog()


@pytest.fixture
def catalog_factory():
    """make_catalog, for tests that need a variant of the synthetic catalog."""
    return make_catalog
