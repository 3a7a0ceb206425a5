"""Reference catalog loading and lookup.

The catalog is built once from YAML and never mutated. Resolvers and
classifiers take it as an explicit argument, so tests can construct small
synthetic catalogs with ``ReferenceCatalog(facilities=..., vessels=...)``.

Load-time checks (any failure raises CatalogLoadFailure):
  1. The file exists and parses as a YAML mapping.
  2. The document validates against CatalogDocument.
  3. Facility and vessel ids are unique; parent ids and baseline fleet ids exist.
  4. No facility declares the same LC in both its drilling and production set.
"""
from __future__ import annotations

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Mapping

import yaml
from pydantic import ValidationError

from offshore_logistics.config import settings
from offshore_logistics.models.reference import CatalogDocument, Facility, Vessel
from offshore_logistics.utils.text import tokenize

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent.parent / "data" / "reference_catalog.yaml"


class CatalogLoadFailure(Exception):
    """Reference data is missing or violates an integrity rule; nothing can be classified."""


class ReferenceCatalog:
    """Immutable facility/vessel reference data plus derived lookup indexes."""

    __slots__ = (
        "_facilities", "_vessels", "_children", "_lc_owners",
        "baseline_fleet", "port_markers", "logistics_lcs",
    )

    def __init__(
        self,
        facilities: Iterable[Facility],
        vessels: Iterable[Vessel] = (),
        baseline_fleet: Iterable[str] = (),
        port_markers: Iterable[str] = (),
        logistics_lcs: Iterable[str] = (),
    ):
        facilities = list(facilities)
        vessels = list(vessels)
        _check_unique("facility", [f.id for f in facilities])
        _check_unique("vessel", [v.id for v in vessels])

        facility_map = {f.id: f for f in facilities}
        vessel_map = {v.id: v for v in vessels}

        children: dict[str, list[str]] = {}
        lc_owners: dict[str, list[str]] = {}
        for facility in facilities:
            overlap = facility.drilling_lcs & facility.production_lcs
            if overlap:
                raise CatalogLoadFailure(
                    f"Facility '{facility.id}' lists LC(s) {sorted(overlap)} in both "
                    "drilling and production sets"
                )
            if facility.parent_id is not None:
                if facility.parent_id not in facility_map:
                    raise CatalogLoadFailure(
                        f"Facility '{facility.id}' references unknown parent '{facility.parent_id}'"
                    )
                children.setdefault(facility.parent_id, []).append(facility.id)
            for lc in facility.drilling_lcs | facility.production_lcs:
                lc_owners.setdefault(lc, []).append(facility.id)

        baseline = frozenset(baseline_fleet)
        missing = baseline - vessel_map.keys()
        if missing:
            raise CatalogLoadFailure(f"Baseline fleet references unknown vessel(s): {sorted(missing)}")

        self._facilities = MappingProxyType(facility_map)
        self._vessels = MappingProxyType(vessel_map)
        self._children = MappingProxyType({k: tuple(v) for k, v in children.items()})
        self._lc_owners = MappingProxyType({k: tuple(v) for k, v in lc_owners.items()})
        self.baseline_fleet = baseline
        self.port_markers = tuple(tokenize(" ".join(port_markers)))
        self.logistics_lcs = frozenset(str(lc) for lc in logistics_lcs)

    def __setattr__(self, name, value):
        if hasattr(self, name):
            raise AttributeError(f"ReferenceCatalog is immutable; cannot reassign '{name}'")
        super().__setattr__(name, value)

    @property
    def facilities(self) -> Mapping[str, Facility]:
        return self._facilities

    @property
    def vessels(self) -> Mapping[str, Vessel]:
        return self._vessels

    def facility(self, facility_id: str) -> Facility | None:
        return self._facilities.get(facility_id)

    def vessel(self, vessel_id: str) -> Vessel | None:
        return self._vessels.get(vessel_id)

    def children(self, facility_id: str) -> tuple[str, ...]:
        return self._children.get(facility_id, ())

    def lc_owners(self, lc_number: str) -> tuple[str, ...]:
        """Facilities whose declared drilling or production set contains *lc_number*."""
        return self._lc_owners.get(str(lc_number).strip(), ())

    def effective_lc_sets(self, facility_id: str) -> tuple[frozenset[str], frozenset[str]]:
        """(drilling, production) LC sets, unioned over children for integrated parents."""
        facility = self._facilities[facility_id]
        drilling = set(facility.drilling_lcs)
        production = set(facility.production_lcs)
        for child_id in self.children(facility_id):
            child = self._facilities[child_id]
            drilling |= child.drilling_lcs
            production |= child.production_lcs
        return frozenset(drilling), frozenset(production)

    def is_port_location(self, text: str | None) -> bool:
        """True when *text* names a shore base or port rather than an offshore facility."""
        tokens = tokenize(text)
        return any(marker in tokens for marker in self.port_markers)


def _check_unique(kind: str, ids: list[str]) -> None:
    seen: set[str] = set()
    for item in ids:
        if item in seen:
            raise CatalogLoadFailure(f"Duplicate {kind} id '{item}'")
        seen.add(item)


def catalog_from_document(data: dict) -> ReferenceCatalog:
    try:
        document = CatalogDocument.model_validate(data)
    except ValidationError as exc:
        raise CatalogLoadFailure(f"Invalid reference catalog: {exc}") from exc
    return ReferenceCatalog(
        facilities=document.facilities,
        vessels=document.vessels,
        baseline_fleet=document.baseline_fleet,
        port_markers=document.port_markers,
        logistics_lcs=document.logistics_lcs,
    )


def load_catalog(path: str | Path | None = None) -> ReferenceCatalog:
    """Read and validate a reference catalog YAML file."""
    if path is None:
        path = settings.REFERENCE_CATALOG or DEFAULT_CATALOG_PATH
    config_path = Path(path)
    if not config_path.exists():
        raise CatalogLoadFailure(f"Reference catalog not found at {config_path}")
    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise CatalogLoadFailure(f"Reference catalog {config_path} is not valid YAML: {exc}") from exc
    if not isinstance(data, dict):
        raise CatalogLoadFailure(f"Reference catalog {config_path} must be a mapping")

    catalog = catalog_from_document(data)
    logger.info(
        "Loaded reference catalog from %s: %d facilities, %d vessels",
        config_path, len(catalog.facilities), len(catalog.vessels),
    )
    return catalog


_CATALOG: ReferenceCatalog | None = None


def get_catalog() -> ReferenceCatalog:
    """Process-wide catalog, loaded on first use."""
    global _CATALOG
    if _CATALOG is None:
        _CATALOG = load_catalog()
    return _CATALOG


def reload_catalog(path: str | Path | None = None) -> ReferenceCatalog:
    """Load a fresh catalog and swap it in whole; readers never see a partial update."""
    global _CATALOG
    _CATALOG = load_catalog(path)
    return _CATALOG
