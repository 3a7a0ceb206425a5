"""Offshore logistics normalization, classification and derived metrics.

Public entry points:
  normalize(raw_rows, source_type)           -> (records, diagnostics)
  compute_metric(name, records, scope)       -> MetricResult
  classify_lc / resolve_facility / resolve_vessel for reuse by filtering UIs
"""

__version__ = "0.1.0"

from offshore_logistics.modules.catalog import CatalogLoadFailure, ReferenceCatalog, get_catalog, load_catalog
from offshore_logistics.modules.ingest import normalize
from offshore_logistics.modules.lc_classifier import classify_lc
from offshore_logistics.modules.location_resolver import resolve_facility
from offshore_logistics.modules.metrics import compute_metric
from offshore_logistics.modules.vessel_resolver import resolve_vessel
