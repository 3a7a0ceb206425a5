"""LC (cost-allocation code) classification against facility cost pools.

classify_lc is a pure lookup: the answer depends only on the LC number and the
facility's reference data. An LC present in both the drilling and production
pool is reported as AMBIGUOUS (with a logged warning) and never coerced to
one side. The department fallback is a separate, explicitly tagged step
that callers opt into when the lookup comes back UNKNOWN.
"""
from __future__ import annotations

import logging

from offshore_logistics.models.base import LCClassificationEnum, OperationTypeEnum
from offshore_logistics.modules.catalog import ReferenceCatalog

logger = logging.getLogger(__name__)

# Free-text project type / department -> operation type
_DEPARTMENT_FALLBACK: dict[str, OperationTypeEnum] = {
    "drilling": OperationTypeEnum.DRILLING,
    "completions": OperationTypeEnum.DRILLING,
    "completion": OperationTypeEnum.DRILLING,
    "production": OperationTypeEnum.PRODUCTION,
    "maintenance": OperationTypeEnum.PRODUCTION,
    "operator sharing": OperationTypeEnum.LOGISTICS,
    "logistics": OperationTypeEnum.LOGISTICS,
}

LC_TO_OPERATION: dict[LCClassificationEnum, OperationTypeEnum] = {
    LCClassificationEnum.DRILLING: OperationTypeEnum.DRILLING,
    LCClassificationEnum.PRODUCTION: OperationTypeEnum.PRODUCTION,
    LCClassificationEnum.AMBIGUOUS: OperationTypeEnum.AMBIGUOUS,
    LCClassificationEnum.UNKNOWN: OperationTypeEnum.UNCLASSIFIED,
}


def normalize_lc(lc_number) -> str:
    """Canonical LC text: "10140.0" and 10140 both become "10140"."""
    text = str(lc_number).strip()
    if text.endswith(".0") and text[:-2].isdigit():
        text = text[:-2]
    return text


def classify_lc(lc_number, facility_id: str, catalog: ReferenceCatalog) -> LCClassificationEnum:
    """Classify *lc_number* against one facility's drilling and production pools.

    Integrated facilities use the union of their children's pools, so an LC
    declared by both the drilling and production child is AMBIGUOUS at the
    parent.
    """
    if catalog.facility(facility_id) is None:
        return LCClassificationEnum.UNKNOWN
    lc = normalize_lc(lc_number)
    drilling, production = catalog.effective_lc_sets(facility_id)
    in_drilling = lc in drilling
    in_production = lc in production
    if in_drilling and in_production:
        logger.warning(
            "LC %s is in both drilling and production pools for facility %s",
            lc, facility_id,
        )
        return LCClassificationEnum.AMBIGUOUS
    if in_drilling:
        return LCClassificationEnum.DRILLING
    if in_production:
        return LCClassificationEnum.PRODUCTION
    return LCClassificationEnum.UNKNOWN


def owning_facility(lc_number, facility_id: str | None, catalog: ReferenceCatalog) -> str | None:
    """The single facility that declares *lc_number*, preferring *facility_id* and its children.

    Used to pin records to the operational identity that actually bills the
    LC (e.g. Thunder Horse PDQ text + production LC -> Thunder Horse Prod).
    Returns None when no facility, or more than one unrelated facility,
    declares the LC.
    """
    owners = catalog.lc_owners(normalize_lc(lc_number))
    if not owners:
        return None
    if facility_id is not None:
        related = [o for o in owners if o == facility_id or o in catalog.children(facility_id)]
        if len(related) == 1:
            return related[0]
        if related:
            return None
    return owners[0] if len(owners) == 1 else None


def department_fallback(department: str | None) -> OperationTypeEnum | None:
    """Operation type implied by a free-text department/project type, if recognised."""
    if not department:
        return None
    key = " ".join(department.split()).casefold()
    if key in _DEPARTMENT_FALLBACK:
        return _DEPARTMENT_FALLBACK[key]
    for name, operation in _DEPARTMENT_FALLBACK.items():
        if name in key:
            return operation
    return None
