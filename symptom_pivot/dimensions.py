from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from .errors import PivotValidationError


class DimensionType(str, Enum):
    SYMPTOM = "symptom"
    DIAGNOSIS = "diagnosis"
    DIAGNOSTIC_CATEGORY = "diagnostic-category"
    HRSN = "hrsn"


# Older dashboard builds still request these spellings.
DIMENSION_TYPE_ALIASES: Dict[str, DimensionType] = {
    "category": DimensionType.DIAGNOSTIC_CATEGORY,
    "diagnostic_category": DimensionType.DIAGNOSTIC_CATEGORY,
}


@dataclass(frozen=True)
class DimensionSpec:
    value_field: str
    symp_prob: Optional[str]
    include_hrsn_markers: bool = False


DIMENSION_SPECS: Dict[DimensionType, DimensionSpec] = {
    DimensionType.SYMPTOM: DimensionSpec("symptom_segment", "Symptom"),
    DimensionType.DIAGNOSIS: DimensionSpec("diagnosis", "Symptom"),
    DimensionType.DIAGNOSTIC_CATEGORY: DimensionSpec("diagnostic_category", "Symptom"),
    # HRSN rows are either flagged Z-code/HRSN or classified as a Problem.
    DimensionType.HRSN: DimensionSpec("symptom_segment", None, include_hrsn_markers=True),
}


# Canonical field name -> legacy names, in lookup order.
FIELD_ALIASES: Dict[str, Tuple[str, ...]] = {
    "patient_id": ("patientid", "patient_identifier", "medical_record_number", "mrn"),
    "patient_name": ("patientname", "name"),
    "mention_id": ("mentionid", "mention_key"),
    "note_id": ("noteid", "clinical_note_id"),
    "dos_date": ("date_of_service", "service_date", "encounter_date", "note_date", "date"),
    "symptom_segment": ("symptom", "symptom_text", "segment"),
    "diagnosis": ("diagnosis_name",),
    "diagnostic_category": ("category", "diagnosis_category"),
    "zcode_hrsn": ("z_code_hrsn", "zcode"),
    "symp_prob": ("symptom_problem",),
    "financial_status": ("financial_strain", "socioeconomic_status", "income_level", "financial_stability"),
    "housing_status": ("housing_insecurity", "housing_instability", "housing"),
    "food_status": ("food_insecurity", "nutrition_access", "food_stability", "food_access"),
    "transportation_needs": ("access_to_transportation", "transportation_access", "transportation"),
}


def parse_dimension_type(raw: str) -> DimensionType:
    key = (raw or "").strip().lower()
    try:
        return DimensionType(key)
    except ValueError:
        pass
    if key in DIMENSION_TYPE_ALIASES:
        return DIMENSION_TYPE_ALIASES[key]
    valid = ", ".join(d.value for d in DimensionType)
    raise PivotValidationError(f"Invalid dimension type '{raw}'. Expected one of: {valid}.")


def get_dimension_spec(dimension_type: DimensionType) -> DimensionSpec:
    return DIMENSION_SPECS[dimension_type]


def resolve_field_name(available_fields: Iterable[str], field: str) -> Optional[str]:
    """Return the concrete column name holding ``field``, or None.

    The canonical name wins; otherwise the first alias present is used.
    Resolve once per result set and index rows with the returned name.
    """
    available = set(available_fields)
    if field in available:
        return field
    for alias in FIELD_ALIASES.get(field, ()):
        if alias in available:
            return alias
    return None


def get_mapped_field_value(row: Mapping[str, Any], field: str, default: Any = None) -> Any:
    """Read ``field`` from an arbitrary-shaped row, falling back to legacy names.

    A key that is present wins even when its value is falsy (``""``, ``0``);
    ``default`` is returned only when neither the canonical name nor any alias
    is a key of ``row``.
    """
    if field in row:
        return row[field]
    for alias in FIELD_ALIASES.get(field, ()):
        if alias in row:
            return row[alias]
    return default
