import csv
import io
import logging
from typing import Dict, List, Optional, Tuple

from pydantic import ValidationError

from ..dimensions import get_mapped_field_value, resolve_field_name
from ..schemas.mention import MentionRecord
from ..utils.dates import parse_service_date

logger = logging.getLogger(__name__)

REQUIRED_MENTION_FIELDS = ("mention_id", "patient_id", "symptom_segment")

OPTIONAL_TEXT_FIELDS = (
    "patient_name",
    "symptom_id",
    "diagnosis",
    "diagnosis_icd10_code",
    "diagnostic_category",
    "symp_prob",
    "zcode_hrsn",
    "housing_status",
    "food_status",
    "financial_status",
    "transportation_needs",
)


def parse_mentions_csv(content: str) -> List[Dict]:
    reader = csv.DictReader(io.StringIO(content))
    fieldnames = [name.strip() for name in (reader.fieldnames or [])]
    reader.fieldnames = fieldnames
    missing = [f for f in REQUIRED_MENTION_FIELDS if resolve_field_name(fieldnames, f) is None]
    if missing:
        raise ValueError(f"Mentions CSV missing required columns: {', '.join(sorted(missing))}")
    return list(reader)


def _text(row: Dict, field: str) -> Optional[str]:
    value = get_mapped_field_value(row, field)
    if value is None:
        return None
    return str(value).strip() or None


def _int(row: Dict, field: str) -> Optional[int]:
    value = _text(row, field)
    return int(value) if value is not None else None


def build_mention_records(rows: List[Dict]) -> Tuple[List[MentionRecord], List[str]]:
    """Turn CSV rows into MentionRecords, resolving legacy column names.

    Rows that fail validation are reported in the returned error list. An
    unparsable date of service is kept as ``None``.
    """
    records: List[MentionRecord] = []
    errors: List[str] = []

    for line_no, row in enumerate(rows, start=2):
        raw_date = _text(row, "dos_date")
        dos_date = parse_service_date(raw_date)
        if raw_date is not None and dos_date is None:
            logger.warning("Unparsable date of service on line %d: %r", line_no, raw_date)

        try:
            record = MentionRecord(
                mention_id=_text(row, "mention_id") or "",
                patient_id=_text(row, "patient_id") or "",
                note_id=_int(row, "note_id"),
                dos_date=dos_date,
                symptom_segment=_text(row, "symptom_segment") or "",
                position_in_text=_int(row, "position_in_text"),
                **{field: _text(row, field) for field in OPTIONAL_TEXT_FIELDS},
            )
        except (ValidationError, ValueError) as e:
            logger.warning("Skipping invalid mention row on line %d: %s", line_no, e)
            errors.append(f"line {line_no}: {e}")
            continue
        records.append(record)

    return records, errors
