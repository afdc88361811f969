import logging
from typing import List, Set

from sqlalchemy.orm import Session

from ..integrations.csv_parser import build_mention_records, parse_mentions_csv
from ..models.mention import ExtractedMention
from ..models.patient import Patient
from ..schemas.mention import IngestionSummary, MentionRecord

logger = logging.getLogger(__name__)


def _ensure_patient(db: Session, record: MentionRecord) -> bool:
    existing = db.query(Patient.id).filter(Patient.patient_id == record.patient_id).first()
    if existing:
        return False
    db.add(Patient(patient_id=record.patient_id, patient_name=record.patient_name))
    db.flush()
    return True


def ingest_mentions(db: Session, records: List[MentionRecord]) -> IngestionSummary:
    """Insert extracted mentions, skipping any whose mention_id is already stored.

    Each record runs in its own savepoint, so a row rejected by the database
    rolls back alone (including a patient created for it) and the rest of the
    batch still goes in. The caller owns the outer transaction and commits.
    """
    created = 0
    skipped = 0
    patients_created = 0
    undated = 0
    errors: List[str] = []
    seen_mentions: Set[str] = set()

    for record in records:
        if record.mention_id in seen_mentions:
            skipped += 1
            continue
        seen_mentions.add(record.mention_id)

        try:
            with db.begin_nested():
                existing = db.query(ExtractedMention.id).filter(
                    ExtractedMention.mention_id == record.mention_id,
                ).first()
                already_stored = existing is not None
                new_patient = False
                if not already_stored:
                    new_patient = _ensure_patient(db, record)
                    db.add(ExtractedMention(**record.model_dump(exclude={"patient_name"})))
                    db.flush()
        except Exception as e:
            logger.error("Failed to ingest mention %s: %s", record.mention_id, str(e))
            errors.append(f"{record.mention_id}: {str(e)}")
            continue

        if already_stored:
            skipped += 1
            continue
        created += 1
        if new_patient:
            patients_created += 1
        if record.dos_date is None:
            undated += 1

    logger.info(
        "Ingested mentions: received=%d, created=%d, skipped=%d, undated=%d, errors=%d",
        len(records), created, skipped, undated, len(errors),
    )

    return IngestionSummary(
        total_received=len(records),
        created=created,
        skipped=skipped,
        patients_created=patients_created,
        undated=undated,
        errors=errors,
    )


def import_mentions_csv(db: Session, content: str) -> IngestionSummary:
    rows = parse_mentions_csv(content)
    records, row_errors = build_mention_records(rows)
    summary = ingest_mentions(db, records)
    summary.total_received = len(rows)
    summary.errors = row_errors + summary.errors
    return summary
