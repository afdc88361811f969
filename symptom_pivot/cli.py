import argparse
import logging
import sys
from datetime import date, timedelta

from .config import get_settings
from .database import SessionLocal, init_db
from .models.mention import ExtractedMention, HRSN_MARKER, SympProb
from .models.note import Note
from .models.patient import Patient
from .services.ingestion import import_mentions_csv

logger = logging.getLogger(__name__)

DEMO_PATIENT_ID = "DEMO-1"

# (days after first visit, symptom, diagnosis, diagnostic category, symp_prob, zcode_hrsn)
DEMO_MENTIONS = [
    (0, "Anxiety", "Generalized anxiety disorder", "Anxiety Disorders", SympProb.SYMPTOM.value, None),
    (0, "Anxiety", "Generalized anxiety disorder", "Anxiety Disorders", SympProb.SYMPTOM.value, None),
    (0, "Insomnia", "Major depressive disorder", "Depressive Disorders", SympProb.SYMPTOM.value, None),
    (14, "Insomnia", "Major depressive disorder", "Depressive Disorders", SympProb.SYMPTOM.value, None),
    (14, "Low mood", "Major depressive disorder", "Depressive Disorders", SympProb.SYMPTOM.value, None),
    (14, "Housing instability", None, None, SympProb.PROBLEM.value, HRSN_MARKER),
    (28, "Anxiety", "Generalized anxiety disorder", "Anxiety Disorders", SympProb.SYMPTOM.value, None),
    (28, "Food insecurity", None, None, SympProb.PROBLEM.value, HRSN_MARKER),
]


def seed_demo() -> None:
    db = SessionLocal()
    try:
        existing = db.query(Patient).filter(Patient.patient_id == DEMO_PATIENT_ID).first()
        if existing:
            print(f"Demo patient already exists: {existing.patient_id}")
            print("No changes made. This is expected if you've already run this command.")
            return

        db.add(Patient(patient_id=DEMO_PATIENT_ID, patient_name="Demo Patient"))
        db.flush()

        first_visit = date.today() - timedelta(days=60)
        notes = {}
        for position, (offset, segment, diagnosis, category, symp_prob, zcode) in enumerate(DEMO_MENTIONS):
            dos = first_visit + timedelta(days=offset)
            if dos not in notes:
                note = Note(patient_id=DEMO_PATIENT_ID, dos_date=dos, note_text=f"Demo session note {dos.isoformat()}")
                db.add(note)
                db.flush()
                notes[dos] = note
            db.add(ExtractedMention(
                mention_id=f"{DEMO_PATIENT_ID}-{position}",
                patient_id=DEMO_PATIENT_ID,
                note_id=notes[dos].id,
                dos_date=dos,
                symptom_segment=segment,
                diagnosis=diagnosis,
                diagnostic_category=category,
                symp_prob=symp_prob,
                zcode_hrsn=zcode,
                position_in_text=position,
            ))

        db.commit()
        print(f"Created demo patient {DEMO_PATIENT_ID} with {len(notes)} notes and {len(DEMO_MENTIONS)} mentions")
    finally:
        db.close()


def import_mentions(path: str) -> int:
    with open(path, encoding="utf-8-sig") as fh:
        content = fh.read()

    db = SessionLocal()
    try:
        try:
            summary = import_mentions_csv(db, content)
        except ValueError as e:
            print(f"ERROR: {e}")
            return 1
        db.commit()
    finally:
        db.close()

    print(
        f"Received {summary.total_received}, created {summary.created}, skipped {summary.skipped}, "
        f"new patients {summary.patients_created}, undated {summary.undated}"
    )
    for error in summary.errors:
        print(f"  {error}")
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="symptom-pivot")
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("init-db", help="Create database tables")
    sub.add_parser("seed-demo", help="Create a demo patient with notes and mentions")
    import_parser = sub.add_parser("import-mentions", help="Import extracted mentions from a CSV file")
    import_parser.add_argument("path")

    args = parser.parse_args(argv)
    logging.basicConfig(level=get_settings().log_level.upper())

    init_db()
    if args.command == "seed-demo":
        seed_demo()
    elif args.command == "import-mentions":
        return import_mentions(args.path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
