"""Create patients, notes and extracted_mentions

Revision ID: initial_schema
Revises:
Create Date: 2026-10-17

"""
from alembic import op
import sqlalchemy as sa

revision = "initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "patients",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("patient_id", sa.String(64), nullable=False),
        sa.Column("patient_name", sa.String(255), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_patients_patient_id", "patients", ["patient_id"], unique=True)

    op.create_table(
        "notes",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("patient_id", sa.String(64), sa.ForeignKey("patients.patient_id"), nullable=False),
        sa.Column("dos_date", sa.Date(), nullable=False),
        sa.Column("note_text", sa.Text(), nullable=False),
        sa.Column("provider_id", sa.String(64), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_notes_patient_id", "notes", ["patient_id"])

    op.create_table(
        "extracted_mentions",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("mention_id", sa.String(128), nullable=False),
        sa.Column("patient_id", sa.String(64), sa.ForeignKey("patients.patient_id"), nullable=False),
        sa.Column("note_id", sa.Integer(), sa.ForeignKey("notes.id"), nullable=True),
        sa.Column("dos_date", sa.Date(), nullable=True),
        sa.Column("symptom_segment", sa.String(255), nullable=False),
        sa.Column("symptom_id", sa.String(64), nullable=True),
        sa.Column("diagnosis", sa.String(255), nullable=True),
        sa.Column("diagnosis_icd10_code", sa.String(32), nullable=True),
        sa.Column("diagnostic_category", sa.String(255), nullable=True),
        sa.Column("symp_prob", sa.String(32), nullable=True),
        sa.Column("zcode_hrsn", sa.String(32), nullable=True),
        sa.Column("position_in_text", sa.Integer(), nullable=True),
        sa.Column("housing_status", sa.String(64), nullable=True),
        sa.Column("food_status", sa.String(64), nullable=True),
        sa.Column("financial_status", sa.String(64), nullable=True),
        sa.Column("transportation_needs", sa.String(64), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_extracted_mentions_mention_id", "extracted_mentions", ["mention_id"], unique=True)
    op.create_index("ix_extracted_mentions_note_id", "extracted_mentions", ["note_id"])
    op.create_index("idx_extracted_mentions_patient_type", "extracted_mentions", ["patient_id", "symp_prob"])
    op.create_index("idx_extracted_mentions_patient_date", "extracted_mentions", ["patient_id", "dos_date"])


def downgrade() -> None:
    op.drop_table("extracted_mentions")
    op.drop_table("notes")
    op.drop_table("patients")
