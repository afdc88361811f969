from datetime import datetime
from enum import Enum

from sqlalchemy import Column, Integer, String, DateTime, Date, ForeignKey, Index
from sqlalchemy.orm import relationship

from ..database import Base


class SympProb(str, Enum):
    SYMPTOM = "Symptom"
    PROBLEM = "Problem"


HRSN_MARKER = "ZCode/HRSN"


class ExtractedMention(Base):
    __tablename__ = "extracted_mentions"
    __table_args__ = (
        Index("idx_extracted_mentions_patient_type", "patient_id", "symp_prob"),
        Index("idx_extracted_mentions_patient_date", "patient_id", "dos_date"),
    )

    id = Column(Integer, primary_key=True, index=True)
    mention_id = Column(String(128), unique=True, index=True, nullable=False)

    patient_id = Column(String(64), ForeignKey("patients.patient_id"), nullable=False)
    note_id = Column(Integer, ForeignKey("notes.id"), nullable=True, index=True)

    # Nullable: legacy imports carry dates that could not be parsed.
    dos_date = Column(Date, nullable=True)

    symptom_segment = Column(String(255), nullable=False)
    symptom_id = Column(String(64), nullable=True)
    diagnosis = Column(String(255), nullable=True)
    diagnosis_icd10_code = Column(String(32), nullable=True)
    diagnostic_category = Column(String(255), nullable=True)
    symp_prob = Column(String(32), nullable=True)
    zcode_hrsn = Column(String(32), nullable=True)
    position_in_text = Column(Integer, nullable=True)

    housing_status = Column(String(64), nullable=True)
    food_status = Column(String(64), nullable=True)
    financial_status = Column(String(64), nullable=True)
    transportation_needs = Column(String(64), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    patient = relationship("Patient", back_populates="mentions")
    note = relationship("Note", back_populates="mentions")
