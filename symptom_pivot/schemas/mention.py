from datetime import date
from typing import Optional, List
from pydantic import BaseModel, field_validator


class MentionRecord(BaseModel):
    mention_id: str
    patient_id: str
    patient_name: Optional[str] = None
    note_id: Optional[int] = None
    dos_date: Optional[date] = None
    symptom_segment: str
    symptom_id: Optional[str] = None
    diagnosis: Optional[str] = None
    diagnosis_icd10_code: Optional[str] = None
    diagnostic_category: Optional[str] = None
    symp_prob: Optional[str] = None
    zcode_hrsn: Optional[str] = None
    position_in_text: Optional[int] = None
    housing_status: Optional[str] = None
    food_status: Optional[str] = None
    financial_status: Optional[str] = None
    transportation_needs: Optional[str] = None

    @field_validator("mention_id", "patient_id", "symptom_segment")
    @classmethod
    def not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("value cannot be empty")
        return v.strip()


class IngestionSummary(BaseModel):
    total_received: int
    created: int
    skipped: int
    patients_created: int = 0
    undated: int = 0
    errors: List[str] = []
