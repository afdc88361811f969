from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class PatientListResponse(BaseModel):
    patient_id: str
    patient_name: Optional[str]

    class Config:
        from_attributes = True


class PatientResponse(BaseModel):
    patient_id: str
    patient_name: Optional[str]
    created_at: datetime
    note_count: int
    mention_count: int
