from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import func
from sqlalchemy.orm import Session

from ..database import get_db
from ..models.mention import ExtractedMention
from ..models.note import Note
from ..models.patient import Patient
from ..schemas.patient import PatientListResponse, PatientResponse

router = APIRouter(prefix="/api/patients", tags=["patients"])


@router.get("", response_model=List[PatientListResponse])
def list_patients(db: Session = Depends(get_db)):
    return db.query(Patient).order_by(Patient.patient_id).all()


@router.get("/{patient_id}", response_model=PatientResponse)
def get_patient(patient_id: str, db: Session = Depends(get_db)):
    patient = db.query(Patient).filter(Patient.patient_id == patient_id).first()
    if not patient:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Patient not found")

    note_count = db.query(func.count(Note.id)).filter(Note.patient_id == patient_id).scalar()
    mention_count = db.query(func.count(ExtractedMention.id)).filter(
        ExtractedMention.patient_id == patient_id
    ).scalar()

    return PatientResponse(
        patient_id=patient.patient_id,
        patient_name=patient.patient_name,
        created_at=patient.created_at,
        note_count=note_count or 0,
        mention_count=mention_count or 0,
    )
