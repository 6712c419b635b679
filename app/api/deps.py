from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.services.medication import MedicationService
from app.services.patient import PatientService
from app.services.prescription import PrescriptionService


def get_patient_service(db: AsyncSession = Depends(get_db)) -> PatientService:
    return PatientService(db)

def get_medication_service(db: AsyncSession = Depends(get_db)) -> MedicationService:
    return MedicationService(db)

def get_prescription_service(db: AsyncSession = Depends(get_db)) -> PrescriptionService:
    return PrescriptionService(db)
