from __future__ import annotations
from typing import List, Optional
from pydantic import Field
from datetime import date, datetime

from app.schemas.base import CamelModel
from app.schemas.medication import MedicationSummary
from app.schemas.pagination import PaginationRequest
from app.schemas.patient import PatientSummary

class PrescriptionCreate(CamelModel):
    # opcional en el schema para poder responder InvalidArgument (400) desde el servicio
    patient_id: Optional[int] = None
    prescription_number: Optional[str] = None
    prescription_date: Optional[date] = None
    doctor_name: Optional[str] = None
    doctor_license: Optional[str] = None
    notes: Optional[str] = None
    valid_until: Optional[date] = None
    is_filled: bool = False

class PrescriptionUpdate(CamelModel):
    prescription_number: Optional[str] = None
    prescription_date: Optional[date] = None
    doctor_name: Optional[str] = None
    doctor_license: Optional[str] = None
    notes: Optional[str] = None
    valid_until: Optional[date] = None
    is_filled: Optional[bool] = None
    version: Optional[int] = None

class PrescriptionMedicationIn(CamelModel):
    dosage: Optional[str] = None
    frequency: Optional[str] = None
    duration: Optional[str] = None
    instructions: Optional[str] = None
    quantity: Optional[int] = Field(None, ge=0)

class PrescriptionMedicationOut(CamelModel):
    id: int
    active: bool
    dosage: Optional[str] = None
    frequency: Optional[str] = None
    duration: Optional[str] = None
    instructions: Optional[str] = None
    quantity: Optional[int] = None
    created_at: datetime
    updated_at: datetime
    medication: Optional[MedicationSummary] = None

class PrescriptionOut(CamelModel):
    id: int
    active: bool
    version: int
    created_at: datetime
    updated_at: datetime
    patient_id: int
    prescription_number: Optional[str] = None
    prescription_date: Optional[date] = None
    doctor_name: Optional[str] = None
    doctor_license: Optional[str] = None
    notes: Optional[str] = None
    valid_until: Optional[date] = None
    is_filled: bool
    patient: Optional[PatientSummary] = None
    medications: List[PrescriptionMedicationOut] = Field(default_factory=list)

class PrescriptionSearch(PaginationRequest):
    patient_id: Optional[int] = None
    prescription_number: Optional[str] = None
    doctor_name: Optional[str] = None
    is_filled: Optional[bool] = None
