from typing import Optional

from sqlalchemy import inspect

from app.mappers import medication as medication_mapper
from app.mappers import patient as patient_mapper
from app.mappers.base import merge_fields
from app.models.medication import Medication
from app.models.mixins import utcnow
from app.models.prescription import Prescription, PrescriptionMedication
from app.schemas.prescription import (
    PrescriptionCreate, PrescriptionMedicationIn, PrescriptionMedicationOut,
    PrescriptionOut, PrescriptionUpdate,
)

_FIELDS = (
    "prescription_number", "prescription_date", "doctor_name", "doctor_license",
    "notes", "valid_until", "is_filled",
)
_LINK_FIELDS = ("dosage", "frequency", "duration", "instructions", "quantity")


def _loaded(obj, attr: str) -> bool:
    # evita lazy loads (no permitidos con AsyncSession) al armar la respuesta
    return attr not in inspect(obj).unloaded


def to_entity(payload: PrescriptionCreate) -> Prescription:
    """El paciente lo vincula el servicio; acá solo los datos propios."""
    now = utcnow()
    rx = Prescription(**{f: getattr(payload, f) for f in _FIELDS})
    rx.active = True
    rx.created_at = now
    rx.updated_at = now
    rx.medications = []
    return rx


def to_response(rx: Prescription) -> PrescriptionOut:
    patient = None
    if _loaded(rx, "patient") and rx.patient is not None:
        patient = patient_mapper.to_summary(rx.patient)
    medications = []
    if _loaded(rx, "medications"):
        medications = [link_to_response(pm) for pm in rx.medications if pm.active]
    return PrescriptionOut(
        id=rx.id,
        active=rx.active,
        version=rx.version,
        created_at=rx.created_at,
        updated_at=rx.updated_at,
        patient_id=rx.patient_id,
        patient=patient,
        medications=medications,
        **{f: getattr(rx, f) for f in _FIELDS},
    )


def update_entity(rx: Prescription, patch: PrescriptionUpdate) -> Prescription:
    return merge_fields(rx, patch, _FIELDS)


def link_to_entity(medication: Medication, details: Optional[PrescriptionMedicationIn]) -> PrescriptionMedication:
    now = utcnow()
    pm = PrescriptionMedication(medication=medication, active=True, created_at=now, updated_at=now)
    if details is not None:
        for f in _LINK_FIELDS:
            setattr(pm, f, getattr(details, f))
    return pm


def link_to_response(pm: PrescriptionMedication) -> PrescriptionMedicationOut:
    med = None
    if _loaded(pm, "medication") and pm.medication is not None:
        med = medication_mapper.to_summary(pm.medication)
    return PrescriptionMedicationOut(
        id=pm.id,
        active=pm.active,
        created_at=pm.created_at,
        updated_at=pm.updated_at,
        medication=med,
        **{f: getattr(pm, f) for f in _LINK_FIELDS},
    )


def update_link(pm: PrescriptionMedication, details: PrescriptionMedicationIn) -> PrescriptionMedication:
    return merge_fields(pm, details, _LINK_FIELDS)


def attach_link(
    rx: Prescription, medication: Medication, details: Optional[PrescriptionMedicationIn]
) -> PrescriptionMedication:
    """Agrega la fila de unión a la receta y toca la receta.

    Tocar `updated_at` fuerza un UPDATE de la receta con chequeo de `version`:
    dos altas concurrentes del mismo par no pueden confirmarse las dos.
    """
    pm = link_to_entity(medication, details)
    rx.medications.append(pm)
    rx.updated_at = utcnow()
    return pm
