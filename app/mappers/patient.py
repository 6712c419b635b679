from datetime import date
from typing import Optional

from app.mappers.base import merge_fields, translate_enum
from app.models.mixins import utcnow
from app.models.patient import BloodTypeEnum, GenderEnum, Patient
from app.schemas.patient import (
    BloodType, Gender, PatientCreate, PatientOut, PatientSummary, PatientUpdate,
)

_PLAIN_FIELDS = (
    "first_name", "last_name", "document_type", "document_number", "email",
    "birth_date", "phone", "allergy_notes", "chronic_conditions",
)


def full_name(p: Patient) -> str:
    return f"{p.first_name} {p.last_name}"


def age_on(birth_date: Optional[date], today: Optional[date] = None) -> Optional[int]:
    if birth_date is None:
        return None
    today = today or date.today()
    years = today.year - birth_date.year
    if (today.month, today.day) < (birth_date.month, birth_date.day):
        years -= 1
    return years


def to_entity(payload: PatientCreate) -> Patient:
    now = utcnow()
    p = Patient(**{f: getattr(payload, f) for f in _PLAIN_FIELDS})
    p.gender = translate_enum(payload.gender, GenderEnum, field="gender")
    p.blood_type = translate_enum(payload.blood_type, BloodTypeEnum, field="blood_type")
    p.active = True
    p.created_at = now
    p.updated_at = now
    p.prescriptions = []
    p.sync_active_email()
    return p


def to_response(p: Patient) -> PatientOut:
    return PatientOut(
        id=p.id,
        active=p.active,
        version=p.version,
        created_at=p.created_at,
        updated_at=p.updated_at,
        full_name=full_name(p),
        age=age_on(p.birth_date),
        gender=translate_enum(p.gender, Gender, field="gender", entity_id=p.id),
        blood_type=translate_enum(p.blood_type, BloodType, field="blood_type", entity_id=p.id),
        **{f: getattr(p, f) for f in _PLAIN_FIELDS},
    )


def to_summary(p: Patient) -> PatientSummary:
    return PatientSummary(
        id=p.id,
        first_name=p.first_name,
        last_name=p.last_name,
        full_name=full_name(p),
        document_number=p.document_number,
        email=p.email,
    )


def update_entity(p: Patient, patch: PatientUpdate) -> Patient:
    merge_fields(p, patch, _PLAIN_FIELDS)
    if patch.gender is not None:
        p.gender = translate_enum(patch.gender, GenderEnum, field="gender", entity_id=p.id) or p.gender
    if patch.blood_type is not None:
        p.blood_type = translate_enum(patch.blood_type, BloodTypeEnum, field="blood_type", entity_id=p.id) or p.blood_type
    p.sync_active_email()
    return p
