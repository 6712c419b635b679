from app.mappers.base import merge_fields
from app.models.medication import Medication
from app.models.mixins import utcnow
from app.schemas.medication import MedicationCreate, MedicationOut, MedicationSummary, MedicationUpdate

_FIELDS = (
    "medication_name", "generic_name", "medication_type", "manufacturer",
    "description", "side_effects", "contraindications",
)


def to_entity(payload: MedicationCreate) -> Medication:
    now = utcnow()
    m = Medication(**{f: getattr(payload, f) for f in _FIELDS})
    m.active = True
    m.created_at = now
    m.updated_at = now
    return m


def to_response(m: Medication) -> MedicationOut:
    return MedicationOut(
        id=m.id,
        active=m.active,
        version=m.version,
        created_at=m.created_at,
        updated_at=m.updated_at,
        **{f: getattr(m, f) for f in _FIELDS},
    )


def to_summary(m: Medication) -> MedicationSummary:
    return MedicationSummary(id=m.id, medication_name=m.medication_name, generic_name=m.generic_name)


def update_entity(m: Medication, patch: MedicationUpdate) -> Medication:
    return merge_fields(m, patch, _FIELDS)
