"""Conversiones entidad <-> schema."""
import enum
from datetime import date

from app.mappers import medication as medication_mapper
from app.mappers import patient as patient_mapper
from app.mappers import prescription as prescription_mapper
from app.mappers.base import has_value, merge_fields, translate_enum
from app.models.patient import BloodTypeEnum, GenderEnum, Patient
from app.schemas.medication import MedicationCreate, MedicationUpdate
from app.schemas.patient import BloodType, Gender, PatientCreate, PatientUpdate
from app.schemas.prescription import PrescriptionCreate, PrescriptionMedicationIn


def _persisted(entity, id=1, version=1):
    # lo que completaría el flush
    entity.id = id
    entity.version = version
    return entity


class TestMergeFields:
    def test_partial_update_keeps_untouched_fields(self):
        p = patient_mapper.to_entity(PatientCreate(first_name="Ana", last_name="Silva"))
        patient_mapper.update_entity(p, PatientUpdate(last_name="Gomez"))
        assert p.first_name == "Ana"
        assert p.last_name == "Gomez"

    def test_blank_strings_do_not_overwrite(self):
        m = medication_mapper.to_entity(MedicationCreate(medication_name="Ibuprofeno", manufacturer="Bago"))
        medication_mapper.update_entity(m, MedicationUpdate(manufacturer="   "))
        assert m.manufacturer == "Bago"

    def test_protected_fields_never_copied(self):
        m = _persisted(medication_mapper.to_entity(MedicationCreate(medication_name="X")), id=7, version=3)
        medication_mapper.update_entity(m, MedicationUpdate(version=99))
        assert m.id == 7
        assert m.version == 3
        assert m.active is True

    def test_updated_at_is_refreshed(self):
        m = medication_mapper.to_entity(MedicationCreate(medication_name="X"))
        before = m.updated_at
        merge_fields(m, MedicationUpdate())
        assert m.updated_at >= before

    def test_has_value(self):
        assert not has_value(None)
        assert not has_value("  ")
        assert has_value(0)
        assert has_value(False)


class TestPatientMapper:
    def test_round_trip_preserves_fields(self):
        req = PatientCreate(
            first_name="Ana", last_name="Silva", document_type="DNI", document_number="30111222",
            email="ana@example.com", gender=Gender.FEMALE, blood_type=BloodType.O_NEGATIVE,
            birth_date=date(1990, 5, 17), phone="555-0101",
            allergy_notes="penicilina", chronic_conditions="asma",
        )
        out = patient_mapper.to_response(_persisted(patient_mapper.to_entity(req)))
        for field, value in req.model_dump().items():
            assert getattr(out, field) == value, field
        assert out.full_name == "Ana Silva"
        assert out.active is True

    def test_new_entity_is_active_with_timestamps(self):
        p = patient_mapper.to_entity(PatientCreate(first_name="A", last_name="B", email="a@b.com"))
        assert p.active is True
        assert p.created_at == p.updated_at
        assert p.active_email == "a@b.com"

    def test_enums_translate_by_name(self):
        p = patient_mapper.to_entity(PatientCreate(first_name="A", last_name="B", gender=Gender.MALE))
        assert p.gender is GenderEnum.MALE
        patient_mapper.update_entity(p, PatientUpdate(blood_type=BloodType.AB_POSITIVE))
        assert p.blood_type is BloodTypeEnum.AB_POSITIVE

    def test_age_on(self):
        assert patient_mapper.age_on(date(2000, 6, 15), today=date(2020, 6, 14)) == 19
        assert patient_mapper.age_on(date(2000, 6, 15), today=date(2020, 6, 15)) == 20
        assert patient_mapper.age_on(None) is None

    def test_summary(self):
        p = _persisted(Patient(first_name="Ana", last_name="Silva", document_number="1", email="a@b.com"), id=4)
        s = patient_mapper.to_summary(p)
        assert (s.id, s.full_name, s.email) == (4, "Ana Silva", "a@b.com")


class TestTranslateEnum:
    class Narrow(str, enum.Enum):
        MALE = "MALE"

    def test_missing_member_gives_none(self):
        assert translate_enum(GenderEnum.OTHER, self.Narrow, field="gender", entity_id=1) is None

    def test_none_passes_through(self):
        assert translate_enum(None, self.Narrow, field="gender") is None

    def test_known_member(self):
        assert translate_enum(GenderEnum.MALE, self.Narrow, field="gender") is self.Narrow.MALE


class TestMedicationMapper:
    def test_round_trip_preserves_fields(self):
        req = MedicationCreate(
            medication_name="Amoxicilina", generic_name="amoxicillin", medication_type="antibiotic",
            manufacturer="Roemmers", description="caps 500mg", side_effects="nausea",
            contraindications="alergia a penicilinas",
        )
        out = medication_mapper.to_response(_persisted(medication_mapper.to_entity(req)))
        for field, value in req.model_dump().items():
            assert getattr(out, field) == value, field


class TestPrescriptionMapper:
    def test_round_trip_preserves_own_fields(self):
        req = PrescriptionCreate(
            patient_id=3, prescription_number="RX-1", prescription_date=date(2024, 1, 2),
            doctor_name="Dr. House", doctor_license="MN-1", notes="cada 8h",
            valid_until=date(2024, 2, 2), is_filled=True,
        )
        rx = _persisted(prescription_mapper.to_entity(req))
        rx.patient_id = 3
        out = prescription_mapper.to_response(rx)
        for field, value in req.model_dump().items():
            assert getattr(out, field) == value, field
        assert out.medications == []
        assert out.patient is None

    def test_link_carries_details_and_summary(self):
        med = _persisted(medication_mapper.to_entity(MedicationCreate(medication_name="Ibuprofeno")), id=9)
        link = _persisted(prescription_mapper.link_to_entity(
            med, PrescriptionMedicationIn(dosage="400mg", frequency="8h", quantity=10)
        ), id=2)
        out = prescription_mapper.link_to_response(link)
        assert out.dosage == "400mg"
        assert out.quantity == 10
        assert out.medication.id == 9
        assert out.medication.medication_name == "Ibuprofeno"

    def test_inactive_links_are_not_listed(self):
        rx = _persisted(prescription_mapper.to_entity(PrescriptionCreate(patient_id=1)))
        rx.patient_id = 1
        med = _persisted(medication_mapper.to_entity(MedicationCreate(medication_name="A")), id=5)
        kept = _persisted(prescription_mapper.link_to_entity(med, None), id=1)
        gone = _persisted(prescription_mapper.link_to_entity(med, None), id=2)
        gone.active = False
        rx.medications.extend([kept, gone])
        out = prescription_mapper.to_response(rx)
        assert [m.id for m in out.medications] == [1]
