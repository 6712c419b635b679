"""PatientService: alta con email único, actualización parcial, baja lógica."""
import pytest

from app.core.errors import ConcurrentModificationError, ConflictError, NotFoundError
from app.core.pagination import to_descriptor
from app.schemas.patient import PatientCreate, PatientUpdate
from app.schemas.prescription import PrescriptionCreate
from app.services.patient import PatientService
from app.services.prescription import PrescriptionService


@pytest.fixture
def svc(db):
    return PatientService(db)


def _req(**overrides):
    data = {"first_name": "Ana", "last_name": "Silva", "email": "ana@example.com"}
    data.update(overrides)
    return PatientCreate(**data)


class TestCreate:
    async def test_create_returns_active_patient(self, svc):
        out = await svc.create(_req())
        assert out.id is not None
        assert out.active is True
        assert out.version == 1
        assert out.full_name == "Ana Silva"

    async def test_duplicate_email_conflicts(self, svc):
        await svc.create(_req())
        with pytest.raises(ConflictError):
            await svc.create(_req(first_name="Otra"))

    async def test_email_reusable_after_soft_delete(self, svc):
        first = await svc.create(_req())
        await svc.soft_delete(first.id)
        second = await svc.create(_req(first_name="Otra"))
        assert second.id != first.id


class TestRead:
    async def test_get_and_exists(self, svc):
        out = await svc.create(_req())
        assert (await svc.get(out.id)).email == "ana@example.com"
        assert await svc.exists(out.id) is True
        assert await svc.exists(out.id + 100) is False

    async def test_get_missing_is_not_found(self, svc):
        with pytest.raises(NotFoundError):
            await svc.get(999)

    async def test_get_by_email(self, svc):
        out = await svc.create(_req())
        assert (await svc.get_by_email("ana@example.com")).id == out.id
        with pytest.raises(NotFoundError):
            await svc.get_by_email("nadie@example.com")

    async def test_list_and_search(self, svc):
        await svc.create(_req())
        await svc.create(_req(first_name="Juan", last_name="Perez", email="juan@example.com"))
        page = await svc.list_all(to_descriptor(None))
        assert page.total_elements == 2
        found = await svc.search("perez", to_descriptor(None))
        assert [p.last_name for p in found.content] == ["Perez"]
        everyone = await svc.search("   ", to_descriptor(None))
        assert everyone.total_elements == 2


class TestUpdate:
    async def test_partial_update(self, svc):
        out = await svc.create(_req())
        updated = await svc.update(out.id, PatientUpdate(last_name="Gomez"))
        assert (updated.first_name, updated.last_name) == ("Ana", "Gomez")
        assert updated.version == out.version + 1

    async def test_email_taken_by_other_conflicts(self, svc):
        await svc.create(_req())
        other = await svc.create(_req(email="otro@example.com"))
        with pytest.raises(ConflictError):
            await svc.update(other.id, PatientUpdate(email="ana@example.com"))

    async def test_same_email_is_not_a_conflict(self, svc):
        out = await svc.create(_req())
        updated = await svc.update(out.id, PatientUpdate(email="ana@example.com", phone="555"))
        assert updated.phone == "555"

    async def test_stale_version_rejected(self, svc):
        out = await svc.create(_req())
        with pytest.raises(ConcurrentModificationError):
            await svc.update(out.id, PatientUpdate(phone="1", version=out.version + 5))

    async def test_update_missing_is_not_found(self, svc):
        with pytest.raises(NotFoundError):
            await svc.update(42, PatientUpdate(phone="1"))


class TestDelete:
    async def test_delete_then_get_is_not_found(self, svc):
        out = await svc.create(_req())
        await svc.soft_delete(out.id)
        with pytest.raises(NotFoundError):
            await svc.get(out.id)
        with pytest.raises(NotFoundError):
            await svc.soft_delete(out.id)

    async def test_delete_keeps_prescriptions(self, db, svc):
        patient = await svc.create(_req())
        rx = await PrescriptionService(db).create(PrescriptionCreate(patient_id=patient.id, doctor_name="Dr. X"))
        await svc.soft_delete(patient.id)
        assert (await PrescriptionService(db).get(rx.id)).patient_id == patient.id


class TestPrescriptions:
    async def test_list_prescriptions_of_patient(self, db, svc):
        patient = await svc.create(_req())
        rx_svc = PrescriptionService(db)
        await rx_svc.create(PrescriptionCreate(patient_id=patient.id, prescription_number="RX-1"))
        await rx_svc.create(PrescriptionCreate(patient_id=patient.id, prescription_number="RX-2"))
        rows = await svc.list_prescriptions(patient.id)
        assert [r.prescription_number for r in rows] == ["RX-1", "RX-2"]

    async def test_list_prescriptions_of_missing_patient(self, svc):
        with pytest.raises(NotFoundError):
            await svc.list_prescriptions(12)
