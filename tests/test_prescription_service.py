"""PrescriptionService: alta ligada a paciente y relación con medicamentos."""
import pytest

from app.core.errors import ConcurrentModificationError, ConflictError, InvalidArgumentError, NotFoundError
from app.core.pagination import to_descriptor
from app.mappers import prescription as prescription_mapper
from app.repositories.medication import MedicationRepository
from app.repositories.prescription import PrescriptionMedicationRepository, PrescriptionRepository
from app.schemas.medication import MedicationCreate
from app.schemas.pagination import PaginationRequest
from app.schemas.patient import PatientCreate
from app.schemas.prescription import (
    PrescriptionCreate, PrescriptionMedicationIn, PrescriptionSearch, PrescriptionUpdate,
)
from app.services.medication import MedicationService
from app.services.patient import PatientService
from app.services.prescription import PrescriptionService


@pytest.fixture
def svc(db):
    return PrescriptionService(db)


@pytest.fixture
async def patient(db):
    return await PatientService(db).create(PatientCreate(first_name="Ana", last_name="Silva", email="ana@x.com"))


@pytest.fixture
async def medication(db):
    return await MedicationService(db).create(MedicationCreate(medication_name="Amoxidal", generic_name="amoxicilina"))


@pytest.fixture
async def rx(svc, patient):
    return await svc.create(PrescriptionCreate(patient_id=patient.id, prescription_number="RX-1", doctor_name="Dr. House"))


class TestCreate:
    async def test_create_links_patient(self, rx, patient):
        assert rx.patient_id == patient.id
        assert rx.patient.full_name == "Ana Silva"
        assert rx.active is True
        assert rx.is_filled is False
        assert rx.medications == []

    async def test_missing_patient_id_is_invalid(self, svc):
        with pytest.raises(InvalidArgumentError):
            await svc.create(PrescriptionCreate(doctor_name="Dr. X"))

    async def test_unknown_patient_creates_nothing(self, svc):
        with pytest.raises(NotFoundError):
            await svc.create(PrescriptionCreate(patient_id=404))
        assert (await svc.list_all(to_descriptor(None))).total_elements == 0

    async def test_inactive_patient_is_not_found(self, db, svc, patient):
        await PatientService(db).soft_delete(patient.id)
        with pytest.raises(NotFoundError):
            await svc.create(PrescriptionCreate(patient_id=patient.id))


class TestQueries:
    async def test_list_filters(self, svc, rx, patient):
        await svc.create(PrescriptionCreate(patient_id=patient.id, prescription_number="RX-2", is_filled=True))
        assert (await svc.list_all(to_descriptor(None))).total_elements == 2
        filled = await svc.list_all(to_descriptor(None), is_filled=True)
        assert [p.prescription_number for p in filled.content] == ["RX-2"]
        none = await svc.list_all(to_descriptor(None), patient_id=patient.id + 1)
        assert none.total_elements == 0

    async def test_search(self, svc, rx):
        criteria = PrescriptionSearch(doctor_name="house")
        page = await svc.search(criteria, to_descriptor(criteria))
        assert [p.id for p in page.content] == [rx.id]

    async def test_list_by_patient_paginates(self, svc, rx, patient):
        for n in range(2, 5):
            await svc.create(PrescriptionCreate(patient_id=patient.id, prescription_number=f"RX-{n}"))
        page = await svc.list_by_patient(patient.id, to_descriptor(PaginationRequest(page=1, size=3)))
        assert page.total_elements == 4
        assert page.total_pages == 2
        assert [p.prescription_number for p in page.content] == ["RX-4"]

    async def test_list_by_missing_patient(self, svc):
        with pytest.raises(NotFoundError):
            await svc.list_by_patient(77, to_descriptor(None))

    async def test_update_keeps_patient(self, svc, rx, patient):
        updated = await svc.update(rx.id, PrescriptionUpdate(is_filled=True, notes="retirada"))
        assert updated.is_filled is True
        assert updated.notes == "retirada"
        assert updated.patient_id == patient.id
        assert updated.prescription_number == "RX-1"

    async def test_soft_delete(self, svc, rx):
        await svc.soft_delete(rx.id)
        assert await svc.exists(rx.id) is False
        with pytest.raises(NotFoundError):
            await svc.soft_delete(rx.id)


class TestMedications:
    async def test_add_then_list(self, svc, rx, medication):
        link = await svc.add_medication(rx.id, medication.id, PrescriptionMedicationIn(dosage="500mg", quantity=21))
        assert link.active is True
        assert link.medication.id == medication.id
        links = await svc.list_medications(rx.id)
        assert [(l.medication.id, l.dosage) for l in links] == [(medication.id, "500mg")]
        assert [m.medication.id for m in (await svc.get(rx.id)).medications] == [medication.id]

    async def test_add_without_details(self, svc, rx, medication):
        link = await svc.add_medication(rx.id, medication.id)
        assert link.dosage is None

    async def test_add_twice_conflicts(self, svc, rx, medication):
        await svc.add_medication(rx.id, medication.id)
        with pytest.raises(ConflictError):
            await svc.add_medication(rx.id, medication.id)

    async def test_add_requires_active_sides(self, db, svc, rx, medication):
        with pytest.raises(NotFoundError):
            await svc.add_medication(rx.id, medication.id + 50)
        with pytest.raises(NotFoundError):
            await svc.add_medication(rx.id + 50, medication.id)
        await MedicationService(db).soft_delete(medication.id)
        with pytest.raises(NotFoundError):
            await svc.add_medication(rx.id, medication.id)

    async def test_remove_then_list_excludes(self, svc, rx, medication):
        await svc.add_medication(rx.id, medication.id)
        await svc.remove_medication(rx.id, medication.id)
        assert await svc.list_medications(rx.id) == []
        assert (await svc.get(rx.id)).medications == []
        with pytest.raises(NotFoundError):
            await svc.remove_medication(rx.id, medication.id)

    async def test_readd_after_remove(self, svc, rx, medication):
        first = await svc.add_medication(rx.id, medication.id)
        await svc.remove_medication(rx.id, medication.id)
        second = await svc.add_medication(rx.id, medication.id)
        assert second.id != first.id
        assert len(await svc.list_medications(rx.id)) == 1

    async def test_get_and_update_details(self, svc, rx, medication):
        await svc.add_medication(rx.id, medication.id, PrescriptionMedicationIn(dosage="500mg", frequency="8h"))
        updated = await svc.update_medication_details(rx.id, medication.id, PrescriptionMedicationIn(dosage="1g"))
        assert (updated.dosage, updated.frequency) == ("1g", "8h")
        assert (await svc.get_medication(rx.id, medication.id)).dosage == "1g"

    async def test_details_of_unlinked_pair(self, svc, rx, medication):
        with pytest.raises(NotFoundError):
            await svc.get_medication(rx.id, medication.id)
        with pytest.raises(NotFoundError):
            await svc.update_medication_details(rx.id, medication.id, PrescriptionMedicationIn(dosage="1g"))


class TestConcurrentLinking:
    async def test_same_pair_from_two_sessions_keeps_one_link(self, session_factory, rx, medication):
        """Dos transacciones que ven el par libre: solo la primera en confirmar gana."""
        async with session_factory() as first, session_factory() as second:
            rx_a = await PrescriptionRepository(first).find_active(rx.id)
            rx_b = await PrescriptionRepository(second).find_active(rx.id)
            assert await PrescriptionMedicationRepository(first).find_link(rx.id, medication.id) is None
            assert await PrescriptionMedicationRepository(second).find_link(rx.id, medication.id) is None
            med_a = await MedicationRepository(first).find_active(medication.id)
            med_b = await MedicationRepository(second).find_active(medication.id)

            prescription_mapper.attach_link(rx_a, med_a, PrescriptionMedicationIn(dosage="500mg"))
            await PrescriptionRepository(first).save(rx_a)
            await first.commit()

            prescription_mapper.attach_link(rx_b, med_b, PrescriptionMedicationIn(dosage="1g"))
            with pytest.raises(ConcurrentModificationError):
                await PrescriptionRepository(second).save(rx_b)

        async with session_factory() as check:
            links = await PrescriptionMedicationRepository(check).list_links(rx.id)
        assert [link.dosage for link in links] == ["500mg"]

    async def test_add_medication_bumps_prescription_version(self, svc, rx, medication):
        await svc.add_medication(rx.id, medication.id)
        assert (await svc.get(rx.id)).version == rx.version + 1
