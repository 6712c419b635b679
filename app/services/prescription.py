"""Recetas y su relación muchos-a-muchos con medicamentos.

La relación se guarda en filas PrescriptionMedication con baja lógica propia:
agregar crea una fila activa, quitar la desactiva. Ni la receta ni el
medicamento cambian al quitar.
"""
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import ConflictError, InvalidArgumentError, NotFoundError
from app.core.pagination import PageDescriptor
from app.mappers import prescription as prescription_mapper
from app.models.prescription import PrescriptionMedication
from app.repositories.medication import MedicationRepository
from app.repositories.patient import PatientRepository
from app.repositories.prescription import PrescriptionMedicationRepository, PrescriptionRepository
from app.schemas.pagination import Page
from app.schemas.prescription import (
    PrescriptionCreate, PrescriptionMedicationIn, PrescriptionMedicationOut,
    PrescriptionOut, PrescriptionSearch, PrescriptionUpdate,
)
from app.services.common import ensure_exists, ensure_version

logger = logging.getLogger(__name__)


class PrescriptionService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.prescriptions = PrescriptionRepository(db)
        self.patients = PatientRepository(db)
        self.medications = MedicationRepository(db)
        self.links = PrescriptionMedicationRepository(db)

    # ---------- CRUD ----------
    async def create(self, payload: PrescriptionCreate) -> PrescriptionOut:
        logger.info("Creating new prescription for patient ID: %s", payload.patient_id)
        if payload.patient_id is None:
            raise InvalidArgumentError("Patient ID is required to create a prescription")

        patient = await self.patients.find_active(payload.patient_id)

        rx = prescription_mapper.to_entity(payload)
        # el paciente se vincula antes del insert: nunca hay recetas huérfanas
        rx.patient = patient
        await self.prescriptions.save(rx)
        await self.db.commit()
        logger.info("Prescription created with ID: %s for patient ID: %s", rx.id, patient.id)
        return prescription_mapper.to_response(rx)

    async def get(self, id: int) -> PrescriptionOut:
        return prescription_mapper.to_response(await self.prescriptions.find_active(id))

    async def exists(self, id: int) -> bool:
        return await self.prescriptions.exists_active(id)

    async def list_all(
        self,
        descriptor: PageDescriptor,
        patient_id: int | None = None,
        is_filled: bool | None = None,
    ) -> Page[PrescriptionOut]:
        logger.info("Getting prescriptions - page: %s, size: %s, patientId: %s, isFilled: %s",
                    descriptor.page, descriptor.size, patient_id, is_filled)
        rows, total = await self.prescriptions.search(descriptor, patient_id=patient_id, is_filled=is_filled)
        return self._page(rows, total, descriptor)

    async def search(self, criteria: PrescriptionSearch, descriptor: PageDescriptor) -> Page[PrescriptionOut]:
        rows, total = await self.prescriptions.search(
            descriptor,
            patient_id=criteria.patient_id,
            prescription_number=criteria.prescription_number,
            doctor_name=criteria.doctor_name,
            is_filled=criteria.is_filled,
        )
        return self._page(rows, total, descriptor)

    async def list_by_patient(self, patient_id: int, descriptor: PageDescriptor) -> Page[PrescriptionOut]:
        await ensure_exists(self.patients, patient_id)
        rows, total = await self.prescriptions.list_by_patient(patient_id, descriptor)
        logger.info("Found %s prescriptions for patient ID: %s", total, patient_id)
        return self._page(rows, total, descriptor)

    async def update(self, id: int, patch: PrescriptionUpdate) -> PrescriptionOut:
        logger.info("Updating prescription with ID: %s", id)
        rx = await self.prescriptions.find_active(id)
        ensure_version(rx, patch.version, "Prescription")
        prescription_mapper.update_entity(rx, patch)
        await self.prescriptions.save(rx)
        await self.db.commit()
        return prescription_mapper.to_response(rx)

    async def soft_delete(self, id: int) -> None:
        logger.info("Deleting prescription with ID: %s", id)
        await self.prescriptions.soft_delete(id)
        await self.db.commit()

    # ---------- medicamentos de la receta ----------
    async def add_medication(
        self,
        prescription_id: int,
        medication_id: int,
        details: PrescriptionMedicationIn | None = None,
    ) -> PrescriptionMedicationOut:
        logger.info("Adding medication ID %s to prescription ID %s", medication_id, prescription_id)
        rx = await self.prescriptions.find_active(prescription_id)
        med = await self.medications.find_active(medication_id)

        if await self.links.find_link(prescription_id, medication_id) is not None:
            logger.warning("Medication %s is already associated with prescription %s", medication_id, prescription_id)
            raise ConflictError("Medication is already associated with this prescription")

        link = prescription_mapper.attach_link(rx, med, details)
        # el insert de la fila de unión va en cascada desde la receta;
        # si otra transacción agregó el mismo par, la versión de la receta ya cambió
        await self.prescriptions.save(rx)
        await self.db.commit()
        logger.info("Medication ID %s added to prescription ID %s with relationship ID %s",
                    medication_id, prescription_id, link.id)
        return prescription_mapper.link_to_response(link)

    async def remove_medication(self, prescription_id: int, medication_id: int) -> None:
        logger.info("Removing medication ID %s from prescription ID %s", medication_id, prescription_id)
        link = await self._find_link_or_404(prescription_id, medication_id)
        await self.links.soft_delete(link.id)
        await self.db.commit()

    async def list_medications(self, prescription_id: int) -> list[PrescriptionMedicationOut]:
        await ensure_exists(self.prescriptions, prescription_id)
        links = await self.links.list_links(prescription_id)
        logger.info("Found %s active medications for prescription ID: %s", len(links), prescription_id)
        return [prescription_mapper.link_to_response(pm) for pm in links]

    async def get_medication(self, prescription_id: int, medication_id: int) -> PrescriptionMedicationOut:
        link = await self._find_link_or_404(prescription_id, medication_id)
        return prescription_mapper.link_to_response(link)

    async def update_medication_details(
        self,
        prescription_id: int,
        medication_id: int,
        details: PrescriptionMedicationIn,
    ) -> PrescriptionMedicationOut:
        logger.info("Updating medication ID %s of prescription ID %s", medication_id, prescription_id)
        link = await self._find_link_or_404(prescription_id, medication_id)
        prescription_mapper.update_link(link, details)
        await self.links.save(link)
        await self.db.commit()
        return prescription_mapper.link_to_response(link)

    # ---------- helpers ----------
    async def _find_link_or_404(self, prescription_id: int, medication_id: int) -> PrescriptionMedication:
        await ensure_exists(self.prescriptions, prescription_id)
        link = await self.links.find_link(prescription_id, medication_id)
        if link is None:
            logger.warning("Medication ID %s is not associated with prescription ID %s", medication_id, prescription_id)
            raise NotFoundError(f"Medication {medication_id} is not associated with prescription {prescription_id}")
        return link

    @staticmethod
    def _page(rows, total: int, descriptor: PageDescriptor) -> Page[PrescriptionOut]:
        return Page[PrescriptionOut].build(
            [prescription_mapper.to_response(rx) for rx in rows], total, descriptor.page, descriptor.size
        )
