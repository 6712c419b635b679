import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import ConflictError, NotFoundError
from app.core.pagination import PageDescriptor
from app.mappers import patient as patient_mapper
from app.mappers import prescription as prescription_mapper
from app.repositories.patient import PatientRepository
from app.repositories.prescription import PrescriptionRepository
from app.schemas.pagination import Page
from app.schemas.patient import PatientCreate, PatientOut, PatientUpdate
from app.schemas.prescription import PrescriptionOut
from app.services.common import ensure_version

logger = logging.getLogger(__name__)


class PatientService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.patients = PatientRepository(db)
        self.prescriptions = PrescriptionRepository(db)

    async def create(self, payload: PatientCreate) -> PatientOut:
        logger.info("Creating patient %s %s", payload.first_name, payload.last_name)
        if payload.email and await self.patients.email_taken(payload.email):
            logger.warning("Email %s is already used by an active patient", payload.email)
            raise ConflictError(f"Email {payload.email} is already registered")

        patient = patient_mapper.to_entity(payload)
        await self.patients.save(patient)
        await self.db.commit()
        logger.info("Patient created with ID: %s", patient.id)
        return patient_mapper.to_response(patient)

    async def get(self, id: int) -> PatientOut:
        return patient_mapper.to_response(await self.patients.find_active(id))

    async def get_by_email(self, email: str) -> PatientOut:
        patient = await self.patients.find_by_email(email)
        if patient is None:
            raise NotFoundError(f"Patient not found with email: {email}")
        return patient_mapper.to_response(patient)

    async def exists(self, id: int) -> bool:
        return await self.patients.exists_active(id)

    async def list_all(self, descriptor: PageDescriptor) -> Page[PatientOut]:
        rows, total = await self.patients.list_active(descriptor)
        return Page[PatientOut].build(
            [patient_mapper.to_response(p) for p in rows], total, descriptor.page, descriptor.size
        )

    async def search(self, name: str | None, descriptor: PageDescriptor) -> Page[PatientOut]:
        logger.info("Searching patients by name: %s", name)
        rows, total = await self.patients.search_by_name(name, descriptor)
        return Page[PatientOut].build(
            [patient_mapper.to_response(p) for p in rows], total, descriptor.page, descriptor.size
        )

    async def update(self, id: int, patch: PatientUpdate) -> PatientOut:
        logger.info("Updating patient with ID: %s", id)
        patient = await self.patients.find_active(id)
        ensure_version(patient, patch.version, "Patient")

        if patch.email and patch.email != patient.email:
            if await self.patients.email_taken(patch.email, exclude_id=id):
                logger.warning("Email %s is already used by an active patient", patch.email)
                raise ConflictError(f"Email {patch.email} is already registered")

        patient_mapper.update_entity(patient, patch)
        await self.patients.save(patient)
        await self.db.commit()
        return patient_mapper.to_response(patient)

    async def soft_delete(self, id: int) -> None:
        logger.info("Deleting patient with ID: %s", id)
        # las recetas del paciente quedan como están
        await self.patients.soft_delete(id)
        await self.db.commit()

    async def list_prescriptions(self, patient_id: int) -> list[PrescriptionOut]:
        await self.patients.find_active(patient_id)
        rows = await self.prescriptions.all_by_patient(patient_id)
        logger.info("Found %s prescriptions for patient ID: %s", len(rows), patient_id)
        return [prescription_mapper.to_response(rx) for rx in rows]
