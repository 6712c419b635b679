from sqlalchemy.orm import selectinload

from app.core.pagination import PageDescriptor
from app.models.prescription import Prescription, PrescriptionMedication
from app.repositories.base import SoftDeleteRepository


class PrescriptionRepository(SoftDeleteRepository[Prescription]):
    model = Prescription
    label = "Prescription"

    def load_options(self):
        return (
            selectinload(Prescription.patient),
            selectinload(Prescription.medications).selectinload(PrescriptionMedication.medication),
        )

    async def list_by_patient(self, patient_id: int, descriptor: PageDescriptor):
        return await self.list_active(descriptor, Prescription.patient_id == patient_id)

    async def all_by_patient(self, patient_id: int) -> list[Prescription]:
        q = self.active_query(Prescription.patient_id == patient_id).order_by(Prescription.id.asc())
        return list((await self.db.execute(q)).scalars().unique().all())

    async def search(
        self,
        descriptor: PageDescriptor,
        *,
        patient_id: int | None = None,
        prescription_number: str | None = None,
        doctor_name: str | None = None,
        is_filled: bool | None = None,
    ):
        criteria = []
        if patient_id is not None:
            criteria.append(Prescription.patient_id == patient_id)
        if prescription_number and prescription_number.strip():
            criteria.append(Prescription.prescription_number.ilike(f"%{prescription_number.strip()}%"))
        if doctor_name and doctor_name.strip():
            criteria.append(Prescription.doctor_name.ilike(f"%{doctor_name.strip()}%"))
        if is_filled is not None:
            criteria.append(Prescription.is_filled.is_(is_filled))
        return await self.list_active(descriptor, *criteria)


class PrescriptionMedicationRepository(SoftDeleteRepository[PrescriptionMedication]):
    """Filas de unión receta <-> medicamento (solo las activas)."""
    model = PrescriptionMedication
    label = "Prescription medication"

    def load_options(self):
        return (selectinload(PrescriptionMedication.medication),)

    async def find_link(self, prescription_id: int, medication_id: int) -> PrescriptionMedication | None:
        q = self.active_query(
            PrescriptionMedication.prescription_id == prescription_id,
            PrescriptionMedication.medication_id == medication_id,
        ).order_by(PrescriptionMedication.id.asc())
        return (await self.db.execute(q)).scalars().first()

    async def list_links(self, prescription_id: int) -> list[PrescriptionMedication]:
        q = self.active_query(
            PrescriptionMedication.prescription_id == prescription_id,
        ).order_by(PrescriptionMedication.id.asc())
        return list((await self.db.execute(q)).scalars().all())
