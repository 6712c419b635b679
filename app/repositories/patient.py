from sqlalchemy import or_

from app.core.pagination import PageDescriptor
from app.models.patient import Patient
from app.repositories.base import SoftDeleteRepository


class PatientRepository(SoftDeleteRepository[Patient]):
    model = Patient
    label = "Patient"

    async def save(self, entity: Patient) -> Patient:
        entity.sync_active_email()
        return await super().save(entity)

    async def find_by_email(self, email: str) -> Patient | None:
        res = await self.db.execute(self.active_query(Patient.email == email))
        return res.scalars().first()

    async def email_taken(self, email: str, exclude_id: int | None = None) -> bool:
        criteria = [Patient.email == email]
        if exclude_id is not None:
            criteria.append(Patient.id != exclude_id)
        return await self.count_active(*criteria) > 0

    async def search_by_name(self, name: str | None, descriptor: PageDescriptor):
        if not name or not name.strip():
            return await self.list_active(descriptor)
        term = f"%{name.strip()}%"
        return await self.list_active(
            descriptor,
            or_(Patient.first_name.ilike(term), Patient.last_name.ilike(term)),
        )
