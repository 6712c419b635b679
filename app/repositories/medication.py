from sqlalchemy import or_

from app.core.pagination import PageDescriptor
from app.models.medication import Medication
from app.repositories.base import SoftDeleteRepository


def _like(value: str) -> str:
    return f"%{value.strip()}%"


class MedicationRepository(SoftDeleteRepository[Medication]):
    model = Medication
    label = "Medication"

    async def search(
        self,
        descriptor: PageDescriptor,
        *,
        search: str | None = None,
        medication_name: str | None = None,
        generic_name: str | None = None,
        manufacturer: str | None = None,
        medication_type: str | None = None,
    ):
        """Criterios combinados con AND; `search` busca en nombre O genérico."""
        criteria = []
        if search and search.strip():
            criteria.append(or_(
                Medication.medication_name.ilike(_like(search)),
                Medication.generic_name.ilike(_like(search)),
            ))
        if medication_name and medication_name.strip():
            criteria.append(Medication.medication_name.ilike(_like(medication_name)))
        if generic_name and generic_name.strip():
            criteria.append(Medication.generic_name.ilike(_like(generic_name)))
        if manufacturer and manufacturer.strip():
            criteria.append(Medication.manufacturer.ilike(_like(manufacturer)))
        if medication_type and medication_type.strip():
            criteria.append(Medication.medication_type.ilike(_like(medication_type)))
        return await self.list_active(descriptor, *criteria)
