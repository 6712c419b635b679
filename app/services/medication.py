import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.pagination import PageDescriptor
from app.mappers import medication as medication_mapper
from app.repositories.medication import MedicationRepository
from app.schemas.medication import MedicationCreate, MedicationOut, MedicationSearch, MedicationUpdate
from app.schemas.pagination import Page
from app.services.common import ensure_version

logger = logging.getLogger(__name__)


class MedicationService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.medications = MedicationRepository(db)

    async def create(self, payload: MedicationCreate) -> MedicationOut:
        med = medication_mapper.to_entity(payload)
        await self.medications.save(med)
        await self.db.commit()
        logger.info("Medication created with ID: %s", med.id)
        return medication_mapper.to_response(med)

    async def get(self, id: int) -> MedicationOut:
        return medication_mapper.to_response(await self.medications.find_active(id))

    async def exists(self, id: int) -> bool:
        return await self.medications.exists_active(id)

    async def list_all(
        self,
        descriptor: PageDescriptor,
        medication_type: str | None = None,
        manufacturer: str | None = None,
    ) -> Page[MedicationOut]:
        rows, total = await self.medications.search(
            descriptor, medication_type=medication_type, manufacturer=manufacturer
        )
        return self._page(rows, total, descriptor)

    async def search(self, criteria: MedicationSearch, descriptor: PageDescriptor) -> Page[MedicationOut]:
        logger.info(
            "Searching medications - search: %s, name: %s, genericName: %s, type: %s, manufacturer: %s",
            criteria.search, criteria.medication_name, criteria.generic_name,
            criteria.medication_type, criteria.manufacturer,
        )
        rows, total = await self.medications.search(
            descriptor,
            search=criteria.search,
            medication_name=criteria.medication_name,
            generic_name=criteria.generic_name,
            manufacturer=criteria.manufacturer,
            medication_type=criteria.medication_type,
        )
        return self._page(rows, total, descriptor)

    async def update(self, id: int, patch: MedicationUpdate) -> MedicationOut:
        logger.info("Updating medication with ID: %s", id)
        med = await self.medications.find_active(id)
        ensure_version(med, patch.version, "Medication")
        medication_mapper.update_entity(med, patch)
        await self.medications.save(med)
        await self.db.commit()
        return medication_mapper.to_response(med)

    async def soft_delete(self, id: int) -> None:
        logger.info("Deleting medication with ID: %s", id)
        await self.medications.soft_delete(id)
        await self.db.commit()

    @staticmethod
    def _page(rows, total: int, descriptor: PageDescriptor) -> Page[MedicationOut]:
        return Page[MedicationOut].build(
            [medication_mapper.to_response(m) for m in rows], total, descriptor.page, descriptor.size
        )
