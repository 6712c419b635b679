"""Repositorio genérico con baja lógica.

Todas las lecturas filtran `active = true` en el SQL, nunca en Python.
"""
import logging
from typing import Any, Generic, Sequence, TypeVar

from pydantic.alias_generators import to_snake
from sqlalchemy import func, inspect, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError
from sqlalchemy.sql import Select

from app.core.errors import ConcurrentModificationError, ConflictError, NotFoundError
from app.core.pagination import PageDescriptor
from app.models.mixins import utcnow

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")


class SoftDeleteRepository(Generic[ModelT]):
    model: type[ModelT]
    label: str = "Entity"

    def __init__(self, db: AsyncSession):
        self.db = db

    # --- hooks ---
    def load_options(self) -> Sequence[Any]:
        """Opciones de carga (selectinload...) para lecturas de entidades completas."""
        return ()

    # --- lecturas ---
    def active_query(self, *criteria) -> Select:
        return (
            select(self.model)
            .where(self.model.active.is_(True), *criteria)
            .options(*self.load_options())
        )

    async def get_active(self, id: int) -> ModelT | None:
        res = await self.db.execute(self.active_query(self.model.id == id))
        return res.scalars().unique().one_or_none()

    async def find_active(self, id: int) -> ModelT:
        entity = await self.get_active(id)
        if entity is None:
            raise NotFoundError(f"{self.label} not found with ID: {id}")
        return entity

    async def exists_active(self, id: int) -> bool:
        q = select(self.model.id).where(self.model.id == id, self.model.active.is_(True))
        return (await self.db.execute(q)).scalar_one_or_none() is not None

    async def count_active(self, *criteria) -> int:
        q = select(func.count()).select_from(self.model).where(self.model.active.is_(True), *criteria)
        return (await self.db.execute(q)).scalar_one()

    async def list_active(self, descriptor: PageDescriptor, *criteria) -> tuple[list[ModelT], int]:
        total = await self.count_active(*criteria)
        q = (
            self.active_query(*criteria)
            .order_by(*self.order_clauses(descriptor))
            .offset(descriptor.offset)
            .limit(descriptor.limit)
        )
        rows = list((await self.db.execute(q)).scalars().unique().all())
        return rows, total

    def order_clauses(self, descriptor: PageDescriptor) -> list:
        """Campos de orden válidos del descriptor + `id ASC` como desempate.

        Acepta camelCase o snake_case; los campos que no son columnas se ignoran.
        """
        columns = inspect(self.model).column_attrs.keys()
        clauses = []
        used: set[str] = set()
        for field, ascending in descriptor.order_by:
            name = field if field in columns else to_snake(field)
            if name not in columns or name in used:
                continue
            used.add(name)
            col = getattr(self.model, name)
            clauses.append(col.asc() if ascending else col.desc())
        if "id" not in used:
            clauses.append(self.model.id.asc())
        return clauses

    # --- escrituras ---
    async def save(self, entity: ModelT) -> ModelT:
        """Inserta o actualiza (flush). La versión la controla SQLAlchemy."""
        self.db.add(entity)
        try:
            await self.db.flush()
        except StaleDataError as exc:
            msg = f"{self.label} {entity.id} was modified by another transaction"
            await self.db.rollback()
            raise ConcurrentModificationError(msg) from exc
        except IntegrityError as exc:
            logger.warning("Integrity error saving %s: %s", self.label, exc.orig)
            await self.db.rollback()
            raise ConflictError(f"{self.label} violates a uniqueness or reference constraint") from exc
        return entity

    async def soft_delete(self, id: int) -> ModelT:
        entity = await self.find_active(id)
        entity.active = False
        entity.updated_at = utcnow()
        return await self.save(entity)
