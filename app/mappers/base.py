"""Helpers compartidos por los mappers entidad <-> schema."""
import enum
import logging
from typing import Any, Iterable, Optional, TypeVar

from pydantic import BaseModel

from app.models.mixins import utcnow

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=enum.Enum)

# nunca se pisan desde un request de actualización
PROTECTED_FIELDS = frozenset({"id", "created_at", "updated_at", "active", "version"})


def has_value(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str) and not value.strip():
        return False
    return True


def merge_fields(entity: Any, patch: BaseModel, fields: Optional[Iterable[str]] = None) -> Any:
    """Actualización parcial: solo los campos con valor del request pisan la entidad.

    `updated_at` se refresca siempre, haya cambiado algo o no.
    """
    names = fields if fields is not None else type(patch).model_fields.keys()
    for name in names:
        if name in PROTECTED_FIELDS:
            continue
        value = getattr(patch, name, None)
        if has_value(value):
            setattr(entity, name, value)
    entity.updated_at = utcnow()
    return entity


def translate_enum(value: Optional[enum.Enum], target: type[E], *, field: str, entity_id: Any = None) -> Optional[E]:
    """Traduce entre enums de persistencia y de wire por nombre exacto.

    Si el nombre no existe en el destino se loguea y se devuelve None, para que
    el resto de la conversión siga adelante.
    """
    if value is None:
        return None
    try:
        return target[value.name]
    except KeyError:
        logger.warning("Cannot map %s '%s' for entity %s: not a member of %s",
                       field, value.name, entity_id, target.__name__)
        return None
