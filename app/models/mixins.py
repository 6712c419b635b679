from datetime import datetime, timezone
from sqlalchemy import Boolean, DateTime, Integer
from sqlalchemy.orm import Mapped, mapped_column


def utcnow() -> datetime:
    # columnas DateTime sin tz, siempre en UTC
    return datetime.now(timezone.utc).replace(tzinfo=None)


class EntityMixin:
    """id + baja lógica + auditoría. La columna `version` la declara cada modelo
    junto a su __mapper_args__ (version_id_col)."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
