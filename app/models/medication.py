from sqlalchemy import String, Text, Integer
from sqlalchemy.orm import Mapped, mapped_column
from app.core.db import Base
from app.models.mixins import EntityMixin

class Medication(EntityMixin, Base):
    __tablename__ = "medications"

    medication_name: Mapped[str] = mapped_column(String(150), index=True)
    generic_name: Mapped[str | None] = mapped_column(String(150), nullable=True, index=True)
    medication_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    manufacturer: Mapped[str | None] = mapped_column(String(150), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    side_effects: Mapped[str | None] = mapped_column(Text, nullable=True)
    contraindications: Mapped[str | None] = mapped_column(Text, nullable=True)

    version: Mapped[int] = mapped_column(Integer, nullable=False)
    __mapper_args__ = {"version_id_col": version}
