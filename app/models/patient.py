from __future__ import annotations
import enum
from datetime import date
from typing import TYPE_CHECKING
from sqlalchemy import String, Text, Enum, Date, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.core.db import Base
from app.models.mixins import EntityMixin

if TYPE_CHECKING:
    from app.models.prescription import Prescription

class GenderEnum(str, enum.Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"
    OTHER = "OTHER"

class BloodTypeEnum(str, enum.Enum):
    A_POSITIVE = "A_POSITIVE"
    A_NEGATIVE = "A_NEGATIVE"
    B_POSITIVE = "B_POSITIVE"
    B_NEGATIVE = "B_NEGATIVE"
    AB_POSITIVE = "AB_POSITIVE"
    AB_NEGATIVE = "AB_NEGATIVE"
    O_POSITIVE = "O_POSITIVE"
    O_NEGATIVE = "O_NEGATIVE"

class Patient(EntityMixin, Base):
    __tablename__ = "patients"

    first_name: Mapped[str] = mapped_column(String(100))
    last_name: Mapped[str] = mapped_column(String(100))
    document_type: Mapped[str | None] = mapped_column(String(20), nullable=True)
    document_number: Mapped[str | None] = mapped_column(String(50), nullable=True, index=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
    # copia de email mientras el paciente está activo, NULL al darlo de baja:
    # el índice único garantiza email único entre pacientes activos
    active_email: Mapped[str | None] = mapped_column(String(255), nullable=True, unique=True)
    gender: Mapped[GenderEnum | None] = mapped_column(Enum(GenderEnum), nullable=True)
    blood_type: Mapped[BloodTypeEnum | None] = mapped_column(Enum(BloodTypeEnum), nullable=True)
    birth_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    allergy_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    chronic_conditions: Mapped[str | None] = mapped_column(Text, nullable=True)

    version: Mapped[int] = mapped_column(Integer, nullable=False)
    __mapper_args__ = {"version_id_col": version}

    # solo referencia: el paciente no maneja el ciclo de vida de sus recetas
    prescriptions: Mapped[list["Prescription"]] = relationship(back_populates="patient")

    def sync_active_email(self) -> None:
        self.active_email = self.email if self.active else None
