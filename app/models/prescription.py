from __future__ import annotations
from datetime import date
from typing import TYPE_CHECKING
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import String, Text, Date, Boolean, ForeignKey, Integer, Index
from app.core.db import Base
from app.models.mixins import EntityMixin

if TYPE_CHECKING:
    from app.models.medication import Medication
    from app.models.patient import Patient

class Prescription(EntityMixin, Base):
    __tablename__ = "prescriptions"

    patient_id: Mapped[int] = mapped_column(ForeignKey("patients.id"), index=True, nullable=False)

    prescription_number: Mapped[str | None] = mapped_column(String(50), nullable=True, index=True)
    prescription_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    doctor_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    doctor_license: Mapped[str | None] = mapped_column(String(100), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    valid_until: Mapped[date | None] = mapped_column(Date, nullable=True)
    is_filled: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    version: Mapped[int] = mapped_column(Integer, nullable=False)
    __mapper_args__ = {"version_id_col": version}

    patient: Mapped["Patient"] = relationship(back_populates="prescriptions")
    medications: Mapped[list["PrescriptionMedication"]] = relationship(
        back_populates="prescription", cascade="all, delete-orphan"
    )


class PrescriptionMedication(EntityMixin, Base):
    """Fila de unión receta <-> medicamento, con datos propios (dosis, frecuencia...)."""
    __tablename__ = "prescription_medications"

    prescription_id: Mapped[int] = mapped_column(ForeignKey("prescriptions.id"), nullable=False)
    medication_id: Mapped[int] = mapped_column(ForeignKey("medications.id"), nullable=False)

    dosage: Mapped[str | None] = mapped_column(String(100), nullable=True)
    frequency: Mapped[str | None] = mapped_column(String(100), nullable=True)
    duration: Mapped[str | None] = mapped_column(String(100), nullable=True)
    instructions: Mapped[str | None] = mapped_column(Text, nullable=True)
    quantity: Mapped[int | None] = mapped_column(Integer, nullable=True)

    version: Mapped[int] = mapped_column(Integer, nullable=False)
    __mapper_args__ = {"version_id_col": version}

    prescription: Mapped["Prescription"] = relationship(back_populates="medications")
    medication: Mapped["Medication"] = relationship()

    __table_args__ = (
        Index("ix_rx_med_pair", "prescription_id", "medication_id"),
        Index("ix_rx_med_medication", "medication_id"),
    )
