"""create patients, medications, prescriptions

Revision ID: 5b1e2c7a9d40
Revises:
Create Date: 2026-10-18 10:12:41.208113

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5b1e2c7a9d40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _entity_columns() -> list[sa.Column]:
    return [
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("active", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "patients",
        *_entity_columns(),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("document_type", sa.String(20), nullable=True),
        sa.Column("document_number", sa.String(50), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("active_email", sa.String(255), nullable=True),
        sa.Column("gender", sa.Enum("MALE", "FEMALE", "OTHER", name="genderenum"), nullable=True),
        sa.Column(
            "blood_type",
            sa.Enum(
                "A_POSITIVE", "A_NEGATIVE", "B_POSITIVE", "B_NEGATIVE",
                "AB_POSITIVE", "AB_NEGATIVE", "O_POSITIVE", "O_NEGATIVE",
                name="bloodtypeenum",
            ),
            nullable=True,
        ),
        sa.Column("birth_date", sa.Date(), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("allergy_notes", sa.Text(), nullable=True),
        sa.Column("chronic_conditions", sa.Text(), nullable=True),
        # email único solo entre pacientes activos
        sa.UniqueConstraint("active_email"),
    )
    op.create_index("ix_patients_active", "patients", ["active"])
    op.create_index("ix_patients_email", "patients", ["email"])
    op.create_index("ix_patients_document_number", "patients", ["document_number"])

    op.create_table(
        "medications",
        *_entity_columns(),
        sa.Column("medication_name", sa.String(150), nullable=False),
        sa.Column("generic_name", sa.String(150), nullable=True),
        sa.Column("medication_type", sa.String(100), nullable=True),
        sa.Column("manufacturer", sa.String(150), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("side_effects", sa.Text(), nullable=True),
        sa.Column("contraindications", sa.Text(), nullable=True),
    )
    op.create_index("ix_medications_active", "medications", ["active"])
    op.create_index("ix_medications_medication_name", "medications", ["medication_name"])
    op.create_index("ix_medications_generic_name", "medications", ["generic_name"])

    op.create_table(
        "prescriptions",
        *_entity_columns(),
        sa.Column("patient_id", sa.Integer(), sa.ForeignKey("patients.id"), nullable=False),
        sa.Column("prescription_number", sa.String(50), nullable=True),
        sa.Column("prescription_date", sa.Date(), nullable=True),
        sa.Column("doctor_name", sa.String(255), nullable=True),
        sa.Column("doctor_license", sa.String(100), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("valid_until", sa.Date(), nullable=True),
        sa.Column("is_filled", sa.Boolean(), nullable=False),
    )
    op.create_index("ix_prescriptions_active", "prescriptions", ["active"])
    op.create_index("ix_prescriptions_patient_id", "prescriptions", ["patient_id"])
    op.create_index("ix_prescriptions_prescription_number", "prescriptions", ["prescription_number"])

    op.create_table(
        "prescription_medications",
        *_entity_columns(),
        sa.Column("prescription_id", sa.Integer(), sa.ForeignKey("prescriptions.id"), nullable=False),
        sa.Column("medication_id", sa.Integer(), sa.ForeignKey("medications.id"), nullable=False),
        sa.Column("dosage", sa.String(100), nullable=True),
        sa.Column("frequency", sa.String(100), nullable=True),
        sa.Column("duration", sa.String(100), nullable=True),
        sa.Column("instructions", sa.Text(), nullable=True),
        sa.Column("quantity", sa.Integer(), nullable=True),
    )
    op.create_index("ix_prescription_medications_active", "prescription_medications", ["active"])
    # no es único: un par puede repetirse si las filas anteriores están dadas de baja
    op.create_index("ix_rx_med_pair", "prescription_medications", ["prescription_id", "medication_id"])
    op.create_index("ix_rx_med_medication", "prescription_medications", ["medication_id"])


def downgrade() -> None:
    op.drop_index("ix_rx_med_medication", table_name="prescription_medications")
    op.drop_index("ix_rx_med_pair", table_name="prescription_medications")
    op.drop_index("ix_prescription_medications_active", table_name="prescription_medications")
    op.drop_table("prescription_medications")

    op.drop_index("ix_prescriptions_prescription_number", table_name="prescriptions")
    op.drop_index("ix_prescriptions_patient_id", table_name="prescriptions")
    op.drop_index("ix_prescriptions_active", table_name="prescriptions")
    op.drop_table("prescriptions")

    op.drop_index("ix_medications_generic_name", table_name="medications")
    op.drop_index("ix_medications_medication_name", table_name="medications")
    op.drop_index("ix_medications_active", table_name="medications")
    op.drop_table("medications")

    op.drop_index("ix_patients_document_number", table_name="patients")
    op.drop_index("ix_patients_email", table_name="patients")
    op.drop_index("ix_patients_active", table_name="patients")
    op.drop_table("patients")
