from app.models.patient import Patient
from app.models.medication import Medication
from app.models.prescription import Prescription, PrescriptionMedication
