from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Query, Request, Response, status

from app.api.deps import get_prescription_service
from app.core.pagination import PageDescriptor, to_descriptor
from app.schemas.pagination import Page
from app.schemas.prescription import (
    PrescriptionCreate, PrescriptionMedicationIn, PrescriptionMedicationOut,
    PrescriptionOut, PrescriptionSearch, PrescriptionUpdate,
)
from app.services.prescription import PrescriptionService
from ._helpers import page_params

router = APIRouter(prefix="/prescriptions", tags=["prescriptions"])


@router.get("", response_model=Page[PrescriptionOut])
async def list_prescriptions(
    descriptor: PageDescriptor = Depends(page_params),
    patient_id: Optional[int] = Query(None, alias="patientId"),
    is_filled: Optional[bool] = Query(None, alias="isFilled"),
    svc: PrescriptionService = Depends(get_prescription_service),
):
    return await svc.list_all(descriptor, patient_id=patient_id, is_filled=is_filled)

@router.post("/search", response_model=Page[PrescriptionOut])
async def search_prescriptions(payload: PrescriptionSearch, svc: PrescriptionService = Depends(get_prescription_service)):
    return await svc.search(payload, to_descriptor(payload))

@router.get("/patient/{patient_id}", response_model=Page[PrescriptionOut])
async def list_prescriptions_by_patient(
    patient_id: int,
    descriptor: PageDescriptor = Depends(page_params),
    svc: PrescriptionService = Depends(get_prescription_service),
):
    return await svc.list_by_patient(patient_id, descriptor)

@router.get("/{id}", response_model=PrescriptionOut)
async def get_prescription(id: int, svc: PrescriptionService = Depends(get_prescription_service)):
    return await svc.get(id)

@router.get("/{id}/exists", response_model=bool)
async def prescription_exists(id: int, svc: PrescriptionService = Depends(get_prescription_service)):
    return await svc.exists(id)

@router.post("", response_model=PrescriptionOut, status_code=status.HTTP_201_CREATED)
async def create_prescription(
    payload: PrescriptionCreate,
    request: Request,
    response: Response,
    svc: PrescriptionService = Depends(get_prescription_service),
):
    out = await svc.create(payload)
    response.headers["Location"] = str(request.url_for("get_prescription", id=str(out.id)))
    return out

@router.put("/{id}", response_model=PrescriptionOut)
async def update_prescription(id: int, patch: PrescriptionUpdate, svc: PrescriptionService = Depends(get_prescription_service)):
    return await svc.update(id, patch)

@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_prescription(id: int, svc: PrescriptionService = Depends(get_prescription_service)):
    await svc.soft_delete(id)

# ---------- medicamentos de la receta ----------
@router.get("/{id}/medications", response_model=List[PrescriptionMedicationOut])
async def list_prescription_medications(id: int, svc: PrescriptionService = Depends(get_prescription_service)):
    return await svc.list_medications(id)

@router.post("/{id}/medications/{medication_id}", response_model=PrescriptionMedicationOut,
             status_code=status.HTTP_201_CREATED)
async def add_prescription_medication(
    id: int,
    medication_id: int,
    details: Optional[PrescriptionMedicationIn] = Body(None),
    svc: PrescriptionService = Depends(get_prescription_service),
):
    return await svc.add_medication(id, medication_id, details)

@router.get("/{id}/medications/{medication_id}", response_model=PrescriptionMedicationOut)
async def get_prescription_medication(id: int, medication_id: int, svc: PrescriptionService = Depends(get_prescription_service)):
    return await svc.get_medication(id, medication_id)

@router.put("/{id}/medications/{medication_id}", response_model=PrescriptionMedicationOut)
async def update_prescription_medication(
    id: int,
    medication_id: int,
    details: PrescriptionMedicationIn,
    svc: PrescriptionService = Depends(get_prescription_service),
):
    return await svc.update_medication_details(id, medication_id, details)

@router.delete("/{id}/medications/{medication_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_prescription_medication(id: int, medication_id: int, svc: PrescriptionService = Depends(get_prescription_service)):
    await svc.remove_medication(id, medication_id)
