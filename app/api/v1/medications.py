from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, Response, status

from app.api.deps import get_medication_service
from app.core.pagination import PageDescriptor, to_descriptor
from app.schemas.medication import MedicationCreate, MedicationOut, MedicationSearch, MedicationUpdate
from app.schemas.pagination import Page
from app.services.medication import MedicationService
from ._helpers import page_params

router = APIRouter(prefix="/medications", tags=["medications"])


@router.get("", response_model=Page[MedicationOut])
async def list_medications(
    descriptor: PageDescriptor = Depends(page_params),
    medication_type: Optional[str] = Query(None, alias="medicationType"),
    manufacturer: Optional[str] = Query(None),
    svc: MedicationService = Depends(get_medication_service),
):
    return await svc.list_all(descriptor, medication_type=medication_type, manufacturer=manufacturer)

@router.post("/search", response_model=Page[MedicationOut])
async def search_medications(payload: MedicationSearch, svc: MedicationService = Depends(get_medication_service)):
    return await svc.search(payload, to_descriptor(payload))

@router.get("/{id}", response_model=MedicationOut)
async def get_medication(id: int, svc: MedicationService = Depends(get_medication_service)):
    return await svc.get(id)

@router.get("/{id}/exists", response_model=bool)
async def medication_exists(id: int, svc: MedicationService = Depends(get_medication_service)):
    return await svc.exists(id)

@router.post("", response_model=MedicationOut, status_code=status.HTTP_201_CREATED)
async def create_medication(
    payload: MedicationCreate,
    request: Request,
    response: Response,
    svc: MedicationService = Depends(get_medication_service),
):
    out = await svc.create(payload)
    response.headers["Location"] = str(request.url_for("get_medication", id=str(out.id)))
    return out

@router.put("/{id}", response_model=MedicationOut)
async def update_medication(id: int, patch: MedicationUpdate, svc: MedicationService = Depends(get_medication_service)):
    return await svc.update(id, patch)

@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_medication(id: int, svc: MedicationService = Depends(get_medication_service)):
    await svc.soft_delete(id)
