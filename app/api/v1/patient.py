from fastapi import APIRouter, Depends, Request, Response, status

from app.api.deps import get_patient_service
from app.core.pagination import PageDescriptor, to_descriptor
from app.schemas.pagination import Page
from app.schemas.patient import PatientCreate, PatientOut, PatientSearch, PatientUpdate
from app.schemas.prescription import PrescriptionOut
from app.services.patient import PatientService
from ._helpers import page_params

router = APIRouter(prefix="/patients", tags=["patients"])


@router.get("", response_model=Page[PatientOut])
async def list_patients(
    descriptor: PageDescriptor = Depends(page_params),
    svc: PatientService = Depends(get_patient_service),
):
    return await svc.list_all(descriptor)

@router.post("/search", response_model=Page[PatientOut])
async def search_patients(payload: PatientSearch, svc: PatientService = Depends(get_patient_service)):
    return await svc.search(payload.name, to_descriptor(payload))

@router.get("/email/{email}", response_model=PatientOut)
async def get_patient_by_email(email: str, svc: PatientService = Depends(get_patient_service)):
    return await svc.get_by_email(email)

@router.get("/{id}", response_model=PatientOut)
async def get_patient(id: int, svc: PatientService = Depends(get_patient_service)):
    return await svc.get(id)

@router.get("/{id}/exists", response_model=bool)
async def patient_exists(id: int, svc: PatientService = Depends(get_patient_service)):
    return await svc.exists(id)

@router.get("/{id}/prescriptions", response_model=list[PrescriptionOut])
async def get_patient_prescriptions(id: int, svc: PatientService = Depends(get_patient_service)):
    return await svc.list_prescriptions(id)

@router.post("", response_model=PatientOut, status_code=status.HTTP_201_CREATED)
async def create_patient(
    payload: PatientCreate,
    request: Request,
    response: Response,
    svc: PatientService = Depends(get_patient_service),
):
    out = await svc.create(payload)
    response.headers["Location"] = str(request.url_for("get_patient", id=str(out.id)))
    return out

@router.put("/{id}", response_model=PatientOut)
async def update_patient(id: int, patch: PatientUpdate, svc: PatientService = Depends(get_patient_service)):
    return await svc.update(id, patch)

@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_patient(id: int, svc: PatientService = Depends(get_patient_service)):
    await svc.soft_delete(id)
