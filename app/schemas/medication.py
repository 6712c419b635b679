from datetime import datetime
from typing import Optional
from pydantic import Field

from app.schemas.base import CamelModel
from app.schemas.pagination import PaginationRequest

class MedicationCreate(CamelModel):
    medication_name: str = Field(..., min_length=1, max_length=150)
    generic_name: Optional[str] = None
    medication_type: Optional[str] = None
    manufacturer: Optional[str] = None
    description: Optional[str] = None
    side_effects: Optional[str] = None
    contraindications: Optional[str] = None

class MedicationUpdate(CamelModel):
    medication_name: Optional[str] = None
    generic_name: Optional[str] = None
    medication_type: Optional[str] = None
    manufacturer: Optional[str] = None
    description: Optional[str] = None
    side_effects: Optional[str] = None
    contraindications: Optional[str] = None
    version: Optional[int] = None

class MedicationOut(CamelModel):
    id: int
    active: bool
    version: int
    created_at: datetime
    updated_at: datetime
    medication_name: str
    generic_name: Optional[str] = None
    medication_type: Optional[str] = None
    manufacturer: Optional[str] = None
    description: Optional[str] = None
    side_effects: Optional[str] = None
    contraindications: Optional[str] = None

class MedicationSummary(CamelModel):
    id: int
    medication_name: str
    generic_name: Optional[str] = None

class MedicationSearch(PaginationRequest):
    # texto libre: nombre O nombre genérico
    search: Optional[str] = None
    medication_name: Optional[str] = None
    generic_name: Optional[str] = None
    manufacturer: Optional[str] = None
    medication_type: Optional[str] = None
