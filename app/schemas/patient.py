import enum
from datetime import date, datetime
from typing import Optional
from pydantic import EmailStr, Field

from app.schemas.base import CamelModel
from app.schemas.pagination import PaginationRequest

# vocabulario del lado wire; se traduce por nombre contra los enums del modelo
class Gender(str, enum.Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"
    OTHER = "OTHER"

class BloodType(str, enum.Enum):
    A_POSITIVE = "A_POSITIVE"
    A_NEGATIVE = "A_NEGATIVE"
    B_POSITIVE = "B_POSITIVE"
    B_NEGATIVE = "B_NEGATIVE"
    AB_POSITIVE = "AB_POSITIVE"
    AB_NEGATIVE = "AB_NEGATIVE"
    O_POSITIVE = "O_POSITIVE"
    O_NEGATIVE = "O_NEGATIVE"

class PatientCreate(CamelModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    document_type: Optional[str] = None
    document_number: Optional[str] = None
    email: Optional[EmailStr] = None
    gender: Optional[Gender] = None
    blood_type: Optional[BloodType] = None
    birth_date: Optional[date] = None
    phone: Optional[str] = None
    allergy_notes: Optional[str] = None
    chronic_conditions: Optional[str] = None

class PatientUpdate(CamelModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    document_type: Optional[str] = None
    document_number: Optional[str] = None
    email: Optional[EmailStr] = None
    gender: Optional[Gender] = None
    blood_type: Optional[BloodType] = None
    birth_date: Optional[date] = None
    phone: Optional[str] = None
    allergy_notes: Optional[str] = None
    chronic_conditions: Optional[str] = None
    # si viene, tiene que coincidir con la versión guardada
    version: Optional[int] = None

class PatientOut(CamelModel):
    id: int
    active: bool
    version: int
    created_at: datetime
    updated_at: datetime
    first_name: str
    last_name: str
    full_name: str
    age: Optional[int] = None
    document_type: Optional[str] = None
    document_number: Optional[str] = None
    email: Optional[str] = None
    gender: Optional[Gender] = None
    blood_type: Optional[BloodType] = None
    birth_date: Optional[date] = None
    phone: Optional[str] = None
    allergy_notes: Optional[str] = None
    chronic_conditions: Optional[str] = None

class PatientSummary(CamelModel):
    id: int
    first_name: str
    last_name: str
    full_name: str
    document_number: Optional[str] = None
    email: Optional[str] = None

class PatientSearch(PaginationRequest):
    name: Optional[str] = None
