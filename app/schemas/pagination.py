import math
from typing import Generic, List, TypeVar
from pydantic import Field

from app.schemas.base import CamelModel

T = TypeVar("T")

DEFAULT_PAGE = 0
DEFAULT_SIZE = 20


class PaginationRequest(CamelModel):
    page: int = Field(DEFAULT_PAGE, ge=0)
    size: int = Field(DEFAULT_SIZE, ge=1)
    # "campo,direccion" -> ej. ["id,asc", "email,desc"]
    sort: List[str] = Field(default_factory=list)


class Page(CamelModel, Generic[T]):
    content: List[T] = Field(default_factory=list)
    total_elements: int
    total_pages: int
    page: int
    size: int

    @classmethod
    def build(cls, content: List[T], total: int, page: int, size: int) -> "Page[T]":
        return cls(
            content=content,
            total_elements=total,
            total_pages=math.ceil(total / size) if size else 0,
            page=page,
            size=size,
        )
