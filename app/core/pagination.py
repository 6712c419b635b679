# app/core/pagination.py
"""Traduce page/size/sort a un descriptor de consulta (offset, limit, orden).

Nunca falla: entrada ausente o fuera de rango cae en los valores por defecto,
y los tokens de orden mal formados se descartan en silencio.
"""
from dataclasses import dataclass
from typing import Iterable, Optional

from app.schemas.pagination import DEFAULT_PAGE, DEFAULT_SIZE, PaginationRequest


@dataclass(frozen=True)
class PageDescriptor:
    page: int
    size: int
    offset: int
    limit: int
    # tupla de (campo, ascendente); vacía = orden natural
    order_by: tuple[tuple[str, bool], ...] = ()

    @property
    def sorted(self) -> bool:
        return bool(self.order_by)


def parse_sort(tokens: Optional[Iterable[Optional[str]]]) -> tuple[tuple[str, bool], ...]:
    if not tokens:
        return ()
    orders: list[tuple[str, bool]] = []
    for token in tokens:
        if token is None or not token.strip():
            continue
        parts = token.split(",")
        field = parts[0].strip()
        if not field:
            continue
        ascending = True
        if len(parts) > 1 and parts[1].strip().lower() == "desc":
            ascending = False
        orders.append((field, ascending))
    return tuple(orders)


def to_descriptor(request: Optional[PaginationRequest]) -> PageDescriptor:
    if request is None:
        return PageDescriptor(page=DEFAULT_PAGE, size=DEFAULT_SIZE, offset=0, limit=DEFAULT_SIZE)

    page = request.page if request.page is not None and request.page >= 0 else DEFAULT_PAGE
    size = request.size if request.size is not None and request.size >= 1 else DEFAULT_SIZE
    return PageDescriptor(
        page=page,
        size=size,
        offset=page * size,
        limit=size,
        order_by=parse_sort(request.sort),
    )
