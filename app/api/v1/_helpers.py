from typing import List, Optional

from fastapi import Query

from app.core.pagination import PageDescriptor, to_descriptor
from app.schemas.pagination import DEFAULT_PAGE, DEFAULT_SIZE, PaginationRequest


def page_params(
    page: int = Query(DEFAULT_PAGE, ge=0),
    size: int = Query(DEFAULT_SIZE, ge=1),
    sort: Optional[List[str]] = Query(None),
) -> PageDescriptor:
    """?page&size&sort (sort repetible: ?sort=lastName,asc&sort=id,desc)."""
    return to_descriptor(PaginationRequest(page=page, size=size, sort=sort or []))
