"""Shared query parameter dependencies."""

from fastapi import HTTPException, Query, status

from patient_service.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from patient_service.schemas.pagination import Pageable, parse_sort


async def pageable_params(
    page: int = Query(0, ge=0, description="Zero-based page index"),
    size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE, description="Page size"),
    sort: list[str] | None = Query(None, description="property[,asc|desc], repeatable"),
) -> Pageable:
    """Build a Pageable from ``page``, ``size`` and ``sort`` query parameters."""
    try:
        orders = parse_sort(sort)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    return Pageable(page=page, size=size, sort=orders)
