"""MedicalCase API routes.

CRUD and free-text search over medical cases, with alert and pagination
response headers.
"""

import logging

from fastapi import APIRouter, Depends, Query, Response, status

from patient_service.constants import MEDICAL_CASE_ENTITY_NAME
from patient_service.errors import BadRequestAlertError
from patient_service.routes.headers import (
    create_entity_creation_alert,
    create_entity_deletion_alert,
    create_entity_update_alert,
    generate_pagination_headers,
    generate_search_pagination_headers,
)
from patient_service.routes.params import pageable_params
from patient_service.schemas.medical_case import MedicalCaseDTO
from patient_service.schemas.pagination import Pageable
from patient_service.services.medical_case import MedicalCaseService, get_medical_case_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["medical-cases"])

ENTITY_NAME = MEDICAL_CASE_ENTITY_NAME
BASE_URL = "/api/medical-cases"
SEARCH_URL = "/api/_search/medical-cases"


@router.post(
    "/medical-cases",
    response_model=MedicalCaseDTO,
    status_code=status.HTTP_201_CREATED,
)
async def create_medical_case(
    medical_case: MedicalCaseDTO,
    response: Response,
    service: MedicalCaseService = Depends(get_medical_case_service),
) -> MedicalCaseDTO:
    """Create a new medicalCase.

    Returns:
        The created medicalCase, with a ``Location`` header pointing at it.

    Raises:
        BadRequestAlertError: 400 if the medicalCase already has an id.
    """
    logger.debug("REST request to save MedicalCase : %s", medical_case)
    if medical_case.id is not None:
        raise BadRequestAlertError(
            "A new medicalCase cannot already have an ID", ENTITY_NAME, "idexists"
        )
    result = await service.save(medical_case)
    response.headers["Location"] = f"{BASE_URL}/{result.id}"
    response.headers.update(create_entity_creation_alert(ENTITY_NAME, str(result.id)))
    return result


@router.put("/medical-cases", response_model=MedicalCaseDTO)
async def update_medical_case(
    medical_case: MedicalCaseDTO,
    response: Response,
    service: MedicalCaseService = Depends(get_medical_case_service),
) -> MedicalCaseDTO:
    """Update an existing medicalCase.

    Raises:
        BadRequestAlertError: 400 if the medicalCase has no id.
    """
    logger.debug("REST request to update MedicalCase : %s", medical_case)
    if medical_case.id is None:
        raise BadRequestAlertError("Invalid id", ENTITY_NAME, "idnull")
    result = await service.save(medical_case)
    response.headers.update(create_entity_update_alert(ENTITY_NAME, str(result.id)))
    return result


@router.get("/medical-cases", response_model=list[MedicalCaseDTO])
async def get_all_medical_cases(
    response: Response,
    pageable: Pageable = Depends(pageable_params),
    service: MedicalCaseService = Depends(get_medical_case_service),
) -> list[MedicalCaseDTO]:
    """Get a page of medicalCases."""
    logger.debug("REST request to get a page of MedicalCases")
    page = await service.find_all(pageable)
    response.headers.update(generate_pagination_headers(page, BASE_URL))
    return page.content


@router.get("/medical-cases/{case_id}", response_model=MedicalCaseDTO)
async def get_medical_case(
    case_id: int,
    service: MedicalCaseService = Depends(get_medical_case_service),
):
    """Get the medicalCase with the given id, or 404 with an empty body."""
    logger.debug("REST request to get MedicalCase : %s", case_id)
    result = await service.find_one(case_id)
    if result is None:
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    return result


@router.delete("/medical-cases/{case_id}", response_class=Response)
async def delete_medical_case(
    case_id: int,
    service: MedicalCaseService = Depends(get_medical_case_service),
) -> Response:
    """Delete the medicalCase with the given id. Absent ids are accepted."""
    logger.debug("REST request to delete MedicalCase : %s", case_id)
    await service.delete(case_id)
    return Response(
        status_code=status.HTTP_200_OK,
        headers=create_entity_deletion_alert(ENTITY_NAME, str(case_id)),
    )


@router.get("/_search/medical-cases", response_model=list[MedicalCaseDTO])
async def search_medical_cases(
    response: Response,
    query: str = Query(..., description="Free-text query"),
    pageable: Pageable = Depends(pageable_params),
    service: MedicalCaseService = Depends(get_medical_case_service),
) -> list[MedicalCaseDTO]:
    """Search for the medicalCases corresponding to the query."""
    logger.debug("REST request to search for a page of MedicalCases for query %s", query)
    page = await service.search(query, pageable)
    response.headers.update(generate_search_pagination_headers(query, page, SEARCH_URL))
    return page.content
