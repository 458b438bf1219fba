"""Patient API routes."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from patient_service.constants import PATIENT_ENTITY_NAME
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
from patient_service.schemas.patient import PatientDTO
from patient_service.services.medical_case import MedicalCaseService, get_medical_case_service
from patient_service.services.patient import (
    IdpCodeAlreadyUsedError,
    MedicalCaseNotFoundError,
    PatientNotFoundError,
    PatientService,
    get_patient_service,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["patients"])

ENTITY_NAME = PATIENT_ENTITY_NAME
BASE_URL = "/api/patients"
SEARCH_URL = "/api/_search/patients"


async def _save(service: PatientService, patient: PatientDTO) -> PatientDTO:
    try:
        return await service.save(patient)
    except IdpCodeAlreadyUsedError as e:
        raise BadRequestAlertError(str(e), ENTITY_NAME, "idpcodeexists") from e


@router.post("/patients", response_model=PatientDTO, status_code=status.HTTP_201_CREATED)
async def create_patient(
    patient: PatientDTO,
    response: Response,
    service: PatientService = Depends(get_patient_service),
) -> PatientDTO:
    """Create a new patient.

    Raises:
        BadRequestAlertError: 400 if the patient already has an id, or if the
            idpCode is used by another patient.
    """
    logger.debug("REST request to save Patient : %s", patient.idp_code)
    if patient.id is not None:
        raise BadRequestAlertError("A new patient cannot already have an ID", ENTITY_NAME, "idexists")
    result = await _save(service, patient)
    response.headers["Location"] = f"{BASE_URL}/{result.id}"
    response.headers.update(create_entity_creation_alert(ENTITY_NAME, str(result.id)))
    return result


@router.put("/patients", response_model=PatientDTO)
async def update_patient(
    patient: PatientDTO,
    response: Response,
    service: PatientService = Depends(get_patient_service),
) -> PatientDTO:
    """Update an existing patient."""
    logger.debug("REST request to update Patient : %s", patient.id)
    if patient.id is None:
        raise BadRequestAlertError("Invalid id", ENTITY_NAME, "idnull")
    result = await _save(service, patient)
    response.headers.update(create_entity_update_alert(ENTITY_NAME, str(result.id)))
    return result


@router.get("/patients", response_model=list[PatientDTO])
async def get_all_patients(
    response: Response,
    pageable: Pageable = Depends(pageable_params),
    service: PatientService = Depends(get_patient_service),
) -> list[PatientDTO]:
    logger.debug("REST request to get a page of Patients")
    page = await service.find_all(pageable)
    response.headers.update(generate_pagination_headers(page, BASE_URL))
    return page.content


@router.get("/patients/idp-code/{idp_code}", response_model=PatientDTO)
async def get_patient_by_idp_code(
    idp_code: str,
    service: PatientService = Depends(get_patient_service),
):
    """Get the patient with the given identity provider code."""
    logger.debug("REST request to get Patient by idpCode : %s", idp_code)
    result = await service.find_by_idp_code(idp_code)
    if result is None:
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    return result


@router.get("/patients/{patient_id}", response_model=PatientDTO)
async def get_patient(
    patient_id: int,
    service: PatientService = Depends(get_patient_service),
):
    logger.debug("REST request to get Patient : %s", patient_id)
    result = await service.find_one(patient_id)
    if result is None:
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    return result


@router.delete("/patients/{patient_id}", response_class=Response)
async def delete_patient(
    patient_id: int,
    service: PatientService = Depends(get_patient_service),
) -> Response:
    """Delete a patient. Its medical cases are kept, without owner."""
    logger.debug("REST request to delete Patient : %s", patient_id)
    await service.delete(patient_id)
    return Response(
        status_code=status.HTTP_200_OK,
        headers=create_entity_deletion_alert(ENTITY_NAME, str(patient_id)),
    )


@router.get("/_search/patients", response_model=list[PatientDTO])
async def search_patients(
    response: Response,
    query: str = Query(..., description="Free-text query"),
    pageable: Pageable = Depends(pageable_params),
    service: PatientService = Depends(get_patient_service),
) -> list[PatientDTO]:
    logger.debug("REST request to search for a page of Patients for query %s", query)
    page = await service.search(query, pageable)
    response.headers.update(generate_search_pagination_headers(query, page, SEARCH_URL))
    return page.content


# =============================================================================
# Patient -> MedicalCase relation
# =============================================================================


@router.get("/patients/{patient_id}/medical-cases", response_model=list[MedicalCaseDTO])
async def get_patient_medical_cases(
    patient_id: int,
    service: MedicalCaseService = Depends(get_medical_case_service),
) -> list[MedicalCaseDTO]:
    """List the medical cases owned by a patient."""
    logger.debug("REST request to get MedicalCases of Patient : %s", patient_id)
    return await service.find_by_patient(patient_id)


@router.put("/patients/{patient_id}/medical-cases/{case_id}", response_model=MedicalCaseDTO)
async def add_patient_medical_case(
    patient_id: int,
    case_id: int,
    service: PatientService = Depends(get_patient_service),
) -> MedicalCaseDTO:
    """Make the patient the owner of a medical case.

    Raises:
        HTTPException: 404 if the patient or the medical case does not exist.
    """
    logger.debug("REST request to add MedicalCase %s to Patient %s", case_id, patient_id)
    try:
        return await service.add_medical_case(patient_id, case_id)
    except (PatientNotFoundError, MedicalCaseNotFoundError) as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.delete("/patients/{patient_id}/medical-cases/{case_id}", response_model=MedicalCaseDTO)
async def remove_patient_medical_case(
    patient_id: int,
    case_id: int,
    service: PatientService = Depends(get_patient_service),
) -> MedicalCaseDTO:
    """Release a medical case from the patient.

    Raises:
        HTTPException: 404 if the patient or the medical case does not exist.
    """
    logger.debug("REST request to remove MedicalCase %s from Patient %s", case_id, patient_id)
    try:
        return await service.remove_medical_case(patient_id, case_id)
    except (PatientNotFoundError, MedicalCaseNotFoundError) as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
