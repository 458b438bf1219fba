"""Patient service.

Besides the CRUD/search contract shared with ``MedicalCaseService`` this
service owns the Patient to MedicalCase relation: adding or removing a case
updates the case's back-reference and re-indexes the case.
"""

import logging

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from patient_service.constants import MEDICAL_CASE_INDEX, PATIENT_INDEX
from patient_service.database import get_db
from patient_service.repositories.medical_case import MedicalCaseRepository
from patient_service.repositories.patient import PatientRepository
from patient_service.schemas.medical_case import MedicalCaseDTO
from patient_service.schemas.pagination import Page, Pageable
from patient_service.schemas.patient import PatientDTO
from patient_service.search.index import SearchIndex
from patient_service.services.mappers import (
    medical_case_to_dto,
    patient_from_dto,
    patient_to_dto,
    to_index_source,
)

logger = logging.getLogger(__name__)


class IdpCodeAlreadyUsedError(ValueError):
    """Raised when another patient already holds the idp code."""

    def __init__(self, idp_code: str):
        super().__init__(f"idpCode '{idp_code}' is already used by another patient")
        self.idp_code = idp_code


class PatientNotFoundError(ValueError):
    """Raised when a relation operation targets a missing patient."""

    pass


class MedicalCaseNotFoundError(ValueError):
    """Raised when a relation operation targets a missing medical case."""

    pass


class PatientService:
    """Service for managing Patient."""

    def __init__(self, db: AsyncSession):
        self.repository = PatientRepository(db)
        self.medical_cases = MedicalCaseRepository(db)
        self.search_index = SearchIndex(db)

    async def save(self, dto: PatientDTO) -> PatientDTO:
        """Save a patient.

        Raises:
            IdpCodeAlreadyUsedError: If another patient holds ``dto.idp_code``.
        """
        logger.debug("Request to save Patient : %s", dto.model_dump(exclude={"image"}))
        if dto.idp_code is not None:
            holder = await self.repository.find_by_idp_code(dto.idp_code)
            if holder is not None and holder.id != dto.id:
                raise IdpCodeAlreadyUsedError(dto.idp_code)
        entity = await self.repository.save(patient_from_dto(dto))
        result = patient_to_dto(entity)
        await self.search_index.index(PATIENT_INDEX, result.id, to_index_source(result))
        return result

    async def find_all(self, pageable: Pageable) -> Page[PatientDTO]:
        logger.debug("Request to get all Patients")
        page = await self.repository.find_all(pageable)
        return page.map(patient_to_dto)

    async def find_one(self, patient_id: int) -> PatientDTO | None:
        logger.debug("Request to get Patient : %s", patient_id)
        entity = await self.repository.find_by_id(patient_id)
        return patient_to_dto(entity) if entity is not None else None

    async def find_by_idp_code(self, idp_code: str) -> PatientDTO | None:
        logger.debug("Request to get Patient by idpCode : %s", idp_code)
        entity = await self.repository.find_by_idp_code(idp_code)
        return patient_to_dto(entity) if entity is not None else None

    async def delete(self, patient_id: int) -> None:
        """Delete the patient, detaching and re-indexing its medical cases."""
        logger.debug("Request to delete Patient : %s", patient_id)
        detached = await self.medical_cases.detach_from_patient(patient_id)
        await self.repository.delete_by_id(patient_id)
        await self.search_index.remove(PATIENT_INDEX, patient_id)
        for case_id in detached:
            await self._reindex_case(case_id)

    async def search(self, query: str, pageable: Pageable) -> Page[PatientDTO]:
        """Search for the patient corresponding to the query."""
        logger.debug("Request to search for a page of Patients for query %s", query)
        page = await self.search_index.search(PATIENT_INDEX, query, pageable)
        return page.map(PatientDTO.model_validate)

    async def add_medical_case(self, patient_id: int, case_id: int) -> MedicalCaseDTO:
        """Make the patient the owner of a medical case.

        Raises:
            PatientNotFoundError: If the patient does not exist.
            MedicalCaseNotFoundError: If the case does not exist.
        """
        if await self.repository.find_by_id(patient_id) is None:
            raise PatientNotFoundError(f"Patient {patient_id} not found")
        case = await self.medical_cases.find_by_id(case_id)
        if case is None:
            raise MedicalCaseNotFoundError(f"MedicalCase {case_id} not found")
        case.patient_id = patient_id
        case = await self.medical_cases.save(case)
        return await self._index_case(case)

    async def remove_medical_case(self, patient_id: int, case_id: int) -> MedicalCaseDTO:
        """Clear the owner of a medical case if it is owned by the patient.

        A case owned by another patient is returned unchanged.

        Raises:
            PatientNotFoundError: If the patient does not exist.
            MedicalCaseNotFoundError: If the case does not exist.
        """
        if await self.repository.find_by_id(patient_id) is None:
            raise PatientNotFoundError(f"Patient {patient_id} not found")
        case = await self.medical_cases.find_by_id(case_id)
        if case is None:
            raise MedicalCaseNotFoundError(f"MedicalCase {case_id} not found")
        if case.patient_id != patient_id:
            return medical_case_to_dto(case)
        case.patient_id = None
        case = await self.medical_cases.save(case)
        return await self._index_case(case)

    async def _reindex_case(self, case_id: int) -> None:
        case = await self.medical_cases.find_by_id(case_id)
        if case is not None:
            await self._index_case(case)

    async def _index_case(self, case) -> MedicalCaseDTO:
        dto = medical_case_to_dto(case)
        await self.search_index.index(MEDICAL_CASE_INDEX, dto.id, to_index_source(dto))
        return dto


async def get_patient_service(
    db: AsyncSession = Depends(get_db, scope="function"),
) -> PatientService:
    """FastAPI dependency providing a request-scoped PatientService."""
    return PatientService(db)
