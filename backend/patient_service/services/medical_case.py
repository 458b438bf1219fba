"""MedicalCase service.

Mediates between the record store, the search index and DTO conversion.
Every save re-indexes the record; every delete removes it from the index.
Collaborator failures propagate unchanged.
"""

import logging

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from patient_service.constants import MEDICAL_CASE_INDEX
from patient_service.database import get_db
from patient_service.repositories.medical_case import MedicalCaseRepository
from patient_service.schemas.medical_case import MedicalCaseDTO
from patient_service.schemas.pagination import Page, Pageable
from patient_service.search.index import SearchIndex
from patient_service.services.mappers import (
    medical_case_from_dto,
    medical_case_to_dto,
    to_index_source,
)

logger = logging.getLogger(__name__)


class MedicalCaseService:
    """Service for managing MedicalCase."""

    def __init__(self, db: AsyncSession):
        self.repository = MedicalCaseRepository(db)
        self.search_index = SearchIndex(db)

    async def save(self, dto: MedicalCaseDTO) -> MedicalCaseDTO:
        """Save a medicalCase.

        Args:
            dto: The entity to save. Without an id a new record is created.

        Returns:
            The persisted entity.
        """
        logger.debug("Request to save MedicalCase : %s", dto)
        entity = await self.repository.save(medical_case_from_dto(dto))
        result = medical_case_to_dto(entity)
        await self.search_index.index(MEDICAL_CASE_INDEX, result.id, to_index_source(result))
        return result

    async def find_all(self, pageable: Pageable) -> Page[MedicalCaseDTO]:
        logger.debug("Request to get all MedicalCases")
        page = await self.repository.find_all(pageable)
        return page.map(medical_case_to_dto)

    async def find_one(self, case_id: int) -> MedicalCaseDTO | None:
        logger.debug("Request to get MedicalCase : %s", case_id)
        entity = await self.repository.find_by_id(case_id)
        return medical_case_to_dto(entity) if entity is not None else None

    async def find_by_patient(self, patient_id: int) -> list[MedicalCaseDTO]:
        """Get the cases owned by a patient."""
        logger.debug("Request to get MedicalCases of Patient : %s", patient_id)
        entities = await self.repository.find_by_patient_id(patient_id)
        return [medical_case_to_dto(entity) for entity in entities]

    async def delete(self, case_id: int) -> None:
        """Delete the medicalCase from the store and the search index."""
        logger.debug("Request to delete MedicalCase : %s", case_id)
        await self.repository.delete_by_id(case_id)
        await self.search_index.remove(MEDICAL_CASE_INDEX, case_id)

    async def search(self, query: str, pageable: Pageable) -> Page[MedicalCaseDTO]:
        """Search for the medicalCase corresponding to the query."""
        logger.debug("Request to search for a page of MedicalCases for query %s", query)
        page = await self.search_index.search(MEDICAL_CASE_INDEX, query, pageable)
        return page.map(MedicalCaseDTO.model_validate)


async def get_medical_case_service(
    db: AsyncSession = Depends(get_db, scope="function"),
) -> MedicalCaseService:
    """FastAPI dependency providing a request-scoped MedicalCaseService."""
    return MedicalCaseService(db)
