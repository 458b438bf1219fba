"""MedicalCase repository."""

from sqlalchemy import select, update

from patient_service.models.medical_case import MedicalCase
from patient_service.repositories.base import EntityRepository


class MedicalCaseRepository(EntityRepository[MedicalCase]):
    """Record store for MedicalCase."""

    model = MedicalCase

    async def find_by_patient_id(self, patient_id: int) -> list[MedicalCase]:
        """Get all cases owned by a patient, ordered by id."""
        result = await self.db.execute(
            select(MedicalCase)
            .where(MedicalCase.patient_id == patient_id)
            .order_by(MedicalCase.id.asc())
        )
        return list(result.scalars().all())

    async def detach_from_patient(self, patient_id: int) -> list[int]:
        """Clear the owner of every case owned by ``patient_id``.

        Returns:
            Ids of the cases that were detached.
        """
        result = await self.db.execute(
            select(MedicalCase.id).where(MedicalCase.patient_id == patient_id)
        )
        case_ids = list(result.scalars().all())
        if case_ids:
            await self.db.execute(
                update(MedicalCase)
                .where(MedicalCase.id.in_(case_ids))
                .values(patient_id=None)
            )
        return case_ids
