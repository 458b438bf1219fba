"""Patient repository."""

from sqlalchemy import select

from patient_service.models.patient import Patient
from patient_service.repositories.base import EntityRepository


class PatientRepository(EntityRepository[Patient]):
    """Record store for Patient, with lookup by identity provider code."""

    model = Patient

    async def find_by_idp_code(self, idp_code: str) -> Patient | None:
        """Get the patient holding ``idp_code``, or None."""
        result = await self.db.execute(select(Patient).where(Patient.idp_code == idp_code))
        return result.scalars().first()
