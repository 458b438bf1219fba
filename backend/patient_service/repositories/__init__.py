"""Repository layer for data access.

Repositories encapsulate database operations and provide a clean interface
for CRUD operations on domain objects.
"""

from patient_service.repositories.base import EntityRepository, InvalidSortError
from patient_service.repositories.medical_case import MedicalCaseRepository
from patient_service.repositories.patient import PatientRepository

__all__ = [
    "EntityRepository",
    "InvalidSortError",
    "MedicalCaseRepository",
    "PatientRepository",
]
