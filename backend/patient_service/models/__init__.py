"""SQLAlchemy models."""

from patient_service.models.identity import same_identity
from patient_service.models.medical_case import MedicalCase
from patient_service.models.patient import Patient
from patient_service.models.search import SearchDocument

__all__ = [
    "MedicalCase",
    "Patient",
    "SearchDocument",
    "same_identity",
]
