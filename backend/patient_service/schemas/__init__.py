"""Pydantic schemas."""

from patient_service.schemas.medical_case import MedicalCaseDTO
from patient_service.schemas.pagination import Page, Pageable, SortOrder, parse_sort
from patient_service.schemas.patient import PatientDTO

__all__ = [
    "MedicalCaseDTO",
    "Page",
    "Pageable",
    "PatientDTO",
    "SortOrder",
    "parse_sort",
]
