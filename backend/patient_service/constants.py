"""Shared constants for API routes."""

# Pagination defaults
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

# Entity names used in alert and error headers
MEDICAL_CASE_ENTITY_NAME = "patientServiceMedicalCase"
PATIENT_ENTITY_NAME = "patientServicePatient"

# Search index names
MEDICAL_CASE_INDEX = "medical_case"
PATIENT_INDEX = "patient"
