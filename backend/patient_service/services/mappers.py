"""Conversion between persisted entities and API DTOs."""

import base64

from patient_service.models.medical_case import MedicalCase
from patient_service.models.patient import Patient
from patient_service.schemas.medical_case import MedicalCaseDTO
from patient_service.schemas.patient import PatientDTO


def medical_case_to_dto(entity: MedicalCase) -> MedicalCaseDTO:
    return MedicalCaseDTO(
        id=entity.id,
        dms_id=entity.dms_id,
        location=entity.location,
        created_date=entity.created_date,
        patient_id=entity.patient_id,
    )


def medical_case_from_dto(dto: MedicalCaseDTO) -> MedicalCase:
    return MedicalCase(
        id=dto.id,
        dms_id=dto.dms_id,
        location=dto.location,
        created_date=dto.created_date,
        patient_id=dto.patient_id,
    )


def patient_to_dto(entity: Patient) -> PatientDTO:
    return PatientDTO(
        id=entity.id,
        image=base64.b64encode(entity.image).decode("ascii") if entity.image is not None else None,
        image_content_type=entity.image_content_type,
        phone_number=entity.phone_number,
        idp_code=entity.idp_code,
        dob=entity.dob,
        location=entity.location,
        created_date=entity.created_date,
        dms_id=entity.dms_id,
    )


def patient_from_dto(dto: PatientDTO) -> Patient:
    return Patient(
        id=dto.id,
        image=base64.b64decode(dto.image) if dto.image is not None else None,
        image_content_type=dto.image_content_type,
        phone_number=dto.phone_number,
        idp_code=dto.idp_code,
        dob=dto.dob,
        location=dto.location,
        created_date=dto.created_date,
        dms_id=dto.dms_id,
    )


def to_index_source(dto: MedicalCaseDTO | PatientDTO) -> dict:
    """JSON-compatible DTO dump stored as the search document source.

    The patient image is left out of the index.
    """
    return dto.model_dump(mode="json", by_alias=True, exclude={"image"})
