"""Pydantic schemas for the MedicalCase API."""

from datetime import date

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class MedicalCaseDTO(BaseModel):
    """MedicalCase as exposed over REST.

    ``id`` must be absent on create and present on update; the routes enforce
    this, not the schema.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    id: int | None = None
    dms_id: str | None = None
    location: str | None = None
    created_date: date | None = None
    patient_id: int | None = None
