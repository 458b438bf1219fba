"""Pydantic schemas for the Patient API."""

import base64
import binascii
from datetime import date

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class PatientDTO(BaseModel):
    """Patient as exposed over REST.

    The image travels as a base64 string; it is decoded to bytes when the
    DTO is mapped to the stored entity.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    id: int | None = None
    image: str | None = None
    image_content_type: str | None = None
    phone_number: int | None = None
    idp_code: str | None = None
    dob: date | None = None
    location: str | None = None
    created_date: date | None = None
    dms_id: str | None = None

    @field_validator("image")
    @classmethod
    def image_must_be_base64(cls, value: str | None) -> str | None:
        if value is None:
            return value
        try:
            base64.b64decode(value, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValueError("image must be base64 encoded") from e
        return value
