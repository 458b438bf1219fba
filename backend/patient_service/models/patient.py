"""Patient model.

A patient registered with the service. The image is stored inline as a
binary column together with its content type; ``dms_id`` points at the
patient's folder in the document-management system.
"""

from datetime import date

from sqlalchemy import BigInteger, Date, Integer, LargeBinary, String
from sqlalchemy.orm import Mapped, mapped_column

from patient_service.database import Base


class Patient(Base):
    """Patient record.

    Medical cases reference their owning patient through
    ``medical_case.patient_id``; there is no ORM-level collection here, the
    relation is maintained by ``PatientService.add_medical_case`` and
    ``PatientService.remove_medical_case``.
    """

    __tablename__ = "patient"

    # === Identity ===
    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )

    # === Photo ===
    image: Mapped[bytes | None] = mapped_column(LargeBinary, nullable=True)
    image_content_type: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # === Contact / identity ===
    phone_number: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    idp_code: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        unique=True,
        comment="Identity provider code, alternate lookup key",
    )
    dob: Mapped[date | None] = mapped_column(Date, nullable=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # === Metadata ===
    created_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    dms_id: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        comment="Folder/node id in the document management system",
    )

    def __repr__(self) -> str:
        return f"<Patient(id={self.id}, idp_code={self.idp_code})>"
