"""MedicalCase model."""

from datetime import date

from sqlalchemy import BigInteger, Date, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from patient_service.database import Base


class MedicalCase(Base):
    """A medical case, optionally owned by a patient."""

    __tablename__ = "medical_case"

    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )

    dms_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    # Back-reference to the owning patient
    patient_id: Mapped[int | None] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        ForeignKey("patient.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<MedicalCase(id={self.id}, patient_id={self.patient_id})>"
