"""Search document model.

Mirror of store records used for free-text search. Rows are written and
removed by the service layer; nothing links them to the source tables, so
the two may diverge until ``scripts.reindex`` is run.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, BigInteger, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from patient_service.database import Base


class SearchDocument(Base):
    """One indexed record, keyed by index name and source record id."""

    __tablename__ = "search_document"

    index_name: Mapped[str] = mapped_column(String(50), primary_key=True)
    document_id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=False,
    )

    # Lower-cased concatenation of the indexed field values
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")

    # DTO as it was at index time
    source: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)

    indexed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    def __repr__(self) -> str:
        return f"<SearchDocument(index={self.index_name}, id={self.document_id})>"
