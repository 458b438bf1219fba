"""initial_patient_schema

Revision ID: 3f1c2a9d7b10
Revises:
Create Date: 2026-10-18 09:12:44.318201

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "3f1c2a9d7b10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create patient, medical_case and search_document tables."""
    op.create_table(
        "patient",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("image", sa.LargeBinary(), nullable=True),
        sa.Column("image_content_type", sa.String(255), nullable=True),
        sa.Column("phone_number", sa.BigInteger(), nullable=True),
        sa.Column(
            "idp_code",
            sa.String(255),
            nullable=True,
            comment="Identity provider code, alternate lookup key",
        ),
        sa.Column("dob", sa.Date(), nullable=True),
        sa.Column("location", sa.String(255), nullable=True),
        sa.Column("created_date", sa.Date(), nullable=True),
        sa.Column(
            "dms_id",
            sa.String(255),
            nullable=True,
            comment="Folder/node id in the document management system",
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("idp_code"),
    )

    op.create_table(
        "medical_case",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("dms_id", sa.String(255), nullable=True),
        sa.Column("location", sa.String(255), nullable=True),
        sa.Column("created_date", sa.Date(), nullable=True),
        sa.Column("patient_id", sa.BigInteger(), nullable=True),
        sa.ForeignKeyConstraint(["patient_id"], ["patient.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_medical_case_patient_id", "medical_case", ["patient_id"])

    op.create_table(
        "search_document",
        sa.Column("index_name", sa.String(50), nullable=False),
        sa.Column("document_id", sa.BigInteger(), autoincrement=False, nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("source", sa.JSON(), nullable=False),
        sa.Column("indexed_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("index_name", "document_id"),
    )


def downgrade() -> None:
    """Drop all tables."""
    op.drop_table("search_document")
    op.drop_index("ix_medical_case_patient_id", table_name="medical_case")
    op.drop_table("medical_case")
    op.drop_table("patient")
