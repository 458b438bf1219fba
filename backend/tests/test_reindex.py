"""Tests for the reindex script."""

import pytest

from patient_service.models import MedicalCase, Patient
from patient_service.schemas.pagination import Pageable
from patient_service.scripts.reindex import reindex
from patient_service.search.index import SearchIndex


@pytest.mark.asyncio
async def test_reindex_rebuilds_from_store(db_session):
    """Documents missing from or stale in the index are rebuilt."""
    for i in range(5):
        db_session.add(MedicalCase(dms_id=f"case-{i}", location="Ward A"))
    await db_session.flush()

    search_index = SearchIndex(db_session)
    await search_index.index("medical_case", 999, {"id": 999, "dmsId": "stale"})

    count = await reindex(db_session, "medical_case", batch_size=2)

    assert count == 5
    assert (await search_index.search("medical_case", "stale", Pageable())).total == 0
    assert (await search_index.search("medical_case", "ward a", Pageable())).total == 5


@pytest.mark.asyncio
async def test_reindex_patients(db_session):
    db_session.add(Patient(idp_code="idp-1", image=b"\x00"))
    await db_session.flush()

    count = await reindex(db_session, "patient")

    assert count == 1
    page = await SearchIndex(db_session).search("patient", "idp-1", Pageable())
    assert "image" not in page.content[0]
