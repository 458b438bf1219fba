"""Tests for the record-store repositories."""

from datetime import date

import pytest

from patient_service.models import MedicalCase, Patient
from patient_service.repositories import (
    InvalidSortError,
    MedicalCaseRepository,
    PatientRepository,
)
from patient_service.schemas.pagination import Pageable, SortOrder


class TestEntityRepository:
    """Shared repository behavior, exercised through MedicalCaseRepository."""

    @pytest.mark.asyncio
    async def test_save_assigns_id(self, db_session):
        repo = MedicalCaseRepository(db_session)
        case = await repo.save(MedicalCase(dms_id="X1"))
        assert case.id is not None
        assert (await repo.find_by_id(case.id)).dms_id == "X1"

    @pytest.mark.asyncio
    async def test_save_with_id_overwrites(self, db_session):
        repo = MedicalCaseRepository(db_session)
        case = await repo.save(MedicalCase(dms_id="X1", location="Ward A"))

        updated = await repo.save(MedicalCase(id=case.id, dms_id="X2", location=None))

        assert updated.id == case.id
        assert updated.dms_id == "X2"
        assert updated.location is None
        assert await repo.count() == 1

    @pytest.mark.asyncio
    async def test_save_with_unknown_id_gets_store_assigned_id(self, db_session):
        repo = MedicalCaseRepository(db_session)
        existing = await repo.save(MedicalCase(dms_id="X1"))

        saved = await repo.save(MedicalCase(id=existing.id + 776, dms_id="forged"))

        assert saved.id is not None
        assert saved.id != existing.id + 776
        assert await repo.find_by_id(existing.id + 776) is None
        assert (await repo.find_by_id(saved.id)).dms_id == "forged"
        assert await repo.count() == 2

    @pytest.mark.asyncio
    async def test_delete_by_id(self, db_session):
        repo = MedicalCaseRepository(db_session)
        case = await repo.save(MedicalCase(dms_id="X1"))

        await repo.delete_by_id(case.id)

        assert await repo.find_by_id(case.id) is None

    @pytest.mark.asyncio
    async def test_delete_absent_is_silent(self, db_session):
        repo = MedicalCaseRepository(db_session)
        await repo.delete_by_id(31337)
        assert await repo.count() == 0

    @pytest.mark.asyncio
    async def test_find_all_pages(self, db_session):
        repo = MedicalCaseRepository(db_session)
        for i in range(7):
            await repo.save(MedicalCase(dms_id=f"c{i}"))

        page = await repo.find_all(Pageable(page=2, size=3))

        assert page.total == 7
        assert page.total_pages == 3
        assert [c.dms_id for c in page.content] == ["c6"]

    @pytest.mark.asyncio
    async def test_find_all_sorts_by_camel_case_property(self, db_session):
        repo = MedicalCaseRepository(db_session)
        await repo.save(MedicalCase(dms_id="a", created_date=date(2024, 1, 2)))
        await repo.save(MedicalCase(dms_id="b", created_date=date(2024, 1, 3)))
        await repo.save(MedicalCase(dms_id="c", created_date=date(2024, 1, 1)))

        page = await repo.find_all(Pageable(sort=(SortOrder("createdDate", "desc"),)))

        assert [c.dms_id for c in page.content] == ["b", "a", "c"]

    @pytest.mark.asyncio
    async def test_find_all_rejects_unknown_sort(self, db_session):
        repo = MedicalCaseRepository(db_session)
        with pytest.raises(InvalidSortError):
            await repo.find_all(Pageable(sort=(SortOrder("nope"),)))


class TestPatientRepository:

    @pytest.mark.asyncio
    async def test_find_by_idp_code(self, db_session):
        repo = PatientRepository(db_session)
        patient = await repo.save(Patient(idp_code="idp-1"))

        assert (await repo.find_by_idp_code("idp-1")).id == patient.id
        assert await repo.find_by_idp_code("idp-2") is None


class TestMedicalCaseRepository:

    @pytest.mark.asyncio
    async def test_find_by_patient_and_detach(self, db_session):
        patients = PatientRepository(db_session)
        cases = MedicalCaseRepository(db_session)
        owner = await patients.save(Patient(idp_code="idp-1"))
        other = await patients.save(Patient(idp_code="idp-2"))
        first = await cases.save(MedicalCase(dms_id="a", patient_id=owner.id))
        second = await cases.save(MedicalCase(dms_id="b", patient_id=owner.id))
        await cases.save(MedicalCase(dms_id="c", patient_id=other.id))

        owned = await cases.find_by_patient_id(owner.id)
        assert [c.id for c in owned] == [first.id, second.id]

        detached = await cases.detach_from_patient(owner.id)

        assert sorted(detached) == sorted([first.id, second.id])
        assert await cases.find_by_patient_id(owner.id) == []
        assert len(await cases.find_by_patient_id(other.id)) == 1
