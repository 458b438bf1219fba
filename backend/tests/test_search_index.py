"""Tests for the search-index collaborator."""

import pytest

from patient_service.repositories.base import InvalidSortError
from patient_service.schemas.pagination import Pageable, SortOrder
from patient_service.search.index import SearchIndex
from patient_service.search.registry import IndexConfig, get_index


class TestIndexConfig:
    """Tests for content extraction."""

    def test_extract_content_lowercases_and_skips_missing(self):
        config = IndexConfig(name="t", fields=("a", "b", "c"))
        assert config.extract_content({"a": "Ward A", "b": None, "c": 42}) == "ward a 42"

    def test_unregistered_index_raises(self):
        with pytest.raises(KeyError, match="not registered"):
            get_index("nope")

    def test_builtin_indexes_registered(self):
        assert "location" in get_index("medical_case").fields
        assert "idpCode" in get_index("patient").fields


class TestSearchIndex:
    """Tests for SearchIndex against the test database."""

    @pytest.mark.asyncio
    async def test_index_and_search(self, db_session):
        index = SearchIndex(db_session)
        await index.index("medical_case", 1, {"id": 1, "dmsId": "X1", "location": "Ward A"})
        await index.index("medical_case", 2, {"id": 2, "dmsId": "Y2", "location": "Ward B"})

        page = await index.search("medical_case", "x1", Pageable())

        assert page.total == 1
        assert page.content == [{"id": 1, "dmsId": "X1", "location": "Ward A"}]

    @pytest.mark.asyncio
    async def test_blank_query_matches_all(self, db_session):
        index = SearchIndex(db_session)
        for i in range(1, 4):
            await index.index("medical_case", i, {"id": i, "dmsId": f"d{i}"})

        page = await index.search("medical_case", "   ", Pageable())

        assert page.total == 3
        assert [d["id"] for d in page.content] == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_reindex_replaces_document(self, db_session):
        index = SearchIndex(db_session)
        await index.index("medical_case", 1, {"id": 1, "dmsId": "old"})
        await index.index("medical_case", 1, {"id": 1, "dmsId": "new"})

        assert (await index.search("medical_case", "old", Pageable())).total == 0
        assert (await index.search("medical_case", "new", Pageable())).total == 1

    @pytest.mark.asyncio
    async def test_indexes_are_separate(self, db_session):
        index = SearchIndex(db_session)
        await index.index("medical_case", 1, {"id": 1, "dmsId": "shared"})
        await index.index("patient", 1, {"id": 1, "dmsId": "shared"})

        await index.remove("patient", 1)

        assert (await index.search("medical_case", "shared", Pageable())).total == 1
        assert (await index.search("patient", "shared", Pageable())).total == 0

    @pytest.mark.asyncio
    async def test_remove_absent_is_noop(self, db_session):
        index = SearchIndex(db_session)
        await index.remove("medical_case", 404)

    @pytest.mark.asyncio
    async def test_paging_and_descending_sort(self, db_session):
        index = SearchIndex(db_session)
        for i in range(1, 6):
            await index.index("medical_case", i, {"id": i, "location": "ward"})

        page = await index.search(
            "medical_case",
            "ward",
            Pageable(page=1, size=2, sort=(SortOrder("id", "desc"),)),
        )

        assert page.total == 5
        assert page.total_pages == 3
        assert [d["id"] for d in page.content] == [3, 2]

    @pytest.mark.asyncio
    async def test_sort_on_other_property_rejected(self, db_session):
        index = SearchIndex(db_session)
        with pytest.raises(InvalidSortError):
            await index.search(
                "medical_case", "", Pageable(sort=(SortOrder("location"),))
            )

    @pytest.mark.asyncio
    async def test_like_wildcards_are_literal(self, db_session):
        index = SearchIndex(db_session)
        await index.index("medical_case", 1, {"id": 1, "dmsId": "abc"})

        assert (await index.search("medical_case", "%", Pageable())).total == 0
        assert (await index.search("medical_case", "a_c", Pageable())).total == 0

    @pytest.mark.asyncio
    async def test_clear(self, db_session):
        index = SearchIndex(db_session)
        await index.index("medical_case", 1, {"id": 1})
        await index.index("medical_case", 2, {"id": 2})

        await index.clear("medical_case")

        assert (await index.search("medical_case", "", Pageable())).total == 0
