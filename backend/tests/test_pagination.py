"""Tests for paging types."""

import pytest

from patient_service.schemas.pagination import Page, Pageable, SortOrder, parse_sort


class TestParseSort:

    def test_default_direction_is_ascending(self):
        assert parse_sort(["id"]) == (SortOrder("id", "asc"),)

    def test_direction_applies_to_all_listed_properties(self):
        assert parse_sort(["location,dmsId,desc"]) == (
            SortOrder("location", "desc"),
            SortOrder("dmsId", "desc"),
        )

    def test_repeated_values_keep_order(self):
        orders = parse_sort(["location,asc", "id,DESC"])
        assert [o.property for o in orders] == ["location", "id"]
        assert orders[1].descending

    def test_none_and_empty(self):
        assert parse_sort(None) == ()
        assert parse_sort([""]) == ()

    def test_invalid_direction(self):
        with pytest.raises(ValueError, match="Invalid sort direction"):
            parse_sort(["id,up"])


class TestPage:

    def test_total_pages_rounds_up(self):
        assert Page(content=[], total=5, page=0, size=2).total_pages == 3
        assert Page(content=[], total=4, page=0, size=2).total_pages == 2
        assert Page(content=[], total=0, page=0, size=2).total_pages == 0

    def test_map_keeps_metadata(self):
        page = Page(content=[1, 2], total=9, page=1, size=2)
        mapped = page.map(str)
        assert mapped.content == ["1", "2"]
        assert (mapped.total, mapped.page, mapped.size) == (9, 1, 2)

    def test_pageable_offset(self):
        assert Pageable(page=3, size=20).offset == 60
