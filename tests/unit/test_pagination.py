"""Unit tests – PageRequest and Page."""
from __future__ import annotations

import pytest

from facet_search.pagination import DEFAULT_PAGE_SIZE, Page, PageRequest


class TestPageRequest:
    def test_defaults(self) -> None:
        request = PageRequest()
        assert (request.page, request.size, request.offset) == (1, DEFAULT_PAGE_SIZE, 0)

    @pytest.mark.parametrize("page, size, expected", [(0, 5, (1, 5)), (-3, 0, (1, 10)), (2, -1, (2, 10))])
    def test_out_of_range_is_normalized(self, page: int, size: int, expected: tuple[int, int]) -> None:
        request = PageRequest(page=page, size=size)
        assert (request.page, request.size) == expected

    def test_offset(self) -> None:
        assert PageRequest(page=3, size=20).offset == 40


class TestPage:
    def test_navigation(self) -> None:
        page = Page(items=[1, 2], total=5, page=2, size=2)
        assert page.total_pages == 3
        assert page.has_next
        assert page.has_previous

    def test_last_page(self) -> None:
        page = Page(items=[5], total=5, page=3, size=2)
        assert not page.has_next

    def test_empty(self) -> None:
        page = Page(items=[], total=0, page=1, size=10)
        assert page.total_pages == 0
        assert not page.has_next
        assert not page.has_previous

    def test_map(self) -> None:
        page = Page(items=[1, 2], total=4, page=1, size=2).map(str)
        assert page.items == ["1", "2"]
        assert (page.total, page.page, page.size) == (4, 1, 2)
