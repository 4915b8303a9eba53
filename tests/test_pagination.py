"""페이지네이션 유틸리티 테스트 — Pageable, Page, 카운트 최적화, 정렬."""

import pytest
from sqlalchemy import select

from querystudy.models import Member
from querystudy.utils.exceptions import BadRequestError
from querystudy.utils.pagination import Page, Pageable, apply_sort, get_page


class CountSpy:
    """호출 횟수를 기록하는 카운트 공급자."""

    def __init__(self, total: int) -> None:
        self.total = total
        self.calls = 0

    async def __call__(self) -> int:
        self.calls += 1
        return self.total


class TestPageable:
    """Pageable 테스트."""

    def test_offset_and_limit(self):
        pageable = Pageable(page=3, per_page=10)
        assert pageable.offset == 20
        assert pageable.limit == 10

    def test_defaults(self):
        pageable = Pageable()
        assert (pageable.page, pageable.per_page, pageable.sort) == (1, 20, ())

    @pytest.mark.parametrize("page,per_page", [(0, 10), (1, 0), (-1, 5)])
    def test_invalid_values(self, page, per_page):
        """페이지 번호와 크기는 1 이상이어야 한다."""
        with pytest.raises(ValueError):
            Pageable(page=page, per_page=per_page)

    def test_of_offset(self):
        pageable = Pageable.of_offset(4, 2)
        assert pageable.page == 3
        assert pageable.offset == 4

    def test_of_offset_requires_multiple_of_limit(self):
        with pytest.raises(ValueError):
            Pageable.of_offset(1, 2)


class TestPage:
    """Page 생성 테스트."""

    def test_pages_rounded_up(self):
        page = Page.of(["a", "b"], Pageable(page=1, per_page=2), total=5)
        assert page.pages == 3
        assert page.items == ["a", "b"]

    def test_empty(self):
        page = Page.of([], Pageable(), total=0)
        assert page.pages == 0
        assert page.total == 0


class TestGetPage:
    """카운트 쿼리 생략 규칙 테스트."""

    async def test_first_page_smaller_than_size_skips_count(self):
        """첫 페이지에서 내용이 페이지 크기보다 적으면 카운트 생략."""
        spy = CountSpy(100)
        page = await get_page([1, 2, 3], Pageable(page=1, per_page=10), spy)
        assert spy.calls == 0
        assert page.total == 3

    async def test_first_page_full_runs_count(self):
        spy = CountSpy(100)
        page = await get_page([1, 2], Pageable(page=1, per_page=2), spy)
        assert spy.calls == 1
        assert page.total == 100

    async def test_last_page_skips_count(self):
        """마지막 페이지면 offset + 내용 크기로 전체 개수를 계산."""
        spy = CountSpy(100)
        page = await get_page([1], Pageable(page=2, per_page=3), spy)
        assert spy.calls == 0
        assert page.total == 4

    async def test_full_middle_page_runs_count(self):
        spy = CountSpy(9)
        page = await get_page([1, 2, 3], Pageable(page=2, per_page=3), spy)
        assert spy.calls == 1
        assert page.total == 9

    async def test_empty_page_beyond_end_runs_count(self):
        """범위를 넘은 빈 페이지는 전체 개수를 알 수 없으므로 카운트 실행."""
        spy = CountSpy(4)
        page = await get_page([], Pageable(page=5, per_page=2), spy)
        assert spy.calls == 1
        assert page.total == 4
        assert page.items == []


class TestApplySort:
    """정렬 적용 테스트."""

    columns = {"age": Member.age, "username": Member.username}

    def test_no_sort_returns_query(self):
        query = select(Member)
        assert apply_sort(query, [], self.columns) is query

    def test_desc_with_nulls_last(self):
        sql = str(apply_sort(select(Member), ["age,desc"], self.columns))
        assert "ORDER BY member.age DESC NULLS LAST" in sql

    def test_default_direction_is_asc(self):
        sql = str(apply_sort(select(Member), ["username"], self.columns))
        assert "member.username ASC NULLS LAST" in sql

    def test_unknown_field(self):
        with pytest.raises(BadRequestError) as exc_info:
            apply_sort(select(Member), ["password"], self.columns)
        assert exc_info.value.status_code == 400

    def test_unknown_direction(self):
        with pytest.raises(BadRequestError):
            apply_sort(select(Member), ["age,sideways"], self.columns)
