"""기본 레포지토리 테스트 — CRUD 및 fetch 헬퍼."""

import pytest
from sqlalchemy import select
from sqlalchemy.exc import MultipleResultsFound
from sqlalchemy.ext.asyncio import AsyncSession

from querystudy.models import Member, Team
from querystudy.repositories.member_repository import member_repository
from querystudy.repositories.team_repository import team_repository


class TestFetchHelpers:
    """fetch_one / fetch_first / fetch_count / fetch_results 테스트."""

    async def test_fetch_one(self, db: AsyncSession, members):
        member = await member_repository.fetch_one(
            db, select(Member).where(Member.username == "member3")
        )
        assert member.age == 30

    async def test_fetch_one_none(self, db: AsyncSession, members):
        assert await member_repository.fetch_one(
            db, select(Member).where(Member.age > 100)
        ) is None

    async def test_fetch_one_many(self, db: AsyncSession, members):
        """두 건 이상이면 MultipleResultsFound."""
        with pytest.raises(MultipleResultsFound):
            await member_repository.fetch_one(db, select(Member))

    async def test_fetch_first(self, db: AsyncSession, members):
        member = await member_repository.fetch_first(db, select(Member).order_by(Member.age.desc()))
        assert member.username == "member4"

    async def test_fetch_count_ignores_paging(self, db: AsyncSession, members):
        query = select(Member).order_by(Member.id).offset(2).limit(1)
        assert await member_repository.fetch_count(db, query) == 4

    async def test_fetch_results_beyond_end(self, db: AsyncSession, members):
        results = await member_repository.fetch_results(db, select(Member), offset=10, limit=2)
        assert results.results == []
        assert results.total == 4


class TestCrud:
    """CRUD 테스트."""

    async def test_get_by_id(self, db: AsyncSession, teams):
        team = await team_repository.get_by_id(db, teams["teamA"].id)
        assert team.name == "teamA"
        assert await team_repository.get_by_id(db, 999) is None

    async def test_get_all_with_filters(self, db: AsyncSession, teams, members):
        """None 값 필터는 무시된다."""
        result = await member_repository.get_all(
            db, {"team_id": teams["teamB"].id, "username": None}
        )
        assert [m.username for m in result] == ["member3", "member4"]

    async def test_get_all_order_by(self, db: AsyncSession, members):
        result = await member_repository.get_all(db, order_by=Member.age.desc())
        assert [m.age for m in result] == [40, 30, 20, 10]

    async def test_get_paginated(self, db: AsyncSession, members):
        items, total = await member_repository.get_paginated(
            db, select(Member).order_by(Member.id), page=2, per_page=3
        )
        assert total == 4
        assert [m.username for m in items] == ["member4"]

    async def test_create_and_update(self, db: AsyncSession):
        team: Team = await team_repository.create(db, {"name": "teamC"})
        assert team.id is not None

        updated = await team_repository.update(db, team.id, {"name": "teamD", "unknown": 1})
        assert updated.name == "teamD"
        assert await team_repository.update(db, 999, {"name": "x"}) is None

    async def test_exists_and_delete(self, db: AsyncSession, teams):
        team_id = teams["teamA"].id
        assert await team_repository.exists(db, {"name": "teamA"}) is True

        assert await team_repository.delete(db, team_id) is True
        assert await team_repository.exists(db, {"name": "teamA"}) is False
        assert await team_repository.delete(db, team_id) is False
