"""팀 레포지토리 — 팀 CRUD 및 집계 쿼리.

Team Repository — CRUD and aggregate queries for teams.
"""

from typing import Any

from sqlalchemy import Select, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from querystudy.models.member import Member
from querystudy.models.team import Team
from querystudy.repositories.base import BaseRepository
from querystudy.utils.predicates import has_text


class TeamRepository(BaseRepository[Team]):
    """팀 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the team table.
    """

    def __init__(self) -> None:
        super().__init__(Team)

    async def get_with_member_counts(self, db: AsyncSession) -> list[tuple[Team, int]]:
        """팀 목록을 소속 회원 수와 함께 조회합니다.

        Retrieve every team with its member count (teams without members count 0).

        Returns:
            list[tuple[Team, int]]: (팀, 회원 수) 목록 (Team and member count pairs)
        """
        query: Select = (
            select(Team, func.count(Member.id))
            .outerjoin(Team.members)
            .group_by(Team.id)
            .order_by(Team.id)
        )
        result = await db.execute(query)
        return [(team, count) for team, count in result.all()]

    async def get_detail(self, db: AsyncSession, team_id: int) -> Team | None:
        """팀 상세 정보를 소속 회원과 함께 조회합니다.

        Retrieve a team with its members eagerly loaded.
        """
        query: Select = (
            select(Team)
            .options(selectinload(Team.members))
            .where(Team.id == team_id)
            .execution_options(populate_existing=True)
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def average_age_by_team(
        self,
        db: AsyncSession,
        team_name: str | None = None,
    ) -> list[Any]:
        """팀 이름별 평균 나이를 구합니다 (GROUP BY / HAVING).

        Average member age grouped by team name. Teams without members
        are absent (inner join).

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            team_name: HAVING 절로 남길 팀 이름 (Keep only this team via HAVING)

        Returns:
            list[Row]: (team_name, age_avg) 행 목록, 팀 이름 순
        """
        query: Select = (
            select(Team.name.label("team_name"), func.avg(Member.age).label("age_avg"))
            .select_from(Member)
            .join(Member.team)
            .group_by(Team.name)
            .order_by(Team.name)
        )
        if has_text(team_name):
            query = query.having(Team.name == team_name)
        result = await db.execute(query)
        return list(result.all())

    async def detach_members(self, db: AsyncSession, team_id: int) -> None:
        """팀에 소속된 모든 회원의 팀 참조를 해제합니다.

        Clear the team reference of every member of ``team_id``.
        """
        await db.execute(
            update(Member).where(Member.team_id == team_id).values(team_id=None)
        )


# 싱글턴 인스턴스 — Singleton instance
team_repository: TeamRepository = TeamRepository()
