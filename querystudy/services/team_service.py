"""팀 서비스 — 팀 CRUD 및 팀별 집계 비즈니스 로직.

Team Service — Business logic for team CRUD and per-team aggregates.
"""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from querystudy.models.team import Team
from querystudy.repositories.team_repository import team_repository
from querystudy.schemas.member import MemberResponse
from querystudy.schemas.team import (
    TeamAgeAverage,
    TeamCreate,
    TeamDetailResponse,
    TeamResponse,
)
from querystudy.utils.exceptions import DuplicateError, NotFoundError


class TeamService:
    """팀 관련 비즈니스 로직을 처리하는 서비스.

    Service handling team business logic.
    """

    async def list_teams(self, db: AsyncSession) -> list[TeamResponse]:
        rows = await team_repository.get_with_member_counts(db)
        return [
            TeamResponse(id=team.id, name=team.name, member_count=count)
            for team, count in rows
        ]

    async def get_team(self, db: AsyncSession, team_id: int) -> TeamDetailResponse:
        """팀 상세 정보를 소속 회원과 함께 조회합니다.

        Retrieve a team with its members.

        Raises:
            NotFoundError: 팀을 찾을 수 없을 때 (Team not found)
        """
        team: Team | None = await team_repository.get_detail(db, team_id)
        if team is None:
            raise NotFoundError("Team not found")

        return TeamDetailResponse(
            id=team.id,
            name=team.name,
            members=[
                MemberResponse(
                    id=m.id,
                    username=m.username,
                    age=m.age,
                    team_id=team.id,
                    team_name=team.name,
                )
                for m in team.members
            ],
        )

    async def create_team(self, db: AsyncSession, data: TeamCreate) -> TeamResponse:
        """새 팀을 생성합니다.

        Create a new team.

        Raises:
            DuplicateError: 같은 이름의 팀이 이미 존재할 때
                            (When a team with the same name already exists)
        """
        # 팀 이름 중복 확인 — Team names are unique
        exists: bool = await team_repository.exists(db, {"name": data.name})
        if exists:
            raise DuplicateError("A team with this name already exists")

        try:
            team: Team = await team_repository.create(db, {"name": data.name})
        except IntegrityError:
            # 동시 생성 경합 — uq_team_name rejected a concurrent insert
            await db.rollback()
            raise DuplicateError("A team with this name already exists")
        return TeamResponse(id=team.id, name=team.name, member_count=0)

    async def delete_team(self, db: AsyncSession, team_id: int) -> None:
        """팀을 삭제합니다. 소속 회원은 남고 팀 참조만 해제됩니다.

        Delete a team. Its members are kept with no team.

        Raises:
            NotFoundError: 팀을 찾을 수 없을 때 (Team not found)
        """
        team: Team | None = await team_repository.get_by_id(db, team_id)
        if team is None:
            raise NotFoundError("Team not found")

        await team_repository.detach_members(db, team_id)
        await team_repository.delete(db, team_id)

    async def average_ages(self, db: AsyncSession, team_name: str | None = None) -> list[TeamAgeAverage]:
        rows = await team_repository.average_age_by_team(db, team_name)
        return [TeamAgeAverage(team_name=r.team_name, age_avg=float(r.age_avg)) for r in rows]


# 싱글턴 인스턴스 — Singleton instance
team_service: TeamService = TeamService()
