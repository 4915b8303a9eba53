"""회원 서비스 — 회원 CRUD, 검색, 페이징 비즈니스 로직.

Member Service — Business logic for member CRUD, search, and paging.
Translates persistence outcomes (no row / non-unique row) into HTTP errors.
"""

from sqlalchemy.exc import MultipleResultsFound
from sqlalchemy.ext.asyncio import AsyncSession

from querystudy.models.member import Member
from querystudy.models.team import Team
from querystudy.repositories.member_query_repository import member_query_repository
from querystudy.repositories.member_repository import member_repository
from querystudy.repositories.team_repository import team_repository
from querystudy.schemas.member import (
    AgeBand,
    MemberCreate,
    MemberResponse,
    MemberSearchCondition,
    MemberStatistics,
    MemberTeamDto,
    MemberUpdate,
)
from querystudy.utils.exceptions import BadRequestError, DuplicateError, NotFoundError
from querystudy.utils.pagination import Page, Pageable


class MemberService:
    """회원 관련 비즈니스 로직을 처리하는 서비스.

    Service handling member business logic.
    """

    def _to_response(self, member: Member) -> MemberResponse:
        """회원 모델을 응답 스키마로 변환합니다. team은 미리 로딩되어 있어야 함.

        Convert a Member (team already loaded) to a MemberResponse.
        """
        team: Team | None = member.team
        return MemberResponse(
            id=member.id,
            username=member.username,
            age=member.age,
            team_id=member.team_id,
            team_name=team.name if team is not None else None,
        )

    async def _get_team(self, db: AsyncSession, team_id: int) -> Team:
        team: Team | None = await team_repository.get_by_id(db, team_id)
        if team is None:
            raise BadRequestError(f"Team {team_id} does not exist")
        return team

    async def create_member(self, db: AsyncSession, data: MemberCreate) -> MemberResponse:
        """새 회원을 생성합니다. 팀이 지정되면 해당 팀에 소속시킵니다.

        Create a new member, optionally joining an existing team.

        Raises:
            BadRequestError: 지정한 팀이 없을 때 (Referenced team does not exist)
        """
        if data.team_id is not None:
            await self._get_team(db, data.team_id)

        member: Member = await member_repository.create(
            db,
            {"username": data.username, "age": data.age, "team_id": data.team_id},
        )
        return await self.get_member(db, member.id)

    async def get_member(self, db: AsyncSession, member_id: int) -> MemberResponse:
        """회원을 조회합니다.

        Raises:
            NotFoundError: 회원을 찾을 수 없을 때 (Member not found)
        """
        member: Member | None = await member_repository.get_detail(db, member_id)
        if member is None:
            raise NotFoundError("Member not found")
        return self._to_response(member)

    async def update_member(
        self,
        db: AsyncSession,
        member_id: int,
        data: MemberUpdate,
    ) -> MemberResponse:
        """회원 정보를 부분 수정합니다. 전달된 필드만 변경.

        Partially update a member; only fields sent by the client change.

        Raises:
            NotFoundError: 회원을 찾을 수 없을 때 (Member not found)
        """
        updated: Member | None = await member_repository.update(
            db, member_id, data.model_dump(exclude_unset=True)
        )
        if updated is None:
            raise NotFoundError("Member not found")
        return await self.get_member(db, member_id)

    async def change_team(self, db: AsyncSession, member_id: int, team_id: int) -> MemberResponse:
        """회원의 소속 팀을 변경합니다.

        Move a member to another team through ``Member.change_team``.

        Raises:
            NotFoundError: 회원을 찾을 수 없을 때 (Member not found)
            BadRequestError: 대상 팀이 없을 때 (Target team does not exist)
        """
        member: Member | None = await member_repository.get_detail(db, member_id)
        if member is None:
            raise NotFoundError("Member not found")
        team: Team | None = await team_repository.get_detail(db, team_id)
        if team is None:
            raise BadRequestError(f"Team {team_id} does not exist")

        member.change_team(team)
        await db.flush()
        return self._to_response(member)

    async def delete_member(self, db: AsyncSession, member_id: int) -> None:
        """회원을 삭제합니다.

        Raises:
            NotFoundError: 회원을 찾을 수 없을 때 (Member not found)
        """
        deleted: bool = await member_repository.delete(db, member_id)
        if not deleted:
            raise NotFoundError("Member not found")

    async def find_by_username(self, db: AsyncSession, username: str) -> list[MemberResponse]:
        members = await member_repository.find_by_username(db, username)
        return [self._to_response(m) for m in members]

    async def get_by_username(self, db: AsyncSession, username: str) -> MemberResponse:
        """회원명으로 정확히 한 명을 조회합니다.

        Fetch the single member named ``username``.

        Raises:
            NotFoundError: 결과가 없을 때 (No member has this username)
            DuplicateError: 결과가 둘 이상일 때 (Username is shared by several members)
        """
        try:
            member: Member | None = await member_repository.find_one_by_username(db, username)
        except MultipleResultsFound:
            raise DuplicateError(f"Username '{username}' is not unique")
        if member is None:
            raise NotFoundError("Member not found")
        return self._to_response(member)

    async def search(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
    ) -> list[MemberTeamDto]:
        return await member_repository.search(db, condition)

    async def search_page_simple(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
        pageable: Pageable,
    ) -> Page:
        return await member_repository.search_page_simple(db, condition, pageable)

    async def search_page_complex(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
        pageable: Pageable,
    ) -> Page:
        return await member_repository.search_page_complex(db, condition, pageable)

    async def search_page_optimized(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
        pageable: Pageable,
    ) -> Page:
        return await member_repository.search_page_count_optimization(db, condition, pageable)

    async def statistics(self, db: AsyncSession) -> MemberStatistics:
        return await member_query_repository.statistics(db)

    async def age_bands(self, db: AsyncSession) -> list[AgeBand]:
        rows = await member_query_repository.age_bands(db)
        return [AgeBand(username=r.username, age=r.age, band=r.band) for r in rows]


# 싱글턴 인스턴스 — Singleton instance
member_service: MemberService = MemberService()
