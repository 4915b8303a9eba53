"""회원 레포지토리 — 회원 CRUD 및 동적 검색/페이징 쿼리.

Member Repository — CRUD plus dynamic search and paging queries.
Search conditions are composed from optional criteria (see
``querystudy.utils.predicates``): each unset field contributes no
condition, so an empty search condition returns every member.
"""

from typing import Any, Sequence

from sqlalchemy import ColumnElement, Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from querystudy.models.member import Member
from querystudy.models.team import Team
from querystudy.repositories.base import BaseRepository
from querystudy.schemas.member import MemberSearchCondition, MemberTeamDto
from querystudy.utils.pagination import Page, Pageable, apply_sort, get_page
from querystudy.utils.predicates import has_text, where_all

# 정렬 허용 필드 — Sortable fields exposed to clients
SORTABLE_COLUMNS: dict[str, ColumnElement[Any]] = {
    "id": Member.id,
    "username": Member.username,
    "age": Member.age,
    "team_name": Team.name,
}


def username_eq(username: str | None) -> ColumnElement[bool] | None:
    return Member.username == username if has_text(username) else None


def team_name_eq(team_name: str | None) -> ColumnElement[bool] | None:
    return Team.name == team_name if has_text(team_name) else None


def age_goe(age: int | None) -> ColumnElement[bool] | None:
    return Member.age >= age if age is not None else None


def age_loe(age: int | None) -> ColumnElement[bool] | None:
    return Member.age <= age if age is not None else None


def search_criteria(condition: MemberSearchCondition) -> tuple[ColumnElement[bool] | None, ...]:
    """검색 조건의 각 필드를 조건식 또는 None으로 변환합니다.

    Map every field of ``condition`` to a criterion, or None when unset.
    """
    return (
        username_eq(condition.username),
        team_name_eq(condition.team_name),
        age_goe(condition.age_goe),
        age_loe(condition.age_loe),
    )


class MemberRepository(BaseRepository[Member]):
    """회원 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the member table.
    """

    def __init__(self) -> None:
        super().__init__(Member)

    async def get_detail(self, db: AsyncSession, member_id: int) -> Member | None:
        """회원을 소속 팀과 함께 조회합니다.

        Retrieve a member with its team eagerly loaded.
        """
        query: Select = (
            select(Member)
            .options(selectinload(Member.team))
            .where(Member.id == member_id)
            .execution_options(populate_existing=True)
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def find_by_username(self, db: AsyncSession, username: str) -> list[Member]:
        """회원명으로 회원 목록을 조회합니다 (select m from Member m where m.username = ?).

        Retrieve all members with the given username, ordered by id.
        """
        query: Select = (
            select(Member)
            .options(selectinload(Member.team))
            .where(Member.username == username)
            .order_by(Member.id)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def find_one_by_username(self, db: AsyncSession, username: str) -> Member | None:
        """회원명으로 단건 조회합니다.

        Fetch the single member with ``username``.

        Raises:
            MultipleResultsFound: 같은 이름의 회원이 여럿일 때 (Username is not unique)
        """
        query: Select = (
            select(Member)
            .options(selectinload(Member.team))
            .where(Member.username == username)
        )
        return await self.fetch_one(db, query)

    def _content_query(self, condition: MemberSearchCondition) -> Select:
        """회원 + 팀 프로젝션 쿼리 (member left join team)."""
        query: Select = (
            select(
                Member.id.label("member_id"),
                Member.username,
                Member.age,
                Team.id.label("team_id"),
                Team.name.label("team_name"),
            )
            .select_from(Member)
            .outerjoin(Member.team)
        )
        return where_all(query, *search_criteria(condition))

    def _count_query(self, condition: MemberSearchCondition) -> Select:
        """카운트 쿼리 — 팀명 조건이 있을 때만 팀을 조인합니다.

        Count query. The team table is joined only when the team-name
        criterion needs it; a left join cannot change the member count.
        """
        query: Select = select(func.count(Member.id)).select_from(Member)
        if has_text(condition.team_name):
            query = query.outerjoin(Member.team)
        return where_all(query, *search_criteria(condition))

    def _ordered(self, query: Select, pageable: Pageable | None = None) -> Select:
        if pageable is not None and pageable.sort:
            query = apply_sort(query, pageable.sort, SORTABLE_COLUMNS)
        # 동순위 정렬 안정화 — id as final tiebreaker for stable pages
        return query.order_by(Member.id)

    async def _fetch_content(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
        pageable: Pageable,
    ) -> list[MemberTeamDto]:
        query: Select = (
            self._ordered(self._content_query(condition), pageable)
            .offset(pageable.offset)
            .limit(pageable.limit)
        )
        result = await db.execute(query)
        return [MemberTeamDto(**row._mapping) for row in result]

    async def _count(self, db: AsyncSession, condition: MemberSearchCondition) -> int:
        return (await db.execute(self._count_query(condition))).scalar() or 0

    async def search(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
    ) -> list[MemberTeamDto]:
        """동적 조건으로 회원을 검색합니다 (페이징 없음).

        Search members with the dynamic condition, without paging.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            condition: 검색 조건 (Search condition; unset fields are ignored)

        Returns:
            list[MemberTeamDto]: 회원 + 팀 프로젝션 목록 (Member/team rows, ordered by id)
        """
        result = await db.execute(self._ordered(self._content_query(condition)))
        return [MemberTeamDto(**row._mapping) for row in result]

    async def search_page_simple(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
        pageable: Pageable,
    ) -> Page:
        """내용 쿼리와 카운트 쿼리를 항상 함께 실행하는 단순 페이징.

        Simple paging: the count is derived from the content query itself
        (wrapped as a subquery) and is always issued.
        """
        query: Select = self._ordered(self._content_query(condition), pageable)
        total: int = await self.fetch_count(db, query)
        result = await db.execute(query.offset(pageable.offset).limit(pageable.limit))
        content = [MemberTeamDto(**row._mapping) for row in result]
        return Page.of(content, pageable, total)

    async def search_page_complex(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
        pageable: Pageable,
    ) -> Page:
        """내용 쿼리와 별도로 최적화된 카운트 쿼리를 실행하는 페이징.

        Paging with a dedicated count query. The count query skips the
        team join unless the team-name filter is set.
        """
        content = await self._fetch_content(db, condition, pageable)
        total: int = await self._count(db, condition)
        return Page.of(content, pageable, total)

    async def search_page_count_optimization(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
        pageable: Pageable,
    ) -> Page:
        """내용 크기로 전체 개수를 알 수 있으면 카운트 쿼리를 생략하는 페이징.

        Paging that runs the content query first and issues the count
        query only when the content size cannot prove the total
        (see ``get_page``).
        """
        content: Sequence[MemberTeamDto] = await self._fetch_content(db, condition, pageable)

        async def count() -> int:
            return await self._count(db, condition)

        return await get_page(content, pageable, count)


# 싱글턴 인스턴스 — Singleton instance
member_repository: MemberRepository = MemberRepository()
