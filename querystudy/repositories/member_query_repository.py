"""회원 조회 레포지토리 — 조인, 서브쿼리, 집계, CASE, 프로젝션 쿼리.

Member Query Repository — read-only queries over members and teams that
go beyond CRUD: textual SQL with bound parameters, chained predicates,
ordering with NULLS LAST, offset paging, aggregation and grouping,
inner/theta/outer joins (with ON filtering), fetch joins, subqueries in
WHERE and SELECT, CASE expressions, constants, string concatenation,
and tuple/DTO projections.

Subqueries use an aliased member (``member_sub``) so the outer and inner
``member`` references do not collide.
"""

from typing import Any

from sqlalchemy import Select, String, and_, case, cast, func, literal, select, text
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased, contains_eager

from querystudy.models.member import Member
from querystudy.models.team import Team
from querystudy.repositories.base import BaseRepository
from querystudy.schemas.member import MemberDto, MemberStatistics, UserDto
from querystudy.utils.pagination import QueryResults

# 나이 라벨 — Labels for the simple CASE on exact ages
AGE_LABELS: dict[int, str] = {10: "ten", 20: "twenty"}
# 나이대 — Inclusive (low, high, label) bands for the searched CASE
AGE_BANDS: tuple[tuple[int, int, str], ...] = ((0, 20, "0-20"), (21, 30, "21-30"))
OTHER_LABEL: str = "other"


class MemberQueryRepository(BaseRepository[Member]):
    """회원/팀 조회 전용 쿼리 모음.

    Read-only query collection over members and teams.
    """

    def __init__(self) -> None:
        super().__init__(Member)

    # --- 기본 조회 (Basic fetches) ---

    async def find_by_username_text(self, db: AsyncSession, username: str) -> Member | None:
        """문자열 SQL + 파라미터 바인딩으로 회원을 조회합니다.

        Look up a member with a textual SQL statement and a bound parameter,
        mapped back onto the ``Member`` entity.
        """
        statement = text(
            "SELECT member_id, username, age, team_id FROM member WHERE username = :username"
        ).columns(Member.id, Member.username, Member.age, Member.team_id)
        query: Select = select(Member).from_statement(statement)
        result = await db.execute(query, {"username": username})
        return result.scalar_one_or_none()

    async def find_by_username_and_age(
        self,
        db: AsyncSession,
        username: str,
        age: int,
    ) -> Member | None:
        """회원명과 나이가 모두 일치하는 회원 한 명 (AND 체인)."""
        query: Select = select(Member).where(
            and_(Member.username == username, Member.age == age)
        )
        return await self.fetch_one(db, query)

    async def find_by_age_sorted(self, db: AsyncSession, age: int) -> list[Member]:
        """나이 내림차순, 회원명 오름차순 (이름 없으면 마지막).

        Members of ``age`` ordered by age desc, then username asc with NULLs last.
        """
        query: Select = (
            select(Member)
            .where(Member.age == age)
            .order_by(Member.age.desc(), Member.username.asc().nulls_last())
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    def _by_username_desc(self) -> Select:
        return select(Member).order_by(Member.username.desc(), Member.id)

    async def find_page(self, db: AsyncSession, offset: int, limit: int) -> list[Member]:
        """회원명 내림차순으로 offset/limit 구간을 조회합니다 (offset은 0부터)."""
        query: Select = self._by_username_desc().offset(offset).limit(limit)
        result = await db.execute(query)
        return list(result.scalars().all())

    async def find_results(self, db: AsyncSession, offset: int, limit: int) -> QueryResults:
        """offset/limit 구간과 전체 개수를 함께 조회합니다."""
        return await self.fetch_results(db, self._by_username_desc(), offset, limit)

    # --- 집계 (Aggregation) ---

    async def statistics(self, db: AsyncSession) -> MemberStatistics:
        """전체 회원 나이의 count/sum/avg/max/min.

        Count, sum, average, max and min of member ages in one query.
        """
        query: Select = select(
            func.count(Member.id),
            func.sum(Member.age),
            func.avg(Member.age),
            func.max(Member.age),
            func.min(Member.age),
        )
        count, age_sum, age_avg, age_max, age_min = (await db.execute(query)).one()
        return MemberStatistics(
            count=count,
            age_sum=age_sum,
            age_avg=float(age_avg) if age_avg is not None else None,
            age_max=age_max,
            age_min=age_min,
        )

    # --- 조인 (Joins) ---

    async def find_by_team_name(self, db: AsyncSession, team_name: str) -> list[Member]:
        """팀에 소속된 회원 (inner join)."""
        query: Select = (
            select(Member)
            .join(Member.team)
            .where(Team.name == team_name)
            .order_by(Member.id)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def find_username_matching_team(self, db: AsyncSession) -> list[Member]:
        """세타 조인 — 회원 이름이 어떤 팀 이름과 같은 회원.

        Theta join: ``FROM member, team WHERE member.username = team.name``.
        Only inner semantics are possible this way.
        """
        query: Select = (
            select(Member)
            .where(Member.username == Team.name)
            .order_by(Member.id)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def find_with_team_filtered_join(
        self,
        db: AsyncSession,
        team_name: str,
    ) -> list[tuple[Member, Team | None]]:
        """회원은 모두, 팀은 이름이 일치할 때만 조인합니다.

        Every member, paired with its team only when the team is named
        ``team_name``: ``LEFT JOIN team ON member.team_id = team.team_id
        AND team.name = :team_name``.
        """
        query: Select = (
            select(Member, Team)
            .outerjoin(Member.team.and_(Team.name == team_name))
            .order_by(Member.id)
        )
        result = await db.execute(query)
        return [(member, team) for member, team in result.all()]

    async def find_with_unrelated_team(self, db: AsyncSession) -> list[tuple[Member, Team | None]]:
        """연관관계 없는 외부 조인 — 회원 이름과 같은 이름의 팀.

        Outer join on a condition unrelated to the foreign key:
        ``LEFT JOIN team ON member.username = team.name``.
        """
        query: Select = (
            select(Member, Team)
            .outerjoin(Team, Member.username == Team.name)
            .order_by(Member.id)
        )
        result = await db.execute(query)
        return [(member, team) for member, team in result.all()]

    async def find_one_without_team(self, db: AsyncSession, username: str) -> Member | None:
        """팀을 로딩하지 않는 일반 조회 — team은 지연 로딩 상태로 남음."""
        query: Select = select(Member).where(Member.username == username)
        return await self.fetch_one(db, query)

    async def find_one_with_team(self, db: AsyncSession, username: str) -> Member | None:
        """페치 조인 — 같은 쿼리에서 팀까지 로딩합니다.

        Fetch join: the team is joined and populated by the same statement.
        """
        query: Select = (
            select(Member)
            .join(Member.team)
            .options(contains_eager(Member.team))
            .where(Member.username == username)
        )
        return await self.fetch_one(db, query)

    # --- 서브쿼리 (Subqueries) ---

    async def find_oldest(self, db: AsyncSession) -> list[Member]:
        """나이가 가장 많은 회원 (WHERE age = (SELECT max(age) ...))."""
        member_sub = aliased(Member, name="member_sub")
        query: Select = (
            select(Member)
            .where(Member.age == select(func.max(member_sub.age)).scalar_subquery())
            .order_by(Member.id)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def find_at_or_above_average_age(self, db: AsyncSession) -> list[Member]:
        """나이가 평균 이상인 회원."""
        member_sub = aliased(Member, name="member_sub")
        query: Select = (
            select(Member)
            .where(Member.age >= select(func.avg(member_sub.age)).scalar_subquery())
            .order_by(Member.id)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def find_age_in_older_than(self, db: AsyncSession, age: int) -> list[Member]:
        """나이가 IN 서브쿼리(나이 > age)에 포함되는 회원."""
        member_sub = aliased(Member, name="member_sub")
        query: Select = (
            select(Member)
            .where(Member.age.in_(select(member_sub.age).where(member_sub.age > age)))
            .order_by(Member.id)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def username_with_average_age(self, db: AsyncSession) -> list[tuple[str | None, float]]:
        """SELECT 절 서브쿼리 — 회원명과 전체 평균 나이."""
        member_sub = aliased(Member, name="member_sub")
        query: Select = select(
            Member.username,
            select(func.avg(member_sub.age)).scalar_subquery().label("age_avg"),
        ).order_by(Member.id)
        result = await db.execute(query)
        return [(username, float(age_avg)) for username, age_avg in result.all()]

    # --- CASE / 상수 / 문자 더하기 (Case, constants, concatenation) ---

    async def age_labels(self, db: AsyncSession) -> list[str]:
        """단순 CASE — 특정 나이에 라벨, 나머지는 other."""
        label = case(AGE_LABELS, value=Member.age, else_=OTHER_LABEL)
        result = await db.execute(select(label).order_by(Member.id))
        return list(result.scalars().all())

    async def age_bands(self, db: AsyncSession) -> list[Any]:
        """검색 CASE — 나이 구간별 라벨 (BETWEEN).

        Searched CASE mapping each member's age to its band.

        Returns:
            list[Row]: (username, age, band) 행 목록, id 순
        """
        band = case(
            *[(Member.age.between(low, high), name) for low, high, name in AGE_BANDS],
            else_=OTHER_LABEL,
        ).label("band")
        query: Select = select(Member.username, Member.age, band).order_by(Member.id)
        result = await db.execute(query)
        return list(result.all())

    async def usernames_with_constant(self, db: AsyncSession, constant: str) -> list[tuple[str | None, str]]:
        """회원명과 상수 컬럼을 함께 조회합니다."""
        query: Select = select(Member.username, literal(constant).label("constant")).order_by(Member.id)
        result = await db.execute(query)
        return [tuple(row) for row in result.all()]

    async def username_age_concat(self, db: AsyncSession, username: str) -> list[str]:
        """문자 더하기 — "{username}_{age}". 숫자는 문자로 변환 후 결합."""
        joined = Member.username + "_" + cast(Member.age, String)
        query: Select = select(joined).where(Member.username == username).order_by(Member.id)
        result = await db.execute(query)
        return list(result.scalars().all())

    # --- 프로젝션 (Projections) ---

    async def usernames(self, db: AsyncSession) -> list[str | None]:
        """프로젝션 대상이 하나 — 회원명 목록."""
        result = await db.execute(select(Member.username).order_by(Member.id))
        return list(result.scalars().all())

    async def username_age_tuples(self, db: AsyncSession) -> list[tuple[str | None, int]]:
        """프로젝션 대상이 둘 — (회원명, 나이) 튜플.

        Row tuples stay inside the repository layer; callers that leave it
        get plain tuples or DTOs.
        """
        result = await db.execute(select(Member.username, Member.age).order_by(Member.id))
        return [(username, age) for username, age in result.all()]

    async def member_dtos(self, db: AsyncSession) -> list[MemberDto]:
        """컬럼명이 DTO 필드명과 같은 프로젝션."""
        result = await db.execute(select(Member.username, Member.age).order_by(Member.id))
        return [MemberDto(**row._mapping) for row in result]

    async def user_dtos(self, db: AsyncSession) -> list[UserDto]:
        """필드명이 다른 DTO — username을 name으로 라벨링해야 함."""
        query: Select = select(Member.username.label("name"), Member.age).order_by(Member.id)
        result = await db.execute(query)
        return [UserDto(**row._mapping) for row in result]

    async def user_dtos_with_max_age(self, db: AsyncSession) -> list[UserDto]:
        """서브쿼리 결과를 DTO 필드(age)로 라벨링한 프로젝션.

        Each member's name with the overall maximum age, the subquery
        labelled ``age`` to land in the DTO field.
        """
        member_sub = aliased(Member, name="member_sub")
        query: Select = select(
            Member.username.label("name"),
            select(func.max(member_sub.age)).scalar_subquery().label("age"),
        ).order_by(Member.id)
        result = await db.execute(query)
        return [UserDto(**row._mapping) for row in result]


# 싱글턴 인스턴스 — Singleton instance
member_query_repository: MemberQueryRepository = MemberQueryRepository()
