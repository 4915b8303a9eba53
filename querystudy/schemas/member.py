"""회원 관련 Pydantic 요청/응답 스키마 정의.

Member-related Pydantic request/response schema definitions.
Covers member CRUD, the dynamic search condition, and the projection
shapes (DTOs) that query results are mapped into.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


# === 검색 조건 (Search condition) ===

class MemberSearchCondition(BaseModel):
    """회원 검색 조건 — 모든 필드는 선택 사항.

    Member search condition. Every field is optional; an unset field
    (None, or blank text) applies no filter.

    Attributes:
        username: 회원명 일치 (Exact username match)
        team_name: 팀명 일치 (Exact team name match)
        age_goe: 나이 하한, 이상 (Minimum age, inclusive)
        age_loe: 나이 상한, 이하 (Maximum age, inclusive)
    """

    username: str | None = None
    team_name: str | None = None
    age_goe: int | None = None
    age_loe: int | None = None


# === 프로젝션 (Projection) 스키마 ===

class MemberTeamDto(BaseModel):
    """회원 + 팀 조회 결과 프로젝션.

    Member-with-team projection returned by search queries.
    Team fields are None for members without a team.
    """

    model_config = ConfigDict(from_attributes=True)

    member_id: int
    username: str | None
    age: int
    team_id: int | None = None
    team_name: str | None = None


class MemberDto(BaseModel):
    """회원명/나이 프로젝션 (Username and age projection)."""

    model_config = ConfigDict(from_attributes=True)

    username: str | None
    age: int


class UserDto(BaseModel):
    """별칭이 다른 프로젝션 — username을 name으로 받음.

    Projection whose field name differs from the column; the query must
    label ``username`` as ``name``.
    """

    model_config = ConfigDict(from_attributes=True)

    name: str | None
    age: int | None


# === 회원 (Member) CRUD 스키마 ===

class MemberCreate(BaseModel):
    """회원 생성 요청 스키마.

    Member creation request schema.

    Attributes:
        username: 회원명 (Username)
        age: 나이 (Age, non-negative)
        team_id: 소속 팀 ID (Team to join, optional)
    """

    username: str = Field(min_length=1, max_length=255)
    age: int = Field(default=0, ge=0)
    team_id: int | None = None


class MemberUpdate(BaseModel):
    """회원 수정 요청 스키마 (부분 업데이트).

    Member update request schema (partial update). Team changes go
    through MemberTeamChange instead.
    """

    username: str | None = Field(default=None, min_length=1, max_length=255)
    age: int | None = Field(default=None, ge=0)

    @field_validator("age")
    @classmethod
    def age_not_null(cls, v: int | None) -> int:
        """나이는 생략할 수 있지만 null로 지울 수는 없음 (age may be omitted, not nulled)."""
        if v is None:
            raise ValueError("age cannot be null")
        return v


class MemberTeamChange(BaseModel):
    """회원 소속 팀 변경 요청 스키마 (Team change request)."""

    team_id: int


class MemberResponse(BaseModel):
    """회원 응답 스키마.

    Member response schema including the team name when assigned.
    """

    id: int
    username: str | None
    age: int
    team_id: int | None
    team_name: str | None = None


# === 통계 (Statistics) 스키마 ===

class MemberStatistics(BaseModel):
    """회원 나이 집계 결과 — count/sum/avg/max/min.

    Aggregate statistics over member ages. Aggregates other than count
    are None when there are no members.
    """

    count: int
    age_sum: int | None
    age_avg: float | None
    age_max: int | None
    age_min: int | None


class AgeBand(BaseModel):
    """CASE 식으로 분류한 회원 나이대 (Member with its CASE-derived age band)."""

    username: str | None
    age: int
    band: str
