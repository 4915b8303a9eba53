"""팀 관련 Pydantic 요청/응답 스키마 정의.

Team-related Pydantic request/response schema definitions.
"""

from pydantic import BaseModel, Field

from querystudy.schemas.member import MemberResponse


class TeamCreate(BaseModel):
    """팀 생성 요청 스키마.

    Team creation request schema. Team names are unique.

    Attributes:
        name: 팀 이름 (Team name)
    """

    name: str = Field(min_length=1, max_length=255)


class TeamResponse(BaseModel):
    """팀 응답 스키마 (Team response with member count)."""

    id: int
    name: str
    member_count: int = 0


class TeamDetailResponse(BaseModel):
    """팀 상세 응답 스키마 — 소속 회원 포함.

    Team detail response including its members.
    """

    id: int
    name: str
    members: list[MemberResponse] = []


class TeamAgeAverage(BaseModel):
    """팀별 평균 나이 (GROUP BY 결과).

    Average member age per team, as produced by a GROUP BY query.
    """

    team_name: str
    age_avg: float
