"""회원 라우터 — 회원 CRUD, 검색, 통계 엔드포인트.

Member Router — CRUD, search, and statistics endpoints for members.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from querystudy.api.deps import get_search_condition
from querystudy.database import get_db
from querystudy.schemas.member import (
    AgeBand,
    MemberCreate,
    MemberResponse,
    MemberSearchCondition,
    MemberStatistics,
    MemberTeamChange,
    MemberTeamDto,
    MemberUpdate,
)
from querystudy.services.member_service import member_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[MemberTeamDto])
async def search_members(
    db: Annotated[AsyncSession, Depends(get_db)],
    condition: Annotated[MemberSearchCondition, Depends(get_search_condition)],
) -> list[MemberTeamDto]:
    """동적 조건으로 회원을 검색합니다 (페이징 없음).

    Search members by the optional condition; unset fields are ignored.
    """
    return await member_service.search(db, condition)


@router.get("/statistics", response_model=MemberStatistics)
async def member_statistics(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MemberStatistics:
    """회원 나이 통계 (count/sum/avg/max/min)."""
    return await member_service.statistics(db)


@router.get("/age-bands", response_model=list[AgeBand])
async def member_age_bands(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[AgeBand]:
    """회원별 나이대 (CASE 식)."""
    return await member_service.age_bands(db)


@router.get("/lookup", response_model=MemberResponse)
async def lookup_member(
    db: Annotated[AsyncSession, Depends(get_db)],
    username: str = Query(..., min_length=1),
) -> MemberResponse:
    """회원명으로 한 명을 조회합니다. 없으면 404, 여럿이면 409.

    Fetch the single member with this username.
    """
    return await member_service.get_by_username(db, username)


@router.get("/by-username/{username}", response_model=list[MemberResponse])
async def list_members_by_username(
    username: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[MemberResponse]:
    """같은 회원명을 가진 회원 목록 (Members sharing this username)."""
    return await member_service.find_by_username(db, username)


@router.get("/{member_id}", response_model=MemberResponse)
async def get_member(
    member_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MemberResponse:
    """회원을 조회합니다 (Retrieve a member)."""
    return await member_service.get_member(db, member_id)


@router.post("", response_model=MemberResponse, status_code=201)
async def create_member(
    data: MemberCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MemberResponse:
    """새 회원을 생성합니다.

    Create a new member, optionally in an existing team.
    """
    result: MemberResponse = await member_service.create_member(db, data)
    await db.commit()
    return result


@router.patch("/{member_id}", response_model=MemberResponse)
async def update_member(
    member_id: int,
    data: MemberUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MemberResponse:
    """회원명/나이를 부분 수정합니다 (Partially update username and age)."""
    result: MemberResponse = await member_service.update_member(db, member_id, data)
    await db.commit()
    return result


@router.put("/{member_id}/team", response_model=MemberResponse)
async def change_member_team(
    member_id: int,
    data: MemberTeamChange,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MemberResponse:
    """회원의 소속 팀을 변경합니다 (Move a member to another team)."""
    result: MemberResponse = await member_service.change_team(db, member_id, data.team_id)
    await db.commit()
    return result


@router.delete("/{member_id}", status_code=204)
async def delete_member(
    member_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> None:
    """회원을 삭제합니다 (Delete a member)."""
    await member_service.delete_member(db, member_id)
    await db.commit()
