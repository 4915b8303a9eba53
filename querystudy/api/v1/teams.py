"""팀 라우터 — 팀 CRUD 및 팀별 평균 나이 엔드포인트.

Team Router — CRUD and per-team average age endpoints.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from querystudy.database import get_db
from querystudy.schemas.team import (
    TeamAgeAverage,
    TeamCreate,
    TeamDetailResponse,
    TeamResponse,
)
from querystudy.services.team_service import team_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[TeamResponse])
async def list_teams(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[TeamResponse]:
    """팀 목록을 회원 수와 함께 조회합니다 (List teams with member counts)."""
    return await team_service.list_teams(db)


@router.get("/age-averages", response_model=list[TeamAgeAverage])
async def team_age_averages(
    db: Annotated[AsyncSession, Depends(get_db)],
    team_name: str | None = Query(None),
) -> list[TeamAgeAverage]:
    """팀별 평균 나이. team_name을 주면 HAVING으로 해당 팀만 남깁니다.

    Average member age per team; ``team_name`` narrows it via HAVING.
    """
    return await team_service.average_ages(db, team_name)


@router.get("/{team_id}", response_model=TeamDetailResponse)
async def get_team(
    team_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TeamDetailResponse:
    """팀 상세 정보를 소속 회원과 함께 조회합니다."""
    return await team_service.get_team(db, team_id)


@router.post("", response_model=TeamResponse, status_code=201)
async def create_team(
    data: TeamCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TeamResponse:
    """새 팀을 생성합니다. 이름이 중복되면 409.

    Create a new team; duplicate names are rejected.
    """
    result: TeamResponse = await team_service.create_team(db, data)
    await db.commit()
    return result


@router.delete("/{team_id}", status_code=204)
async def delete_team(
    team_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> None:
    """팀을 삭제합니다. 소속 회원은 팀 없이 남습니다."""
    await team_service.delete_team(db, team_id)
    await db.commit()
