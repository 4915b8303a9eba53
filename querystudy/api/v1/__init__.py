"""v1 API 라우터 패키지 — 팀/회원 엔드포인트 통합.

v1 API Router package — Aggregates team and member endpoints
into a single router for inclusion in the FastAPI application.

Included routers:
    - teams: 팀 관리 (Team management)
    - members: 회원 관리 및 검색 (Member management and search)
"""

from fastapi import APIRouter

from querystudy.api.v1.members import router as members_router
from querystudy.api.v1.teams import router as teams_router

v1_router: APIRouter = APIRouter()

v1_router.include_router(teams_router, prefix="/teams", tags=["Teams"])
v1_router.include_router(members_router, prefix="/members", tags=["Members"])
