"""회원 페이징 검색 라우터 — 페이징 전략별 엔드포인트.

Member paged-search routers, one per paging strategy:
    - simple_router (v2): 내용 + 카운트 쿼리를 항상 실행 (Count always issued)
    - optimized_router (v3): 내용으로 전체 개수를 알 수 있으면 카운트 생략
      (Count skipped when the content proves the total)
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from querystudy.api.deps import get_pageable, get_search_condition
from querystudy.database import get_db
from querystudy.schemas.member import MemberSearchCondition
from querystudy.services.member_service import member_service
from querystudy.utils.pagination import Page, Pageable

simple_router: APIRouter = APIRouter()
optimized_router: APIRouter = APIRouter()


@simple_router.get("", response_model=Page)
async def search_members_page_simple(
    db: Annotated[AsyncSession, Depends(get_db)],
    condition: Annotated[MemberSearchCondition, Depends(get_search_condition)],
    pageable: Annotated[Pageable, Depends(get_pageable)],
) -> Page:
    """회원 페이징 검색 — 카운트 쿼리 항상 실행."""
    return await member_service.search_page_simple(db, condition, pageable)


@optimized_router.get("", response_model=Page)
async def search_members_page_optimized(
    db: Annotated[AsyncSession, Depends(get_db)],
    condition: Annotated[MemberSearchCondition, Depends(get_search_condition)],
    pageable: Annotated[Pageable, Depends(get_pageable)],
) -> Page:
    """회원 페이징 검색 — 필요할 때만 카운트 쿼리 실행."""
    return await member_service.search_page_optimized(db, condition, pageable)
