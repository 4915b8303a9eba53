"""FastAPI 의존성 주입 모듈 — 검색 조건 및 페이지 요청 파싱.

FastAPI dependency injection module — parses the member search condition
and the paging request from query parameters so every search endpoint
accepts the same parameters.

Query parameters:
    username, team_name, age_goe, age_loe: 검색 조건 (Search condition, all optional)
    page: 페이지 번호, 1부터 (Page number, 1-based)
    per_page: 페이지 크기 (Page size, capped by MAX_PAGE_SIZE)
    sort: 정렬 "필드,방향", 반복 가능 (Sort "field,direction", repeatable)
"""

from typing import Annotated

from fastapi import Query

from querystudy.config import settings
from querystudy.schemas.member import MemberSearchCondition
from querystudy.utils.pagination import Pageable


def get_search_condition(
    username: str | None = None,
    team_name: str | None = None,
    age_goe: int | None = None,
    age_loe: int | None = None,
) -> MemberSearchCondition:
    """쿼리 파라미터를 회원 검색 조건으로 변환합니다.

    Build a MemberSearchCondition from query parameters.
    """
    return MemberSearchCondition(
        username=username,
        team_name=team_name,
        age_goe=age_goe,
        age_loe=age_loe,
    )


def get_pageable(
    page: Annotated[int, Query(ge=1)] = 1,
    per_page: Annotated[int, Query(ge=1, le=settings.MAX_PAGE_SIZE)] = settings.DEFAULT_PAGE_SIZE,
    sort: Annotated[list[str] | None, Query()] = None,
) -> Pageable:
    """쿼리 파라미터를 페이지 요청으로 변환합니다.

    Build a Pageable from query parameters. Out-of-range values are
    rejected by FastAPI validation (422).
    """
    return Pageable(page=page, per_page=per_page, sort=tuple(sort or ()))
