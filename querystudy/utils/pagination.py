"""페이지네이션 유틸리티 모듈.

Pagination utility module for SQLAlchemy async queries.
Provides the paging request (Pageable), page/result containers, sort
application, and the count-query optimization used by search endpoints.
"""

import math
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Sequence, TypeVar

from pydantic import BaseModel
from sqlalchemy import ColumnElement, Select

from querystudy.utils.exceptions import BadRequestError

SelectT = TypeVar("SelectT", bound=Select[Any])

# 지연 실행되는 카운트 쿼리 — Deferred count query, awaited only when needed
CountSupplier = Callable[[], Awaitable[int]]


@dataclass(frozen=True)
class Pageable:
    """페이지 요청 정보.

    Paging request: 1-based page number, page size, and sort orders.

    Attributes:
        page: 요청 페이지 번호, 1부터 시작 (Page number, 1-indexed)
        per_page: 페이지당 항목 수 (Items per page)
        sort: 정렬 조건 목록, "필드" 또는 "필드,asc|desc"
              (Sort entries, "field" or "field,asc|desc")
    """

    page: int = 1
    per_page: int = 20
    sort: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError("page must be >= 1")
        if self.per_page < 1:
            raise ValueError("per_page must be >= 1")

    @classmethod
    def of_offset(cls, offset: int, limit: int) -> "Pageable":
        """offset/limit 기반 요청을 페이지로 변환합니다. offset은 limit의 배수여야 함.

        Build a Pageable from an offset/limit pair; offset must be a multiple of limit.
        """
        if limit < 1 or offset < 0 or offset % limit != 0:
            raise ValueError("offset must be a non-negative multiple of limit")
        return cls(page=offset // limit + 1, per_page=limit)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page

    @property
    def limit(self) -> int:
        return self.per_page


class Page(BaseModel):
    """페이지네이션 결과 모델.

    Pagination result model for typed responses.

    Attributes:
        items: 현재 페이지 항목 목록 (Items for the current page)
        total: 전체 항목 수 (Total count across all pages)
        page: 현재 페이지 번호 (Current page number, 1-based)
        per_page: 페이지당 항목 수 (Items per page)
        pages: 전체 페이지 수 (Total number of pages)
    """

    items: list[Any]
    total: int
    page: int
    per_page: int
    pages: int  # ceil(total / per_page)

    @classmethod
    def of(cls, items: Sequence[Any], pageable: Pageable, total: int) -> "Page":
        return cls(
            items=list(items),
            total=total,
            page=pageable.page,
            per_page=pageable.per_page,
            pages=math.ceil(total / pageable.per_page) if total else 0,
        )


@dataclass
class QueryResults:
    """내용 조회와 카운트 조회를 함께 담는 결과.

    Content rows of one query together with that query's total count.
    """

    results: list[Any]
    total: int
    offset: int
    limit: int


async def get_page(
    content: Sequence[Any],
    pageable: Pageable,
    count: CountSupplier,
) -> Page:
    """내용 크기로 전체 개수를 알 수 있으면 카운트 쿼리를 생략하고 페이지를 만듭니다.

    Build a Page, awaiting ``count`` only when the content cannot prove the total.

    The count is skipped when:
        - 첫 페이지이고 내용이 페이지 크기보다 적을 때
          (first page and fewer rows than the page size: total = len(content))
        - 마지막 페이지일 때 (last page: total = offset + len(content))

    Args:
        content: 현재 페이지 내용 (Rows of the current page)
        pageable: 페이지 요청 (Paging request used for the content query)
        count: 지연 카운트 쿼리 (Deferred count query)

    Returns:
        Page: 페이지 결과 (Page result)
    """
    size = len(content)
    if pageable.offset == 0:
        if pageable.per_page > size:
            return Page.of(content, pageable, size)
        return Page.of(content, pageable, await count())

    if size != 0 and pageable.per_page > size:
        return Page.of(content, pageable, pageable.offset + size)
    return Page.of(content, pageable, await count())


def apply_sort(
    query: SelectT,
    sort: Sequence[str],
    columns: Mapping[str, ColumnElement[Any]],
) -> SelectT:
    """정렬 조건을 쿼리에 적용합니다. 허용된 필드만 가능, NULL은 마지막.

    Apply ``"field"`` / ``"field,asc|desc"`` sort entries to ``query``.
    Only fields present in ``columns`` are allowed; NULLs sort last.

    Raises:
        BadRequestError: 허용되지 않은 필드나 방향 (Unknown field or direction)
    """
    orders = []
    for entry in sort:
        name, _, direction = entry.partition(",")
        name, direction = name.strip(), (direction.strip().lower() or "asc")
        column = columns.get(name)
        if column is None:
            raise BadRequestError(f"Unsupported sort field: {name}")
        if direction not in ("asc", "desc"):
            raise BadRequestError(f"Unsupported sort direction: {direction}")
        ordered = column.desc() if direction == "desc" else column.asc()
        orders.append(ordered.nulls_last())
    if not orders:
        return query
    return query.order_by(None).order_by(*orders)
