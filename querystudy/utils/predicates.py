"""동적 검색 조건 유틸리티.

Dynamic search predicate utilities.
Each optional search field is turned into either a SQL criterion or
``None``. ``None`` means "no condition" and is dropped when the criteria
are AND-ed together, so unset filters are simply not applied.

Usage:
    query = where_all(
        select(Member),
        Member.username == name if has_text(name) else None,
        Member.age >= age_goe if age_goe is not None else None,
    )
"""

from typing import Any, TypeVar

from sqlalchemy import ColumnElement, Select, and_

SelectT = TypeVar("SelectT", bound=Select[Any])


def has_text(value: str | None) -> bool:
    """공백이 아닌 문자가 하나라도 있는지 확인합니다.

    Return True when ``value`` is not None and contains a non-whitespace character.
    """
    return value is not None and value.strip() != ""


def present(*criteria: ColumnElement[bool] | None) -> list[ColumnElement[bool]]:
    """None이 아닌 조건만 남깁니다 — Keep only the criteria that are set."""
    return [criterion for criterion in criteria if criterion is not None]


def conjunction(*criteria: ColumnElement[bool] | None) -> ColumnElement[bool] | None:
    """설정된 조건들을 AND로 결합합니다. 모두 비어 있으면 None.

    AND the set criteria together; None when no criterion is set.
    """
    selected = present(*criteria)
    if not selected:
        return None
    if len(selected) == 1:
        return selected[0]
    return and_(*selected)


def where_all(query: SelectT, *criteria: ColumnElement[bool] | None) -> SelectT:
    """설정된 조건만 WHERE 절에 적용합니다.

    Apply the AND of all non-None criteria to ``query``.
    With every criterion absent the query is returned unchanged.

    Args:
        query: 기본 SELECT 쿼리 (Base SELECT query)
        criteria: 조건 또는 None (Criterion, or None for "not filtered")

    Returns:
        Select: 조건이 적용된 쿼리 (Query with the present criteria applied)
    """
    selected = present(*criteria)
    if not selected:
        return query
    return query.where(*selected)
