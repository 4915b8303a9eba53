"""커스텀 HTTP 예외 클래스 모듈.

Custom HTTP exception classes module.
Pre-configured HTTPException subclasses so services can raise
domain errors without spelling out status codes at each call site.

Usage:
    from querystudy.utils.exceptions import NotFoundError, DuplicateError
    raise NotFoundError("Member not found")
    raise DuplicateError("Team name already exists")
"""

from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    """404 Not Found 예외 — 요청한 회원/팀을 찾을 수 없을 때 사용.

    404 Not Found exception.
    Raised when a requested member or team does not exist, or when a
    single-row lookup yields no result.

    Args:
        detail: 오류 메시지 (Error message, default: "Resource not found")
    """

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class DuplicateError(HTTPException):
    """409 Conflict 예외 — 중복 리소스 또는 단건 조회의 다건 결과.

    409 Conflict exception.
    Raised for duplicate team names and when a lookup that must be unique
    matches more than one row.

    Args:
        detail: 오류 메시지 (Error message, default: "Resource already exists")
    """

    def __init__(self, detail: str = "Resource already exists") -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class BadRequestError(HTTPException):
    """400 Bad Request 예외 — 잘못된 요청 데이터 시 사용.

    400 Bad Request exception.
    Raised when request data is invalid beyond what Pydantic validation
    catches (e.g. unknown sort field, reference to a missing team).

    Args:
        detail: 오류 메시지 (Error message, default: "Bad request")
    """

    def __init__(self, detail: str = "Bad request") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)
