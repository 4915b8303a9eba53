"""Axiom API 로깅 미들웨어.

Axiom API logging middleware.
Captures request/response data and ships one structured event per API
call to Axiom: method, path, search/paging query params, request body,
status code, duration, and the error detail of failed calls.
Sensitive-looking keys are masked before anything leaves the process.
"""

import json
import re
import time
from typing import Any

from axiom_py import Client as AxiomClient
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from querystudy.config import settings

# 마스킹 대상 필드 패턴 — Keys masked in params and bodies
_SENSITIVE_KEYS = re.compile(
    r"(password|passwd|secret|token|authorization|api_key|apikey|credential)",
    re.IGNORECASE,
)

# 로깅 제외 경로 — Paths excluded from logging
_SKIP_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}

_MAX_BODY_CHARS = 2000
_MAX_ERROR_CHARS = 500


def mask_sensitive(data: Any, depth: int = 0) -> Any:
    """민감 필드 자동 마스킹 — Recursively mask sensitive keys in dicts/lists."""
    if depth > 5:
        return "..."
    if isinstance(data, dict):
        return {
            k: "***" if _SENSITIVE_KEYS.search(str(k)) else mask_sensitive(v, depth + 1)
            for k, v in data.items()
        }
    if isinstance(data, list):
        return [mask_sensitive(item, depth + 1) for item in data[:20]]
    return data


def parse_body(body: bytes) -> Any:
    """요청 본문을 JSON으로 해석합니다. 실패 시 표시 문자열.

    Decode a request body for logging; non-JSON bodies become a marker string.
    """
    if not body:
        return None
    try:
        parsed = mask_sensitive(json.loads(body))
    except (json.JSONDecodeError, UnicodeDecodeError):
        return "(non-json body)"
    text = json.dumps(parsed, ensure_ascii=False)
    if len(text) > _MAX_BODY_CHARS:
        return text[:_MAX_BODY_CHARS] + "...(truncated)"
    return parsed


def extract_error_detail(body: bytes) -> str:
    """에러 응답 본문에서 사유를 추출합니다 (FastAPI의 {"detail": ...} 형식).

    Pull the error reason out of an error response body.
    """
    try:
        data = json.loads(body)
        detail = data.get("detail", data) if isinstance(data, dict) else data
    except (json.JSONDecodeError, UnicodeDecodeError):
        detail = body.decode("utf-8", errors="replace")
    if not isinstance(detail, str):
        detail = json.dumps(detail, ensure_ascii=False)
    if len(detail) > _MAX_ERROR_CHARS:
        detail = detail[:_MAX_ERROR_CHARS] + "..."
    return detail


def build_log_event(
    method: str,
    path: str,
    status_code: int,
    duration_ms: float,
    query_params: dict[str, Any] | None = None,
    path_params: dict[str, Any] | None = None,
    request_body: Any = None,
    error: str | None = None,
) -> dict[str, Any]:
    """Axiom 로그 이벤트를 구성합니다. 비어 있는 항목은 생략.

    Assemble the Axiom event; empty parts are left out.
    """
    event: dict[str, Any] = {
        "method": method,
        "path": path,
        "status_code": status_code,
        "duration_ms": duration_ms,
    }
    if query_params:
        event["query_params"] = mask_sensitive(query_params)
    if path_params:
        event["path_params"] = path_params
    if request_body is not None:
        event["request_body"] = request_body
    if error:
        event["error"] = error
    return event


class AxiomLoggingMiddleware(BaseHTTPMiddleware):
    """모든 API 요청/응답을 Axiom에 로깅하는 미들웨어.

    Middleware that logs every API request/response to Axiom.
    Without a client (no token/dataset configured) it is a pass-through.

    Args:
        app: ASGI 애플리케이션 (Wrapped ASGI app)
        client: Axiom 클라이언트, 미지정 시 설정으로 생성
                (Axiom client; built from settings when omitted)
        dataset: 데이터셋 이름 (Dataset name; defaults to AXIOM_DATASET)
    """

    def __init__(
        self,
        app: Any,
        client: AxiomClient | None = None,
        dataset: str | None = None,
    ) -> None:
        super().__init__(app)
        self._dataset: str = dataset if dataset is not None else settings.AXIOM_DATASET
        self._client: AxiomClient | None = client

        if self._client is None and settings.AXIOM_API_TOKEN and self._dataset:
            self._client = AxiomClient(token=settings.AXIOM_API_TOKEN)

    def _ship(self, event: dict[str, Any]) -> None:
        try:
            self._client.ingest_events(self._dataset, [event])
        except Exception:
            pass  # 로깅 실패가 요청 처리에 영향주지 않도록 — Never break a request on log failure

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # 제외 경로 또는 Axiom 미설정 — Skip excluded paths / pass through when unconfigured
        if request.url.path in _SKIP_PATHS or self._client is None:
            return await call_next(request)

        start_time = time.perf_counter()
        request_body: Any = None
        if request.method in ("POST", "PUT", "PATCH"):
            request_body = parse_body(await request.body())

        error_detail: str | None = None
        status_code: int = 500
        path_params: dict[str, Any] | None = None
        try:
            response = await call_next(request)
            status_code = response.status_code
            # 라우팅 후에만 채워짐 — the router fills scope["path_params"] during call_next
            path_params = dict(request.scope.get("path_params") or {}) or None

            if status_code >= 400:
                # 응답 본문을 소비했으므로 다시 감싸서 반환 — Re-wrap the consumed body
                resp_body = b""
                async for chunk in response.body_iterator:
                    resp_body += chunk if isinstance(chunk, bytes) else chunk.encode("utf-8")
                error_detail = extract_error_detail(resp_body)
                response = Response(
                    content=resp_body,
                    status_code=status_code,
                    headers=dict(response.headers),
                    media_type=response.media_type,
                )
        except Exception as exc:
            error_detail = f"{type(exc).__name__}: {str(exc)[:300]}"
            raise
        finally:
            self._ship(
                build_log_event(
                    method=request.method,
                    path=request.url.path,
                    status_code=status_code,
                    duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
                    query_params=dict(request.query_params) or None,
                    path_params=path_params,
                    request_body=request_body,
                    error=error_detail,
                )
            )

        return response
