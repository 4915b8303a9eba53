"""FastAPI 애플리케이션 엔트리포인트 — 미들웨어 및 라우터 등록.

FastAPI application entry point — Middleware and router registration.
Configures request logging, CORS, health check, and the member/team routers.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from querystudy.config import settings
from querystudy.middleware.axiom_logging import AxiomLoggingMiddleware

app: FastAPI = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# Axiom API 로깅 미들웨어 — CORS보다 먼저 등록하여 모든 요청을 캡처
# (Registered before CORS to capture all requests)
app.add_middleware(AxiomLoggingMiddleware)

# CORS 미들웨어 — Cross-Origin Resource Sharing middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """서버 상태 확인 엔드포인트.

    Health check endpoint for load balancers and monitoring.
    """
    return {"status": "ok"}


# ---------------------------------------------------------------------------
# 라우터 등록 — Router registration
# v1: 팀/회원 CRUD + 조건 검색 (Team/member CRUD and unpaged search)
# v2: 단순 페이징 검색 (Paged search, count always issued)
# v3: 카운트 최적화 페이징 검색 (Paged search, count issued only when needed)
# ---------------------------------------------------------------------------
from querystudy.api.v1 import v1_router  # noqa: E402
from querystudy.api.pages import optimized_router, simple_router  # noqa: E402

app.include_router(v1_router, prefix="/api/v1")
app.include_router(simple_router, prefix="/api/v2/members", tags=["Member Pages"])
app.include_router(optimized_router, prefix="/api/v3/members", tags=["Member Pages"])
