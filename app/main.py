"""FastAPI 애플리케이션 엔트리포인트 — 미들웨어 및 라우터 등록.

FastAPI application entry point — Logging, middleware and router
registration.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.middleware.axiom_logging import AxiomLoggingMiddleware
from app.utils.logger import configure_logging

configure_logging()

app: FastAPI = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# 요청 로깅 미들웨어: CORS보다 먼저 등록하여 모든 요청을 캡처
# (Registered before CORS to capture all requests)
app.add_middleware(AxiomLoggingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """서버 상태 확인 엔드포인트 (Health check for load balancers)."""
    return {"status": "ok"}


# ---------------------------------------------------------------------------
# 라우터 등록: Router registration
# ---------------------------------------------------------------------------
# 공통: auth, session, push, calendar / 역할별: admin, store, employee
from app.api.auth import router as auth_router  # noqa: E402
from app.api.session import router as session_router  # noqa: E402
from app.api.push import router as push_router  # noqa: E402
from app.api.calendar import router as calendar_router  # noqa: E402
from app.api.admin import admin_router  # noqa: E402
from app.api.store import store_router  # noqa: E402
from app.api.employee import employee_router  # noqa: E402

app.include_router(auth_router, prefix="/api/v1/auth", tags=["Auth"])
app.include_router(session_router, prefix="/api/v1/session", tags=["Session"])
app.include_router(push_router, prefix="/api/v1/push", tags=["Push"])
app.include_router(calendar_router, prefix="/api/v1/calendar", tags=["Calendar"])
app.include_router(admin_router, prefix="/api/v1/admin")
app.include_router(store_router, prefix="/api/v1/store")
app.include_router(employee_router, prefix="/api/v1/employee")
