"""
FastAPI 애플리케이션

라우터 등록, 예외 → HTTP 응답 변환 및 앱 설정.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from adapters.auth.token_provider import AuthenticationError, TokenIdentityProvider
from adapters.db.record_store import SQLiteRecordStore
from adapters.db.sqlite_adapter import SQLiteAdapter, init_schema
from adapters.memory.record_store import InMemoryRecordStore
from core.config.loader import Settings, get_settings
from core.domain.errors import (
    DuplicateEntry,
    Forbidden,
    InsufficientFunds,
    InvalidInput,
    LedgerError,
    NotFound,
    PartialWriteError,
)
from web.routes import auth, dashboard, expenses, fund, health, payments, staff

logger = logging.getLogger(__name__)

# LedgerError 하위 클래스 → HTTP 상태 코드 (가장 구체적인 클래스 우선)
ERROR_STATUS: dict[type[LedgerError], int] = {
    DuplicateEntry: 409,
    InsufficientFunds: 409,
    NotFound: 404,
    Forbidden: 403,
    InvalidInput: 422,
    PartialWriteError: 500,
}


def status_for(error: LedgerError) -> int:
    """예외 클래스에 대응하는 HTTP 상태 코드 (MRO 순서로 탐색)"""
    for cls in type(error).__mro__:
        if cls in ERROR_STATUS:
            return ERROR_STATUS[cls]
    return 400


@asynccontextmanager
async def lifespan(app: FastAPI):
    """앱 생명주기 관리

    시작 시 DB 스키마 초기화 및 저장소/신원 제공자 생성,
    종료 시 DB 연결 정리.
    """
    settings: Settings = app.state.settings or get_settings()

    db = SQLiteAdapter(settings.db_path)
    await db.connect()
    await init_schema(db)

    app.state.db = db
    app.state.durable_store = SQLiteRecordStore(db)
    app.state.guest_store = InMemoryRecordStore()
    app.state.ledger_policy = settings.ledger
    app.state.identity_provider = TokenIdentityProvider(
        secret_key=settings.web.secret_key,
        ttl_minutes=settings.web.token_ttl_minutes,
        accounts=settings.accounts,
    )

    logger.info(
        f"Web 시작: db={settings.db_path}, accounts={len(settings.accounts)}, "
        f"policy={settings.ledger}"
    )

    try:
        yield
    finally:
        await db.close()


async def ledger_error_handler(request: Request, exc: LedgerError) -> JSONResponse:
    """LedgerError → JSON 오류 응답"""
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} 실패: {exc}")
    else:
        logger.info(f"{request.method} {request.url.path} → {status_code} {exc.code}: {exc}")

    content = {"error": exc.code, "detail": str(exc)}
    if isinstance(exc, DuplicateEntry):
        content["existing_id"] = exc.existing_id
    return JSONResponse(status_code=status_code, content=content)


async def authentication_error_handler(request: Request, exc: AuthenticationError) -> JSONResponse:
    """AuthenticationError → 401"""
    return JSONResponse(
        status_code=401,
        content={"error": "AUTHENTICATION_FAILED", "detail": str(exc)},
        headers={"WWW-Authenticate": "Bearer"},
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """FastAPI 앱 생성

    Args:
        settings: 설정 (None이면 lifespan 시작 시 get_settings() 사용)

    Returns:
        FastAPI 앱
    """
    app = FastAPI(
        title="FinTrack API",
        description="급여 / 시장 지출 / 현금 장부 관리 API",
        version=health.API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings

    # CORS 설정 (개발용)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(LedgerError, ledger_error_handler)
    app.add_exception_handler(AuthenticationError, authentication_error_handler)

    # =========================================================================
    # API 라우터 등록
    # =========================================================================

    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(staff.router)
    app.include_router(payments.router)
    app.include_router(expenses.router)
    app.include_router(fund.router)
    app.include_router(dashboard.router)

    return app


app = create_app()
