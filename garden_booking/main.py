"""FastAPI 애플리케이션 엔트리포인트 (수명주기, 미들웨어, 라우터 등록).

FastAPI application entry point.
The lifespan builds the database engine, the BookingStore and the services,
and publishes them on app.state for the dependencies in api/deps.py.

Run:
    uvicorn garden_booking.main:app --reload
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from garden_booking.config import settings
from garden_booking.database import create_engine, create_session_factory, init_models
from garden_booking.middleware.axiom_logging import AxiomLoggingMiddleware
from garden_booking.repositories.booking_store import BookingStore
from garden_booking.seed import seed_dev_admin
from garden_booking.services.auth_service import AuthService
from garden_booking.services.booking_service import BookingService


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """엔진, 저장소, 서비스를 생성하고 종료 시 엔진을 정리합니다.

    Build the engine, store and services on startup; dispose the engine on shutdown.
    """
    engine = create_engine(settings.DATABASE_URL, echo=settings.DEBUG)
    await init_models(engine)

    store: BookingStore = BookingStore(create_session_factory(engine), settings.BOOKING_YEAR)
    booking_service: BookingService = BookingService(store)
    app.state.store = store
    app.state.booking_service = booking_service
    app.state.auth_service = AuthService(store, booking_service)

    if settings.SEED_DEV_ADMIN:
        await seed_dev_admin(store)

    try:
        yield
    finally:
        await engine.dispose()


app: FastAPI = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Axiom API 로깅 미들웨어 (Registered before CORS to capture all requests)
app.add_middleware(AxiomLoggingMiddleware)

# CORS 미들웨어 (Cross-Origin Resource Sharing middleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
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
# 라우터 등록 (Router registration)
# ---------------------------------------------------------------------------
from garden_booking.api.admin import admin_router  # noqa: E402
from garden_booking.api.app import app_router  # noqa: E402

app.include_router(admin_router, prefix="/api/v1/admin")
app.include_router(app_router, prefix="/api/v1/app")
