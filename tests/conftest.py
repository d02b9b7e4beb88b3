"""테스트 인프라 (인메모리 SQLite, 저장소, 서비스, httpx 클라이언트 픽스처).

Test infrastructure: in-memory SQLite engine, store, services and httpx client fixtures.
Every test gets a fresh in-memory database, so no cleanup is needed.
"""

from collections.abc import AsyncGenerator
from datetime import date

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine

from garden_booking.api.deps import get_auth_service, get_booking_service, get_store
from garden_booking.database import create_engine, create_session_factory, init_models
from garden_booking.main import app
from garden_booking.models.user import User
from garden_booking.repositories.booking_store import BookingStore
from garden_booking.services.auth_service import AuthService
from garden_booking.services.booking_service import BookingService
from garden_booking.utils.jwt import create_access_token
from garden_booking.utils.password import hash_password

# 테스트 기준 연도 (Year the test store treats as current)
CURRENT_YEAR: int = date.today().year

TEST_PASSWORD = "garden123"


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 저장소, 서비스, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """테스트마다 새 인메모리 DB 엔진을 만들고 스키마를 생성합니다."""
    eng = create_engine("sqlite+aiosqlite:///:memory:")
    await init_models(eng)
    yield eng
    await eng.dispose()


@pytest.fixture
def store(engine: AsyncEngine) -> BookingStore:
    return BookingStore(create_session_factory(engine), current_year=CURRENT_YEAR)


@pytest.fixture
def service(store: BookingStore) -> BookingService:
    return BookingService(store)


@pytest.fixture
def auth_service(store: BookingStore, service: BookingService) -> AuthService:
    return AuthService(store, service)


@pytest_asyncio.fixture
async def client(
    store: BookingStore,
    service: BookingService,
    auth_service: AuthService,
) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 (저장소와 서비스를 오버라이드합니다)."""
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_booking_service] = lambda: service
    app.dependency_overrides[get_auth_service] = lambda: auth_service

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# 헬퍼 픽스처: 테스트용 사용자 생성
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def member_user(store: BookingStore) -> User:
    """일반 회원을 생성합니다."""
    return await store.create_user("alice", hash_password(TEST_PASSWORD))


@pytest_asyncio.fixture
async def other_user(store: BookingStore) -> User:
    """다른 일반 회원을 생성합니다."""
    return await store.create_user("bob", hash_password(TEST_PASSWORD))


@pytest_asyncio.fixture
async def admin_user(store: BookingStore) -> User:
    """관리자를 생성합니다."""
    return await store.create_user("admin", hash_password(TEST_PASSWORD), is_admin=True)


def make_token(user: User) -> str:
    """테스트용 JWT 액세스 토큰을 생성합니다."""
    return create_access_token(user.id, user.is_admin)


@pytest.fixture
def member_token(member_user: User) -> str:
    return make_token(member_user)


@pytest.fixture
def other_token(other_user: User) -> str:
    return make_token(other_user)


@pytest.fixture
def admin_token(admin_user: User) -> str:
    return make_token(admin_user)


def auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
