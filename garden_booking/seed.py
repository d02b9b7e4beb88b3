"""개발용 관리자 계정 시드 스크립트.

Seed script: creates the development admin account.

Usage:
    python -m garden_booking.seed

Creates:
    - 1개 관리자 계정: DEV_ADMIN_USERNAME / DEV_ADMIN_PASSWORD (기본 admin / admin)

The application lifespan calls seed_dev_admin() on startup when
SEED_DEV_ADMIN is enabled, which is the only useful way to seed the
default in-memory database.
"""

import asyncio

from garden_booking.config import settings
from garden_booking.database import create_engine, create_session_factory, init_models
from garden_booking.models.user import User
from garden_booking.repositories.booking_store import BookingStore
from garden_booking.utils.password import hash_password, normalize_username


async def seed_dev_admin(store: BookingStore) -> User:
    """개발용 관리자 계정을 생성합니다.

    Create the development admin if it does not exist yet.

    Idempotent: 이미 존재하면 기존 계정을 반환합니다 (Returns the existing account).

    Args:
        store: 예약 저장소 (Booking store)

    Returns:
        User: 관리자 계정 (The admin account)
    """
    username: str = normalize_username(settings.DEV_ADMIN_USERNAME)
    existing: User | None = await store.get_user_by_username(username)
    if existing is not None:
        return existing

    return await store.create_user(
        username,
        hash_password(settings.DEV_ADMIN_PASSWORD),
        is_admin=True,
    )


async def seed() -> None:
    """설정된 데이터베이스에 개발용 관리자를 시드합니다 (Seed the configured database)."""
    engine = create_engine(settings.DATABASE_URL, echo=settings.DEBUG)
    try:
        await init_models(engine)
        store: BookingStore = BookingStore(create_session_factory(engine), settings.BOOKING_YEAR)
        admin: User = await seed_dev_admin(store)
        print(f"Admin user: {admin.username} (id={admin.id})")
    finally:
        await engine.dispose()


if __name__ == "__main__":
    asyncio.run(seed())
