"""개발용 관리자 시드 및 애플리케이션 수명주기 테스트.

Dev admin seeding and application lifespan tests.
"""

import pytest
from fastapi import FastAPI

from garden_booking.config import settings
from garden_booking.main import lifespan
from garden_booking.repositories.booking_store import BookingStore
from garden_booking.seed import seed_dev_admin
from garden_booking.utils.password import verify_password


class TestSeedDevAdmin:
    """개발용 관리자 시드 테스트."""

    async def test_creates_admin(self, store: BookingStore):
        admin = await seed_dev_admin(store)
        assert admin.is_admin is True
        assert admin.username == settings.DEV_ADMIN_USERNAME
        assert verify_password(settings.DEV_ADMIN_PASSWORD, admin.password_hash)

    async def test_idempotent(self, store: BookingStore):
        """두 번 실행해도 계정은 하나."""
        first = await seed_dev_admin(store)
        second = await seed_dev_admin(store)
        assert first.id == second.id
        assert len(await store.get_all_users()) == 1


class TestLifespan:
    """수명주기 테스트."""

    async def test_builds_store_and_seeds(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setattr(settings, "SEED_DEV_ADMIN", True)
        monkeypatch.setattr(settings, "DATABASE_URL", "sqlite+aiosqlite:///:memory:")
        app = FastAPI()

        async with lifespan(app):
            store: BookingStore = app.state.store
            assert app.state.booking_service.store is store
            assert app.state.auth_service.store is store
            admin = await store.get_user_by_username(settings.DEV_ADMIN_USERNAME)
            assert admin is not None and admin.is_admin
