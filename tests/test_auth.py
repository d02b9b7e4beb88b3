"""인증 API 테스트 (회원가입, 로그인, 로그아웃, /me 엔드포인트).

Auth API tests: registration, login, logout, and /me endpoints.
"""

from httpx import AsyncClient

from garden_booking.models.user import User
from garden_booking.repositories.booking_store import BookingStore
from garden_booking.utils.password import verify_password
from tests.conftest import TEST_PASSWORD, auth_header

APP_AUTH = "/api/v1/app/auth"


class TestRegister:
    """회원가입 테스트."""

    async def test_register_success(self, client: AsyncClient, store: BookingStore):
        """회원가입 성공 시 토큰과 사용자 통계 반환, 비밀번호는 해시로 저장."""
        res = await client.post(f"{APP_AUTH}/register", json={
            "username": "  NewMember ",
            "password": "secret123",
        })
        assert res.status_code == 201
        data = res.json()
        assert data["token_type"] == "bearer"
        assert data["access_token"]
        assert data["user"]["username"] == "newmember"
        assert data["user"]["is_admin"] is False
        assert data["user"]["total_bookings"] == 0
        assert "password_hash" not in data["user"]

        stored = await store.get_user_by_username("newmember")
        assert stored.password_hash != "secret123"
        assert verify_password("secret123", stored.password_hash)

    async def test_register_duplicate_case_insensitive(self, client: AsyncClient, member_user: User):
        """대소문자만 다른 사용자명도 중복."""
        res = await client.post(f"{APP_AUTH}/register", json={
            "username": "ALICE",
            "password": "secret123",
        })
        assert res.status_code == 409

    async def test_register_short_username(self, client: AsyncClient):
        res = await client.post(f"{APP_AUTH}/register", json={
            "username": "ab",
            "password": "secret123",
        })
        assert res.status_code == 422

    async def test_register_short_password(self, client: AsyncClient):
        res = await client.post(f"{APP_AUTH}/register", json={
            "username": "gardener",
            "password": "12345",
        })
        assert res.status_code == 422


class TestLogin:
    """로그인 테스트."""

    async def test_login_success(self, client: AsyncClient, member_user: User):
        res = await client.post(f"{APP_AUTH}/login", json={
            "username": "Alice",
            "password": TEST_PASSWORD,
        })
        assert res.status_code == 200
        data = res.json()
        assert data["user"]["id"] == str(member_user.id)

        me = await client.get(f"{APP_AUTH}/me", headers=auth_header(data["access_token"]))
        assert me.status_code == 200
        assert me.json()["username"] == "alice"

    async def test_login_wrong_password(self, client: AsyncClient, member_user: User):
        res = await client.post(f"{APP_AUTH}/login", json={
            "username": "alice",
            "password": "wrong_password",
        })
        assert res.status_code == 401

    async def test_login_nonexistent_user(self, client: AsyncClient):
        res = await client.post(f"{APP_AUTH}/login", json={
            "username": "nobody",
            "password": "whatever",
        })
        assert res.status_code == 401


class TestMeAndLogout:
    """/me 및 로그아웃 테스트."""

    async def test_me_includes_stats(
        self, client: AsyncClient, store: BookingStore, member_user: User, member_token: str
    ):
        await store.create_booking(member_user.id, 20)
        res = await client.get(f"{APP_AUTH}/me", headers=auth_header(member_token))
        assert res.status_code == 200
        data = res.json()
        assert data["total_bookings"] == 1
        assert data["upcoming_bookings"][0]["week_number"] == 20
        assert data["upcoming_bookings"][0]["period_name"] == "Spring"

    async def test_me_without_token(self, client: AsyncClient):
        """토큰 없이 요청 시 거부."""
        res = await client.get(f"{APP_AUTH}/me")
        assert res.status_code in (401, 403)

    async def test_me_invalid_token(self, client: AsyncClient):
        res = await client.get(f"{APP_AUTH}/me", headers=auth_header("not-a-jwt"))
        assert res.status_code == 401

    async def test_logout(self, client: AsyncClient, member_token: str):
        res = await client.post(f"{APP_AUTH}/logout", headers=auth_header(member_token))
        assert res.status_code == 200
        assert res.json()["message"] == "Logged out successfully"
