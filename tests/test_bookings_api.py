"""예약 API 테스트 (회원 및 관리자 엔드포인트).

Booking API tests: member and admin endpoints, error mapping, and export.
"""

import uuid
from io import BytesIO

from httpx import AsyncClient
from openpyxl import load_workbook

from garden_booking.models.user import User
from garden_booking.repositories.booking_store import BookingStore
from tests.conftest import CURRENT_YEAR, auth_header

APP = "/api/v1/app"
ADMIN = "/api/v1/admin"


class TestHealth:
    async def test_health(self, client: AsyncClient):
        res = await client.get("/health")
        assert res.status_code == 200
        assert res.json() == {"status": "ok"}


# ===== Member =====

class TestMemberBookings:
    """회원 예약 API 테스트."""

    async def test_create_booking(self, client: AsyncClient, member_user: User, member_token: str):
        """주 예약 성공."""
        res = await client.post(f"{APP}/bookings", json={"week_number": 16}, headers=auth_header(member_token))
        assert res.status_code == 201
        data = res.json()
        assert data["week_number"] == 16
        assert data["year"] == CURRENT_YEAR
        assert data["period"] == 1
        assert data["user_id"] == str(member_user.id)

    async def test_create_requires_auth(self, client: AsyncClient):
        res = await client.post(f"{APP}/bookings", json={"week_number": 16})
        assert res.status_code in (401, 403)

    async def test_invalid_week(self, client: AsyncClient, member_token: str):
        """범위 밖 주 번호는 400."""
        res = await client.post(f"{APP}/bookings", json={"week_number": 10}, headers=auth_header(member_token))
        assert res.status_code == 400
        assert "Invalid week number" in res.json()["detail"]

    async def test_duplicate_booking(self, client: AsyncClient, member_token: str):
        """중복 예약은 409."""
        await client.post(f"{APP}/bookings", json={"week_number": 16}, headers=auth_header(member_token))
        res = await client.post(f"{APP}/bookings", json={"week_number": 16}, headers=auth_header(member_token))
        assert res.status_code == 409

    async def test_year_out_of_window(self, client: AsyncClient, member_token: str):
        """허용 범위 밖 연도는 422."""
        res = await client.post(
            f"{APP}/bookings",
            json={"week_number": 16, "year": CURRENT_YEAR + 10},
            headers=auth_header(member_token),
        )
        assert res.status_code == 422

    async def test_list_my_bookings(
        self, client: AsyncClient, store: BookingStore, member_user: User, other_user: User, member_token: str
    ):
        """본인 예약만 조회."""
        await store.create_booking(member_user.id, 20)
        await store.create_booking(other_user.id, 21)
        await store.create_booking(member_user.id, 22, CURRENT_YEAR + 1)

        res = await client.get(f"{APP}/bookings", headers=auth_header(member_token))
        assert res.status_code == 200
        assert [b["week_number"] for b in res.json()] == [20]

        res = await client.get(f"{APP}/bookings", params={"year": CURRENT_YEAR + 1}, headers=auth_header(member_token))
        assert [b["week_number"] for b in res.json()] == [22]

    async def test_update_booking(self, client: AsyncClient, store: BookingStore, member_user: User, member_token: str):
        booking = await store.create_booking(member_user.id, 20)
        res = await client.patch(
            f"{APP}/bookings/{booking.id}",
            json={"week_number": 40},
            headers=auth_header(member_token),
        )
        assert res.status_code == 200
        assert res.json()["week_number"] == 40
        assert res.json()["period"] == 3

    async def test_update_year_out_of_window(
        self, client: AsyncClient, store: BookingStore, member_user: User, member_token: str
    ):
        """수정 요청의 연도도 허용 범위 검사, 기존 값 유지."""
        booking = await store.create_booking(member_user.id, 20)
        res = await client.patch(
            f"{APP}/bookings/{booking.id}",
            json={"year": CURRENT_YEAR + 9},
            headers=auth_header(member_token),
        )
        assert res.status_code == 422
        assert (await store.get_booking(booking.id)).year == CURRENT_YEAR

    async def test_update_others_booking_forbidden(
        self, client: AsyncClient, store: BookingStore, other_user: User, member_token: str
    ):
        booking = await store.create_booking(other_user.id, 20)
        res = await client.patch(
            f"{APP}/bookings/{booking.id}",
            json={"week_number": 21},
            headers=auth_header(member_token),
        )
        assert res.status_code == 403

    async def test_update_unknown_booking(self, client: AsyncClient, member_token: str):
        res = await client.patch(
            f"{APP}/bookings/{uuid.uuid4()}",
            json={"week_number": 21},
            headers=auth_header(member_token),
        )
        assert res.status_code == 404

    async def test_delete_booking(self, client: AsyncClient, store: BookingStore, member_user: User, member_token: str):
        booking = await store.create_booking(member_user.id, 20)
        res = await client.delete(f"{APP}/bookings/{booking.id}", headers=auth_header(member_token))
        assert res.status_code == 200
        assert await store.get_booking(booking.id) is None

    async def test_delete_others_booking_forbidden(
        self, client: AsyncClient, store: BookingStore, other_user: User, member_token: str
    ):
        booking = await store.create_booking(other_user.id, 20)
        res = await client.delete(f"{APP}/bookings/{booking.id}", headers=auth_header(member_token))
        assert res.status_code == 403
        assert await store.get_booking(booking.id) is not None

    async def test_cancel_week(self, client: AsyncClient, store: BookingStore, member_user: User, member_token: str):
        await store.create_booking(member_user.id, 25)
        res = await client.delete(f"{APP}/bookings/weeks/25", headers=auth_header(member_token))
        assert res.status_code == 200
        res = await client.delete(f"{APP}/bookings/weeks/25", headers=auth_header(member_token))
        assert res.status_code == 404


class TestMemberPeriods:
    """기간 통계 및 주간 명단 API 테스트."""

    async def test_period_stats(
        self, client: AsyncClient, store: BookingStore, member_user: User, other_user: User, member_token: str
    ):
        await store.create_booking(member_user.id, 24)
        await store.create_booking(other_user.id, 25)
        res = await client.get(f"{APP}/periods", headers=auth_header(member_token))
        assert res.status_code == 200
        data = res.json()
        assert len(data) == 3
        assert data[1]["name"] == "Summer (Weeks 24-33)"
        assert data[1]["user_bookings"] == [24]
        assert data[1]["available_slots"] == 48

    async def test_week_roster(
        self, client: AsyncClient, store: BookingStore, member_user: User, other_user: User, member_token: str
    ):
        await store.create_booking(member_user.id, 30)
        await store.create_booking(other_user.id, 30)
        res = await client.get(f"{APP}/weeks/30/bookings", headers=auth_header(member_token))
        assert res.status_code == 200
        assert {b["username"] for b in res.json()} == {"alice", "bob"}


# ===== Admin =====

class TestAdminAccess:
    """관리자 권한 테스트."""

    async def test_member_rejected(self, client: AsyncClient, member_token: str):
        res = await client.get(f"{ADMIN}/bookings", headers=auth_header(member_token))
        assert res.status_code == 403

    async def test_admin_allowed(self, client: AsyncClient, admin_token: str):
        res = await client.get(f"{ADMIN}/bookings", headers=auth_header(admin_token))
        assert res.status_code == 200
        assert res.json() == []


class TestAdminBookings:
    """관리자 예약 관리 API 테스트."""

    async def test_book_for_member(self, client: AsyncClient, member_user: User, admin_token: str):
        res = await client.post(
            f"{ADMIN}/bookings",
            json={"user_id": str(member_user.id), "week_number": 35},
            headers=auth_header(admin_token),
        )
        assert res.status_code == 201
        assert res.json()["user_id"] == str(member_user.id)
        assert res.json()["period"] == 3

    async def test_book_invalid_week_creates_nothing(
        self, client: AsyncClient, store: BookingStore, member_user: User, admin_token: str
    ):
        """관리자 대리 예약도 주 번호 검증, 기록 없음."""
        res = await client.post(
            f"{ADMIN}/bookings",
            json={"user_id": str(member_user.id), "week_number": 50},
            headers=auth_header(admin_token),
        )
        assert res.status_code == 400
        assert await store.get_all_bookings() == []

    async def test_book_for_unknown_user(self, client: AsyncClient, admin_token: str):
        res = await client.post(
            f"{ADMIN}/bookings",
            json={"user_id": str(uuid.uuid4()), "week_number": 20},
            headers=auth_header(admin_token),
        )
        assert res.status_code == 404

    async def test_book_for_malformed_user_id(self, client: AsyncClient, admin_token: str):
        res = await client.post(
            f"{ADMIN}/bookings",
            json={"user_id": "not-a-uuid", "week_number": 20},
            headers=auth_header(admin_token),
        )
        assert res.status_code == 404

    async def test_list_and_delete_any(
        self, client: AsyncClient, store: BookingStore, member_user: User, other_user: User, admin_token: str
    ):
        booking = await store.create_booking(member_user.id, 20)
        await store.create_booking(other_user.id, 21)

        res = await client.get(f"{ADMIN}/bookings", headers=auth_header(admin_token))
        assert len(res.json()) == 2

        res = await client.delete(f"{ADMIN}/bookings/{booking.id}", headers=auth_header(admin_token))
        assert res.status_code == 200
        assert len(await store.get_all_bookings()) == 1

    async def test_export(self, client: AsyncClient, store: BookingStore, member_user: User, admin_token: str):
        """엑셀 내보내기."""
        await store.create_booking(member_user.id, 20)
        res = await client.get(f"{ADMIN}/bookings/export", headers=auth_header(admin_token))
        assert res.status_code == 200
        assert res.headers["content-type"].startswith(
            "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
        )
        assert "garden_bookings.xlsx" in res.headers["content-disposition"]
        wb = load_workbook(BytesIO(res.content))
        assert wb["Bookings"].cell(row=2, column=1).value == "alice"


class TestAdminUsersAndPeriods:
    """관리자 회원/기간 API 테스트."""

    async def test_list_users(
        self, client: AsyncClient, store: BookingStore, member_user: User, admin_user: User, admin_token: str
    ):
        await store.create_booking(member_user.id, 20)
        res = await client.get(f"{ADMIN}/users", headers=auth_header(admin_token))
        assert res.status_code == 200
        by_name = {u["username"]: u for u in res.json()}
        assert by_name["alice"]["total_bookings"] == 1
        assert by_name["admin"]["is_admin"] is True

    async def test_cancel_member_week(
        self, client: AsyncClient, store: BookingStore, member_user: User, admin_token: str
    ):
        await store.create_booking(member_user.id, 20)
        res = await client.delete(f"{ADMIN}/users/{member_user.id}/weeks/20", headers=auth_header(admin_token))
        assert res.status_code == 200
        assert await store.get_bookings_by_user(member_user.id) == []

        res = await client.delete(f"{ADMIN}/users/{member_user.id}/weeks/20", headers=auth_header(admin_token))
        assert res.status_code == 404

    async def test_period_detail(
        self, client: AsyncClient, store: BookingStore, member_user: User, admin_token: str
    ):
        await store.create_booking(member_user.id, 14)
        res = await client.get(f"{ADMIN}/periods/1", headers=auth_header(admin_token))
        assert res.status_code == 200
        data = res.json()
        assert data["total_bookings"] == 1
        assert data["unique_users"] == 1
        assert len(data["weeks"]) == 10
        assert data["weeks"][0]["bookings"] == [{"user_id": str(member_user.id), "username": "alice"}]

    async def test_unknown_period(self, client: AsyncClient, admin_token: str):
        res = await client.get(f"{ADMIN}/periods/7", headers=auth_header(admin_token))
        assert res.status_code == 404
