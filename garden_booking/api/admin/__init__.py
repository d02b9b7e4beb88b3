"""관리자 API 라우터 패키지 (모든 관리자 엔드포인트 통합).

Admin API Router package: aggregates all admin-facing endpoints
into a single router for inclusion in the FastAPI application.

Included routers:
    - bookings: 전체 예약 관리 및 엑셀 내보내기 (Booking management, Excel export)
    - users: 회원 목록 및 주 예약 취소 (Member list, cancel by week)
    - periods: 기간 상세 (Period detail with week rosters)
"""

from fastapi import APIRouter

from garden_booking.api.admin.bookings import router as bookings_router
from garden_booking.api.admin.periods import router as periods_router
from garden_booking.api.admin.users import router as users_router

admin_router: APIRouter = APIRouter()

admin_router.include_router(bookings_router, prefix="/bookings", tags=["Admin Bookings"])
admin_router.include_router(users_router, prefix="/users", tags=["Admin Users"])
admin_router.include_router(periods_router, prefix="/periods", tags=["Admin Periods"])
