"""앱 API 라우터 패키지 (회원용 엔드포인트 통합).

App API Router package: aggregates all member-facing endpoints
into a single router for inclusion in the FastAPI application.

Included routers:
    - auth: 회원가입/로그인 (Registration, login, logout, me)
    - bookings: 내 예약 관리 (My bookings)
    - periods: 기간 통계 및 주간 명단 (Period stats and week rosters)
"""

from fastapi import APIRouter

from garden_booking.api.app.auth import router as auth_router
from garden_booking.api.app.bookings import router as bookings_router
from garden_booking.api.app.periods import router as periods_router

app_router: APIRouter = APIRouter()

app_router.include_router(auth_router, prefix="/auth", tags=["App Auth"])
# 내 예약: /bookings 하위 (My bookings)
app_router.include_router(bookings_router, prefix="/bookings", tags=["App Bookings"])
# 기간 통계: /periods, 주간 명단: /weeks/{week_number}/bookings
app_router.include_router(periods_router, tags=["App Periods"])
