"""앱 기간/주간 라우터 (기간 통계 및 주간 명단).

App Period Router: period statistics for the dashboard and week rosters.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from garden_booking.api.deps import get_booking_service, get_current_user
from garden_booking.models.user import User
from garden_booking.schemas.booking import PeriodStatsResponse, WeekBookingResponse
from garden_booking.services.booking_service import BookingService

router: APIRouter = APIRouter()


@router.get("/periods", response_model=list[PeriodStatsResponse])
async def get_period_stats(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[BookingService, Depends(get_booking_service)],
    year: Annotated[int | None, Query(description="연도 (Year, defaults to current)")] = None,
) -> list[PeriodStatsResponse]:
    """기간별 통계 조회.

    Statistics for the three periods, with the caller's own booked
    weeks in user_bookings.
    """
    return await service.get_period_stats(current_user.id, year)


@router.get("/weeks/{week_number}/bookings", response_model=list[WeekBookingResponse])
async def get_week_roster(
    week_number: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[BookingService, Depends(get_booking_service)],
    year: Annotated[int | None, Query()] = None,
) -> list[WeekBookingResponse]:
    """주간 예약자 명단 (Who has booked a given week)."""
    return await service.get_week_roster(week_number, year)
