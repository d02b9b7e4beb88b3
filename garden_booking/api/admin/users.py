"""관리자 사용자 라우터 (회원 목록, 회원 주 예약 취소).

Admin User Router: member list with booking stats and cancelling a
member's booking by week, as used by the period detail grid.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from garden_booking.api.deps import get_booking_service, require_admin
from garden_booking.models.user import User
from garden_booking.schemas.booking import UserWithStatsResponse
from garden_booking.schemas.common import MessageResponse
from garden_booking.services.booking_service import BookingService

router: APIRouter = APIRouter()


@router.get("", response_model=list[UserWithStatsResponse])
async def list_users(
    current_user: Annotated[User, Depends(require_admin)],
    service: Annotated[BookingService, Depends(get_booking_service)],
) -> list[UserWithStatsResponse]:
    """전체 회원 목록을 예약 통계와 함께 조회합니다.

    List every member, in registration order, with this year's booking stats.
    """
    return await service.list_users()


@router.delete("/{user_id}/weeks/{week_number}", response_model=MessageResponse)
async def cancel_user_week(
    user_id: UUID,
    week_number: int,
    current_user: Annotated[User, Depends(require_admin)],
    service: Annotated[BookingService, Depends(get_booking_service)],
    year: Annotated[int | None, Query()] = None,
) -> MessageResponse:
    """회원의 특정 주 예약을 취소합니다 (Cancel a member's booking for a week)."""
    await service.cancel_week(current_user, user_id, week_number, year)
    return MessageResponse(message="Booking cancelled")
