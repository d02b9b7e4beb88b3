"""앱 예약 라우터 (내 예약 생성, 조회, 변경, 취소).

App Booking Router: the member's own bookings.
Follows 3-layer architecture: Router -> Service -> Store.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from garden_booking.api.deps import get_booking_service, get_current_user
from garden_booking.models.user import User
from garden_booking.schemas.booking import BookingCreate, BookingResponse, BookingUpdateRequest
from garden_booking.schemas.common import MessageResponse
from garden_booking.services.booking_service import BookingService

router: APIRouter = APIRouter()


@router.post("", response_model=BookingResponse, status_code=201)
async def create_booking(
    data: BookingCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[BookingService, Depends(get_booking_service)],
) -> BookingResponse:
    """주 예약.

    Book a week for the current member.

    Args:
        data: 예약 요청 (Week number and optional year)
        current_user: 인증된 사용자 (Authenticated user)
        service: 예약 서비스 (Booking service)

    Returns:
        BookingResponse: 생성된 예약 (Created booking)
    """
    return await service.book_week(current_user, data.week_number, data.year)


@router.get("", response_model=list[BookingResponse])
async def list_my_bookings(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[BookingService, Depends(get_booking_service)],
    year: Annotated[int | None, Query(description="연도 (Year, defaults to current)")] = None,
) -> list[BookingResponse]:
    """내 예약 목록 (My bookings for a year, in booking order)."""
    return await service.list_user_bookings(current_user.id, year)


@router.patch("/{booking_id}", response_model=BookingResponse)
async def update_booking(
    booking_id: UUID,
    data: BookingUpdateRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[BookingService, Depends(get_booking_service)],
) -> BookingResponse:
    """예약 변경.

    Move a booking to another week and/or year. Members may only change
    their own bookings; admins may change any.
    """
    return await service.change_booking(current_user, booking_id, data)


@router.delete("/weeks/{week_number}", response_model=MessageResponse)
async def cancel_my_week(
    week_number: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[BookingService, Depends(get_booking_service)],
    year: Annotated[int | None, Query()] = None,
) -> MessageResponse:
    """주 번호로 내 예약 취소 (Cancel my booking for a week)."""
    await service.cancel_week(current_user, current_user.id, week_number, year)
    return MessageResponse(message="Booking cancelled")


@router.delete("/{booking_id}", response_model=MessageResponse)
async def delete_booking(
    booking_id: UUID,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[BookingService, Depends(get_booking_service)],
) -> MessageResponse:
    """예약 취소 (Cancel a booking by id; owner or admin)."""
    await service.cancel_booking(current_user, booking_id)
    return MessageResponse(message="Booking cancelled")
