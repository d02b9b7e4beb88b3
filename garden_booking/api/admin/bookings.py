"""관리자 예약 라우터 (전체 예약 조회, 대리 예약, 취소, 엑셀 내보내기).

Admin Booking Router: all bookings, booking on behalf of members,
cancellation, and Excel export. Every endpoint requires an admin token.
"""

from io import BytesIO
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse

from garden_booking.api.deps import get_booking_service, require_admin
from garden_booking.models.user import User
from garden_booking.schemas.booking import AdminBookingCreate, BookingResponse
from garden_booking.schemas.common import MessageResponse
from garden_booking.services.booking_service import BookingService
from garden_booking.utils.exceptions import NotFoundError

router: APIRouter = APIRouter()


@router.get("", response_model=list[BookingResponse])
async def list_all_bookings(
    current_user: Annotated[User, Depends(require_admin)],
    service: Annotated[BookingService, Depends(get_booking_service)],
    year: Annotated[int | None, Query(description="연도 (Year, defaults to current)")] = None,
) -> list[BookingResponse]:
    """전체 예약 목록 (All members' bookings for a year)."""
    return await service.list_all_bookings(year)


@router.post("", response_model=BookingResponse, status_code=201)
async def create_booking_for_user(
    data: AdminBookingCreate,
    current_user: Annotated[User, Depends(require_admin)],
    service: Annotated[BookingService, Depends(get_booking_service)],
) -> BookingResponse:
    """회원 대리 예약.

    Book a week on behalf of a member.

    Raises:
        NotFoundError: 대상 사용자가 없을 때 (Unknown target member)
    """
    try:
        user_id: UUID = UUID(data.user_id)
    except ValueError:
        raise NotFoundError("User not found")
    return await service.book_week(current_user, data.week_number, data.year, user_id=user_id)


@router.get("/export")
async def export_bookings(
    current_user: Annotated[User, Depends(require_admin)],
    service: Annotated[BookingService, Depends(get_booking_service)],
    year: Annotated[int | None, Query()] = None,
) -> StreamingResponse:
    """연도별 예약 현황을 Excel 파일로 내보냅니다."""
    excel_bytes: bytes = await service.export_excel(year)
    return StreamingResponse(
        BytesIO(excel_bytes),
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": "attachment; filename=garden_bookings.xlsx"},
    )


@router.delete("/{booking_id}", response_model=MessageResponse)
async def delete_booking(
    booking_id: UUID,
    current_user: Annotated[User, Depends(require_admin)],
    service: Annotated[BookingService, Depends(get_booking_service)],
) -> MessageResponse:
    """예약 취소 (Cancel any booking by id)."""
    await service.cancel_booking(current_user, booking_id)
    return MessageResponse(message="Booking cancelled")
