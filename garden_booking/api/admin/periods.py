"""관리자 기간 라우터 (기간 상세 및 주간 명단).

Admin Period Router.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from garden_booking.api.deps import get_booking_service, require_admin
from garden_booking.models.user import User
from garden_booking.schemas.booking import PeriodDetailResponse
from garden_booking.services.booking_service import BookingService

router: APIRouter = APIRouter()


@router.get("/{period_id}", response_model=PeriodDetailResponse)
async def get_period_detail(
    period_id: int,
    current_user: Annotated[User, Depends(require_admin)],
    service: Annotated[BookingService, Depends(get_booking_service)],
    year: Annotated[int | None, Query()] = None,
) -> PeriodDetailResponse:
    """기간 상세 조회.

    Period totals plus the roster of every week in it.

    Raises:
        NotFoundError: 존재하지 않는 기간 (Unknown period id)
    """
    return await service.get_period_detail(period_id, year)
