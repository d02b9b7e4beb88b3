"""예약 서비스 (예약 집계 및 권한 확인 비즈니스 로직).

Booking Service: read models and cross-record rules on top of the store.
Builds the member dashboard views (user-with-stats, period stats, week
rosters), the admin period detail and Excel export, and applies the
ownership rules for booking on behalf of, changing, or cancelling
another member's bookings. The service never mutates bookings itself;
every write goes through the BookingStore.
"""

from io import BytesIO
from uuid import UUID

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill

from garden_booking.models.booking import Booking
from garden_booking.models.user import User
from garden_booking.repositories.booking_store import BookingStore
from garden_booking.schemas.booking import (
    BookingResponse,
    BookingUpdate,
    PeriodDetailResponse,
    PeriodStatsResponse,
    UpcomingBookingResponse,
    UserResponse,
    UserWithStatsResponse,
    WeekBookingResponse,
    WeekRosterResponse,
)
from garden_booking.utils.exceptions import ForbiddenError, NotFoundError
from garden_booking.utils.periods import (
    PERIODS,
    SLOTS_PER_WEEK,
    Period,
    get_period,
    get_period_name,
    get_week_date_range,
)

# 대시보드에 보여줄 다가오는 예약 수 (Number of upcoming bookings previewed)
UPCOMING_LIMIT: int = 3


class BookingService:
    """예약 관련 비즈니스 로직을 처리하는 서비스.

    Service handling booking aggregation and actor permission checks.

    Attributes:
        store: 예약 저장소 (The booking store this service reads from and writes through)
    """

    def __init__(self, store: BookingStore) -> None:
        self.store: BookingStore = store

    # === 변환 헬퍼 (Conversion helpers) ===

    def _to_response(self, booking: Booking) -> BookingResponse:
        """예약 모델을 응답 스키마로 변환합니다 (Convert a Booking to its response schema)."""
        return BookingResponse(
            id=str(booking.id),
            user_id=str(booking.user_id),
            week_number=booking.week_number,
            year=booking.year,
            period=booking.period,
            created_at=booking.created_at,
        )

    def _to_user_response(self, user: User) -> UserResponse:
        return UserResponse(
            id=str(user.id),
            username=user.username,
            is_admin=user.is_admin,
            created_at=user.created_at,
        )

    def _ensure_can_act_for(self, actor: User, owner_id: UUID, action: str) -> None:
        """본인 또는 관리자만 허용합니다.

        Allow the action when the actor owns the booking or is an admin.

        Raises:
            ForbiddenError: 타인의 예약에 대한 일반 사용자 요청 (Member acting on someone else)
        """
        if actor.id != owner_id and not actor.is_admin:
            raise ForbiddenError(f"You can only {action} your own bookings")

    def get_period_name(self, period_id: int) -> str:
        """기간 ID를 이름으로 변환합니다 (Spring/Summer/Fall, otherwise "Unknown")."""
        return get_period_name(period_id)

    # === 읽기 모델 (Read models) ===

    async def get_user_with_stats(self, user_id: UUID) -> UserWithStatsResponse | None:
        """사용자 정보와 올해 예약 통계를 조회합니다.

        Fetch a user with this year's booking count and a preview of the
        three bookings with the smallest week numbers.

        Args:
            user_id: 사용자 ID (User UUID)

        Returns:
            UserWithStatsResponse | None: 통계 포함 사용자, 없으면 None (None for an unknown user)
        """
        user: User | None = await self.store.get_user(user_id)
        if user is None:
            return None

        year: int = self.store.current_year
        bookings: list[Booking] = await self.store.get_bookings_by_user(user_id, year)
        # sorted는 안정 정렬 (stable sort keeps insertion order on equal weeks)
        upcoming: list[Booking] = sorted(bookings, key=lambda b: b.week_number)[:UPCOMING_LIMIT]

        return UserWithStatsResponse(
            **self._to_user_response(user).model_dump(),
            total_bookings=len(bookings),
            upcoming_bookings=[
                UpcomingBookingResponse(
                    period_name=self.get_period_name(b.period),
                    week_number=b.week_number,
                    date=get_week_date_range(b.week_number, year),
                )
                for b in upcoming
            ],
        )

    async def get_period_stats(
        self,
        user_id: UUID | None = None,
        year: int | None = None,
    ) -> list[PeriodStatsResponse]:
        """세 기간 각각의 통계를 계산합니다.

        Compute statistics for each of the three periods.
        available_slots = total_weeks * SLOTS_PER_WEEK - 전체 사용자의 기간 내 예약 수.
        The capacity figure is display-only; the store never rejects a booking for it.

        Args:
            user_id: 본인 예약 주 목록을 채울 사용자 (User whose weeks fill user_bookings; None leaves them empty)
            year: 연도, None이면 기준 연도 (Year; None uses the store's current year)

        Returns:
            list[PeriodStatsResponse]: 기간 1, 2, 3의 통계 (Stats for periods 1, 2, 3)
        """
        counts: dict[int, int] = await self.store.count_bookings_by_period(year)
        user_bookings: list[Booking] = (
            await self.store.get_bookings_by_user(user_id, year) if user_id is not None else []
        )

        return [
            PeriodStatsResponse(
                id=period.id,
                name=period.label,
                total_weeks=period.total_weeks,
                user_bookings=sorted(b.week_number for b in user_bookings if b.period == period.id),
                available_slots=period.total_weeks * SLOTS_PER_WEEK - counts.get(period.id, 0),
            )
            for period in PERIODS
        ]

    async def get_week_roster(
        self,
        week_number: int,
        year: int | None = None,
    ) -> list[WeekBookingResponse]:
        """주간 예약자 명단 (Roster of members booked for a week)."""
        return await self.store.get_week_bookings(week_number, year)

    async def get_period_detail(
        self,
        period_id: int,
        year: int | None = None,
    ) -> PeriodDetailResponse:
        """관리자용 기간 상세 정보를 조회합니다.

        Build the admin period detail: the period's totals plus a roster
        for every week in it.

        Raises:
            NotFoundError: 존재하지 않는 기간 ID (Unknown period id)
        """
        period: Period | None = get_period(period_id)
        if period is None:
            raise NotFoundError("Period not found")

        resolved_year: int = self.store.current_year if year is None else year
        bookings: list[Booking] = await self.store.get_bookings_by_period(period.id, resolved_year)

        weeks: list[WeekRosterResponse] = []
        for week_number in period.weeks:
            weeks.append(
                WeekRosterResponse(
                    week_number=week_number,
                    date=get_week_date_range(week_number, resolved_year),
                    bookings=await self.store.get_week_bookings(week_number, resolved_year),
                )
            )

        return PeriodDetailResponse(
            id=period.id,
            name=period.label,
            total_weeks=period.total_weeks,
            total_bookings=len(bookings),
            unique_users=len({b.user_id for b in bookings}),
            available_slots=period.total_weeks * SLOTS_PER_WEEK - len(bookings),
            weeks=weeks,
        )

    async def list_user_bookings(self, user_id: UUID, year: int | None = None) -> list[BookingResponse]:
        bookings: list[Booking] = await self.store.get_bookings_by_user(user_id, year)
        return [self._to_response(b) for b in bookings]

    async def list_all_bookings(self, year: int | None = None) -> list[BookingResponse]:
        bookings: list[Booking] = await self.store.get_all_bookings(year)
        return [self._to_response(b) for b in bookings]

    async def list_users(self) -> list[UserWithStatsResponse]:
        """전체 사용자를 통계와 함께 조회합니다 (All users with their booking stats)."""
        users: list[User] = await self.store.get_all_users()
        result: list[UserWithStatsResponse] = []
        for user in users:
            with_stats: UserWithStatsResponse | None = await self.get_user_with_stats(user.id)
            if with_stats is not None:
                result.append(with_stats)
        return result

    # === 예약 변경 (Booking mutations) ===

    async def book_week(
        self,
        actor: User,
        week_number: int,
        year: int | None = None,
        user_id: UUID | None = None,
    ) -> BookingResponse:
        """주를 예약합니다. 관리자는 다른 사용자 대신 예약할 수 있습니다.

        Book a week for the actor, or for user_id when an admin books on
        a member's behalf.

        Args:
            actor: 요청한 사용자 (Authenticated caller)
            week_number: 주 번호 (Week number)
            year: 연도 (Year; None uses the current year)
            user_id: 대상 사용자, None이면 본인 (Target member; None books for the actor)

        Raises:
            ForbiddenError: 일반 사용자가 타인 대신 예약할 때 (Member booking for someone else)
            NotFoundError: 대상 사용자가 없을 때 (Unknown target user)
            InvalidWeekError, DuplicateBookingError: 저장소 오류 전달 (Propagated from the store)
        """
        target_id: UUID = user_id if user_id is not None else actor.id
        if target_id != actor.id:
            if not actor.is_admin:
                raise ForbiddenError("Admin access required")
            if await self.store.get_user(target_id) is None:
                raise NotFoundError("User not found")

        booking: Booking = await self.store.create_booking(target_id, week_number, year)
        return self._to_response(booking)

    async def change_booking(
        self,
        actor: User,
        booking_id: UUID,
        changes: BookingUpdate,
    ) -> BookingResponse:
        """예약의 주/연도를 변경합니다 (Move a booking to another week and/or year).

        Raises:
            NotFoundError: 예약이 없을 때 (Unknown booking)
            ForbiddenError: 본인/관리자가 아닐 때 (Neither owner nor admin)
        """
        existing: Booking | None = await self.store.get_booking(booking_id)
        if existing is None:
            raise NotFoundError("Booking not found")
        self._ensure_can_act_for(actor, existing.user_id, "update")

        updated: Booking | None = await self.store.update_booking(booking_id, changes)
        if updated is None:
            raise NotFoundError("Booking not found")
        return self._to_response(updated)

    async def cancel_booking(self, actor: User, booking_id: UUID) -> None:
        """예약을 취소합니다 (Cancel a booking by id).

        Raises:
            NotFoundError: 예약이 없을 때 (Unknown booking)
            ForbiddenError: 본인/관리자가 아닐 때 (Neither owner nor admin)
        """
        existing: Booking | None = await self.store.get_booking(booking_id)
        if existing is None:
            raise NotFoundError("Booking not found")
        self._ensure_can_act_for(actor, existing.user_id, "delete")

        if not await self.store.delete_booking(booking_id):
            raise NotFoundError("Booking not found")

    async def cancel_week(
        self,
        actor: User,
        user_id: UUID,
        week_number: int,
        year: int | None = None,
    ) -> None:
        """사용자의 특정 주 예약을 취소합니다.

        Cancel a member's booking for a week, as used by the week grids.

        Raises:
            ForbiddenError: 본인/관리자가 아닐 때 (Neither owner nor admin)
            NotFoundError: 해당 주 예약이 없을 때 (No booking for that week)
        """
        self._ensure_can_act_for(actor, user_id, "delete")
        if not await self.store.delete_booking_by_user_and_week(user_id, week_number, year):
            raise NotFoundError("Booking not found")

    # === 내보내기 (Export) ===

    async def export_excel(self, year: int | None = None) -> bytes:
        """연도별 예약 현황을 Excel 파일로 내보내기."""
        resolved_year: int = self.store.current_year if year is None else year
        bookings: list[Booking] = await self.store.get_all_bookings(resolved_year)
        usernames: dict[UUID, str] = {u.id: u.username for u in await self.store.get_all_users()}
        stats: list[PeriodStatsResponse] = await self.get_period_stats(year=resolved_year)

        wb = Workbook()
        header_font = Font(bold=True, color="FFFFFF", size=11)
        header_fill = PatternFill(start_color="2F5D34", end_color="2F5D34", fill_type="solid")

        def style_headers(ws, headers: list[str]) -> None:
            for col_idx, h in enumerate(headers, 1):
                cell = ws.cell(row=1, column=col_idx, value=h)
                cell.font = header_font
                cell.fill = header_fill
                cell.alignment = Alignment(horizontal="center")

        # --- Sheet 1: Bookings ---
        ws1 = wb.active
        ws1.title = "Bookings"
        style_headers(ws1, ["Username", "Week", "Period", "Dates", "Year", "Booked At"])

        for b in sorted(bookings, key=lambda b: (b.week_number, usernames.get(b.user_id, ""))):
            ws1.append([
                usernames.get(b.user_id, ""),
                b.week_number,
                self.get_period_name(b.period),
                get_week_date_range(b.week_number, resolved_year),
                b.year,
                b.created_at.isoformat() if b.created_at else "",
            ])

        for i, w in enumerate([20, 8, 12, 16, 8, 28], 1):
            ws1.column_dimensions[ws1.cell(row=1, column=i).column_letter].width = w

        # --- Sheet 2: Periods ---
        ws2 = wb.create_sheet("Periods")
        style_headers(ws2, ["Period", "Weeks", "Bookings", "Available Slots"])
        for s in stats:
            ws2.append([
                s.name,
                s.total_weeks,
                s.total_weeks * SLOTS_PER_WEEK - s.available_slots,
                s.available_slots,
            ])

        for i, w in enumerate([26, 8, 10, 16], 1):
            ws2.column_dimensions[ws2.cell(row=1, column=i).column_letter].width = w

        buf = BytesIO()
        wb.save(buf)
        return buf.getvalue()
