"""예약 및 기간 통계 관련 Pydantic 요청/응답 스키마 정의.

Booking and period statistics Pydantic request/response schema definitions.
Covers booking commands (create, admin create, partial update) and the
read models the dashboard consumes: user-with-stats, period stats,
period detail and week rosters.

주 번호 범위(14-44)는 여기서 검증하지 않습니다. 저장소가 InvalidWeekError로 거부합니다.
The week range (14-44) is not validated here; the store rejects it with
InvalidWeekError so every caller sees the same error.
"""

from datetime import date, datetime

from pydantic import BaseModel, field_validator

from garden_booking.config import settings


def _validate_year(year: int | None) -> int | None:
    """연도가 허용 범위(기준 연도 -1 ~ +5) 안에 있는지 확인합니다.

    Accept years from one before the booking year up to five after it.
    """
    if year is None:
        return year
    base_year: int = settings.BOOKING_YEAR or date.today().year
    if not base_year - 1 <= year <= base_year + 5:
        raise ValueError(f"Year must be between {base_year - 1} and {base_year + 5}")
    return year


# === 예약 요청 (Booking commands) ===

class BookingCreate(BaseModel):
    """본인 예약 생성 요청 스키마.

    Booking creation request for the authenticated member.

    Attributes:
        week_number: 주 번호 (Week number)
        year: 연도 (Year, defaults to the current booking year)
    """

    week_number: int  # 주 번호 (Week number, 14-44)
    year: int | None = None  # 연도, 생략 시 현재 연도 (Defaults to current year)

    @field_validator("year")
    @classmethod
    def check_year(cls, year: int | None) -> int | None:
        return _validate_year(year)


class AdminBookingCreate(BookingCreate):
    """관리자 대리 예약 요청 스키마.

    Admin request to book a week on behalf of a member.

    Attributes:
        user_id: 대상 사용자 UUID (Target member UUID)
    """

    user_id: str  # 대상 사용자 UUID 문자열 (Target member UUID as string)


class BookingUpdate(BaseModel):
    """예약 수정 명령 (부분 업데이트).

    Booking update command (partial update).
    An omitted or null field keeps the booking's current value;
    the period is always re-derived from the resulting week number.

    Attributes:
        week_number: 변경할 주 번호 (New week number, optional)
        year: 변경할 연도 (New year, optional)
    """

    week_number: int | None = None
    year: int | None = None


class BookingUpdateRequest(BookingUpdate):
    """예약 수정 요청 스키마 (API 요청 전용).

    Booking update request body. Adds the accepted year window on top of
    the plain update command; the store itself accepts any year.
    """

    @field_validator("year")
    @classmethod
    def check_year(cls, year: int | None) -> int | None:
        return _validate_year(year)


# === 예약 응답 (Booking responses) ===

class BookingResponse(BaseModel):
    """예약 응답 스키마."""

    id: str  # 예약 UUID 문자열 (Booking UUID as string)
    user_id: str  # 사용자 UUID 문자열 (Owner UUID as string)
    week_number: int
    year: int
    period: int  # 1=Spring, 2=Summer, 3=Fall
    created_at: datetime


class WeekBookingResponse(BaseModel):
    """주간 예약자 명단 항목 (Week roster entry)."""

    user_id: str
    username: str


class UpcomingBookingResponse(BaseModel):
    """다가오는 예약 미리보기 항목.

    Upcoming booking preview shown on the member dashboard.

    Attributes:
        period_name: 기간 이름 (Period name, e.g. "Spring")
        week_number: 주 번호 (Week number)
        date: 날짜 범위 (Date range, e.g. "16/4 - 22/4")
    """

    period_name: str
    week_number: int
    date: str


# === 사용자 (User) 스키마 ===

class UserResponse(BaseModel):
    """사용자 응답 스키마 (비밀번호 해시 제외, password hash never exposed)."""

    id: str
    username: str
    is_admin: bool
    created_at: datetime


class UserWithStatsResponse(UserResponse):
    """예약 통계가 포함된 사용자 응답 스키마.

    User response enriched with booking statistics for the current year.

    Attributes:
        total_bookings: 올해 예약 수 (Number of bookings this year)
        upcoming_bookings: 주 번호가 가장 빠른 최대 3개 예약 (Up to 3 earliest bookings)
    """

    total_bookings: int
    upcoming_bookings: list[UpcomingBookingResponse]


# === 기간 (Period) 스키마 ===

class PeriodStatsResponse(BaseModel):
    """기간별 통계 응답 스키마.

    Per-period statistics response schema.

    Attributes:
        id: 기간 ID (Period id, 1-3)
        name: 기간 표시 이름 (Display label, e.g. "Spring (Weeks 14-23)")
        total_weeks: 기간 내 주 수 (Number of weeks in the period)
        user_bookings: 사용자가 예약한 주 번호, 오름차순 (User's booked weeks, ascending)
        available_slots: 표시용 잔여 자리 수 (Display-only remaining slots, not enforced)
    """

    id: int
    name: str
    total_weeks: int
    user_bookings: list[int]
    available_slots: int


class WeekRosterResponse(BaseModel):
    """기간 상세 화면의 주간 명단 (Week roster row of the period detail view)."""

    week_number: int
    date: str
    bookings: list[WeekBookingResponse]


class PeriodDetailResponse(BaseModel):
    """관리자 기간 상세 응답 스키마.

    Admin period detail: the period's statistics plus a roster for every week.
    """

    id: int
    name: str
    total_weeks: int
    total_bookings: int  # 기간 내 전체 예약 수 (All bookings in the period)
    unique_users: int  # 예약한 고유 사용자 수 (Distinct members with a booking)
    available_slots: int
    weeks: list[WeekRosterResponse]
