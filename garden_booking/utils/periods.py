"""예약 기간 규칙 모듈.

Booking period rules module.
Defines the three fixed seasonal periods that partition the bookable
weeks 14-44, derives a booking's period from its week number, and formats
week numbers as day ranges.

Period table:
    1 = Spring (봄, weeks 14-23)
    2 = Summer (여름, weeks 24-33)
    3 = Fall   (가을, weeks 34-44)

주 번호 체계 (Week numbering):
    ISO-8601이 아닌 단순 체계를 사용합니다. 1주차는 요일과 관계없이 1월 1일부터 시작합니다.
    A simplified, non-ISO numbering: week 1 always starts on January 1,
    whatever weekday that is, and week N covers days (N-1)*7+1 .. (N-1)*7+7.
"""

from dataclasses import dataclass
from datetime import date, timedelta

from garden_booking.utils.exceptions import InvalidWeekError

# 예약 가능한 주 범위 (Bookable week range, inclusive)
MIN_WEEK: int = 14
MAX_WEEK: int = 44

# 주당 표시용 정원 (Display-only capacity per week; never enforced on booking)
SLOTS_PER_WEEK: int = 5


@dataclass(frozen=True)
class Period:
    """고정 예약 기간 정의.

    A fixed seasonal period.

    Attributes:
        id: 기간 ID (1, 2, 3)
        name: 기간 이름 (Spring, Summer, Fall)
        first_week: 시작 주 (First week, inclusive)
        last_week: 종료 주 (Last week, inclusive)
    """

    id: int
    name: str
    first_week: int
    last_week: int

    @property
    def weeks(self) -> range:
        return range(self.first_week, self.last_week + 1)

    @property
    def total_weeks(self) -> int:
        return len(self.weeks)

    @property
    def label(self) -> str:
        """화면 표시용 라벨 (Display label, e.g. "Spring (Weeks 14-23)")."""
        return f"{self.name} (Weeks {self.first_week}-{self.last_week})"


PERIODS: tuple[Period, ...] = (
    Period(id=1, name="Spring", first_week=14, last_week=23),
    Period(id=2, name="Summer", first_week=24, last_week=33),
    Period(id=3, name="Fall", first_week=34, last_week=44),
)

_PERIODS_BY_ID: dict[int, Period] = {p.id: p for p in PERIODS}


def get_period(period_id: int) -> Period | None:
    """ID로 기간 정의를 조회합니다 (Look up a period definition by id)."""
    return _PERIODS_BY_ID.get(period_id)


def derive_period(week_number: int) -> int:
    """주 번호로부터 기간 ID를 계산합니다.

    Derive the period id for a week number.

    Args:
        week_number: 주 번호 (Week number)

    Returns:
        int: 기간 ID (1, 2 or 3)

    Raises:
        InvalidWeekError: 주 번호가 14-44 범위를 벗어날 때 (Week outside 14-44)
    """
    for period in PERIODS:
        if period.first_week <= week_number <= period.last_week:
            return period.id
    raise InvalidWeekError(week_number)


def get_period_name(period_id: int) -> str:
    """기간 ID를 이름으로 변환합니다. 알 수 없는 ID는 "Unknown"."""
    period: Period | None = _PERIODS_BY_ID.get(period_id)
    return period.name if period is not None else "Unknown"


def get_week_date_range(week_number: int, year: int) -> str:
    """주 번호를 "D/M - D/M" 형식의 날짜 범위로 변환합니다.

    Format a week number as a day range, e.g. week 16 of 2025 -> "16/4 - 22/4".

    Args:
        week_number: 주 번호 (Week number, week 1 starts on January 1)
        year: 연도 (Year)

    Returns:
        str: 날짜 범위 문자열 (Date range string)
    """
    week_start: date = date(year, 1, 1) + timedelta(days=(week_number - 1) * 7)
    week_end: date = week_start + timedelta(days=6)
    return f"{week_start.day}/{week_start.month} - {week_end.day}/{week_end.month}"
