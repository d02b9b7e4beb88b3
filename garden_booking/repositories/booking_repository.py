"""예약 레포지토리 (예약 조회/집계 쿼리).

Booking Repository: filtered queries and aggregates over the bookings table.
Contains no business rules; validation and uniqueness decisions live in
the BookingStore.
"""

from uuid import UUID

from sqlalchemy import Select, and_, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from garden_booking.models.booking import Booking
from garden_booking.models.user import User
from garden_booking.repositories.base import BaseRepository


class BookingRepository(BaseRepository[Booking]):
    """예약 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the bookings table.
    All list queries return rows in insertion order.
    """

    def __init__(self) -> None:
        super().__init__(Booking)

    async def find(
        self,
        db: AsyncSession,
        *,
        user_id: UUID | None = None,
        week_number: int | None = None,
        period: int | None = None,
        year: int | None = None,
    ) -> list[Booking]:
        """주어진 조건으로 예약 목록을 조회합니다. None인 조건은 무시됩니다.

        Retrieve bookings matching every non-None filter.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user_id: 사용자 ID 필터 (Owner filter)
            week_number: 주 번호 필터 (Week filter)
            period: 기간 ID 필터 (Period filter)
            year: 연도 필터 (Year filter)

        Returns:
            list[Booking]: 예약 목록 (Matching bookings)
        """
        filters: dict[str, UUID | int | None] = {
            "user_id": user_id,
            "week_number": week_number,
            "period": period,
            "year": year,
        }
        return list(await self.get_all(db, filters, order_by=Booking.created_at))

    async def get_by_key(
        self,
        db: AsyncSession,
        user_id: UUID,
        week_number: int,
        year: int,
        exclude_id: UUID | None = None,
    ) -> Booking | None:
        """(사용자, 주, 연도) 키로 예약을 조회합니다.

        Retrieve the booking holding the (user_id, week_number, year) key.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user_id: 사용자 ID (User UUID)
            week_number: 주 번호 (Week number)
            year: 연도 (Year)
            exclude_id: 제외할 예약 ID, 수정 중인 예약 자신 (Booking to ignore, e.g. the one being updated)

        Returns:
            Booking | None: 예약 또는 None (Booking or None)
        """
        query: Select = select(Booking).where(
            and_(
                Booking.user_id == user_id,
                Booking.week_number == week_number,
                Booking.year == year,
            )
        )
        if exclude_id is not None:
            query = query.where(Booking.id != exclude_id)
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def get_week_roster(
        self,
        db: AsyncSession,
        week_number: int,
        year: int,
    ) -> list[tuple[UUID, str]]:
        """주간 예약자 명단을 (사용자 ID, 사용자명) 목록으로 조회합니다.

        Return (user_id, username) pairs for a week. The inner join drops
        any booking whose user no longer resolves.
        """
        result = await db.execute(
            select(User.id, User.username)
            .join(Booking, Booking.user_id == User.id)
            .where(Booking.week_number == week_number, Booking.year == year)
            .order_by(Booking.created_at)
        )
        return [(row.id, row.username) for row in result.all()]

    async def count_by_period(
        self,
        db: AsyncSession,
        year: int,
    ) -> dict[int, int]:
        """연도별 기간당 예약 수를 집계합니다 (Booking count per period for a year)."""
        result = await db.execute(
            select(Booking.period, func.count(Booking.id))
            .where(Booking.year == year)
            .group_by(Booking.period)
        )
        return {period: count for period, count in result.all()}


# 싱글턴 인스턴스 (Singleton instance)
booking_repository: BookingRepository = BookingRepository()
