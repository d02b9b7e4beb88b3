"""예약 저장소 (사용자 및 예약 레코드의 단일 권한 주체).

Booking Store: the sole authority over user and booking records.

The store owns a session factory and runs every operation in its own
session under one asyncio.Lock, so each operation is atomic and the
uniqueness check-then-insert sequence can never interleave with another
caller. The database unique constraint uq_booking_user_week_year backs
the check for writers outside this process.

Invariants enforced here:
    - week_number는 14-44 범위 (InvalidWeekError otherwise)
    - period는 항상 week_number에서 계산 (period is always derived)
    - (user_id, week_number, year) 중복 금지 (DuplicateBookingError otherwise)
    - 예약은 존재하는 사용자만 참조 (bookings only reference existing users)

The store is constructed explicitly by the application lifespan and
handed to the service and API layers; there is no module-level instance.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import date
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from garden_booking.models.booking import Booking
from garden_booking.models.user import User
from garden_booking.repositories.booking_repository import booking_repository
from garden_booking.repositories.user_repository import user_repository
from garden_booking.schemas.booking import BookingUpdate, WeekBookingResponse
from garden_booking.utils.exceptions import DuplicateBookingError, DuplicateError, NotFoundError
from garden_booking.utils.periods import derive_period


class BookingStore:
    """사용자와 예약을 관리하는 저장소.

    Store for users and bookings.

    Attributes:
        current_year: 연도 미지정 시 사용하는 기준 연도 (Year used when a call omits it)
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        current_year: int | None = None,
    ) -> None:
        """저장소를 초기화합니다.

        Args:
            session_factory: 비동기 세션 팩토리 (Async session factory)
            current_year: 기준 연도, None이면 오늘 기준 (Current year; None uses today's year)
        """
        self._session_factory: async_sessionmaker[AsyncSession] = session_factory
        self.current_year: int = current_year or date.today().year
        self._lock: asyncio.Lock = asyncio.Lock()

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[AsyncSession]:
        """잠금을 잡은 상태로 세션을 엽니다 (Open a session while holding the store lock)."""
        async with self._lock:
            async with self._session_factory() as db:
                yield db

    def _resolve_year(self, year: int | None) -> int:
        return self.current_year if year is None else year

    # === 사용자 (Users) ===

    async def create_user(
        self,
        username: str,
        password_hash: str,
        is_admin: bool = False,
    ) -> User:
        """새 사용자를 생성합니다.

        Create a user. Username uniqueness is checked by the caller
        beforehand; a unique violation from the database is still
        reported as DuplicateError.

        Args:
            username: 정규화된 사용자명 (Normalized username)
            password_hash: bcrypt 해시 (bcrypt hash, never plaintext)
            is_admin: 관리자 여부, 개발용 관리자 시드에만 사용 (Only used to seed the dev admin)

        Returns:
            User: 생성된 사용자 (Created user)
        """
        async with self._session() as db:
            try:
                user: User = await user_repository.create(
                    db,
                    {"username": username, "password_hash": password_hash, "is_admin": is_admin},
                )
                await db.commit()
            except IntegrityError as exc:
                await db.rollback()
                raise DuplicateError("Username already exists") from exc
            return user

    async def get_user(self, user_id: UUID) -> User | None:
        async with self._session() as db:
            return await user_repository.get_by_id(db, user_id)

    async def get_user_by_username(self, username: str) -> User | None:
        """정규화된 사용자명으로 정확히 일치하는 사용자를 조회합니다 (Exact match)."""
        async with self._session() as db:
            return await user_repository.get_by_username(db, username)

    async def get_all_users(self) -> list[User]:
        async with self._session() as db:
            return await user_repository.list_all(db)

    # === 예약 변경 (Booking mutations) ===

    async def create_booking(
        self,
        user_id: UUID,
        week_number: int,
        year: int | None = None,
    ) -> Booking:
        """새 예약을 생성합니다.

        Create a booking.

        처리 순서 (Steps):
            1. 연도 미지정 시 기준 연도 사용 (Resolve year)
            2. 주 번호 검증 및 기간 계산 (Validate week, derive period)
            3. 사용자 존재 확인 (Check the user exists)
            4. (사용자, 주, 연도) 중복 확인 (Check uniqueness)
            5. 저장 (Persist)

        Raises:
            InvalidWeekError: 주 번호가 14-44 범위 밖일 때 (Week outside 14-44)
            NotFoundError: 사용자가 존재하지 않을 때 (Unknown user)
            DuplicateBookingError: 같은 주/연도를 이미 예약했을 때 (Duplicate key)
        """
        resolved_year: int = self._resolve_year(year)
        period: int = derive_period(week_number)

        async with self._session() as db:
            if await user_repository.get_by_id(db, user_id) is None:
                raise NotFoundError("User not found")

            existing: Booking | None = await booking_repository.get_by_key(
                db, user_id, week_number, resolved_year
            )
            if existing is not None:
                raise DuplicateBookingError(user_id, week_number, resolved_year)

            try:
                booking: Booking = await booking_repository.create(
                    db,
                    {
                        "user_id": user_id,
                        "week_number": week_number,
                        "year": resolved_year,
                        "period": period,
                    },
                )
                await db.commit()
            except IntegrityError as exc:
                await db.rollback()
                raise DuplicateBookingError(user_id, week_number, resolved_year) from exc
            return booking

    async def update_booking(
        self,
        booking_id: UUID,
        changes: BookingUpdate,
    ) -> Booking | None:
        """예약의 주 번호 및/또는 연도를 변경합니다.

        Update a booking's week and/or year. Unset fields keep their
        previous values and the period is re-derived from the resulting week.
        Uniqueness is checked against every other booking of the same user.

        Args:
            booking_id: 예약 ID (Booking UUID)
            changes: 변경 명령 (Update command)

        Returns:
            Booking | None: 수정된 예약, 존재하지 않으면 None (Updated booking, or None if unknown)

        Raises:
            InvalidWeekError: 새 주 번호가 범위 밖일 때 (New week outside 14-44)
            DuplicateBookingError: 결과 키가 다른 예약과 겹칠 때 (Resulting key already taken)
        """
        async with self._session() as db:
            booking: Booking | None = await booking_repository.get_by_id(db, booking_id)
            if booking is None:
                return None

            new_week: int = changes.week_number if changes.week_number is not None else booking.week_number
            new_year: int = changes.year if changes.year is not None else booking.year
            new_period: int = derive_period(new_week)
            owner_id: UUID = booking.user_id

            if changes.week_number is not None or changes.year is not None:
                duplicate: Booking | None = await booking_repository.get_by_key(
                    db, owner_id, new_week, new_year, exclude_id=booking.id
                )
                if duplicate is not None:
                    raise DuplicateBookingError(owner_id, new_week, new_year)

            booking.week_number = new_week
            booking.year = new_year
            booking.period = new_period
            try:
                await db.flush()
                await db.commit()
            except IntegrityError as exc:
                await db.rollback()
                raise DuplicateBookingError(owner_id, new_week, new_year) from exc
            return booking

    async def delete_booking(self, booking_id: UUID) -> bool:
        """예약을 삭제합니다. 삭제되었으면 True (True if a record was removed)."""
        async with self._session() as db:
            deleted: bool = await booking_repository.delete(db, booking_id)
            await db.commit()
            return deleted

    async def delete_booking_by_user_and_week(
        self,
        user_id: UUID,
        week_number: int,
        year: int | None = None,
    ) -> bool:
        """사용자/주/연도로 예약을 찾아 삭제합니다.

        Look up the booking for (user_id, week_number, year) and delete it.

        Returns:
            bool: 삭제되었으면 True (True if a record was removed)
        """
        async with self._session() as db:
            booking: Booking | None = await booking_repository.get_by_key(
                db, user_id, week_number, self._resolve_year(year)
            )
            if booking is None:
                return False
            await db.delete(booking)
            await db.commit()
            return True

    # === 예약 조회 (Booking queries) ===

    async def get_booking(self, booking_id: UUID) -> Booking | None:
        async with self._session() as db:
            return await booking_repository.get_by_id(db, booking_id)

    async def get_bookings_by_user(self, user_id: UUID, year: int | None = None) -> list[Booking]:
        async with self._session() as db:
            return await booking_repository.find(db, user_id=user_id, year=self._resolve_year(year))

    async def get_bookings_by_week(self, week_number: int, year: int | None = None) -> list[Booking]:
        async with self._session() as db:
            return await booking_repository.find(db, week_number=week_number, year=self._resolve_year(year))

    async def get_bookings_by_period(self, period: int, year: int | None = None) -> list[Booking]:
        async with self._session() as db:
            return await booking_repository.find(db, period=period, year=self._resolve_year(year))

    async def get_all_bookings(self, year: int | None = None) -> list[Booking]:
        async with self._session() as db:
            return await booking_repository.find(db, year=self._resolve_year(year))

    async def get_week_bookings(
        self,
        week_number: int,
        year: int | None = None,
    ) -> list[WeekBookingResponse]:
        """주간 예약자 명단을 조회합니다.

        Return the roster of a week as {user_id, username} entries,
        skipping any booking whose user no longer resolves.
        """
        async with self._session() as db:
            roster: list[tuple[UUID, str]] = await booking_repository.get_week_roster(
                db, week_number, self._resolve_year(year)
            )
        return [
            WeekBookingResponse(user_id=str(user_id), username=username)
            for user_id, username in roster
        ]

    async def count_bookings_by_period(self, year: int | None = None) -> dict[int, int]:
        """기간별 전체 예약 수 (All-user booking count per period)."""
        async with self._session() as db:
            return await booking_repository.count_by_period(db, self._resolve_year(year))
