"""주간 예약 모델 (Week booking model).

A booking reserves one week number in one year for one user.
The period column is derived from the week number and is never
supplied by callers.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Integer, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from garden_booking.database import Base


class Booking(Base):
    """주간 예약 테이블.

    Week booking table. Many users may share a week; one user may hold
    only one booking per (week_number, year).

    Attributes:
        id: 고유 식별자 (Primary key UUID)
        user_id: 예약한 사용자 ID (Owner user UUID)
        week_number: 주 번호 (Week number, 14-44)
        year: 연도 (Calendar year)
        period: 기간 ID (1=Spring, 2=Summer, 3=Fall, derived from week_number)
        created_at: 생성 일시 (Creation timestamp)

    Constraints:
        uq_booking_user_week_year: 사용자당 주/연도 중복 예약 금지
                                   (One booking per user per week per year)
    """

    __tablename__ = "bookings"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    week_number: Mapped[int] = mapped_column(Integer, nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    period: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    __table_args__ = (
        UniqueConstraint("user_id", "week_number", "year", name="uq_booking_user_week_year"),
    )

    # Relationships
    user = relationship("User", back_populates="bookings")
