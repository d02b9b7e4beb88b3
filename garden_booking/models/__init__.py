"""SQLAlchemy ORM 모델 패키지 (모든 도메인 모델의 중앙 임포트 지점).

SQLAlchemy ORM models package: central import point for all domain models.
Importing from this package ensures all models are registered with the
SQLAlchemy metadata, which is required for table creation and
relationship resolution.

Modules:
    user: 사용자 (Member accounts)
    booking: 주간 예약 (Week bookings)
"""

from garden_booking.models.user import User
from garden_booking.models.booking import Booking

__all__ = [
    "User",
    "Booking",
]
