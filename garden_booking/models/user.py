"""사용자 SQLAlchemy ORM 모델 정의.

User SQLAlchemy ORM model definition.

Tables:
    - users: 사용자 계정 (Member accounts with an admin flag)
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import String, Boolean, DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from garden_booking.database import Base


class User(Base):
    """사용자 모델 (조합원 계정 정보).

    User model: a cooperative member account.
    Users are created once at registration and never edited or deleted
    through the application.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier, never reused)
        username: 로그인 아이디 (Login username, lowercase and trimmed, globally unique)
        password_hash: bcrypt 해시된 비밀번호 (bcrypt-hashed password)
        is_admin: 관리자 여부 (Admin flag, overrides booking ownership checks)
        created_at: 생성 일시 UTC (Creation timestamp)

    Relationships:
        bookings: 사용자의 예약 목록 (The user's bookings, cascade delete)
    """

    __tablename__ = "users"

    # 사용자 고유 식별자 (User unique identifier, UUID v4, auto-generated)
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 로그인 아이디 (정규화된 소문자 값, normalized lowercase value)
    username: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    # 비밀번호 해시 (평문 저장 금지, never store plaintext)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    # 관리자 여부 (Admin flag)
    is_admin: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    # 생성 일시 (Record creation timestamp, UTC)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    # 관계 (Relationships)
    bookings = relationship("Booking", back_populates="user", cascade="all, delete-orphan")
