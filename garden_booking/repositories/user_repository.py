"""사용자 레포지토리 (사용자 조회 쿼리).

User Repository: lookup queries for member accounts.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from garden_booking.models.user import User
from garden_booking.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """사용자 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the users table.
    """

    def __init__(self) -> None:
        super().__init__(User)

    async def get_by_username(
        self,
        db: AsyncSession,
        username: str,
    ) -> User | None:
        """사용자명으로 사용자를 조회합니다 (정확히 일치).

        Retrieve a user by exact username match. Callers normalize
        the username before calling.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            username: 정규화된 사용자명 (Normalized username)

        Returns:
            User | None: 사용자 또는 None (User or None)
        """
        result = await db.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def list_all(self, db: AsyncSession) -> list[User]:
        """가입 순서대로 전체 사용자를 조회합니다 (All users in registration order)."""
        return list(await self.get_all(db, order_by=User.created_at))


# 싱글턴 인스턴스 (Singleton instance)
user_repository: UserRepository = UserRepository()
