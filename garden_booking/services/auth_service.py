"""인증 서비스 (회원가입, 로그인, 토큰 발급 비즈니스 로직).

Auth Service: business logic for registration, login, and token issuing.
Usernames are normalized (trimmed, lowercased) here before every store
lookup or insert, so the store only ever sees canonical names.
"""

from garden_booking.models.user import User
from garden_booking.repositories.booking_store import BookingStore
from garden_booking.schemas.auth import AuthResponse, LoginRequest, RegisterRequest
from garden_booking.schemas.booking import UserWithStatsResponse
from garden_booking.services.booking_service import BookingService
from garden_booking.utils.exceptions import DuplicateError, NotFoundError, UnauthorizedError
from garden_booking.utils.jwt import create_access_token
from garden_booking.utils.password import hash_password, normalize_username, verify_password


class AuthService:
    """인증 관련 비즈니스 로직을 처리하는 서비스.

    Service handling authentication business logic.
    """

    def __init__(self, store: BookingStore, booking_service: BookingService) -> None:
        self.store: BookingStore = store
        self.booking_service: BookingService = booking_service

    async def _build_auth_response(self, user: User) -> AuthResponse:
        """토큰과 통계 포함 사용자 정보를 묶어 반환합니다.

        Issue an access token and attach the user's dashboard summary.

        Raises:
            NotFoundError: 발급 직후 사용자가 사라진 경우 (User vanished before the summary was built)
        """
        with_stats: UserWithStatsResponse | None = await self.booking_service.get_user_with_stats(user.id)
        if with_stats is None:
            raise NotFoundError("User not found")

        return AuthResponse(
            access_token=create_access_token(user.id, user.is_admin),
            user=with_stats,
        )

    async def register(self, data: RegisterRequest) -> AuthResponse:
        """회원가입을 처리합니다.

        Register a new member. Self-registered members are never admins.

        Args:
            data: 회원가입 요청 데이터 (Registration request data)

        Returns:
            AuthResponse: 토큰 및 사용자 정보 (Token and user summary)

        Raises:
            DuplicateError: 같은 사용자명이 이미 존재할 때 (Username already taken)
        """
        username: str = normalize_username(data.username)

        # 사용자명 중복 확인 (Check username uniqueness)
        if await self.store.get_user_by_username(username) is not None:
            raise DuplicateError("Username already exists")

        user: User = await self.store.create_user(username, hash_password(data.password))
        return await self._build_auth_response(user)

    async def login(self, data: LoginRequest) -> AuthResponse:
        """로그인을 처리합니다.

        Verify credentials and issue a token.

        Raises:
            UnauthorizedError: 잘못된 인증 정보일 때 (Invalid credentials)
        """
        user: User | None = await self.store.get_user_by_username(normalize_username(data.username))
        if user is None or not verify_password(data.password, user.password_hash):
            raise UnauthorizedError("Invalid credentials")

        return await self._build_auth_response(user)

    async def get_me(self, user: User) -> UserWithStatsResponse:
        """현재 로그인한 사용자의 통계 포함 프로필 (Current user's profile with stats)."""
        with_stats: UserWithStatsResponse | None = await self.booking_service.get_user_with_stats(user.id)
        if with_stats is None:
            raise NotFoundError("User not found")
        return with_stats
