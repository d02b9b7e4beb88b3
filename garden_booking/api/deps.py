"""FastAPI 의존성 주입 모듈 (저장소/서비스 주입, 인증 및 권한 검사).

FastAPI dependency injection module: store/service injection,
authentication and authorization.

The application lifespan builds the BookingStore and the services and
stores them on app.state; the dependencies below hand them to routes.
Tests replace them through app.dependency_overrides.

Authentication Flow:
    1. 클라이언트가 Authorization: Bearer <token> 헤더를 전송
       (Client sends Authorization: Bearer <token> header)
    2. decode_access_token()이 서명, 만료, 유형을 검증하고 회원 ID를 반환
       (decode_access_token verifies the token and returns the member id)
    3. 회원 ID로 저장소에서 사용자를 조회
       (User is fetched from the store by that id)
"""

from typing import Annotated
from uuid import UUID

import jwt
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from garden_booking.models.user import User
from garden_booking.repositories.booking_store import BookingStore
from garden_booking.services.auth_service import AuthService
from garden_booking.services.booking_service import BookingService
from garden_booking.utils.jwt import decode_access_token

# HTTP Bearer 토큰 추출기 (Extracts JWT token from Authorization: Bearer <token> header)
security: HTTPBearer = HTTPBearer()


def get_store(request: Request) -> BookingStore:
    """앱 상태에서 예약 저장소를 가져옵니다 (BookingStore built by the lifespan)."""
    return request.app.state.store


def get_booking_service(request: Request) -> BookingService:
    return request.app.state.booking_service


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)],
    store: Annotated[BookingStore, Depends(get_store)],
) -> User:
    """JWT 토큰에서 현재 인증된 사용자를 추출합니다.

    Decode JWT from the Authorization header and return the authenticated user.
    The admin flag always comes from the stored user, never from the token.

    Args:
        credentials: HTTP Bearer 토큰 자격 증명 (Bearer token credentials from header)
        store: 예약 저장소 (Booking store)

    Returns:
        User: 인증된 사용자 ORM 인스턴스 (Authenticated user ORM instance)

    Raises:
        HTTPException(401): 토큰이 유효하지 않거나 만료됨 (Invalid or expired token)
        HTTPException(401): 사용자를 찾을 수 없음 (User not found)
    """
    try:
        user_id: UUID = decode_access_token(credentials.credentials)
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired token")

    user: User | None = await store.get_user(user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")

    return user


async def require_admin(
    current_user: Annotated[User, Depends(get_current_user)],
) -> User:
    """관리자 권한 검사 (Admin-only dependency, 403 for members)."""
    if not current_user.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return current_user
