"""앱 인증 라우터 (회원가입, 로그인, 로그아웃, 내 정보).

App Auth Router: registration, login, logout, and current-user endpoints.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from garden_booking.api.deps import get_auth_service, get_current_user
from garden_booking.models.user import User
from garden_booking.schemas.auth import AuthResponse, LoginRequest, RegisterRequest
from garden_booking.schemas.booking import UserWithStatsResponse
from garden_booking.schemas.common import MessageResponse
from garden_booking.services.auth_service import AuthService

router: APIRouter = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(
    data: RegisterRequest,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> AuthResponse:
    """회원가입 (Member self-registration; returns a token and the new member)."""
    return await auth_service.register(data)


@router.post("/login", response_model=AuthResponse)
async def login(
    data: LoginRequest,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> AuthResponse:
    """로그인.

    Login endpoint. Usernames are matched case-insensitively.
    """
    return await auth_service.login(data)


@router.post("/logout", response_model=MessageResponse)
async def logout(
    current_user: Annotated[User, Depends(get_current_user)],
) -> MessageResponse:
    """로그아웃.

    Tokens are stateless; the client discards its token. The endpoint
    only confirms the caller was authenticated.
    """
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=UserWithStatsResponse)
async def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> UserWithStatsResponse:
    """현재 사용자 프로필 및 예약 통계 조회 (Current user with booking stats)."""
    return await auth_service.get_me(current_user)
