"""인증 관련 Pydantic 요청/응답 스키마 정의.

Authentication-related Pydantic request/response schema definitions.
Covers login, registration, and token issuance.
"""

from pydantic import BaseModel, Field

from garden_booking.schemas.booking import UserWithStatsResponse


class LoginRequest(BaseModel):
    """로그인 요청 스키마.

    Login request schema.

    Attributes:
        username: 사용자 로그인 아이디 (Login identifier, normalized before lookup)
        password: 비밀번호 (Plain text password, verified against bcrypt hash)
    """

    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class RegisterRequest(BaseModel):
    """회원가입 요청 스키마.

    Member self-registration request schema. New members are never admins.

    Attributes:
        username: 사용자 아이디 (Desired login username, 3-50 chars)
        password: 비밀번호 (Plain text, 6-100 chars, bcrypt-hashed on server)
    """

    username: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=6, max_length=100)


class AuthResponse(BaseModel):
    """로그인/회원가입 응답 스키마.

    Returned after successful login or registration: a bearer token and
    the member's dashboard summary.

    Attributes:
        access_token: JWT 액세스 토큰 (Access token)
        token_type: 토큰 유형 (Always "bearer" for Authorization header)
        user: 통계가 포함된 사용자 정보 (User with booking statistics)
    """

    access_token: str
    token_type: str = "bearer"
    user: UserWithStatsResponse
