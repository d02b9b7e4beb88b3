"""회원 액세스 토큰 발급 및 검증 모듈.

Member access tokens: issued on register/login, checked on every
authenticated booking request.

Payload:
    {
        "sub": "user_uuid",   # 회원 ID (Member id)
        "adm": false,         # 발급 시점의 관리자 여부, 참고용 (Admin flag at issue time, informational)
        "exp": 1234567890,    # 만료 시각 (Expiry, JWT_ACCESS_TOKEN_EXPIRE_MINUTES after issue)
        "type": "access"
    }

관리자 권한은 항상 저장된 회원 레코드로 판단합니다 ("adm"은 신뢰하지 않음).
"""

from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import UUID

import jwt

from garden_booking.config import settings

TOKEN_TYPE: str = "access"


def create_access_token(user_id: UUID, is_admin: bool = False) -> str:
    """회원용 액세스 토큰을 발급합니다 (Issue an access token for a member)."""
    payload: dict[str, Any] = {
        "sub": str(user_id),
        "adm": is_admin,
        "exp": datetime.now(timezone.utc) + timedelta(minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES),
        "type": TOKEN_TYPE,
    }
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> UUID:
    """액세스 토큰을 검증하고 회원 ID를 꺼냅니다.

    Verify signature, expiry and token type, and return the member id.

    Raises:
        jwt.ExpiredSignatureError: 만료된 토큰 (Expired token)
        jwt.InvalidTokenError: 서명/유형/sub가 잘못된 토큰 (Bad signature, type, or subject)
    """
    payload: dict[str, Any] = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    if payload.get("type") != TOKEN_TYPE:
        raise jwt.InvalidTokenError("Invalid token type")
    try:
        return UUID(payload["sub"])
    except (KeyError, TypeError, ValueError) as exc:
        raise jwt.InvalidTokenError("Invalid token subject") from exc
