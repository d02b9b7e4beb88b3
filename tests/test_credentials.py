"""회원 자격 증명 유틸리티 테스트 (사용자명 정규화, 비밀번호, 액세스 토큰).

Credential helper tests: username normalization, password hashing, access tokens.
"""

import uuid
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from garden_booking.config import settings
from garden_booking.utils.jwt import create_access_token, decode_access_token
from garden_booking.utils.password import hash_password, normalize_username, verify_password


class TestPassword:
    """사용자명/비밀번호 테스트."""

    def test_normalize_username(self):
        assert normalize_username("  Alice ") == "alice"

    def test_hash_and_verify(self):
        hashed = hash_password("garden123")
        assert hashed != "garden123"
        assert verify_password("garden123", hashed)
        assert not verify_password("garden124", hashed)


class TestAccessToken:
    """액세스 토큰 테스트."""

    def test_roundtrip_returns_member_id(self):
        user_id = uuid.uuid4()
        token = create_access_token(user_id, is_admin=True)
        assert decode_access_token(token) == user_id
        payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
        assert payload["adm"] is True
        assert payload["type"] == "access"

    def test_wrong_type_rejected(self):
        token = jwt.encode(
            {"sub": str(uuid.uuid4()), "type": "refresh"},
            settings.JWT_SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
        )
        with pytest.raises(jwt.InvalidTokenError):
            decode_access_token(token)

    def test_malformed_subject_rejected(self):
        token = jwt.encode(
            {"sub": "not-a-uuid", "type": "access"},
            settings.JWT_SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
        )
        with pytest.raises(jwt.InvalidTokenError):
            decode_access_token(token)

    def test_expired_rejected(self):
        token = jwt.encode(
            {
                "sub": str(uuid.uuid4()),
                "type": "access",
                "exp": datetime.now(timezone.utc) - timedelta(minutes=1),
            },
            settings.JWT_SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
        )
        with pytest.raises(jwt.ExpiredSignatureError):
            decode_access_token(token)
