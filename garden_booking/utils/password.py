"""회원 자격 증명 유틸리티 (사용자명 정규화, bcrypt 비밀번호).

Member credential helpers. Usernames are compared in canonical form
(trimmed, lowercase), so "  Alice" and "alice" are the same member.
Passwords are stored only as bcrypt hashes.
"""

import bcrypt


def normalize_username(username: str) -> str:
    """사용자명을 정규형으로 바꿉니다 (Canonical form: trimmed and lowercased)."""
    return username.strip().lower()


def hash_password(password: str) -> str:
    """회원 비밀번호를 bcrypt로 해시합니다 (Salted bcrypt hash of a member password)."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """로그인 비밀번호가 저장된 해시와 일치하는지 확인합니다.

    Args:
        plain_password: 로그인 요청의 비밀번호 (Password from the login request)
        hashed_password: 회원 레코드의 해시 (Stored hash from the member record)

    Returns:
        bool: 일치하면 True
    """
    return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
