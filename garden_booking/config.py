"""애플리케이션 환경 설정 모듈.

Application configuration module using pydantic-settings.
All settings can be overridden via environment variables or a .env file.
"""

from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings

# .env 파일 절대 경로 (CWD와 무관하게 항상 프로젝트 루트의 .env를 참조)
# Absolute path to .env file, resolved from the project root regardless of CWD
_ENV_FILE: Path = Path(__file__).resolve().parent.parent / ".env"


class Settings(BaseSettings):
    """애플리케이션 전역 설정 (환경 변수 기반 구성).

    Global application settings loaded from environment variables.
    Uses pydantic-settings for automatic env var parsing and .env file support.

    Attributes:
        DATABASE_URL: 비동기 DB 연결 문자열 (Async database URL, in-memory SQLite by default)
        JWT_SECRET_KEY: JWT 서명 비밀키 (JWT signing secret key)
        JWT_ALGORITHM: JWT 서명 알고리즘 (JWT signing algorithm)
        JWT_ACCESS_TOKEN_EXPIRE_MINUTES: 액세스 토큰 만료 시간(분) (Access token TTL in minutes)
        CORS_ORIGINS: 허용된 CORS 출처 목록 (Allowed CORS origin URLs)
        APP_NAME: 애플리케이션 표시 이름 (Application display name)
        DEBUG: 디버그 모드 플래그 (Debug mode flag, enables SQL echo)
        BOOKING_YEAR: 예약 기준 연도 고정값 (Pins the store's current year; None uses today)
        SEED_DEV_ADMIN: 개발용 관리자 자동 생성 여부 (Create the dev admin on startup)
    """

    # 데이터베이스 (기본값은 인메모리 SQLite, 운영 시 postgresql+asyncpg URL 사용)
    # Database URL: in-memory SQLite by default, postgresql+asyncpg in production
    DATABASE_URL: str = "sqlite+aiosqlite:///:memory:"

    # JWT 인증 설정 (JSON Web Token authentication settings)
    JWT_SECRET_KEY: str = "change-this-secret-key-in-production"  # 운영 환경에서 반드시 변경 (MUST change in production)
    JWT_ALGORITHM: str = "HS256"  # HMAC-SHA256 대칭 서명 (Symmetric signing algorithm)
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24  # 액세스 토큰 유효 기간: 24시간 (Access token TTL)

    # CORS 설정 (Frontend dev server origins)
    CORS_ORIGINS: List[str] = ["http://localhost:5173", "http://localhost:3000"]

    # 앱 메타데이터 (Application metadata)
    APP_NAME: str = "Garden Booking API"
    DEBUG: bool = False  # True이면 SQLAlchemy SQL 로그 출력 (Enables SQL echo when True)

    # 예약 기준 연도 (None이면 서버 시작 시점의 연도 사용)
    # Booking year override (None means the year at startup)
    BOOKING_YEAR: int | None = None

    # 개발용 관리자 계정 (Development admin account, never enable in production)
    SEED_DEV_ADMIN: bool = False
    DEV_ADMIN_USERNAME: str = "admin"
    DEV_ADMIN_PASSWORD: str = "admin"

    # Axiom 로깅 설정 (Axiom observability platform settings)
    AXIOM_API_TOKEN: str = ""  # Axiom API 토큰 (API token from Axiom dashboard)
    AXIOM_DATASET: str = ""  # Axiom 데이터셋 이름 (Dataset name for API logs)

    model_config = {"env_file": _ENV_FILE, "env_file_encoding": "utf-8"}


# 전역 설정 싱글턴 인스턴스 (Global settings singleton instance)
settings: Settings = Settings()
