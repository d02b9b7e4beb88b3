"""데이터베이스 엔진 및 세션 설정 모듈.

Database engine and session configuration module.
Builds the async SQLAlchemy engine and session factory from a URL and
declares the ORM base class. Nothing here is created at import time: the
application lifespan (or the seed script) owns the engine it builds.
"""

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool


class Base(DeclarativeBase):
    """SQLAlchemy 선언적 베이스 클래스.

    Declarative base class for all ORM models.
    All models inherit from this class to register with the metadata.
    """

    pass


def create_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """URL에 맞는 비동기 엔진을 생성합니다.

    Create an async engine suited to the given database URL.

    SQLite 인메모리 DB는 연결마다 별도 DB가 생기므로 StaticPool로 단일 연결을 공유합니다.
    An in-memory SQLite database lives per connection, so a StaticPool shares
    one connection across sessions. PostgreSQL keeps a regular pool.

    Args:
        database_url: SQLAlchemy 비동기 URL (Async SQLAlchemy URL)
        echo: SQL 로그 출력 여부 (Echo SQL statements)

    Returns:
        AsyncEngine: 비동기 엔진 (Async engine)
    """
    if database_url.startswith("sqlite"):
        return create_async_engine(
            database_url,
            echo=echo,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )

    # pool_pre_ping=True: 커넥션 풀에서 꺼낸 연결의 유효성을 사전 확인 (Validates connections before use)
    return create_async_engine(
        database_url,
        echo=echo,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """비동기 세션 팩토리를 생성합니다.

    Create an async session factory bound to the engine.
    expire_on_commit=False: 커밋 후에도 객체 속성 접근 가능
    (Allows attribute access after commit without refresh)
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def init_models(engine: AsyncEngine) -> None:
    """ORM 메타데이터로 테이블을 생성합니다 (Create all tables from ORM metadata)."""
    # 모든 모델을 메타데이터에 등록 (Register all models with the metadata)
    import garden_booking.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
