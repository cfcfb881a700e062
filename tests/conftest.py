# tests/conftest.py

import os
from typing import AsyncGenerator, Callable, Optional
from contextlib import asynccontextmanager

# --- 테스트 환경 변수 ---
# app 모듈은 임포트 시점에 Settings() 와 엔진을 만들기 때문에, 임포트 전에 설정해야 합니다.
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-pytest-only")

import pytest_asyncio  # noqa: E402
from httpx import AsyncClient, ASGITransport  # noqa: E402

from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import SQLModel  # noqa: E402
from sqlmodel.ext.asyncio.session import AsyncSession  # noqa: E402

# app.main을 임포트하여 FastAPI 앱 인스턴스에 접근합니다.
from app.main import app as main_app  # noqa: E402
from app.core import dependencies as deps  # noqa: E402
from app.core.database import get_session  # noqa: E402
from app.core.security import create_access_token  # noqa: E402

# --- 모든 모델 임포트 ---
#  SQLModel.metadata.create_all()이 모든 테이블을 인식하려면 모델 클래스가 임포트되어 있어야 합니다.
from app.domains.models import *  # noqa: F401, F403, E402


# --- 테스트용 데이터베이스 설정 ---
# 운영 DB와 분리된 인메모리 SQLite 를 사용합니다.
# StaticPool 은 모든 세션이 같은 연결(같은 인메모리 DB)을 공유하게 합니다.
TEST_DATABASE_URL = "sqlite+aiosqlite://"


# --- 데이터베이스 픽스처 ---
@pytest_asyncio.fixture(scope="function")
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    """
    테스트 함수마다 새 인메모리 데이터베이스를 만들고 모든 테이블을 생성합니다.
    """
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(test_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """
    테스트용 비동기 데이터베이스 세션을 제공합니다.
    API 요청과 테스트 코드가 같은 세션을 사용하므로, 요청 후 DB 상태를 바로 확인할 수 있습니다.
    """
    TestingSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    async with TestingSessionLocal() as session:
        yield session


# --- 토큰 픽스처 ---
@pytest_asyncio.fixture(scope="function")
def token_factory() -> Callable[..., str]:
    """
    지정한 클레임으로 서명된 Bearer 토큰을 만드는 함수를 반환합니다.
    """
    def _create_token(nickname: Optional[str] = "tester", sub: str = "user-0001", **claims) -> str:
        data = {"sub": sub, **claims}
        if nickname is not None:
            data["nickname"] = nickname
        return create_access_token(data)
    return _create_token


# --- 클라이언트 픽스처 ---
# 역할: 테스트용 DB 세션을 주입한 AsyncClient 를 만듭니다.
# 인증은 의존성 오버라이드 없이 실제 토큰 검증(get_current_contributor)을 그대로 거칩니다.
@pytest_asyncio.fixture(scope="function")
def client_factory(db_session: AsyncSession):
    """
    (선택적으로) 특정 기여자 토큰을 가진 AsyncClient 를 만드는 비동기 컨텍스트 매니저를 반환합니다.
    """
    @asynccontextmanager
    async def _create_client_context(token: Optional[str] = None) -> AsyncGenerator[AsyncClient, None]:
        async def override_get_session():
            yield db_session

        original_overrides = main_app.dependency_overrides.copy()
        try:
            main_app.dependency_overrides.update({
                get_session: override_get_session,
                deps.get_db_session: override_get_session,
            })

            transport = ASGITransport(app=main_app)
            async with AsyncClient(transport=transport, base_url="http://test") as client:
                if token:
                    client.headers["Authorization"] = f"Bearer {token}"
                yield client
        finally:
            # 테스트가 끝난 후 원래 의존성 상태로 되돌립니다.
            main_app.dependency_overrides.clear()
            main_app.dependency_overrides.update(original_overrides)

    return _create_client_context


@pytest_asyncio.fixture(scope="function")
async def client(client_factory) -> AsyncGenerator[AsyncClient, None]:
    """인증되지 않은 사용자를 위한 AsyncClient 를 반환합니다."""
    async with client_factory() as async_client:
        yield async_client


@pytest_asyncio.fixture(scope="function")
async def authorized_client(client_factory, token_factory) -> AsyncGenerator[AsyncClient, None]:
    """기여자 'tester' 로 인증된 AsyncClient 를 반환합니다."""
    async with client_factory(token_factory("tester")) as async_client:
        yield async_client
