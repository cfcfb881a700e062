# tests/__init__.py

"""
Loo Directory FastAPI 애플리케이션의 테스트 스위트 패키지입니다.

테스트는 `pytest` 와 `pytest-asyncio` 를 기반으로 하며, 운영 DB(PostgreSQL) 대신
테스트마다 새로 만드는 인메모리 SQLite(aiosqlite) 데이터베이스를 사용합니다.

- `domains/`: 도메인별 테스트 모듈 (현재는 'loo' 도메인).
- `conftest.py`: DB 세션, 익명/인증 클라이언트, 토큰 발급 픽스처.
"""

__title__ = "Loo Directory API Tests"
__description__ = "Test suite for the Loo Directory FastAPI application."
__version__ = "0.1.0"
__all__ = []
