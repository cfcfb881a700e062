# app/core/__init__.py

"""
FastAPI 애플리케이션의 핵심 구성 요소 패키지입니다.

- `config.py`: 애플리케이션 설정 및 환경 변수 관리 (Pydantic Settings).
- `database.py`: 데이터베이스 엔진, 세션 관리 (SQLModel 및 AsyncSQLAlchemy).
- `security.py`: JWT 검증 및 기여자(contributor) 식별.
- `dependencies.py`: 라우터에서 사용하는 공통 의존성 함수들.
- `crud_base.py`: 공통 비동기 CRUD 기본 클래스.
- `cache.py`: 공개 캐시(Cache-Control) 헤더 의존성.
"""

__title__ = "Loo Directory Core"
__description__ = "Core components for the Loo Directory FastAPI application."
__version__ = "0.1.0"
__all__ = []
