# app/__init__.py

"""
Loo Directory FastAPI 애플리케이션의 메인 패키지입니다.

공중화장실(loo) 위치 정보를 저장하고, 등록/수정 API와
지도 클라이언트용 압축 덤프(dump) API를 제공합니다.

- core 서브패키지: 설정, 데이터베이스 연결, 인증, 공통 CRUD, 캐시 헤더.
- domains 서브패키지: 비즈니스 도메인 (현재는 'loo' 도메인).
- utils 서브패키지: 도메인에 속하지 않는 범용 유틸리티 (geohash 등).
"""

APP_NAME = "Loo Directory API"
APP_VERSION = "0.1.0"
API_PREFIX = "/api"  # API 라우트의 공통 접두사 (main.py에서 적용)

# PEP 440 버전 정보 (pyproject.toml 과 동일하게 유지)
__version__ = APP_VERSION
__title__ = APP_NAME
__description__ = "Public toilet directory API backend with compact dump export."
__license__ = "MIT"
__all__ = []
