# app/utils/__init__.py

"""
FastAPI 애플리케이션의 'utils' 패키지입니다.

특정 비즈니스 도메인에 속하지 않는, 프로젝트 전반에서 재사용될 수 있는
범용 유틸리티 함수들을 포함합니다.

주요 서브모듈:
- `geohash.py`: 위도/경도와 geohash 문자열 간의 변환.
"""

# flake8: noqa
from . import geohash

__title__ = "Loo Directory Utilities"
__description__ = "Provides common, reusable utility functions for the application."
__version__ = "0.1.0"
__all__ = ["geohash"]
