# tests/domains/__init__.py

"""
도메인별 테스트 모듈 패키지입니다.

- `test_loo_n.py`: 생성/업서트/조회 API와 기여자 이력.
- `test_loo_dump_n.py`: 압축 덤프와 변경분(updates) API.
- `test_loo_bitmask_n.py`: 비트마스크, active 필터 파싱, geohash 유틸리티.
- `test_auth_n.py`: Bearer 토큰 검증과 기여자 식별자 추출.
"""

__title__ = "Loo Directory Domain Tests"
__description__ = "Categorized tests for the loo domain."
__version__ = "0.1.0"
__all__ = []
