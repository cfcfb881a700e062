# app/domains/loo/__init__.py

"""
FastAPI 애플리케이션의 'loo' 도메인 패키지입니다.

공중화장실 위치 레코드와 편의시설 정보, 기여자 이력을 관리하며
지도 클라이언트용 압축 덤프를 제공합니다.

주요 서브모듈:
- `models.py`: loos, loo_contributors 테이블에 매핑되는 SQLModel 정의.
- `schemas.py`: 요청/응답 Pydantic 모델과 덤프 행 타입.
- `crud.py`: 생성/업서트/조회 비동기 로직과 기여자 이력 추가.
- `routers.py`: FastAPI API 엔드포인트 정의.
- `bitmask.py`: 편의시설 플래그 <-> 비트마스크 변환.
- `helpers.py`: ID 발급/검증, active 필터 파싱 등 작은 헬퍼.
"""

__title__ = "Loo Directory Loo Domain"
__description__ = "Manages public toilet records, contributor trail and the compact dump export."
__version__ = "0.1.0"
__all__ = []
