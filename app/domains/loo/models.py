# app/domains/loo/models.py

"""
'loo' 도메인의 데이터베이스 ORM 모델을 정의하는 모듈입니다.

- loos: 화장실 위치 레코드 (편의시설 플래그, 위치, geohash, 활성 여부)
- loo_contributors: 레코드를 변경한 기여자 이력 (추가 전용)

기여자 이력은 별도 테이블의 행으로 저장합니다. 새 기여자를 추가하는 작업은
단일 INSERT 이므로, 같은 레코드를 동시에 수정해도 이력이 유실되지 않습니다.
"""

from typing import Any, List, Optional
from datetime import datetime, UTC
from sqlmodel import Field, SQLModel, Column
from sqlalchemy import ForeignKey, Index, JSON, String
from sqlalchemy.sql import func
from sqlalchemy.types import TIMESTAMP


# =============================================================================
# 1. loos 테이블 모델
# =============================================================================
class LooBase(SQLModel):
    """
    loos 테이블의 변경 가능한 속성을 정의하는 SQLModel Base 클래스입니다.
    편의시설 플래그는 True/False/None(미확인) 3상태입니다.
    """
    name: Optional[str] = Field(default=None, max_length=200, description="화장실 표시 이름")
    active: bool = Field(default=True, description="활성 여부 (False 이면 덤프/기본 목록에서 제외)")

    accessible: Optional[bool] = Field(default=None, description="장애인 접근 가능")
    all_gender: Optional[bool] = Field(default=None, description="성별 구분 없음")
    attended: Optional[bool] = Field(default=None, description="관리인 상주")
    automatic: Optional[bool] = Field(default=None, description="자동 화장실")
    baby_change: Optional[bool] = Field(default=None, description="기저귀 교환대")
    children: Optional[bool] = Field(default=None, description="어린이용 설비")
    men: Optional[bool] = Field(default=None, description="남성용")
    women: Optional[bool] = Field(default=None, description="여성용")
    urinal_only: Optional[bool] = Field(default=None, description="소변기 전용")
    radar: Optional[bool] = Field(default=None, description="RADAR 키 필요")
    no_payment: Optional[bool] = Field(default=None, description="무료 이용")

    notes: Optional[str] = Field(default=None, description="메모")
    payment_details: Optional[str] = Field(default=None, description="요금 정보")
    removal_reason: Optional[str] = Field(default=None, description="비활성화 사유")
    opening_times: Optional[List[Any]] = Field(
        default=None,
        sa_column=Column(JSON, nullable=True),
        description="요일별(월~일) 운영 시간. [\"HH:mm\", \"HH:mm\"] 또는 [] (휴무)"
    )

    latitude: Optional[float] = Field(default=None, description="위도")
    longitude: Optional[float] = Field(default=None, description="경도")
    # 위치에서 파생되는 값. 쓰기 시점마다 다시 계산합니다.
    geohash: Optional[str] = Field(default=None, max_length=12, description="위치 geohash")


class Loo(LooBase, table=True):
    """
    loos 테이블에 매핑되는 SQLModel ORM 클래스입니다.
    ID는 한 번 배정되면 바뀌지 않으며, 레코드는 물리적으로 삭제하지 않습니다.
    """
    __tablename__ = "loos"
    __table_args__ = (
        Index("ix_loos_active", "active"),
        Index("ix_loos_geohash", "geohash"),
        Index("ix_loos_updated_at", "updated_at"),
    )

    id: str = Field(sa_column=Column(String(24), primary_key=True), description="24자리 고유 ID")

    created_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False),
        description="레코드 생성 일시"
    )
    updated_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False),
        description="레코드 마지막 업데이트 일시"
    )


# =============================================================================
# 2. loo_contributors 테이블 모델
# =============================================================================
class LooContribution(SQLModel, table=True):
    """
    loo 레코드 변경 이력의 한 행입니다.
    id 오름차순이 곧 기여 순서이며, 행은 수정/삭제하지 않습니다.
    """
    __tablename__ = "loo_contributors"
    __table_args__ = (
        Index("ix_loo_contributors_loo_id", "loo_id", "id"),
    )

    id: Optional[int] = Field(default=None, primary_key=True, description="기여 순번")
    loo_id: str = Field(
        sa_column=Column(String(24), ForeignKey("loos.id", onupdate="CASCADE", ondelete="RESTRICT"), nullable=False),
        description="대상 loo ID (FK)"
    )
    contributor: str = Field(max_length=255, description="기여자 식별자")
    created_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False),
        description="기여 일시"
    )
