# app/domains/loo/schemas.py

"""
'loo' 도메인의 Pydantic 스키마를 정의하는 모듈입니다.

- 요청 스키마 (LooMutation, LooCreate): 알 수 없는 필드는 거부하고, 문자열은 앞뒤 공백을 제거합니다.
- 검색 조건 (LooSearchQuery): GET /loos/search 쿼리 인자.
- 응답 스키마 (LooRead 등): 모델의 위도/경도를 location 객체로 묶어서 반환합니다.
- 덤프 행(DumpRow): [id, geohash, bitmask] 3원소 배열.
"""

import re
from typing import Any, List, Literal, Optional, Tuple
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, StrictBool, field_validator, model_validator

from app.domains.loo.helpers import LOO_ID_LENGTH, parse_active_flag, parse_filter_flag
from app.domains.loo.models import Loo

_TIME_PATTERN = re.compile(r"^([0-1][0-9]|2[0-3]):[0-5][0-9]$")

# 덤프 행: (id, geohash, bitmask)
DumpRow = Tuple[str, str, int]


# =============================================================================
# 1. 공통 값 객체
# =============================================================================
class Coordinates(BaseModel):
    """위도/경도 좌표."""
    lat: float = Field(..., ge=-90, le=90, description="위도")
    lng: float = Field(..., ge=-180, le=180, description="경도")


def validate_opening_times(value: Optional[List[Any]]) -> Optional[List[Any]]:
    """
    운영 시간은 월요일~일요일 7개 항목입니다.
    각 항목은 ["HH:mm", "HH:mm"] (개장 < 폐장) 또는 [] (휴무) 이어야 합니다.
    """
    if value is None:
        return None
    if not isinstance(value, list) or len(value) != 7:
        raise ValueError("opening_times must contain exactly 7 entries (Monday to Sunday)")
    for day in value:
        if not isinstance(day, list):
            raise ValueError("each opening_times entry must be a list")
        if len(day) == 0:
            continue
        if len(day) != 2 or not all(isinstance(t, str) and _TIME_PATTERN.match(t) for t in day):
            raise ValueError("Time must be in HH:mm format")
        if not day[0] < day[1]:
            raise ValueError("Opening time must be before closing time")
    return value


# =============================================================================
# 2. 요청 스키마
# =============================================================================
class LooMutation(BaseModel):
    """
    loo 생성/업서트 요청 본문입니다.
    업서트는 전체 교체이므로, 생략된 속성은 None 으로 저장됩니다.
    """
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    name: Optional[str] = Field(None, max_length=200, description="표시 이름")
    active: Optional[StrictBool] = Field(None, description="활성 여부 (생략 시 True)")

    accessible: Optional[StrictBool] = None
    all_gender: Optional[StrictBool] = None
    attended: Optional[StrictBool] = None
    automatic: Optional[StrictBool] = None
    baby_change: Optional[StrictBool] = None
    children: Optional[StrictBool] = None
    men: Optional[StrictBool] = None
    women: Optional[StrictBool] = None
    urinal_only: Optional[StrictBool] = None
    radar: Optional[StrictBool] = None
    no_payment: Optional[StrictBool] = None

    notes: Optional[str] = Field(None, max_length=2000, description="메모")
    payment_details: Optional[str] = Field(None, max_length=2000, description="요금 정보")
    removal_reason: Optional[str] = Field(None, max_length=2000, description="비활성화 사유")
    opening_times: Optional[List[Any]] = Field(None, description="요일별 운영 시간 (7개 항목)")
    location: Optional[Coordinates] = Field(None, description="위치 좌표")

    @field_validator("name", "notes", "payment_details", "removal_reason")
    @classmethod
    def empty_string_to_none(cls, v: Optional[str]) -> Optional[str]:
        # 공백만 있는 문자열은 값 삭제로 취급합니다.
        return v or None

    @field_validator("opening_times")
    @classmethod
    def check_opening_times(cls, v: Optional[List[Any]]) -> Optional[List[Any]]:
        return validate_opening_times(v)


class LooCreate(LooMutation):
    """
    POST /loos 요청 본문입니다. id 를 생략하면 서버가 새로 발급합니다.
    """
    id: Optional[str] = Field(
        None,
        min_length=LOO_ID_LENGTH,
        max_length=LOO_ID_LENGTH,
        description="요청자가 지정하는 24자리 ID (선택)"
    )


LooSearchSort = Literal[
    "updated-desc", "updated-asc",
    "created-desc", "created-asc",
    "name-asc", "name-desc",
]


class LooSearchQuery(BaseModel):
    """
    GET /loos/search 쿼리 인자입니다.
    - active: 생략 시 활성 레코드만 (parse_active_flag 규칙)
    - 편의시설 플래그, has_location: true / false / any (생략 시 필터 없음)
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    search: Optional[str] = Field(None, max_length=200, description="ID 일치 또는 이름/메모 부분 일치")
    active: Optional[bool] = True
    accessible: Optional[bool] = None
    all_gender: Optional[bool] = None
    radar: Optional[bool] = None
    baby_change: Optional[bool] = None
    no_payment: Optional[bool] = None
    has_location: Optional[bool] = None
    sort: LooSearchSort = "updated-desc"
    limit: int = Field(50, ge=1, le=200)
    page: int = Field(1, ge=1)

    @field_validator("search")
    @classmethod
    def empty_search_to_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None

    @field_validator("active", mode="before")
    @classmethod
    def parse_active(cls, v: Any) -> Any:
        return parse_active_flag(v) if v is None or isinstance(v, str) else v

    @field_validator("accessible", "all_gender", "radar", "baby_change", "no_payment", "has_location", mode="before")
    @classmethod
    def parse_flag(cls, v: Any) -> Any:
        return parse_filter_flag(v) if isinstance(v, str) else v


# =============================================================================
# 3. 응답 스키마
# =============================================================================
class LooRead(BaseModel):
    """
    loo 정보를 클라이언트에 응답하기 위한 모델입니다.
    기여자 이력은 포함하지 않으며 GET /loos/{id}/reports 로 따로 조회합니다.
    """
    id: str
    name: Optional[str] = None
    active: bool
    geohash: Optional[str] = None
    location: Optional[Coordinates] = None

    accessible: Optional[bool] = None
    all_gender: Optional[bool] = None
    attended: Optional[bool] = None
    automatic: Optional[bool] = None
    baby_change: Optional[bool] = None
    children: Optional[bool] = None
    men: Optional[bool] = None
    women: Optional[bool] = None
    urinal_only: Optional[bool] = None
    radar: Optional[bool] = None
    no_payment: Optional[bool] = None

    notes: Optional[str] = None
    payment_details: Optional[str] = None
    removal_reason: Optional[str] = None
    opening_times: Optional[List[Any]] = None

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    @model_validator(mode="before")
    @classmethod
    def attach_location(cls, data: Any) -> Any:
        # ORM 객체의 latitude/longitude 를 location 객체로 묶습니다.
        if isinstance(data, Loo):
            values = data.model_dump()
            lat, lng = data.latitude, data.longitude
            values["location"] = {"lat": lat, "lng": lng} if lat is not None and lng is not None else None
            return values
        return data


class LooListResponse(BaseModel):
    count: int
    data: List[LooRead]


class LooDumpResponse(BaseModel):
    count: int
    data: List[DumpRow]


class LooUpdatesResponse(BaseModel):
    """since 이후 변경분. 비활성화된 레코드는 deleted 에 ID 로만 포함됩니다."""
    count: int
    upserted: List[DumpRow]
    deleted: List[str]


class LooSearchResponse(BaseModel):
    count: int
    total: int
    page: int
    page_size: int
    has_more: bool
    data: List[LooRead]


class LooReport(BaseModel):
    """기여자 이력의 한 항목."""
    contributor: str
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class LooReportsResponse(BaseModel):
    """기여자 이력. 기여 순서(오래된 것부터)대로 정렬됩니다."""
    count: int
    data: List[LooReport]
