# app/domains/loo/routers.py

"""
'loo' 도메인의 API 엔드포인트를 정의하는 모듈입니다.

- 조회: 덤프(dump), 변경분(updates), 검색(search), geohash 접두사, 단일/다중 ID 조회, 기여자 이력(reports)
- 변경: 생성(POST), 업서트(PUT). 인증 필요

변경 요청은 항상 인증 -> 입력 검증 -> 데이터베이스 접근 순서로 처리합니다.
본문은 인증이 끝난 뒤 핸들러 안에서 읽으므로, 인증되지 않은 요청은 본문 오류와
관계없이 401 을 받습니다.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, List, Optional, Type, TypeVar, Union

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from pydantic import BaseModel, ValidationError
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core import dependencies as deps
from app.core.cache import public_cache
from app.core.config import settings
from app.utils import geohash as geohash_utils

from app.domains.loo import crud as loo_crud
from app.domains.loo import schemas as loo_schemas
from app.domains.loo.helpers import (
    LOO_ID_LENGTH_MESSAGE,
    generate_loo_id,
    is_valid_loo_id,
    parse_active_flag,
    parse_ids,
)

logger = logging.getLogger(__name__)

SchemaType = TypeVar("SchemaType", bound=BaseModel)

router = APIRouter(
    tags=["Loos (화장실 정보 관리)"],
    responses={404: {"description": "Not found"}},
)

dump_cache_headers = public_cache(lambda: settings.LOO_DUMP_CACHE_MAX_AGE)


# =============================================================================
# 공통 헬퍼
# =============================================================================
def require_loo_id(loo_id: str) -> str:
    """경로의 ID 길이를 확인합니다. 조회 전에 호출해야 합니다."""
    if not is_valid_loo_id(loo_id):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=LOO_ID_LENGTH_MESSAGE)
    return loo_id


async def read_json_body(request: Request) -> Any:
    """
    요청 본문을 JSON 으로 읽습니다.
    비어 있거나 JSON 이 아니면 None 을 반환하여 스키마 검증 단계에서 거부되게 합니다.
    """
    raw = await request.body()
    if not raw:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        return None


def validate_body(schema: Type[SchemaType], body: Any, message: str) -> SchemaType:
    try:
        return schema.model_validate(body)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "message": message,
                "errors": e.errors(include_url=False, include_context=False, include_input=False),
            },
        )


def parse_since(value: Optional[str]) -> datetime:
    """ISO-8601 문자열을 UTC datetime 으로 변환합니다. 시간대가 없으면 UTC 로 간주합니다."""
    if not value:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="since query parameter is required")
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="since must be an ISO-8601 timestamp")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


# =============================================================================
# 1. 덤프 / 동기화 엔드포인트
# =============================================================================
@router.get(
    "/dump",
    response_model=Union[loo_schemas.LooDumpResponse, loo_schemas.LooListResponse],
    dependencies=[Depends(dump_cache_headers)],
    summary="활성 화장실 전체 덤프 (압축 포맷)",
)
async def read_loos_dump(
    rich: bool = Query(False, description="true 이면 전체 레코드를 반환합니다"),
    db: AsyncSession = Depends(deps.get_db_session),
):
    """
    활성 화장실 전체를 `[id, geohash, bitmask]` 행으로 반환합니다.
    - 항상 활성 레코드만 포함하며 `active` 인자의 영향을 받지 않습니다.
    - 공유 캐시가 저장할 수 있도록 `Cache-Control: public, max-age=...` 를 설정합니다.
    - 인증 여부와 관계없이 동일한 응답을 반환합니다.
    """
    loos = await loo_crud.loo.get_active(db)
    if rich:
        return loo_schemas.LooListResponse(
            count=len(loos),
            data=[loo_schemas.LooRead.model_validate(loo) for loo in loos],
        )
    rows = [loo_crud.to_dump_row(loo) for loo in loos]
    return loo_schemas.LooDumpResponse(count=len(rows), data=rows)


@router.get("/updates", response_model=loo_schemas.LooUpdatesResponse, summary="since 이후 변경분 조회")
async def read_loo_updates(
    since: Optional[str] = Query(None, description="ISO-8601 기준 시각"),
    db: AsyncSession = Depends(deps.get_db_session),
):
    """
    `since` 이후 변경된 레코드를 반환합니다.
    - 활성 레코드는 덤프 행으로 `upserted` 에 포함됩니다.
    - 비활성화된 레코드는 ID만 `deleted` 에 포함됩니다.
    """
    since_at = parse_since(since)
    loos = await loo_crud.loo.get_updated_since(db, since=since_at)

    upserted = [loo_crud.to_dump_row(loo) for loo in loos if loo.active]
    deleted = [loo.id for loo in loos if not loo.active]
    return loo_schemas.LooUpdatesResponse(count=len(loos), upserted=upserted, deleted=deleted)


# =============================================================================
# 2. 조회 엔드포인트
# =============================================================================
@router.get("/search", response_model=loo_schemas.LooSearchResponse, summary="화장실 검색 (페이지 단위)")
async def search_loos(
    request: Request,
    db: AsyncSession = Depends(deps.get_db_session),
):
    """
    검색 조건에 맞는 화장실을 페이지 단위로 조회합니다.
    - `search`: ID 일치 또는 이름/메모 부분 일치
    - `active`: 생략하거나 알 수 없는 값이면 활성 레코드만 조회합니다.
    - `accessible`, `all_gender`, `radar`, `baby_change`, `no_payment`, `has_location`: true / false / any
    - `sort`: updated-desc(기본), updated-asc, created-desc, created-asc, name-asc, name-desc
    - `limit` (1~200, 기본 50), `page` (1부터)
    """
    query = validate_body(loo_schemas.LooSearchQuery, dict(request.query_params), "Invalid search query")
    loos, total = await loo_crud.loo.search(db, query=query)

    offset = (query.page - 1) * query.limit
    return loo_schemas.LooSearchResponse(
        count=len(loos),
        total=total,
        page=query.page,
        page_size=query.limit,
        has_more=offset + len(loos) < total,
        data=[loo_schemas.LooRead.model_validate(loo) for loo in loos],
    )


@router.get("/geohash/{geohash}", response_model=None, summary="geohash 접두사로 조회")
async def read_loos_by_geohash(
    geohash: str,
    active: Optional[str] = Query(None, description="true(기본) / false / any|all"),
    compressed: bool = Query(False, description="true 이면 덤프 행 포맷으로 반환합니다"),
    db: AsyncSession = Depends(deps.get_db_session),
):
    """
    geohash 가 주어진 접두사로 시작하는 화장실을 조회합니다.
    - `active`: 생략하거나 알 수 없는 값이면 활성 레코드만 조회합니다.
    """
    if not geohash_utils.is_valid(geohash):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid geohash")

    loos = await loo_crud.loo.get_by_geohash_prefix(db, prefix=geohash, active=parse_active_flag(active))
    if compressed:
        rows = [loo_crud.to_dump_row(loo) for loo in loos]
        return loo_schemas.LooDumpResponse(count=len(rows), data=rows)
    return loo_schemas.LooListResponse(
        count=len(loos),
        data=[loo_schemas.LooRead.model_validate(loo) for loo in loos],
    )


@router.get("/{loo_id}/reports", response_model=loo_schemas.LooReportsResponse, summary="기여자 이력 조회")
async def read_loo_reports(
    loo_id: str,
    db: AsyncSession = Depends(deps.get_db_session),
):
    """
    특정 화장실의 기여자 이력을 기여 순서대로 반환합니다. 마지막 항목이 가장 최근 변경입니다.
    """
    require_loo_id(loo_id)
    if await loo_crud.loo.get(db, id=loo_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Loo not found")

    contributions = await loo_crud.loo.get_contributions(db, loo_id=loo_id)
    return loo_schemas.LooReportsResponse(
        count=len(contributions),
        data=[loo_schemas.LooReport.model_validate(row) for row in contributions],
    )


@router.get("/{loo_id}", response_model=loo_schemas.LooRead, summary="특정 화장실 조회")
async def read_loo(
    loo_id: str,
    db: AsyncSession = Depends(deps.get_db_session),
):
    """
    특정 ID의 화장실 정보를 조회합니다. 비활성 레코드도 조회됩니다.
    """
    require_loo_id(loo_id)
    db_loo = await loo_crud.loo.get(db, id=loo_id)
    if db_loo is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Loo not found")
    return loo_schemas.LooRead.model_validate(db_loo)


@router.get("", response_model=loo_schemas.LooListResponse, summary="여러 ID로 조회")
async def read_loos_by_ids(
    ids: Optional[List[str]] = Query(None, description="쉼표 구분 또는 반복 지정"),
    db: AsyncSession = Depends(deps.get_db_session),
):
    """
    `ids` 로 지정한 화장실들을 요청 순서대로 조회합니다. 존재하지 않는 ID는 빠집니다.
    """
    id_list = parse_ids(ids or [])
    if not id_list:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Provide ids query parameter (comma separated or repeated) to fetch loos",
        )
    loos = await loo_crud.loo.get_by_ids(db, ids=id_list)
    return loo_schemas.LooListResponse(
        count=len(loos),
        data=[loo_schemas.LooRead.model_validate(loo) for loo in loos],
    )


# =============================================================================
# 3. 변경 엔드포인트
# =============================================================================
@router.post("", response_model=loo_schemas.LooRead, status_code=status.HTTP_201_CREATED, summary="새 화장실 생성")
async def create_loo(
    request: Request,
    db: AsyncSession = Depends(deps.get_db_session),
    contributor: str = Depends(deps.get_current_contributor),  # 인증된 기여자만 생성 가능
):
    """
    새 화장실을 생성합니다. (인증 필요)
    - `id`: 생략하면 서버가 24자리 ID를 발급합니다. 지정하면 정확히 24자여야 합니다.
    - 이미 존재하는 ID면 409 Conflict 를 반환합니다.
    """
    body = await read_json_body(request)
    loo_in = validate_body(loo_schemas.LooCreate, body, "Invalid create request body")

    # 본문의 id 길이는 LooCreate 스키마에서 이미 검증되었습니다.
    loo_id = loo_in.id or generate_loo_id()
    if await loo_crud.loo.get(db, id=loo_id):
        logger.warning("Rejected create for existing loo %s (contributor: %s)", loo_id, contributor)
        raise loo_crud.conflict_exception(loo_id)

    created = await loo_crud.loo.create(db, id=loo_id, obj_in=loo_in, contributor=contributor)
    return loo_schemas.LooRead.model_validate(created)


@router.put("/{loo_id}", response_model=loo_schemas.LooRead, summary="화장실 업서트 (생성 또는 전체 교체)")
async def upsert_loo(
    loo_id: str,
    request: Request,
    response: Response,
    db: AsyncSession = Depends(deps.get_db_session),
    contributor: str = Depends(deps.get_current_contributor),
):
    """
    지정한 ID의 화장실을 전체 교체하거나, 없으면 생성합니다. (인증 필요)
    - 생성된 경우 201 Created, 갱신된 경우 200 OK 를 반환합니다.
    - 생략된 속성은 비워집니다 (부분 업데이트가 아닙니다).
    """
    require_loo_id(loo_id)
    body = await read_json_body(request)
    loo_in = validate_body(loo_schemas.LooMutation, body, "Invalid upsert request body")

    saved, created = await loo_crud.loo.upsert(db, id=loo_id, obj_in=loo_in, contributor=contributor)
    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return loo_schemas.LooRead.model_validate(saved)
