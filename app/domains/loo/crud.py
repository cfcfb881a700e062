# app/domains/loo/crud.py

"""
'loo' 도메인과 관련된 CRUD 로직을 담당하는 모듈입니다.

- 생성 (create): 이미 존재하는 ID 이면 409 Conflict.
- 업서트 (upsert): UPDATE 를 먼저 시도하고, 갱신된 행이 없으면 INSERT 합니다.
- 모든 변경은 기여자 이력(loo_contributors)에 한 행을 추가합니다.

ID 중복 여부는 최종적으로 데이터베이스의 기본키 제약으로 판정합니다.
애플리케이션 수준의 잠금은 사용하지 않습니다.
"""

from typing import Any, Dict, List, Optional, Tuple
from datetime import datetime, UTC
import logging

from sqlalchemy import func, or_, update
from sqlalchemy.exc import IntegrityError

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from fastapi import HTTPException, status

from app.core.crud_base import CRUDBase
from app.utils import geohash
from . import models as loo_models
from . import schemas as loo_schemas
from .bitmask import bitmask_for


logger = logging.getLogger(__name__)

# 검색에서 true/false 로 거를 수 있는 편의시설 플래그
SEARCH_FLAG_FILTERS = ("accessible", "all_gender", "radar", "baby_change", "no_payment")
# 정렬 키 -> 모델 필드
SEARCH_SORT_COLUMNS = {"updated": "updated_at", "created": "created_at", "name": "name"}


def conflict_exception(loo_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail=f"Loo with id {loo_id} already exists",
    )


def to_dump_row(loo: loo_models.Loo) -> loo_schemas.DumpRow:
    """모델을 덤프 행 [id, geohash, bitmask] 로 변환합니다. 위치가 없으면 geohash 는 빈 문자열입니다."""
    return (loo.id, loo.geohash or "", bitmask_for(loo))


def mutation_to_values(obj_in: loo_schemas.LooMutation) -> Dict[str, Any]:
    """
    요청 본문을 컬럼 값 사전으로 변환합니다.
    전체 교체 의미이므로 생략된 속성도 None 으로 포함합니다.
    """
    values = obj_in.model_dump(exclude={"id", "location"})
    if values.get("active") is None:
        values["active"] = True

    location = obj_in.location
    if location is not None:
        values["latitude"] = location.lat
        values["longitude"] = location.lng
        values["geohash"] = geohash.encode(location.lat, location.lng)
    else:
        values["latitude"] = None
        values["longitude"] = None
        values["geohash"] = None
    return values


# =============================================================================
# 1. Loo CRUD
# =============================================================================
class CRUDLoo(CRUDBase[loo_models.Loo]):
    def __init__(self):
        super().__init__(model=loo_models.Loo)

    async def get_fresh(self, db: AsyncSession, id: str) -> Optional[loo_models.Loo]:
        """세션 캐시를 무시하고 데이터베이스의 최신 상태로 조회합니다."""
        return await db.get(self.model, id, populate_existing=True)

    async def get_contributions(self, db: AsyncSession, *, loo_id: str) -> List[loo_models.LooContribution]:
        """기여자 이력 행을 기여 순서(loo_contributors.id 오름차순)대로 반환합니다."""
        statement = (
            select(loo_models.LooContribution)
            .where(loo_models.LooContribution.loo_id == loo_id)
            .order_by(loo_models.LooContribution.id)
        )
        result = await db.execute(statement)
        return list(result.scalars().all())

    async def get_contributors(self, db: AsyncSession, *, loo_id: str) -> List[str]:
        """기여자 이름만 기여 순서대로 반환합니다. 마지막 항목이 가장 최근 기여자입니다."""
        return [row.contributor for row in await self.get_contributions(db, loo_id=loo_id)]

    async def search(
        self, db: AsyncSession, *, query: loo_schemas.LooSearchQuery
    ) -> Tuple[List[loo_models.Loo], int]:
        """
        검색 조건에 맞는 레코드 한 페이지와 전체 건수를 반환합니다.
        정렬 값이 같으면 id 오름차순으로 정렬합니다.
        """
        conditions = []
        if query.search:
            conditions.append(or_(
                self.model.id == query.search,
                self.model.name.icontains(query.search, autoescape=True),
                self.model.notes.icontains(query.search, autoescape=True),
            ))
        if query.active is not None:
            conditions.append(self.model.active == query.active)
        for name in SEARCH_FLAG_FILTERS:
            value = getattr(query, name)
            if value is not None:
                conditions.append(getattr(self.model, name) == value)
        if query.has_location is True:
            conditions.append(self.model.geohash.is_not(None))
        elif query.has_location is False:
            conditions.append(self.model.geohash.is_(None))

        count_statement = select(func.count()).select_from(self.model).where(*conditions)
        total = (await db.execute(count_statement)).scalar_one()

        field, direction = query.sort.split("-")
        sort_column = getattr(self.model, SEARCH_SORT_COLUMNS[field])
        statement = (
            select(self.model)
            .where(*conditions)
            .order_by(sort_column.desc() if direction == "desc" else sort_column.asc(), self.model.id)
            .offset((query.page - 1) * query.limit)
            .limit(query.limit)
        )
        result = await db.execute(statement)
        return list(result.scalars().all()), total

    async def get_active(self, db: AsyncSession) -> List[loo_models.Loo]:
        """활성 레코드 전체를 id 오름차순으로 조회합니다."""
        return await self.get_filtered(db, filters={"active": True}, order_by_field="id")

    async def get_by_geohash_prefix(
        self, db: AsyncSession, *, prefix: str, active: Optional[bool]
    ) -> List[loo_models.Loo]:
        """
        geohash 가 prefix 로 시작하는 레코드를 조회합니다.
        active 가 None 이면 활성 여부로 거르지 않습니다.
        """
        statement = select(self.model).where(self.model.geohash.startswith(prefix.lower(), autoescape=True))
        if active is not None:
            statement = statement.where(self.model.active == active)
        statement = statement.order_by(self.model.id)
        result = await db.execute(statement)
        return list(result.scalars().all())

    async def get_updated_since(self, db: AsyncSession, *, since: datetime) -> List[loo_models.Loo]:
        """updated_at 이 since 이후인 레코드를 조회합니다."""
        statement = (
            select(self.model)
            .where(self.model.updated_at > since)
            .order_by(self.model.id)
        )
        result = await db.execute(statement)
        return list(result.scalars().all())

    async def _append_contributor_and_commit(
        self, db: AsyncSession, *, loo_id: str, contributor: str, now: datetime
    ) -> None:
        # loos 행이 먼저 반영되어야 FK 를 만족하므로 flush 후 이력 행을 추가합니다.
        # 이력 추가는 단일 INSERT 이며 기존 이력 행은 건드리지 않습니다.
        await db.flush()
        db.add(loo_models.LooContribution(loo_id=loo_id, contributor=contributor, created_at=now))
        await db.commit()

    async def create(
        self, db: AsyncSession, *, id: str, obj_in: loo_schemas.LooMutation, contributor: str
    ) -> loo_models.Loo:
        """
        새 레코드를 생성하고 기여자 이력의 첫 행을 추가합니다.
        ID가 이미 존재하면 409 Conflict 를 발생시키며 아무것도 변경하지 않습니다.
        """
        now = datetime.now(UTC)
        db_obj = self.model(id=id, created_at=now, updated_at=now, **mutation_to_values(obj_in))
        db.add(db_obj)
        try:
            await self._append_contributor_and_commit(db, loo_id=id, contributor=contributor, now=now)
        except IntegrityError as e:
            await db.rollback()
            logger.warning("Duplicate loo id on create (ID: %s): %s", id, e.orig)
            raise conflict_exception(id)

        logger.info("Created loo %s (contributor: %s)", id, contributor)
        return await self.get_fresh(db, id)

    async def upsert(
        self, db: AsyncSession, *, id: str, obj_in: loo_schemas.LooMutation, contributor: str
    ) -> Tuple[loo_models.Loo, bool]:
        """
        레코드를 전체 교체하거나, 없으면 생성합니다.

        Returns:
            Tuple[Loo, bool]: (저장된 레코드, 새로 생성되었는지 여부)
        """
        now = datetime.now(UTC)
        values = mutation_to_values(obj_in)

        result = await db.execute(
            update(self.model)
            .where(self.model.id == id)
            .values(updated_at=now, **values)
            .execution_options(synchronize_session=False)
        )
        created = result.rowcount == 0
        if created:
            db.add(self.model(id=id, created_at=now, updated_at=now, **values))

        try:
            await self._append_contributor_and_commit(db, loo_id=id, contributor=contributor, now=now)
        except IntegrityError as e:
            # UPDATE 와 INSERT 사이에 다른 요청이 같은 ID로 생성한 경우
            await db.rollback()
            logger.warning("Concurrent create while upserting loo (ID: %s): %s", id, e.orig)
            raise conflict_exception(id)

        logger.info("%s loo %s (contributor: %s)", "Created" if created else "Updated", id, contributor)
        return await self.get_fresh(db, id), created


loo = CRUDLoo()
