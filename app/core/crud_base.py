# app/core/crud_base.py

"""
공통 CRUD 작업을 위한 기본 클래스 모듈입니다.
모든 메서드는 비동기(async) 환경에 맞게 작성되었습니다.

이 서비스는 레코드를 물리적으로 삭제하지 않으므로 delete 는 제공하지 않습니다.
"""

from typing import Generic, List, Optional, Sequence, Type, TypeVar, Any, Dict

from sqlmodel import SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession

ModelType = TypeVar("ModelType", bound=SQLModel)


class CRUDBase(Generic[ModelType]):
    """
    조회 중심의 공통 CRUD 작업을 정의합니다.
    """
    def __init__(self, model: Type[ModelType]):
        self.model = model

    async def get(self, db: AsyncSession, id: Any) -> Optional[ModelType]:
        """
        ID를 기준으로 단일 레코드를 조회합니다.
        """
        return await db.get(self.model, id)

    async def get_by_ids(self, db: AsyncSession, *, ids: Sequence[Any]) -> List[ModelType]:
        """
        여러 ID에 해당하는 레코드를 조회합니다. 결과는 요청한 ID 순서를 따릅니다.
        존재하지 않는 ID는 결과에서 빠집니다.
        """
        if not ids:
            return []
        query = select(self.model).where(self.model.id.in_(list(ids)))
        result = await db.execute(query)
        by_id = {obj.id: obj for obj in result.scalars().all()}
        return [by_id[i] for i in ids if i in by_id]

    async def get_filtered(
        self,
        db: AsyncSession,
        *,
        filters: Optional[Dict[str, Any]] = None,  # 다중 속성 필터: {"attribute_name": "value"}
        order_by_field: Optional[str] = None,      # 정렬할 필드 (기본값: id)
        order_desc: bool = False,
        skip: int = 0,
        limit: Optional[int] = None,               # None 이면 전체 조회
    ) -> List[ModelType]:
        """
        다중 속성 필터와 정렬을 적용한 다중 조회.
        정렬은 항상 결정적이어야 하므로 기본값은 id 오름차순입니다.
        """
        query = select(self.model)
        conditions = []

        if filters:
            for attribute, value in filters.items():
                if not hasattr(self.model, attribute):
                    raise AttributeError(f"Model {self.model.__name__} has no attribute '{attribute}'")
                conditions.append(getattr(self.model, attribute) == value)

        if conditions:
            query = query.where(*conditions)

        order_column = getattr(self.model, order_by_field or "id")
        query = query.order_by(order_column.desc() if order_desc else order_column)

        if skip:
            query = query.offset(skip)
        if limit is not None:
            query = query.limit(limit)

        result = await db.execute(query)
        return list(result.scalars().all())
