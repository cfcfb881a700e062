# app/domains/loo/helpers.py

"""
'loo' 도메인 라우터에서 공통으로 사용하는 작은 헬퍼 함수 모음입니다.
"""

import secrets
from typing import Iterable, List, Optional

# 외부에서 전달되는 모든 loo ID는 정확히 이 길이여야 합니다.
LOO_ID_LENGTH = 24
LOO_ID_LENGTH_MESSAGE = f"id must be exactly {LOO_ID_LENGTH} characters"


def generate_loo_id() -> str:
    """
    새 loo ID를 발급합니다. 12바이트 난수를 24자리 16진수 문자열로 인코딩합니다.
    """
    return secrets.token_hex(LOO_ID_LENGTH // 2)


def is_valid_loo_id(value: Optional[str]) -> bool:
    return isinstance(value, str) and len(value) == LOO_ID_LENGTH


def parse_active_flag(value: Optional[str]) -> Optional[bool]:
    """
    `active` 쿼리 인자를 3상태 필터로 변환합니다.

    - None (인자 없음)     -> True  (활성 레코드만)
    - "true"              -> True
    - "false"             -> False (비활성 레코드만)
    - "any" / "all"       -> None  (필터 없음)
    - 그 밖의 값           -> True

    알 수 없는 값은 오류로 처리하지 않습니다.
    """
    if value is None:
        return True
    normalized = value.strip().lower()
    if normalized == "true":
        return True
    if normalized == "false":
        return False
    if normalized in ("any", "all"):
        return None
    return True


def parse_filter_flag(value: Optional[str]) -> Optional[bool]:
    """
    검색 조건의 편의시설 플래그를 변환합니다. parse_active_flag 와 달리 기본값은 '필터 없음'이며
    알 수 없는 값은 ValueError 입니다.
    """
    if value is None:
        return None
    normalized = value.strip().lower()
    if normalized in ("", "any", "all"):
        return None
    if normalized == "true":
        return True
    if normalized == "false":
        return False
    raise ValueError("must be one of: true, false, any")


def parse_ids(values: Iterable[Optional[str]]) -> List[str]:
    """
    `ids` 쿼리 인자(쉼표 구분 또는 반복 지정)를 ID 목록으로 변환합니다.
    공백은 제거하고, 중복은 처음 나온 순서를 유지한 채 제거합니다.
    """
    seen = set()
    ids = []
    for raw in values:
        if not raw:
            continue
        for part in raw.split(","):
            item = part.strip()
            if item and item not in seen:
                seen.add(item)
                ids.append(item)
    return ids
