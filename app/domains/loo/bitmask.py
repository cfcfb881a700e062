# app/domains/loo/bitmask.py

"""
편의시설 플래그 <-> 정수 비트마스크 변환 모듈입니다.

덤프 API는 각 화장실의 편의시설 정보를 하나의 정수로 압축해서 전송합니다.
비트 가중치는 아래 FILTER_WEIGHTS 표로 고정되어 있으며, 한 번 배정된 비트는
다른 플래그에 재사용하지 않습니다. 기존 덤프 소비자(지도 클라이언트)가
같은 표로 디코딩하므로 값을 바꾸면 전송 포맷이 바뀝니다.
"""

from enum import IntFlag
from typing import Dict, Mapping, Optional

# 가중치 표의 버전. 표를 바꿀 때만 올립니다.
FILTER_BITMASK_VERSION = 1


class LooFilter(IntFlag):
    NO_PAYMENT = 1
    ALL_GENDER = 2
    AUTOMATIC = 4
    ACCESSIBLE = 8
    BABY_CHANGE = 16
    RADAR = 32


# 플래그 이름(모델 필드명) -> 비트 가중치
# 선언 순서에서 추론하지 않고 명시적으로 나열합니다.
FILTER_WEIGHTS: Dict[str, LooFilter] = {
    "no_payment": LooFilter.NO_PAYMENT,
    "all_gender": LooFilter.ALL_GENDER,
    "automatic": LooFilter.AUTOMATIC,
    "accessible": LooFilter.ACCESSIBLE,
    "baby_change": LooFilter.BABY_CHANGE,
    "radar": LooFilter.RADAR,
}


def encode_filter_bitmask(flags: Mapping[str, Optional[bool]]) -> int:
    """
    플래그 사전을 비트마스크로 인코딩합니다.

    정확히 True 인 플래그의 가중치만 더합니다. False, None(미확인), 누락된 플래그와
    표에 없는 플래그는 결과에 영향을 주지 않습니다.

    >>> encode_filter_bitmask({"no_payment": True, "all_gender": True, "accessible": True})
    11
    """
    mask = 0
    for name, weight in FILTER_WEIGHTS.items():
        if flags.get(name) is True:
            mask |= weight
    return int(mask)


def decode_filter_bitmask(mask: int) -> Dict[str, bool]:
    """
    비트마스크를 플래그 사전으로 디코딩합니다.
    표에 있는 플래그만 결과에 포함되며, 값은 `mask & weight != 0` 입니다.
    """
    if mask < 0:
        raise ValueError(f"bitmask must be non-negative: {mask}")
    return {name: bool(mask & weight) for name, weight in FILTER_WEIGHTS.items()}


def bitmask_for(obj: object) -> int:
    """모델 객체의 속성에서 바로 비트마스크를 계산합니다."""
    return encode_filter_bitmask({name: getattr(obj, name, None) for name in FILTER_WEIGHTS})
