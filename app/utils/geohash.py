# app/utils/geohash.py

"""
위도/경도 <-> geohash 문자열 변환 유틸리티입니다.

geohash 는 덤프 API에서 좌표를 짧은 문자열로 전송하기 위한 용도로만 사용합니다.
공간 인덱스나 반경 검색에는 사용하지 않습니다.
"""

from typing import Tuple

GEOHASH_ALPHABET = "0123456789bcdefghjkmnpqrstuvwxyz"
GEOHASH_PRECISION = 12  # 저장 정밀도 (약 3.7cm x 1.9cm)

_BITS = (16, 8, 4, 2, 1)
_DECODE_MAP = {ch: idx for idx, ch in enumerate(GEOHASH_ALPHABET)}


def encode(lat: float, lng: float, precision: int = GEOHASH_PRECISION) -> str:
    """
    좌표를 geohash 문자열로 인코딩합니다.

    Args:
        lat (float): 위도 (-90 ~ 90)
        lng (float): 경도 (-180 ~ 180)
        precision (int): 결과 문자열 길이 (1 이상)

    Returns:
        str: geohash 문자열 (예: 42.6, -5.6 -> "ezs42")
    """
    if not -90.0 <= lat <= 90.0:
        raise ValueError(f"latitude out of range: {lat}")
    if not -180.0 <= lng <= 180.0:
        raise ValueError(f"longitude out of range: {lng}")
    if precision < 1:
        raise ValueError(f"precision must be >= 1: {precision}")

    lat_lo, lat_hi = -90.0, 90.0
    lng_lo, lng_hi = -180.0, 180.0
    is_lng = True  # 경도 비트부터 번갈아 배치
    bit = 0
    ch = 0
    out = []

    while len(out) < precision:
        if is_lng:
            mid = (lng_lo + lng_hi) / 2
            if lng >= mid:
                ch |= _BITS[bit]
                lng_lo = mid
            else:
                lng_hi = mid
        else:
            mid = (lat_lo + lat_hi) / 2
            if lat >= mid:
                ch |= _BITS[bit]
                lat_lo = mid
            else:
                lat_hi = mid

        is_lng = not is_lng
        if bit < 4:
            bit += 1
        else:
            out.append(GEOHASH_ALPHABET[ch])
            bit = 0
            ch = 0

    return "".join(out)


def decode_bounds(geohash: str) -> Tuple[float, float, float, float]:
    """
    geohash 가 가리키는 셀의 경계 (lat_lo, lat_hi, lng_lo, lng_hi)를 반환합니다.
    """
    if not geohash:
        raise ValueError("geohash must not be empty")

    lat_lo, lat_hi = -90.0, 90.0
    lng_lo, lng_hi = -180.0, 180.0
    is_lng = True

    for ch in geohash.lower():
        try:
            value = _DECODE_MAP[ch]
        except KeyError:
            raise ValueError(f"invalid geohash character: {ch!r}")
        for mask in _BITS:
            if is_lng:
                mid = (lng_lo + lng_hi) / 2
                if value & mask:
                    lng_lo = mid
                else:
                    lng_hi = mid
            else:
                mid = (lat_lo + lat_hi) / 2
                if value & mask:
                    lat_lo = mid
                else:
                    lat_hi = mid
            is_lng = not is_lng

    return lat_lo, lat_hi, lng_lo, lng_hi


def decode(geohash: str) -> Tuple[float, float]:
    """
    geohash 셀의 중심 좌표 (lat, lng)를 반환합니다.
    """
    lat_lo, lat_hi, lng_lo, lng_hi = decode_bounds(geohash)
    return (lat_lo + lat_hi) / 2, (lng_lo + lng_hi) / 2


def is_valid(value: str) -> bool:
    """geohash 알파벳만으로 이루어진 비어있지 않은 문자열인지 확인합니다."""
    return bool(value) and all(ch in _DECODE_MAP for ch in value.lower())
