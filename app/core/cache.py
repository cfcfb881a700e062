# app/core/cache.py

"""
공유 캐시(CDN, 프록시)가 응답을 저장할 수 있도록 Cache-Control 헤더를 설정하는 의존성입니다.

응답 자체를 애플리케이션 메모리에 캐싱하지 않습니다.
반복 조회 부하는 외부 캐시 계층이 흡수합니다.
"""

from typing import Callable, Union

from fastapi import Response

TtlResolver = Union[int, Callable[[], int]]


def public_cache(ttl: TtlResolver) -> Callable[[Response], None]:
    """
    `Cache-Control: public, max-age=<ttl>` 헤더를 설정하는 의존성을 생성합니다.

    ttl 은 초 단위 정수이거나, 요청 시점에 값을 돌려주는 함수입니다.
    오류 응답(HTTPException)은 새 Response 로 만들어지므로 이 헤더가 붙지 않습니다.
    """
    def _set_cache_header(response: Response) -> None:
        max_age = ttl() if callable(ttl) else ttl
        response.headers["Cache-Control"] = f"public, max-age={max_age}"

    return _set_cache_header
