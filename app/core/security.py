# app/core/security.py

"""
애플리케이션의 보안 관련 유틸리티 함수 및 의존성 주입을 정의하는 모듈입니다.

- JWT(JSON Web Token) 생성 및 검증.
- HTTP Bearer 스키마로 전달된 토큰에서 기여자(contributor) 식별자 획득.

이 서비스는 사용자 테이블을 두지 않습니다. 검증된 토큰의 클레임이 곧 신원이며,
기여자 식별자는 데이터 변경 이력(contributors)에 그대로 기록됩니다.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import jwt, JWTError
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.config import settings

logger = logging.getLogger(__name__)


# --- Bearer 스키마 설정 ---
# auto_error=False: 토큰이 없을 때 403 대신 직접 401을 반환하기 위함입니다.
bearer_scheme = HTTPBearer(auto_error=False)


# --- JWT 토큰 생성 및 검증 ---
def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Access Token을 생성합니다.
    """
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire})
    if settings.AUTH_AUDIENCE and "aud" not in to_encode:
        to_encode["aud"] = settings.AUTH_AUDIENCE
    if settings.AUTH_ISSUER and "iss" not in to_encode:
        to_encode["iss"] = settings.AUTH_ISSUER
    return jwt.encode(to_encode, settings.SECRET_KEY.get_secret_value(), algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    토큰 서명과 만료, (설정된 경우) audience/issuer 를 검증하고 클레임을 반환합니다.
    검증 실패 시 JWTError 를 그대로 발생시킵니다.
    """
    options = {"verify_aud": bool(settings.AUTH_AUDIENCE)}
    return jwt.decode(
        token,
        settings.SECRET_KEY.get_secret_value(),
        algorithms=[settings.ALGORITHM],
        audience=settings.AUTH_AUDIENCE,
        issuer=settings.AUTH_ISSUER,
        options=options,
    )


def _clean(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def extract_contributor(claims: Optional[Dict[str, Any]]) -> Optional[str]:
    """
    클레임에서 기여자 식별자를 추출합니다.

    우선순위: `<AUTH_PROFILE_KEY>.nickname` -> `nickname` -> `name` -> `sub`
    사용할 수 있는 값이 없으면 None 을 반환합니다.
    """
    if not claims:
        return None

    profile_key = settings.AUTH_PROFILE_KEY
    if profile_key and isinstance(claims.get(profile_key), dict):
        nickname = _clean(claims[profile_key].get("nickname"))
        if nickname:
            return nickname

    for key in ("nickname", "name", "sub"):
        value = _clean(claims.get(key))
        if value:
            return value
    return None


# --- 인증 의존성 ---
async def get_current_contributor(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> str:
    """
    Bearer 토큰을 검증하고 현재 요청의 기여자 식별자를 반환합니다.
    토큰이 없거나 유효하지 않으면 401 Unauthorized 를 발생시킵니다.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise credentials_exception

    try:
        claims = decode_access_token(credentials.credentials)
    except JWTError as e:
        logger.info("Rejected bearer token: %s", e)
        raise credentials_exception

    contributor = extract_contributor(claims)
    if contributor is None:
        logger.info("Bearer token carries no usable contributor identity")
        raise credentials_exception
    return contributor
