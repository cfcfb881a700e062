# app/core/config.py

from typing import Any, List, Optional
from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict
import os

# 프로젝트의 루트 디렉토리 경로를 계산합니다.
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


class Settings(BaseSettings):
    """
    애플리케이션의 모든 설정을 정의하는 Pydantic BaseSettings 모델입니다.
    환경 변수 및 .env 파일에서 값을 자동으로 로드합니다.
    """

    # --- Pydantic Settings 설정 ---
    model_config = SettingsConfigDict(
        env_file=os.path.join(BASE_DIR, '.env'),  # 프로젝트 루트의 .env 파일을 명시적으로 지정
        env_file_encoding='utf-8',
        extra='ignore',                      # .env 파일에 정의되었지만 모델에 없는 변수는 무시
        case_sensitive=True                  # 환경 변수 이름 대소문자 구분
    )

    # --- 애플리케이션 기본 설정 ---
    APP_NAME: str = "Loo Directory API"
    APP_VERSION: str = "0.1.0"
    APP_DESCRIPTION: str = "Public toilet directory API with compact dump export"
    # 애플리케이션 환경 (예: "development", "production", "testing")
    APP_ENV: str = Field("development", description="Application environment (e.g., development, production, testing)")
    # 디버그 모드 활성화 여부 (SQL echo 포함)
    DEBUG_MODE: bool = Field(False, description="Enable debug mode for detailed logging and SQL echo")

    # --- 데이터베이스 설정 ---
    DATABASE_URL: SecretStr = Field(..., description="Database connection URL (postgresql+asyncpg://...)")

    # --- JWT (JSON Web Token) 설정 ---
    SECRET_KEY: SecretStr = Field(..., description="Secret key for JWT token signing. Keep this highly secure!")
    ALGORITHM: str = Field("HS256", description="Algorithm used for JWT signing (e.g., HS256)")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(30, description="Access token expiration time in minutes")
    AUTH_AUDIENCE: Optional[str] = Field(None, description="Expected 'aud' claim. Not checked when empty")
    AUTH_ISSUER: Optional[str] = Field(None, description="Expected 'iss' claim. Not checked when empty")
    # 기여자 닉네임을 담고 있는 커스텀 클레임 키 (예: "app_metadata")
    AUTH_PROFILE_KEY: Optional[str] = Field(None, description="Claim holding a profile object with a 'nickname'")

    # --- 덤프 API 캐시 설정 ---
    LOO_DUMP_CACHE_MAX_AGE: int = Field(3600, ge=0, description="Public cache max-age (seconds) for /loos/dump")

    # --- CORS 설정 ---
    CORS_ORIGINS: List[str] = Field(default_factory=lambda: ["*"], description="Allowed CORS origins")

    # Post-initialization validation (Pydantic v2 BaseSettings)
    def model_post_init(self, __context: Any) -> None:  # noqa: ANN001
        # 운영 환경에서 모든 출처를 허용하는 것은 위험하므로 빈 목록으로 되돌립니다.
        if self.APP_ENV == "production" and self.CORS_ORIGINS == ["*"]:
            self.CORS_ORIGINS = []


settings = Settings()
