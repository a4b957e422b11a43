"""
config.py

애플리케이션 전역 설정(Configuration) 관리 파일.

.env 및 환경 변수를 pydantic-settings(BaseSettings)로 읽어
애플리케이션 전반에서 공통으로 사용하는 설정 값을 제공한다.

주요 설정 항목:
- 데이터베이스 연결 정보 (DATABASE_URL / TEST_DATABASE_URL)
- JWT Access / Refresh 시크릿 및 만료 정책
- 실행 환경(APP_ENV, 구 NODE_ENV 호환)과 DB 재연결 정책
- 초기 모더레이터 계정 정보
- 쿠키 / CORS / 로그 레벨 옵션

설계 원칙:
- 모든 환경 변수는 이 파일을 통해서만 접근
- JWT 시크릿이 비어 있어도 서버는 기동한다
  (토큰이 필요한 요청에서 500 "Server configuration error")
- 설정 값은 런타임 중 변경되지 않는 불변 객체로 취급

관련 파일:
- peptitrace.main            : CORS / 라우터 prefix
- peptitrace.core.security   : JWT 시크릿 / 만료 설정
- peptitrace.core.lifespan   : DB 연결 확인 및 재연결 주기
- peptitrace.db.session      : DATABASE_URL

"""

from typing import List

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    DATABASE_URL: str
    TEST_DATABASE_URL: str | None = None

    # access / refresh 시크릿 분리
    JWT_ACCESS_SECRET: str | None = None
    JWT_REFRESH_SECRET: str | None = None
    ALGORITHM: str = "HS256"

    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7

    PORT: int = 3000

    # development 이면 DB 연결 실패 시 경고만 남기고 기동
    APP_ENV: str = Field(default="production", validation_alias=AliasChoices("APP_ENV", "NODE_ENV"))

    DB_RETRY_SECONDS: int = 5
    DB_MONITOR_ENABLED: bool = True

    INITIAL_MODERATOR_EMAIL: str | None = None
    INITIAL_MODERATOR_PASSWORD: str | None = None

    BCRYPT_ROUNDS: int = 10

    COOKIE_SECURE: bool = False
    COOKIE_SAMESITE: str = "lax"
    COOKIE_DOMAIN: str | None = None

    API_PREFIX: str = "/api"
    LOG_LEVEL: str = "INFO"

    CORS_ORIGINS: List[str] = ["http://localhost:5173", "http://127.0.0.1:5173", "http://localhost:3000"]

    @property
    def is_development(self) -> bool:
        return self.APP_ENV.lower() == "development"


settings = Settings()
