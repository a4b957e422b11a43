"""
security.py

비밀번호 해싱 및 JWT 토큰 생성/검증을 담당하는 보안 유틸리티 모음.

라우터 / 인증 의존성에서 사용하는 저수준(low-level) 기능만 제공하며
비즈니스 로직은 포함하지 않는다.

주요 기능:
- 평문 / 해시 비밀번호를 타입으로 구분 (PlaintextPassword / HashedPassword)
- bcrypt 해싱 및 검증
- JWT Access Token / Refresh Token 생성
- Access / Refresh Token 디코딩 및 검증

설계 원칙:
- 비밀번호는 시스템에 들어오는 경계에서 PlaintextPassword 로 감싸고,
  저장소에는 HashedPassword 만 기록된다 (문자열 형식 추측 없음)
- Access / Refresh 시크릿을 분리
- Refresh Token 에 jti(사용자별 refresh_token_id)를 담아
  로그인 / 재발급 시 회전(rotation) 및 무효화 지원
- 시크릿 누락은 ConfigurationError 로 올려 500 응답

관련 파일:
- peptitrace.core.config        : JWT 시크릿 / 만료 설정
- peptitrace.core.deps          : Access Token 검증 의존성
- peptitrace.db.types           : HashedPassword 컬럼 타입
- peptitrace.routers.auth       : 로그인 / 재발급 API

"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Literal, Optional

from jose import jwt, JWTError
from passlib.context import CryptContext

from peptitrace.core.config import settings
from peptitrace.core.errors import ConfigurationError


pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


@dataclass(frozen=True)
class PlaintextPassword:
    """요청으로 들어온 평문 비밀번호. repr 에 값이 노출되지 않는다."""

    value: str

    def __repr__(self) -> str:
        return "PlaintextPassword('***')"


@dataclass(frozen=True)
class HashedPassword:
    """단방향 해시 값. 저장소에 기록 가능한 유일한 비밀번호 형태."""

    value: str

    def __repr__(self) -> str:
        return "HashedPassword('***')"


def hash_password(password: PlaintextPassword) -> HashedPassword:
    if not isinstance(password, PlaintextPassword):
        raise TypeError("hash_password expects a PlaintextPassword")
    return HashedPassword(pwd_context.hash(password.value))


def verify_password(plain: PlaintextPassword, hashed: HashedPassword) -> bool:
    if hashed is None:
        return False
    return pwd_context.verify(plain.value, hashed.value)


def new_refresh_token_id() -> str:
    return uuid.uuid4().hex


def _secret(kind: Literal["access", "refresh"]) -> str:
    secret = settings.JWT_ACCESS_SECRET if kind == "access" else settings.JWT_REFRESH_SECRET
    if not secret:
        raise ConfigurationError(f"JWT {kind} secret is not configured")
    return secret


"""
JWT 토큰 생성 내부 공통 함수

- sub / userId : 사용자 식별자
- email        : 사용자 이메일
- type         : access 또는 refresh
- exp          : 만료 시각 (UTC timestamp)

"""

def _create_token(*, user_id: str, email: str, token_type: Literal["access", "refresh"],
                  expires_delta: timedelta, extra: Optional[dict] = None) -> str:
    expire = datetime.now(timezone.utc) + expires_delta
    payload = {
        "sub": user_id,
        "userId": user_id,
        "email": email,
        "type": token_type,
        "exp": int(expire.timestamp()),
    }
    if extra:
        payload.update(extra)
    return jwt.encode(payload, _secret(token_type), algorithm=settings.ALGORITHM)


def create_access_token(user_id: str, email: str, expires_delta: Optional[timedelta] = None) -> str:
    return _create_token(
        user_id=user_id,
        email=email,
        token_type="access",
        expires_delta=expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )


def create_refresh_token(user_id: str, email: str, token_id: str,
                         expires_delta: Optional[timedelta] = None) -> str:
    return _create_token(
        user_id=user_id,
        email=email,
        token_type="refresh",
        expires_delta=expires_delta or timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS),
        extra={"jti": token_id},
    )


"""
Access Token 디코딩

- 서명 / 만료 검증 후 payload 반환
- refresh 토큰은 거부
- 실패 시 JWTError (만료는 ExpiredSignatureError)

"""

def decode_access_token(token: str) -> dict:
    payload = jwt.decode(token, _secret("access"), algorithms=[settings.ALGORITHM])
    if payload.get("type") != "access":
        raise JWTError("Not an access token")
    if not payload.get("userId") and not payload.get("sub"):
        raise JWTError("Missing subject")
    return payload


def decode_refresh_token(token: str) -> tuple[str, str | None]:
    payload = jwt.decode(token, _secret("refresh"), algorithms=[settings.ALGORITHM])
    if payload.get("type") != "refresh":
        raise JWTError("Not a refresh token")
    sub = payload.get("userId") or payload.get("sub")
    if not sub:
        raise JWTError("Missing subject")
    return sub, payload.get("jti")
