"""
auth.py

인증(Authentication) API 모음.

회원 가입, 로그인, 토큰 재발급, 토큰 검증, 로그아웃을 담당한다.
JWT 기반 Access Token + Refresh Token 구조를 따른다.

주요 기능:
- 회원 가입 (status=pending, 토큰 즉시 발급)
- 로그인 및 토큰 발급 (refresh_token_id 회전)
- Refresh Token 기반 토큰 재발급
- Access Token 검증
- 로그아웃 (Refresh Token 무효화)

설계 원칙:
- Access Token 은 Authorization 헤더로 전달
- Refresh Token 은 응답 바디와 HttpOnly Cookie 로 함께 내려준다
  (재발급 요청은 바디의 refresh_token 우선, 없으면 쿠키)
- 승인 대기(pending) 계정도 로그인은 가능하지만
  인증이 필요한 API 에서는 401 로 거부된다

관련 파일:
- peptitrace.core.security   : 비밀번호 해시 / JWT 생성·검증
- peptitrace.core.deps       : 인증 의존성
- peptitrace.services.user   : 가입 / 인증 / 토큰 식별자 회전

"""

import logging
import uuid

from fastapi import APIRouter, Body, Depends, HTTPException, Request, Response, status
from fastapi.responses import JSONResponse
from jose import JWTError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from peptitrace.core.config import settings
from peptitrace.core.deps import get_current_user, get_db
from peptitrace.core.errors import ok, to_http
from peptitrace.core.security import (
    PlaintextPassword,
    create_access_token,
    create_refresh_token,
    decode_refresh_token,
)
from peptitrace.models.user import User, UserStatus
from peptitrace.schemas.auth import LoginRequest, RefreshRequest, RegisterRequest, UserSummary
from peptitrace.services import user as user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

REFRESH_COOKIE_NAME = "refresh_token"


def _summary(user: User) -> dict:
    return UserSummary(
        id=user.id, email=user.email, username=user.username, role=user.role, status=user.status
    ).model_dump(mode="json")


def _issue_tokens(user: User) -> dict:
    return {
        "access_token": create_access_token(str(user.id), user.email),
        "refresh_token": create_refresh_token(str(user.id), user.email, user.refresh_token_id),
        "token_type": "bearer",
    }


def _set_refresh_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=REFRESH_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite=settings.COOKIE_SAMESITE,
        domain=settings.COOKIE_DOMAIN,
        path="/",
        max_age=settings.REFRESH_TOKEN_EXPIRE_DAYS * 24 * 60 * 60,
    )


def _clear_refresh_cookie(response: Response) -> None:
    response.delete_cookie(key=REFRESH_COOKIE_NAME, path="/", domain=settings.COOKIE_DOMAIN)


def _reject_refresh(detail: str) -> JSONResponse:
    # HTTPException 경로에서는 주입된 Response 의 쿠키가 적용되지 않음
    response = JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"success": False, "error": detail},
    )
    _clear_refresh_cookie(response)
    return response


"""
회원 가입 API

- username 미지정 시 이메일 로컬파트에서 유도
- status=pending 으로 생성 (모더레이터 승인 필요)
- 가입 직후 Access / Refresh Token 발급

"""

@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(data: RegisterRequest, response: Response, db: Session = Depends(get_db)):
    try:
        user = user_service.register_user(
            db,
            email=data.email,
            password=PlaintextPassword(data.password),
            username=data.username,
        )
        db.commit()
        db.refresh(user)
    except ValueError as e:
        db.rollback()
        raise to_http(e)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=400, detail="Email or username already registered")
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")

    tokens = _issue_tokens(user)
    _set_refresh_cookie(response, tokens["refresh_token"])
    return ok({"user": _summary(user), **tokens}, message="User registered successfully")


"""
로그인 API

- 이메일 / 비밀번호 인증 (실패 시 401 "Invalid email or password")
- 성공 시 refresh_token_id 회전 + last_login_at 갱신
- 계정 상태는 여기서 검사하지 않음

"""

@router.post("/login")
def login(data: LoginRequest, response: Response, db: Session = Depends(get_db)):
    try:
        user = user_service.authenticate(db, email=data.email, password=PlaintextPassword(data.password))
        if user is None:
            db.rollback()
            logger.info("login rejected reason=bad_credentials")
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password")
        db.commit()
        db.refresh(user)
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")

    tokens = _issue_tokens(user)
    _set_refresh_cookie(response, tokens["refresh_token"])
    return ok({"user": _summary(user), **tokens}, message="Login successful")


"""
토큰 재발급 API

- 바디의 refresh_token 우선, 없으면 refresh 쿠키
- 둘 다 없으면 400
- 서명 / 만료 / 토큰 식별자(jti) 불일치는 401 "Invalid refresh token"
- 승인되지 않은 계정은 401 (pending / not active 구분)
- 재발급 시 refresh_token_id 회전

"""

@router.post("/refresh")
def refresh(
    request: Request,
    response: Response,
    data: RefreshRequest | None = Body(default=None),
    db: Session = Depends(get_db),
):
    token = (data.refresh_token if data else None) or request.cookies.get(REFRESH_COOKIE_NAME)
    if not token:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Refresh token is required")

    try:
        user_id, token_id = decode_refresh_token(token)
        user_uuid = uuid.UUID(user_id)
    except (JWTError, ValueError):
        logger.info("refresh rejected reason=invalid_token")
        return _reject_refresh("Invalid refresh token")

    user = db.get(User, user_uuid)
    if user is None or user.refresh_token_id is None or token_id != user.refresh_token_id:
        logger.info("refresh rejected reason=revoked user=%s", user_uuid)
        return _reject_refresh("Invalid refresh token")

    if user.status != UserStatus.APPROVED or not user.is_active:
        detail = "Account pending approval" if user.status == UserStatus.PENDING else "Account not active"
        logger.info("refresh rejected reason=%s user=%s", user.status.value, user.id)
        return _reject_refresh(detail)

    try:
        user_service.rotate_refresh_token(db, user)
        db.commit()
        db.refresh(user)
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")

    tokens = _issue_tokens(user)
    _set_refresh_cookie(response, tokens["refresh_token"])
    return ok(tokens)


@router.get("/validate")
def validate(current_user: User = Depends(get_current_user)):
    return ok({"user": _summary(current_user)}, message="Token is valid")


"""
로그아웃 API

- refresh_token_id 제거로 기존 Refresh Token 무효화
- refresh 쿠키 삭제

"""

@router.post("/logout")
def logout(
    response: Response,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        user_service.revoke_refresh_token(db, current_user)
        db.commit()
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")

    _clear_refresh_cookie(response)
    return ok(message="Logged out")
