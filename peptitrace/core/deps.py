"""
deps.py

FastAPI 의존성(Dependency) 모음: DB 세션, 호출자 식별, 권한 검사, 제출 한도.

주요 기능:
- get_db                        : 요청 단위 세션
- get_optional_user             : Bearer 토큰 -> User | None (익명 허용)
- get_current_user              : 인증 필수 (없으면 401)
- require_permission            : 권한 테이블 + 본인 소유 검사
- enforce_submission_rate_limit : 경험 등록 24시간 한도 (429)
- require_min_role              : moderator / admin 게이트

설계 원칙:
- 토큰이 없거나 형식 / 서명 / 만료가 잘못된 경우는 에러가 아니라 "익명" 으로 처리
  (공개 API 는 토큰이 있어도 그대로 동작)
- 토큰은 유효하지만 계정이 승인 전 / 비활성인 경우는 익명으로 숨기지 않고 401
- 거부 사유(undefined / role_denied / ownership 등)는 로그에서 구분

관련 파일:
- peptitrace.core.permissions   : 권한 테이블 / 판정
- peptitrace.core.security      : Access Token 디코딩
- peptitrace.services.experience: 최근 제출 건수 / 소유자 조회

"""

import logging
import uuid
from datetime import timedelta
from typing import Generator

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from sqlalchemy.orm import Session

from peptitrace.core.permissions import (
    OWNERSHIP_MESSAGE,
    SUBMISSION_WINDOW_HOURS,
    Operation,
    PermissionDecision,
    Resource,
    denied_message,
    evaluate_permission,
    rate_limit_message,
    requires_ownership,
    submission_limit,
    undefined_message,
)
from peptitrace.core.security import decode_access_token
from peptitrace.db.base import utcnow
from peptitrace.db.session import SessionLocal
from peptitrace.models.user import Role, User, UserStatus
from peptitrace.services import experience as experience_service

logger = logging.getLogger(__name__)

# Swagger Authorize 에서 Bearer 토큰 입력
bearer_scheme = HTTPBearer(auto_error=False)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


"""
호출자 식별 (선택)

- Authorization 헤더가 없거나 잘못되면 None (익명)
- 서명 / 만료 검증 실패도 None (fail-open)
- 사용자가 없거나 approved 가 아니면 401
  (pending -> "Account pending approval", 그 외 -> "Account not active")

"""

def get_optional_user(
    cred: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User | None:
    if cred is None:
        return None

    try:
        payload = decode_access_token(cred.credentials)
        user_id = uuid.UUID(str(payload.get("userId") or payload.get("sub")))
    except (JWTError, ValueError) as e:
        logger.debug("ignoring unusable bearer token: %s", type(e).__name__)
        return None

    user = db.get(User, user_id)
    if user is None or user.status != UserStatus.APPROVED or not user.is_active:
        if user is not None and user.status == UserStatus.PENDING:
            logger.info("identity rejected reason=pending user=%s", user_id)
            raise _unauthorized("Account pending approval")
        logger.info("identity rejected reason=inactive user=%s", user_id)
        raise _unauthorized("Account not active")

    return user


def get_current_user(user: User | None = Depends(get_optional_user)) -> User:
    if user is None:
        logger.info("request rejected reason=unauthenticated")
        raise _unauthorized("Authentication required")
    return user


def _parse_uuid(value: str) -> uuid.UUID | None:
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError):
        return None


def check_ownership(db: Session, resource: Resource, target_id: str, user: User) -> bool:
    """대상 id 가 본인 id 가 아니면 실제 소유자를 다시 확인한다."""
    target = _parse_uuid(target_id)
    if target is not None and target == user.id:
        return True

    if resource == Resource.EXPERIENCE:
        if target is None:
            return False
        owner_id = experience_service.get_owner_id(db, target)
        return owner_id is not None and owner_id == user.id

    # user 리소스는 경로 id 비교만
    return False


"""
권한 검사 의존성 팩토리

- 인증 필수 (익명 -> 401 "Authentication required")
- 권한 테이블에 없는 조합 -> 403 "Operation ... not defined"
- 역할 불일치 -> 403 "Insufficient permissions for ..."
- update / delete 의 소유권 제한 항목은 역할과 무관하게 본인 확인
  (경로 파라미터 id 또는 user_id 기준)

"""

def require_permission(operation: Operation, resource: Resource):
    operation = Operation(operation)
    resource = Resource(resource)

    def _checker(
        request: Request,
        user: User = Depends(get_current_user),
        db: Session = Depends(get_db),
    ) -> User:
        decision = evaluate_permission(user.role, resource, operation)

        if decision == PermissionDecision.UNDEFINED:
            logger.warning("permission rejected reason=undefined op=%s resource=%s user=%s",
                           operation.value, resource.value, user.id)
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN,
                                detail=undefined_message(resource, operation))

        if decision == PermissionDecision.ROLE_DENIED:
            logger.info("permission rejected reason=role_denied op=%s resource=%s role=%s user=%s",
                        operation.value, resource.value, user.role.value, user.id)
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN,
                                detail=denied_message(resource, operation))

        if requires_ownership(resource, operation):
            target_id = request.path_params.get("id") or request.path_params.get("user_id")
            if target_id and not check_ownership(db, resource, target_id, user):
                logger.info("permission rejected reason=ownership op=%s resource=%s target=%s user=%s",
                            operation.value, resource.value, target_id, user.id)
                raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=OWNERSHIP_MESSAGE)

        return user

    return _checker


"""
경험 등록 제출 한도

- 최근 24시간 내 본인이 등록한 경험 수를 매 요청마다 다시 계산
- 역할별 한도 이상이면 429

"""

def enforce_submission_rate_limit(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> User:
    since = utcnow() - timedelta(hours=SUBMISSION_WINDOW_HOURS)
    recent = experience_service.count_recent_submissions(db, user.id, since)
    limit = submission_limit(user.role)

    if recent >= limit:
        logger.info("submission rejected reason=rate_limited user=%s recent=%d limit=%d",
                    user.id, recent, limit)
        raise HTTPException(status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                            detail=rate_limit_message(limit))
    return user


ROLE_LEVEL = {
    Role.USER: 1,
    Role.MODERATOR: 2,
    Role.ADMIN: 3,
}


def require_min_role(min_role: Role, detail: str):
    def _checker(current_user: User = Depends(get_current_user)) -> User:
        if ROLE_LEVEL[current_user.role] < ROLE_LEVEL[min_role]:
            logger.info("role gate rejected min=%s role=%s user=%s",
                        min_role.value, current_user.role.value, current_user.id)
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=detail)
        return current_user
    return _checker


get_current_moderator = require_min_role(Role.MODERATOR, "Moderator access required")
get_current_admin = require_min_role(Role.ADMIN, "Admin access required")
