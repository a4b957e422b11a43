"""
services/user.py

사용자 가입 / 인증 / 모더레이션 / 프로필 관리 로직.

주요 기능:
- 회원 가입 (username 은 이메일 로컬파트에서 유도, status=pending)
- 이메일 / 비밀번호 인증 + refresh_token_id 회전
- 승인 대기 목록 / 승인 / 거절
- 본인 프로필(demographics / preferences) 부분 수정
- 역할 / 상태별 사용자 수 집계

설계 원칙:
- 비밀번호는 PlaintextPassword 로 받아 HashedPassword 로만 저장
- 이메일 / username 중복은 ConflictError (400)
- status 는 approve / reject 에서만 변경

관련 파일:
- peptitrace.models.user      : User / Role / UserStatus
- peptitrace.core.security    : 해시 / refresh_token_id
- peptitrace.routers.auth     : 가입 / 로그인 / 재발급
- peptitrace.routers.users    : 프로필 / 모더레이션

"""

import copy
import logging
import re
import secrets
import string
import uuid

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from peptitrace.core.errors import ConflictError, NotFoundError
from peptitrace.core.security import PlaintextPassword, hash_password, new_refresh_token_id, verify_password
from peptitrace.db.base import utcnow
from peptitrace.models.user import Role, User, UserStatus, default_preferences
from peptitrace.schemas.user import ft_to_cm

logger = logging.getLogger(__name__)

HEIGHT_MIN_CM = 100
HEIGHT_MAX_CM = 250

_USERNAME_CLEAN_RE = re.compile(r"[^a-zA-Z0-9_.\-]")
_SUFFIX_ALPHABET = string.ascii_lowercase + string.digits


def get_by_email(db: Session, email: str) -> User | None:
    return db.scalar(select(User).where(User.email == email.strip().lower()))


def get_by_username(db: Session, username: str) -> User | None:
    return db.scalar(select(User).where(User.username == username))


def get_user(db: Session, user_id: uuid.UUID) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def _random_suffix(length: int = 6) -> str:
    return "".join(secrets.choice(_SUFFIX_ALPHABET) for _ in range(length))


def derive_username(db: Session, email: str, *, always_suffix: bool = False) -> str:
    """이메일 로컬파트 기반 username. 충돌하면 _xxxxxx 접미사"""
    base = _USERNAME_CLEAN_RE.sub("", email.split("@", 1)[0]) or "user"
    base = base[:90]
    if not always_suffix and get_by_username(db, base) is None:
        return base

    while True:
        candidate = f"{base}_{_random_suffix()}"
        if get_by_username(db, candidate) is None:
            return candidate


"""
회원 가입

- 이메일 / username 중복 검사 (ConflictError)
- status=pending, role=user 로 생성
- 가입 직후 로그인 가능하도록 refresh_token_id 발급

"""

def register_user(
    db: Session,
    *,
    email: str,
    password: PlaintextPassword,
    username: str | None = None,
    always_suffix: bool = False,
) -> User:
    email = email.strip().lower()
    if get_by_email(db, email) is not None:
        raise ConflictError("User with this email already exists")

    if username:
        if get_by_username(db, username) is not None:
            raise ConflictError("Username already taken")
    else:
        username = derive_username(db, email, always_suffix=always_suffix)

    user = User(
        email=email,
        username=username,
        password_hash=hash_password(password),
        role=Role.USER,
        status=UserStatus.PENDING,
        demographics={},
        preferences=default_preferences(),
        refresh_token_id=new_refresh_token_id(),
    )
    db.add(user)
    db.flush()
    logger.info("user registered id=%s username=%s", user.id, user.username)
    return user


def authenticate(db: Session, *, email: str, password: PlaintextPassword) -> User | None:
    """자격 증명 확인. 성공 시 refresh_token_id 회전 + last_login_at 갱신"""
    user = get_by_email(db, email)
    if user is None or not verify_password(password, user.password_hash):
        return None

    user.refresh_token_id = new_refresh_token_id()
    user.last_login_at = utcnow()
    db.flush()
    return user


def rotate_refresh_token(db: Session, user: User) -> str:
    user.refresh_token_id = new_refresh_token_id()
    db.flush()
    return user.refresh_token_id


def revoke_refresh_token(db: Session, user: User) -> None:
    user.refresh_token_id = None
    db.flush()


def set_password(db: Session, user: User, password: PlaintextPassword) -> None:
    user.password_hash = hash_password(password)
    user.refresh_token_id = None
    db.flush()


def list_pending(db: Session) -> list[User]:
    return list(db.scalars(
        select(User).where(User.status == UserStatus.PENDING).order_by(User.created_at)
    ).all())


def approve_user(db: Session, user_id: uuid.UUID, *, moderator_id: uuid.UUID) -> User:
    user = get_user(db, user_id)
    if user.status == UserStatus.APPROVED:
        raise ValueError("User already approved")

    user.status = UserStatus.APPROVED
    user.approval_date = utcnow()
    db.flush()
    logger.info("user approved id=%s by=%s", user.id, moderator_id)
    return user


def reject_user(db: Session, user_id: uuid.UUID, *, moderator_id: uuid.UUID, notes: str | None) -> User:
    user = get_user(db, user_id)
    if user.status == UserStatus.REJECTED:
        raise ValueError("User already rejected")

    user.status = UserStatus.REJECTED
    user.moderator_notes = notes
    # 거절된 계정의 refresh 토큰 무효화
    user.refresh_token_id = None
    db.flush()
    logger.info("user rejected id=%s by=%s", user.id, moderator_id)
    return user


def delete_user(db: Session, user_id: uuid.UUID) -> None:
    """관리자 Hard Delete. 경험은 익명(user_id=NULL)으로 남는다."""
    user = get_user(db, user_id)
    db.delete(user)
    db.flush()
    logger.info("user deleted id=%s", user_id)


def _merge(base: dict, changes: dict) -> dict:
    merged = copy.deepcopy(base or {})
    for key, value in changes.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


"""
프로필 부분 수정

- username 변경 시 중복 검사
- preferences 는 깊은 병합 (전달된 항목만 변경)
- height 는 (변경 후) preferences.units.height 기준으로 해석해 cm 로 저장
- cm 기준 100 ~ 250 범위 밖이면 ValueError

"""

def update_profile(db: Session, user: User, data) -> User:
    if data.username is not None and data.username != user.username:
        if get_by_username(db, data.username) is not None:
            raise ConflictError("Username already taken")
        user.username = data.username

    if data.preferences is not None:
        user.preferences = _merge(user.preferences or default_preferences(),
                                  data.preferences.model_dump(exclude_none=True))

    if data.demographics is not None:
        changes = data.demographics.model_dump(exclude_none=True)
        if "height" in changes:
            unit = ((user.preferences or {}).get("units") or {}).get("height", "cm")
            height_cm = ft_to_cm(changes["height"]) if unit == "ft" else changes["height"]
            if height_cm < HEIGHT_MIN_CM or height_cm > HEIGHT_MAX_CM:
                raise ValueError(f"Height must be between {HEIGHT_MIN_CM} and {HEIGHT_MAX_CM} cm")
            changes["height"] = height_cm
        user.demographics = _merge(user.demographics, changes)

    user.profile_updated_at = utcnow()
    db.flush()
    return user


def user_overview(db: Session) -> dict:
    by_role = dict(db.execute(select(User.role, func.count(User.id)).group_by(User.role)).all())
    by_status = dict(db.execute(select(User.status, func.count(User.id)).group_by(User.status)).all())

    return {
        "total_users": sum(by_role.values()),
        "by_role": {r.value: int(by_role.get(r, 0)) for r in Role},
        "by_status": {s.value: int(by_status.get(s, 0)) for s in UserStatus},
    }
