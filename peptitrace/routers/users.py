"""
users.py

사용자(User) 프로필 / 모더레이션 API 모음.

주요 기능:
- 본인 프로필 조회 / 수정 (demographics, preferences)
- 토큰 없는 간편 가입 (승인 대기 안내 메시지만 반환)
- 승인 대기 목록 / 승인 / 거절 (moderator 이상)
- 사용자 단건 조회 / 수정(본인만) / 삭제(admin)
- 역할 / 상태별 사용자 수 집계

설계 원칙:
- 권한은 require_permission(권한 테이블) 또는 역할 게이트로만 판단
- 수정(update)은 역할과 무관하게 본인 id 만 허용
- 상태(status) 변경은 approve / reject 로만 가능

관련 파일:
- peptitrace.services.user  : 가입 / 승인 / 프로필 로직
- peptitrace.schemas.user   : 요청 / 응답 스키마
- peptitrace.core.deps      : 권한 / 역할 의존성

"""

import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from peptitrace.core.deps import (
    get_current_moderator,
    get_current_user,
    get_db,
    require_permission,
)
from peptitrace.core.errors import ok, to_http
from peptitrace.core.permissions import Operation, Resource
from peptitrace.core.security import PlaintextPassword
from peptitrace.models.user import Role, User
from peptitrace.schemas.auth import RegisterRequest
from peptitrace.schemas.user import ProfileUpdateRequest, RejectRequest, user_out
from peptitrace.services import user as user_service

router = APIRouter(prefix="/users", tags=["users"])


def _dump(user: User, moderation: bool = False) -> dict:
    return user_out(user, moderation=moderation).model_dump(mode="json")


def _is_staff(user: User) -> bool:
    return user.role in (Role.MODERATOR, Role.ADMIN)


"""
간편 가입 API

- username 은 이메일 로컬파트 + 랜덤 6자리 접미사
- 토큰은 발급하지 않고 승인 대기 안내만 반환

"""

@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(data: RegisterRequest, db: Session = Depends(get_db)):
    try:
        user = user_service.register_user(
            db,
            email=data.email,
            password=PlaintextPassword(data.password),
            username=data.username,
            always_suffix=True,
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

    return ok(
        {"id": str(user.id), "email": user.email, "username": user.username, "status": user.status.value},
        message="Registration successful. Your account is pending approval.",
    )


@router.get("/me")
def get_me(current_user: User = Depends(get_current_user)):
    return ok(_dump(current_user))


"""
본인 프로필 수정 API

- username / demographics / preferences 부분 수정
- height 는 preferences.units.height 가 ft 이면 ft 로 입력받아 cm 로 저장

"""

@router.put("/me")
def update_me(
    data: ProfileUpdateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        user = user_service.update_profile(db, current_user, data)
        db.commit()
        db.refresh(user)
    except ValueError as e:
        db.rollback()
        raise to_http(e)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=400, detail="Username already taken")
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")

    return ok(_dump(user), message="Profile updated successfully")


@router.get("/pending")
def list_pending(
    db: Session = Depends(get_db),
    _: User = Depends(require_permission(Operation.MODERATE, Resource.USER)),
):
    return ok([_dump(u, moderation=True) for u in user_service.list_pending(db)])


@router.get("/analytics/overview")
def overview(
    db: Session = Depends(get_db),
    _: User = Depends(require_permission(Operation.READ, Resource.ANALYTICS)),
):
    return ok(user_service.user_overview(db))


"""
승인 API

- moderator 이상만 가능
- status=approved, approval_date 기록

"""

@router.post("/{id}/approve")
def approve(
    id: uuid.UUID,
    db: Session = Depends(get_db),
    moderator: User = Depends(get_current_moderator),
):
    try:
        user = user_service.approve_user(db, id, moderator_id=moderator.id)
        db.commit()
        db.refresh(user)
    except ValueError as e:
        db.rollback()
        raise to_http(e)
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")

    return ok(_dump(user, moderation=True), message="User approved successfully")


"""
거절 API

- moderator 이상만 가능
- status=rejected, 모더레이터 메모(notes) 저장

"""

@router.post("/{id}/reject")
def reject(
    id: uuid.UUID,
    data: RejectRequest | None = None,
    db: Session = Depends(get_db),
    moderator: User = Depends(get_current_moderator),
):
    try:
        user = user_service.reject_user(
            db, id, moderator_id=moderator.id, notes=data.notes if data else None
        )
        db.commit()
        db.refresh(user)
    except ValueError as e:
        db.rollback()
        raise to_http(e)
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")

    return ok(_dump(user, moderation=True), message="User rejected")


@router.get("/{id}")
def get_user(
    id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission(Operation.READ, Resource.USER)),
):
    try:
        user = user_service.get_user(db, id)
    except ValueError as e:
        raise to_http(e)
    return ok(_dump(user, moderation=_is_staff(current_user)))


@router.put("/{id}")
def update_user(
    id: uuid.UUID,
    data: ProfileUpdateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission(Operation.UPDATE, Resource.USER)),
):
    try:
        user = user_service.update_profile(db, user_service.get_user(db, id), data)
        db.commit()
        db.refresh(user)
    except ValueError as e:
        db.rollback()
        raise to_http(e)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=400, detail="Username already taken")
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")

    return ok(_dump(user), message="User updated successfully")


"""
사용자 삭제 API (admin)

- Hard Delete
- 본인 계정은 삭제 불가
- 작성한 경험은 익명(user_id=NULL)으로 남고 투표는 함께 삭제

"""

@router.delete("/{id}")
def delete_user(
    id: uuid.UUID,
    db: Session = Depends(get_db),
    admin: User = Depends(require_permission(Operation.DELETE, Resource.USER)),
):
    if id == admin.id:
        raise HTTPException(status_code=400, detail="Cannot delete your own account")

    try:
        user_service.delete_user(db, id)
        db.commit()
    except ValueError as e:
        db.rollback()
        raise to_http(e)
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")

    return ok(message="User deleted successfully")
