"""
experiences.py

경험(Experience) 공유 / 조회 / 투표 API 모음.

주요 기능:
- 홈 화면용 최신 경험 3건 (공개)
- 펩타이드별 경험 목록 (공개)
- 경험 목록(페이지네이션) / tracking id 조회 / 사용자별 / 단건 조회
- 경험 등록 (권한 + 24시간 제출 한도 + 허니팟)
- 경험 수정 / 철회 (본인만)
- 투표 조회 / 등록(upsert) / 본인 투표 조회 / 본인 투표 철회

설계 원칙:
- 철회(RETRACTED)된 경험은 어떤 조회 경로에서도 보이지 않는다
- 수정 / 철회는 역할과 무관하게 소유자 본인만 가능
- 투표는 인증된 사용자면 가능, (사용자, 경험) 당 1개

관련 파일:
- peptitrace.services.experience : 경험 로직
- peptitrace.services.vote       : 투표 upsert / 카운터
- peptitrace.core.deps           : 권한 / 제출 한도 의존성

"""

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from peptitrace.core.deps import (
    enforce_submission_rate_limit,
    get_current_user,
    get_db,
    require_permission,
)
from peptitrace.core.errors import ok, to_http
from peptitrace.core.permissions import Operation, Resource
from peptitrace.models.user import User
from peptitrace.schemas.experience import (
    ExperienceCreate,
    ExperienceOut,
    ExperiencePublic,
    ExperienceUpdate,
)
from peptitrace.schemas.vote import VoteOut, VoteRequest
from peptitrace.services import experience as experience_service
from peptitrace.services import vote as vote_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/experiences", tags=["experiences"])


def _dump(experience) -> dict:
    return ExperienceOut.model_validate(experience).model_dump(mode="json")


def _dump_vote(vote) -> dict:
    return VoteOut.model_validate(vote).model_dump(mode="json")


@router.get("/home/public")
def home_public(db: Session = Depends(get_db)):
    items = experience_service.latest_public(db, limit=3)
    return ok({
        "experiences": [ExperiencePublic.model_validate(e).model_dump(mode="json") for e in items],
    })


@router.get("/peptide/{peptide_id}")
def list_for_peptide(peptide_id: uuid.UUID, db: Session = Depends(get_db)):
    items = experience_service.list_by_peptide(db, peptide_id)
    return ok({"experiences": [_dump(e) for e in items], "total": len(items)})


"""
경험 목록 API

- limit 기본 50, offset 기본 0
- 최신순, 활성 경험만
- peptide_id 로 필터 가능

"""

@router.get("")
def list_experiences(
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
    peptide_id: uuid.UUID | None = Query(default=None),
    db: Session = Depends(get_db),
    _: User = Depends(require_permission(Operation.READ, Resource.EXPERIENCE)),
):
    items, total = experience_service.list_experiences(db, limit=limit, offset=offset, peptide_id=peptide_id)
    return ok({
        "experiences": [_dump(e) for e in items],
        "total": total,
        "limit": limit,
        "offset": offset,
    })


@router.get("/tracking/{tracking_id}")
def get_by_tracking_id(
    tracking_id: str,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission(Operation.READ, Resource.EXPERIENCE)),
):
    try:
        experience = experience_service.get_by_tracking_id(db, tracking_id)
    except ValueError as e:
        raise to_http(e)
    return ok(_dump(experience))


@router.get("/user/{user_id}")
def list_for_user(
    user_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission(Operation.READ, Resource.EXPERIENCE)),
):
    items = experience_service.list_by_user(db, user_id)
    return ok({"experiences": [_dump(e) for e in items], "total": len(items)})


@router.get("/{id}")
def get_experience(
    id: uuid.UUID,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission(Operation.READ, Resource.EXPERIENCE)),
):
    try:
        experience = experience_service.get_experience(db, id)
    except ValueError as e:
        raise to_http(e)
    return ok(_dump(experience))


"""
경험 등록 API

- 권한 테이블(create experience) 확인 후 24시간 제출 한도 검사 (초과 시 429)
- website(허니팟) 필드에 값이 있으면 400 "Invalid submission"
- 참조 펩타이드가 없으면 404 "Peptide not found"

"""

@router.post("", status_code=status.HTTP_201_CREATED)
def create_experience(
    data: ExperienceCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission(Operation.CREATE, Resource.EXPERIENCE)),
    _: User = Depends(enforce_submission_rate_limit),
):
    if data.website:
        logger.info("submission rejected reason=honeypot user=%s", current_user.id)
        raise HTTPException(status_code=400, detail="Invalid submission")

    try:
        experience = experience_service.create_experience(db, data, user_id=current_user.id)
        db.commit()
        db.refresh(experience)
    except ValueError as e:
        db.rollback()
        raise to_http(e)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=400, detail="Tracking ID already exists")
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=str(e) or f"Database error: {type(e).__name__}")

    return ok(_dump(experience), message="Experience submitted successfully")


@router.put("/{id}")
def update_experience(
    id: uuid.UUID,
    data: ExperienceUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission(Operation.UPDATE, Resource.EXPERIENCE)),
):
    try:
        experience = experience_service.update_experience(db, id, data)
        db.commit()
        db.refresh(experience)
    except ValueError as e:
        db.rollback()
        raise to_http(e)
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=str(e) or f"Database error: {type(e).__name__}")

    return ok(_dump(experience), message="Experience updated successfully")


@router.delete("/{id}")
def retract_experience(
    id: uuid.UUID,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission(Operation.DELETE, Resource.EXPERIENCE)),
):
    try:
        experience_service.retract_experience(db, id)
        db.commit()
    except ValueError as e:
        db.rollback()
        raise to_http(e)
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")

    return ok(message="Experience deleted successfully")


@router.get("/{id}/votes")
def list_votes(
    id: uuid.UUID,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission(Operation.READ, Resource.EXPERIENCE)),
):
    try:
        votes = vote_service.list_votes(db, id)
    except ValueError as e:
        raise to_http(e)
    return ok({"votes": [_dump_vote(v) for v in votes], "total": len(votes)})


"""
투표 등록 API (upsert)

- 첫 투표는 201, 기존 투표 변경은 200
- 응답에 경험의 helpful / total 카운터 포함

"""

@router.post("/{id}/votes")
def submit_vote(
    id: uuid.UUID,
    data: VoteRequest,
    response: Response,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        vote, created = vote_service.submit_vote(
            db, user_id=current_user.id, experience_id=id, vote_type=data.vote_type
        )
        db.commit()
        db.refresh(vote)
        experience = experience_service.get_experience(db, id)
    except ValueError as e:
        db.rollback()
        raise to_http(e)
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")

    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return ok({
        "vote": _dump_vote(vote),
        "helpful_votes": experience.helpful_votes,
        "total_votes": experience.total_votes,
    }, message="Vote recorded" if created else "Vote updated")


@router.get("/{id}/votes/me")
def get_my_vote(
    id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    vote = vote_service.get_user_vote(db, current_user.id, id)
    return ok(_dump_vote(vote) if vote else None)


@router.delete("/{id}/votes/me")
def retract_my_vote(
    id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        vote_service.delete_vote(db, user_id=current_user.id, experience_id=id)
        db.commit()
    except ValueError as e:
        db.rollback()
        raise to_http(e)
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")

    return ok(message="Vote removed")
