"""
services/experience.py

경험(Experience) 도메인의 비즈니스 로직 모음.

제출 / 조회 / 수정 / 철회와 함께, 권한 계층이 사용하는
"최근 제출 건수" / "소유자 조회" 를 제공한다.

설계 원칙:
- 철회(RETRACTED)된 경험은 모든 조회 경로에서 제외
- tracking_id 는 서버에서 생성 (충돌 시 재생성)
- 참조 펩타이드가 없으면 NotFoundError("Peptide not found"), 아무것도 저장하지 않음
- 저장소 오류는 "Failed to ... experience: ..." 형태로 다시 발생

관련 파일:
- peptitrace.models.experience : Experience 모델
- peptitrace.core.deps         : 제출 한도 / 소유권 검사
- peptitrace.routers.experiences

"""

import logging
import uuid
from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from peptitrace.core.errors import ConflictError, NotFoundError
from peptitrace.models.experience import Experience, Lifecycle, generate_tracking_id
from peptitrace.models.peptide import Peptide

logger = logging.getLogger(__name__)

TRACKING_ID_ATTEMPTS = 5
DEFAULT_LIMIT = 50
NULLABLE_FIELDS = frozenset({"story", "sourcing", "vendor"})


def count_recent_submissions(db: Session, user_id: uuid.UUID, since: datetime) -> int:
    """since 이후 본인이 등록한 경험 수 (철회 건 포함)"""
    return int(db.scalar(
        select(func.count(Experience.id))
        .where(Experience.user_id == user_id)
        .where(Experience.created_at >= since)
    ) or 0)


def get_owner_id(db: Session, experience_id: uuid.UUID) -> uuid.UUID | None:
    return db.scalar(select(Experience.user_id).where(Experience.id == experience_id))


def _active():
    return Experience.lifecycle == Lifecycle.ACTIVE


def _new_tracking_id(db: Session) -> str:
    for _ in range(TRACKING_ID_ATTEMPTS):
        candidate = generate_tracking_id()
        taken = db.scalar(select(Experience.id).where(Experience.tracking_id == candidate))
        if taken is None:
            return candidate
    raise ConflictError("Could not allocate a unique tracking id")


def _dump(value):
    if value is None:
        return None
    if hasattr(value, "model_dump"):
        return value.model_dump(exclude_none=True)
    return value


"""
경험 등록

- 펩타이드 존재 확인 후 이름을 비정규화해 저장
- user_id 가 None 이면 익명 제출
- flush 까지만 수행 (commit 은 라우터)

"""

def create_experience(db: Session, data, *, user_id: uuid.UUID | None) -> Experience:
    peptide = db.get(Peptide, data.peptide_id)
    if peptide is None:
        raise NotFoundError("Peptide not found")

    experience = Experience(
        user_id=user_id,
        peptide_id=peptide.id,
        peptide_name=peptide.name,
        tracking_id=_new_tracking_id(db),
        dosage=data.dosage,
        frequency=data.frequency,
        duration=data.duration,
        route_of_administration=data.route_of_administration,
        primary_purpose=list(data.primary_purpose or []),
        demographics=_dump(data.demographics) or {},
        outcomes=dict(data.outcomes),
        effects=list(data.effects or []),
        timeline=data.timeline,
        story=data.story,
        stack=list(data.stack or []),
        sourcing=_dump(data.sourcing),
        vendor=_dump(data.vendor),
    )

    try:
        db.add(experience)
        db.flush()
    except SQLAlchemyError as e:
        raise RuntimeError(f"Failed to create experience: {type(e).__name__}") from e

    logger.info("experience created id=%s tracking=%s peptide=%s user=%s",
                experience.id, experience.tracking_id, peptide.name, user_id)
    return experience


def get_experience(db: Session, experience_id: uuid.UUID) -> Experience:
    experience = db.scalar(select(Experience).where(Experience.id == experience_id, _active()))
    if experience is None:
        raise NotFoundError("Experience not found")
    return experience


def get_by_tracking_id(db: Session, tracking_id: str) -> Experience:
    # 대소문자 구분, 정확히 일치
    experience = db.scalar(
        select(Experience).where(Experience.tracking_id == tracking_id, _active())
    )
    if experience is None:
        raise NotFoundError("Experience not found with this tracking ID")
    return experience


def list_experiences(
    db: Session,
    *,
    limit: int = DEFAULT_LIMIT,
    offset: int = 0,
    peptide_id: uuid.UUID | None = None,
) -> tuple[list[Experience], int]:
    conditions = [_active()]
    if peptide_id is not None:
        conditions.append(Experience.peptide_id == peptide_id)

    total = db.scalar(select(func.count(Experience.id)).where(*conditions)) or 0
    items = db.scalars(
        select(Experience)
        .where(*conditions)
        .order_by(Experience.created_at.desc())
        .limit(limit)
        .offset(offset)
    ).all()
    return list(items), int(total)


def list_by_peptide(db: Session, peptide_id: uuid.UUID) -> list[Experience]:
    return list(db.scalars(
        select(Experience)
        .where(Experience.peptide_id == peptide_id, _active())
        .order_by(Experience.created_at.desc())
    ).all())


def list_by_user(db: Session, user_id: uuid.UUID) -> list[Experience]:
    return list(db.scalars(
        select(Experience)
        .where(Experience.user_id == user_id, _active())
        .order_by(Experience.created_at.desc())
    ).all())


def latest_public(db: Session, limit: int = 3) -> list[Experience]:
    return list(db.scalars(
        select(Experience).where(_active()).order_by(Experience.created_at.desc()).limit(limit)
    ).all())


"""
경험 수정

- 전달된 필드만 반영
- peptide_id 변경 시 펩타이드 존재 확인 + peptide_name 갱신
- tracking_id / 투표 카운터 / 소유자는 변경 불가

"""

def update_experience(db: Session, experience_id: uuid.UUID, data) -> Experience:
    experience = get_experience(db, experience_id)
    changes = data.model_dump(exclude_unset=True)

    if "peptide_id" in changes and changes["peptide_id"] is not None:
        peptide = db.get(Peptide, changes.pop("peptide_id"))
        if peptide is None:
            raise NotFoundError("Peptide not found")
        experience.peptide_id = peptide.id
        experience.peptide_name = peptide.name
    else:
        changes.pop("peptide_id", None)

    for field, value in changes.items():
        # story / sourcing / vendor 만 null 로 지울 수 있음
        if value is None and field not in NULLABLE_FIELDS:
            continue
        setattr(experience, field, value)

    try:
        db.flush()
    except SQLAlchemyError as e:
        raise RuntimeError(f"Failed to update experience: {type(e).__name__}") from e
    return experience


def retract_experience(db: Session, experience_id: uuid.UUID) -> Experience:
    """Soft Delete: 레코드는 남기고 lifecycle 만 RETRACTED 로"""
    experience = get_experience(db, experience_id)
    experience.lifecycle = Lifecycle.RETRACTED
    db.flush()
    logger.info("experience retracted id=%s tracking=%s", experience.id, experience.tracking_id)
    return experience
