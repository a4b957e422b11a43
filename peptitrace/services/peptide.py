"""
services/peptide.py

펩타이드 카탈로그 로직.

주요 기능:
- 카탈로그 조회 + 경험 통계(총 경험 수 / 평균 평점 / 인기도)
- 생성 / 수정 / 삭제 / 검색
- 인기(popular) / 급상승(trending) 목록

인기도 점수 (0 ~ 100):
- 경험 수     0.4 x min(count / 10, 1)
- 평균 평점   0.4 x rating / 10
- 최근성      0.2 x max(0, 1 - 마지막 경험 경과 시간 / 30일)

설계 원칙:
- 통계는 활성(ACTIVE) 경험만 대상으로 한다
- 경험이 참조 중인 펩타이드는 삭제하지 않는다 (ValueError)

"""

import logging
import uuid
from datetime import datetime, timedelta

from sqlalchemy import String, cast, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from peptitrace.core.errors import ConflictError, NotFoundError
from peptitrace.db.base import as_utc, utcnow
from peptitrace.models.experience import Experience, Lifecycle
from peptitrace.models.peptide import Peptide

logger = logging.getLogger(__name__)

POPULARITY_EXPERIENCE_CAP = 10
POPULARITY_DECAY = timedelta(days=30)
TRENDING_WINDOW = timedelta(days=30)


def popularity_score(total: int, rating: float, last_at: datetime | None, now: datetime | None = None) -> int:
    now = now or utcnow()
    experience_score = min(total / POPULARITY_EXPERIENCE_CAP, 1) * 0.4
    rating_score = (rating / 10) * 0.4
    recency_score = 0.0
    if last_at is not None:
        age = now - as_utc(last_at)
        recency_score = max(0.0, 1 - age / POPULARITY_DECAY) * 0.2
    return round((experience_score + rating_score + recency_score) * 100)


def _collect_stats(db: Session, since: datetime | None = None) -> dict:
    query = select(Experience.peptide_id, Experience.outcomes, Experience.created_at).where(
        Experience.lifecycle == Lifecycle.ACTIVE
    )
    if since is not None:
        query = query.where(Experience.created_at >= since)

    buckets: dict[uuid.UUID, dict] = {}
    for peptide_id, outcomes, created_at in db.execute(query):
        bucket = buckets.setdefault(peptide_id, {"count": 0, "ratings": [], "last_at": None})
        bucket["count"] += 1
        values = [v for v in (outcomes or {}).values() if isinstance(v, (int, float))]
        if values:
            bucket["ratings"].append(sum(values) / len(values))
        created_at = as_utc(created_at)
        if bucket["last_at"] is None or created_at > bucket["last_at"]:
            bucket["last_at"] = created_at
    return buckets


def _stats_for(bucket: dict | None) -> tuple[int, float, datetime | None]:
    if not bucket:
        return 0, 0, None
    ratings = bucket["ratings"]
    rating = round(sum(ratings) / len(ratings), 1) if ratings else 0
    return bucket["count"], rating, bucket["last_at"]


def _with_stats(peptide: Peptide, bucket: dict | None, now: datetime) -> dict:
    total, rating, last_at = _stats_for(bucket)
    return {
        "peptide": peptide,
        "total_experiences": total,
        "average_rating": rating,
        "popularity": popularity_score(total, rating, last_at, now),
    }


def list_with_stats(db: Session) -> list[dict]:
    now = utcnow()
    stats = _collect_stats(db)
    peptides = db.scalars(select(Peptide).order_by(Peptide.name)).all()
    return [_with_stats(p, stats.get(p.id), now) for p in peptides]


def get_peptide(db: Session, peptide_id: uuid.UUID) -> Peptide:
    peptide = db.get(Peptide, peptide_id)
    if peptide is None:
        raise NotFoundError("Peptide not found")
    return peptide


def get_with_stats(db: Session, peptide_id: uuid.UUID) -> dict:
    peptide = get_peptide(db, peptide_id)
    stats = _collect_stats(db)
    return _with_stats(peptide, stats.get(peptide.id), utcnow())


def get_by_name(db: Session, name: str) -> Peptide | None:
    return db.scalar(select(Peptide).where(Peptide.name == name.strip()))


def _json_fields(data: dict) -> dict:
    for key in ("dosage_ranges", "timeline"):
        value = data.get(key)
        if hasattr(value, "model_dump"):
            data[key] = value.model_dump()
    return data


def create_peptide(db: Session, data) -> Peptide:
    if get_by_name(db, data.name) is not None:
        raise ConflictError("Peptide with this name already exists")

    peptide = Peptide(**_json_fields(data.model_dump()))
    db.add(peptide)
    db.flush()
    logger.info("peptide created id=%s name=%s", peptide.id, peptide.name)
    return peptide


def update_peptide(db: Session, peptide_id: uuid.UUID, data) -> Peptide:
    peptide = get_peptide(db, peptide_id)
    changes = _json_fields(data.model_dump(exclude_unset=True, exclude_none=True))

    if "name" in changes and changes["name"].strip() != peptide.name:
        if get_by_name(db, changes["name"]) is not None:
            raise ConflictError("Peptide with this name already exists")

    for field, value in changes.items():
        setattr(peptide, field, value)

    # 비정규화된 이름 동기화
    if "name" in changes:
        for experience in peptide.experiences:
            experience.peptide_name = peptide.name

    db.flush()
    return peptide


def delete_peptide(db: Session, peptide_id: uuid.UUID) -> None:
    peptide = get_peptide(db, peptide_id)

    referenced = db.scalar(select(func.count(Experience.id)).where(Experience.peptide_id == peptide.id))
    if referenced:
        raise ValueError("Peptide is referenced by existing experiences and cannot be deleted")

    try:
        with db.begin_nested():
            db.delete(peptide)
            db.flush()
    except IntegrityError as e:
        raise ValueError("Peptide is referenced by existing experiences and cannot be deleted") from e
    logger.info("peptide deleted id=%s name=%s", peptide_id, peptide.name)


def search_peptides(db: Session, query: str) -> list[Peptide]:
    """name / description / category / sequence 부분 일치 (대소문자 무시)"""
    pattern = f"%{query.strip()}%"
    return list(db.scalars(
        select(Peptide)
        .where(or_(
            Peptide.name.ilike(pattern),
            Peptide.description.ilike(pattern),
            cast(Peptide.category, String).ilike(pattern),
            Peptide.peptide_sequence.ilike(pattern),
        ))
        .order_by(Peptide.name)
    ).all())


def popular_peptides(db: Session, limit: int = 10) -> list[dict]:
    ranked = sorted(list_with_stats(db), key=lambda s: (-s["popularity"], s["peptide"].name))
    return ranked[:limit]


def trending_peptides(db: Session, limit: int = 10) -> list[dict]:
    """최근 30일 경험 수 기준 상위 펩타이드"""
    now = utcnow()
    stats = _collect_stats(db, since=now - TRENDING_WINDOW)
    if not stats:
        return []

    peptides = {p.id: p for p in db.scalars(select(Peptide).where(Peptide.id.in_(stats.keys()))).all()}
    rows = []
    for peptide_id, bucket in stats.items():
        peptide = peptides.get(peptide_id)
        if peptide is None:
            continue
        total, rating, _ = _stats_for(bucket)
        rows.append({
            "peptide_id": peptide.id,
            "name": peptide.name,
            "category": peptide.category,
            "recent_experiences": total,
            "average_rating": rating,
        })
    rows.sort(key=lambda r: (-r["recent_experiences"], r["name"]))
    return rows[:limit]
