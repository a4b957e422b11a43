"""
services/vote.py

경험(Experience) 투표 로직.

- (user, experience) 쌍 당 투표 1개: 재투표는 vote_type 을 덮어씀 (upsert)
- 동시 요청으로 INSERT 가 고유 제약에 걸리면 기존 레코드를 다시 읽어 갱신
- helpful_votes / total_votes 카운터는 투표 생성 / 변경 / 삭제에 맞춰 조정

"""

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from peptitrace.core.errors import NotFoundError
from peptitrace.models.experience import Experience, Lifecycle
from peptitrace.models.vote import Vote, VoteType

logger = logging.getLogger(__name__)


def _get_target(db: Session, experience_id: uuid.UUID) -> Experience:
    experience = db.scalar(
        select(Experience).where(Experience.id == experience_id, Experience.lifecycle == Lifecycle.ACTIVE)
    )
    if experience is None:
        raise NotFoundError("Experience not found")
    return experience


def get_user_vote(db: Session, user_id: uuid.UUID, experience_id: uuid.UUID) -> Vote | None:
    return db.scalar(
        select(Vote).where(Vote.user_id == user_id, Vote.experience_id == experience_id)
    )


def list_votes(db: Session, experience_id: uuid.UUID) -> list[Vote]:
    _get_target(db, experience_id)
    return list(db.scalars(
        select(Vote).where(Vote.experience_id == experience_id).order_by(Vote.created_at)
    ).all())


def _apply_counters(experience: Experience, before: VoteType | None, after: VoteType | None) -> None:
    if before is None and after is not None:
        experience.total_votes += 1
    elif before is not None and after is None:
        experience.total_votes = max(0, experience.total_votes - 1)

    if before == VoteType.HELPFUL and after != VoteType.HELPFUL:
        experience.helpful_votes = max(0, experience.helpful_votes - 1)
    elif before != VoteType.HELPFUL and after == VoteType.HELPFUL:
        experience.helpful_votes += 1


"""
투표 등록 / 변경 (upsert)

- 기존 투표가 있으면 종류만 변경 (레코드 수 불변)
- 없으면 savepoint 안에서 INSERT, 고유 제약 충돌 시 기존 레코드 갱신으로 전환
- 반환값: (vote, created 여부)

"""

def submit_vote(db: Session, *, user_id: uuid.UUID, experience_id: uuid.UUID,
                vote_type: VoteType) -> tuple[Vote, bool]:
    experience = _get_target(db, experience_id)
    vote_type = VoteType(vote_type)

    existing = get_user_vote(db, user_id, experience_id)
    if existing is None:
        vote = Vote(user_id=user_id, experience_id=experience_id, vote_type=vote_type)
        try:
            with db.begin_nested():
                db.add(vote)
                db.flush()
        except IntegrityError:
            logger.info("vote insert raced, updating existing user=%s experience=%s", user_id, experience_id)
            existing = get_user_vote(db, user_id, experience_id)
            if existing is None:
                raise
        else:
            _apply_counters(experience, None, vote_type)
            db.flush()
            return vote, True

    before = existing.vote_type
    existing.vote_type = vote_type
    _apply_counters(experience, before, vote_type)
    db.flush()
    return existing, False


def delete_vote(db: Session, *, user_id: uuid.UUID, experience_id: uuid.UUID) -> None:
    experience = _get_target(db, experience_id)
    vote = get_user_vote(db, user_id, experience_id)
    if vote is None:
        raise NotFoundError("Vote not found")

    _apply_counters(experience, vote.vote_type, None)
    db.delete(vote)
    db.flush()
