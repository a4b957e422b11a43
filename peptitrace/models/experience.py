"""
experience.py

사용자 경험(Experience) 모델 정의 파일.

사용자가 특정 펩타이드를 사용한 경험(용량, 빈도, 투여 경로, 결과 점수 등)을
자가 보고한 기록이다.

설계 원칙:
- tracking_id 는 서버에서 생성하며 전역 고유 / 한 번 지정되면 변경 불가
- outcomes 는 "결과 항목명 -> 점수" 매핑이며 최소 1개 이상
- 삭제는 Hard Delete 가 아닌 lifecycle=RETRACTED (모든 조회 경로에서 제외)
- user_id 는 nullable (익명 제출 허용), peptide_id 는 필수 참조

관련 파일:
- peptitrace.services.experience : 생성 / 조회 / 수정 / 철회
- peptitrace.services.vote       : helpful / total 투표 카운터 갱신

"""

import secrets
import uuid
import datetime
from enum import Enum

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer, JSON, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from peptitrace.db.base import Base, utcnow
from peptitrace.db.types import str_enum


STORY_MAX_LENGTH = 1000
TRACKING_PREFIX = "TRK-"


class Frequency(str, Enum):
    DAILY = "daily"
    EVERY_OTHER_DAY = "every-other-day"
    TWICE_WEEKLY = "twice-weekly"
    WEEKLY = "weekly"
    AS_NEEDED = "as-needed"


class RouteOfAdministration(str, Enum):
    SUBCUTANEOUS = "subcutaneous"
    INTRAMUSCULAR = "intramuscular"
    ORAL = "oral"
    NASAL = "nasal"


class OnsetTimeline(str, Enum):
    IMMEDIATELY = "immediately"
    ONE_TO_THREE_DAYS = "1-3-days"
    ONE_WEEK = "1-week"
    TWO_WEEKS = "2-weeks"
    THREE_TO_FOUR_WEEKS = "3-4-weeks"
    ONE_TO_TWO_MONTHS = "1-2-months"
    NO_EFFECTS = "no-effects"


class Lifecycle(str, Enum):
    ACTIVE = "active"
    RETRACTED = "retracted"


def generate_tracking_id() -> str:
    # TRK- + 12자리 hex
    return TRACKING_PREFIX + secrets.token_hex(6)


class Experience(Base):
    __tablename__ = "experiences"
    __table_args__ = (
        CheckConstraint("duration >= 1", name="ck_experiences_duration_positive"),
        CheckConstraint("helpful_votes >= 0", name="ck_experiences_helpful_votes"),
        CheckConstraint("total_votes >= 0", name="ck_experiences_total_votes"),
        Index("ix_experiences_peptide_created", "peptide_id", "created_at"),
        Index("ix_experiences_user_created", "user_id", "created_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    user_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
    )
    peptide_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("peptides.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    peptide_name: Mapped[str] = mapped_column(String(120), nullable=False)

    tracking_id: Mapped[str] = mapped_column(String(32), unique=True, index=True, nullable=False)

    dosage: Mapped[str] = mapped_column(String(120), nullable=False)
    frequency: Mapped[Frequency] = mapped_column(str_enum(Frequency), nullable=False)
    duration: Mapped[int] = mapped_column(Integer, nullable=False)
    route_of_administration: Mapped[RouteOfAdministration] = mapped_column(
        str_enum(RouteOfAdministration), nullable=False
    )
    primary_purpose: Mapped[list] = mapped_column(JSON, nullable=False, default=list)

    # age_range / biological_sex / activity_level (제출 시점 스냅샷)
    demographics: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)

    outcomes: Mapped[dict] = mapped_column(JSON, nullable=False)
    effects: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    timeline: Mapped[OnsetTimeline] = mapped_column(str_enum(OnsetTimeline), nullable=False)

    story: Mapped[str | None] = mapped_column(Text, nullable=True)
    stack: Mapped[list] = mapped_column(JSON, nullable=False, default=list)

    # vendor_url / batch_id / purity_percentage / volume_ml
    sourcing: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    # name / quantity / batch_id
    vendor: Mapped[dict | None] = mapped_column(JSON, nullable=True)

    helpful_votes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_votes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    lifecycle: Mapped[Lifecycle] = mapped_column(
        str_enum(Lifecycle, 16), nullable=False, default=Lifecycle.ACTIVE, index=True
    )

    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, index=True
    )
    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    user = relationship("User", back_populates="experiences")
    peptide = relationship("Peptide", back_populates="experiences")
    votes = relationship("Vote", back_populates="experience", cascade="all, delete-orphan", passive_deletes=True)

    @property
    def is_active(self) -> bool:
        return self.lifecycle == Lifecycle.ACTIVE

    @property
    def average_rating(self) -> float:
        values = [v for v in (self.outcomes or {}).values() if isinstance(v, (int, float))]
        if not values:
            return 0
        return round(sum(values) / len(values), 1)

    @validates("tracking_id")
    def _freeze_tracking_id(self, key, value: str) -> str:
        if self.tracking_id is not None and value != self.tracking_id:
            raise ValueError("tracking_id is immutable once assigned")
        return value

    @validates("outcomes")
    def _check_outcomes(self, key, value: dict) -> dict:
        if not isinstance(value, dict) or len(value) == 0:
            raise ValueError("Outcomes must be a non-empty mapping")
        return value

    @validates("story")
    def _check_story(self, key, value: str | None) -> str | None:
        if value is not None and len(value) > STORY_MAX_LENGTH:
            raise ValueError(f"story must be at most {STORY_MAX_LENGTH} characters")
        return value

    @validates("duration")
    def _check_duration(self, key, value: int) -> int:
        if value is None or value < 1:
            raise ValueError("duration must be a positive integer")
        return value
