import uuid
import datetime
from enum import Enum

from sqlalchemy import DateTime, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from peptitrace.db.base import Base, utcnow
from peptitrace.db.types import str_enum


class VoteType(str, Enum):
    HELPFUL = "helpful"
    NOT_HELPFUL = "not-helpful"
    DETAILED = "detailed"
    CONCERNING = "concerning"


class Vote(Base):
    """경험(Experience)에 대한 사용자 1인의 평가.

    (user_id, experience_id) 쌍 당 정확히 1개. 재투표는 vote_type 을 덮어쓴다.
    """

    __tablename__ = "votes"
    __table_args__ = (
        UniqueConstraint("user_id", "experience_id", name="uq_votes_user_experience"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    experience_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("experiences.id", ondelete="CASCADE"), nullable=False, index=True
    )

    vote_type: Mapped[VoteType] = mapped_column(str_enum(VoteType, 16), nullable=False)

    created_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    user = relationship("User", back_populates="votes")
    experience = relationship("Experience", back_populates="votes")
