"""
user.py

사용자(User), 권한(Role), 계정 상태(UserStatus) 모델 정의 파일.

인증 / 권한 / 경험 공유 / 투표 기능의 기준이 되는 핵심 모델이다.

- username / email 은 전체 사용자 기준 고유 (email 은 소문자 저장)
- status 는 pending 으로 시작하며 모더레이션(approve / reject)으로만 변경
- password_hash 는 HashedPassword 만 저장 가능 (평문은 TypeError)
- refresh_token_id 는 로그인 / 재발급 때마다 회전되는 고유 식별자

"""

import uuid
import datetime
from enum import Enum

from sqlalchemy import Boolean, DateTime, JSON, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from peptitrace.db.base import Base, utcnow
from peptitrace.db.types import PasswordHashType, str_enum
from peptitrace.core.security import HashedPassword


class Role(str, Enum):
    USER = "user"
    MODERATOR = "moderator"
    ADMIN = "admin"


class UserStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


def default_preferences() -> dict:
    return {
        "units": {"weight": "kg", "height": "cm"},
        "privacy": {
            "share_age": True,
            "share_gender": True,
            "share_weight": False,
            "share_height": False,
        },
        "notifications": {
            "email": True,
            "new_experiences": False,
            "weekly_digest": True,
        },
    }


class User(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    username: Mapped[str] = mapped_column(String(100), unique=True, index=True, nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    password_hash: Mapped[HashedPassword] = mapped_column(PasswordHashType(), nullable=False)

    role: Mapped[Role] = mapped_column(str_enum(Role, 16), nullable=False, default=Role.USER)
    status: Mapped[UserStatus] = mapped_column(
        str_enum(UserStatus, 16), nullable=False, default=UserStatus.PENDING, index=True
    )

    moderator_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    approval_date: Mapped[datetime.datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    # age / gender / weight(kg) / height(cm) / activity_level / fitness_goals / conditions / allergies
    demographics: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    preferences: Mapped[dict] = mapped_column(JSON, nullable=False, default=default_preferences)

    refresh_token_id: Mapped[str | None] = mapped_column(String(64), unique=True, nullable=True)

    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    created_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )
    last_login_at: Mapped[datetime.datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    profile_updated_at: Mapped[datetime.datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    experiences = relationship("Experience", back_populates="user", passive_deletes=True)
    votes = relationship("Vote", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)

    @validates("email")
    def _normalize_email(self, key, value: str) -> str:
        return value.strip().lower() if value else value

    @validates("password_hash")
    def _require_hashed(self, key, value):
        if not isinstance(value, HashedPassword):
            raise TypeError("User.password_hash only accepts HashedPassword")
        return value
