import uuid
import datetime
from enum import Enum

from sqlalchemy import Boolean, DateTime, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from peptitrace.db.base import Base, utcnow
from peptitrace.db.types import str_enum


class EffectType(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"


class EffectCategory(str, Enum):
    PHYSICAL_PERFORMANCE = "Physical Performance"
    RECOVERY = "Recovery"
    MENTAL_COGNITIVE = "Mental/Cognitive"
    APPEARANCE = "Appearance"
    SLEEP = "Sleep"
    METABOLIC = "Metabolic"
    SIDE_EFFECT = "Side Effect"


class Severity(str, Enum):
    MILD = "mild"
    MODERATE = "moderate"
    SEVERE = "severe"


class EffectFrequency(str, Enum):
    RARE = "rare"
    UNCOMMON = "uncommon"
    COMMON = "common"
    VERY_COMMON = "very_common"


"""
생리적 효과(Effect) 참조 데이터

- 펩타이드 카탈로그의 common_effects / side_effects 로부터 시딩
- 그 외에는 변경되지 않는 정적 데이터

"""

class Effect(Base):
    __tablename__ = "effects"
    __table_args__ = (
        Index("ix_effects_type_category", "type", "category"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    name: Mapped[str] = mapped_column(String(200), unique=True, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)

    type: Mapped[EffectType] = mapped_column(str_enum(EffectType, 16), nullable=False, index=True)
    category: Mapped[EffectCategory] = mapped_column(str_enum(EffectCategory, 32), nullable=False)
    severity: Mapped[Severity] = mapped_column(str_enum(Severity, 16), nullable=False, default=Severity.MILD)
    frequency: Mapped[EffectFrequency] = mapped_column(
        str_enum(EffectFrequency, 16), nullable=False, default=EffectFrequency.COMMON
    )
    is_common: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    created_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )
