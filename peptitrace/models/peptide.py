"""
peptide.py

펩타이드 카탈로그(Peptide) 모델.

- name 고유
- peptide_sequence 는 아미노산 토큰 문법(PEPTIDE_SEQUENCE_RE)을 만족해야 함
- category 는 PeptideCategory 닫힌 집합
- dosage_ranges : {"low", "medium", "high"}
- timeline      : {"onset", "peak", "duration"}

"""

import re
import uuid
import datetime
from enum import Enum

from sqlalchemy import DateTime, JSON, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from peptitrace.db.base import Base, utcnow
from peptitrace.db.types import str_enum


# 한 글자 / 세 글자 아미노산 코드, 말단기, 수식(괄호/대괄호/점) 허용
PEPTIDE_SEQUENCE_RE = re.compile(r"^[A-Za-z0-9\-\[\]\(\)\.]+(?:-[A-Za-z0-9\-\[\]\(\)\.]+)*$")


class PeptideCategory(str, Enum):
    HEALING_RECOVERY = "Healing & Recovery"
    GROWTH_HORMONE = "Growth Hormone"
    ANTI_AGING = "Anti-Aging"
    PERFORMANCE = "Performance & Enhancement"
    COGNITIVE = "Cognitive Enhancement"
    GLP1 = "GLP-1 Agonist"
    GLP1_GIP = "GLP-1/GIP Agonist"
    GLP1_GIP_GLUCAGON = "GLP-1/GIP/Glucagon Agonist"
    IMMUNE = "Immune Support"
    FAT_LOSS = "Fat Loss"
    METABOLIC = "Metabolic Control"
    WEIGHT = "Weight Management"
    GLYCEMIC = "Glycemic Control"
    APPETITE = "Appetite Regulation"


def is_valid_sequence(value: str) -> bool:
    return bool(value) and PEPTIDE_SEQUENCE_RE.match(value) is not None


class Peptide(Base):
    __tablename__ = "peptides"

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    name: Mapped[str] = mapped_column(String(120), unique=True, index=True, nullable=False)
    peptide_sequence: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[PeptideCategory] = mapped_column(str_enum(PeptideCategory, 64), nullable=False, index=True)

    description: Mapped[str] = mapped_column(Text, nullable=False)
    detailed_description: Mapped[str] = mapped_column(Text, nullable=False)
    mechanism: Mapped[str] = mapped_column(Text, nullable=False)

    common_dosage: Mapped[str] = mapped_column(String(120), nullable=False)
    common_frequency: Mapped[str] = mapped_column(String(120), nullable=False)

    common_effects: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    side_effects: Mapped[list] = mapped_column(JSON, nullable=False, default=list)

    dosage_ranges: Mapped[dict] = mapped_column(JSON, nullable=False)
    timeline: Mapped[dict] = mapped_column(JSON, nullable=False)

    created_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    experiences = relationship("Experience", back_populates="peptide")

    @validates("name")
    def _strip_name(self, key, value: str) -> str:
        return value.strip() if value else value

    @validates("peptide_sequence")
    def _check_sequence(self, key, value: str) -> str:
        if not is_valid_sequence(value):
            raise ValueError(f"{value} is not a valid peptide sequence!")
        return value
