"""
schemas/experience.py

경험(Experience) 제출 / 수정 / 응답 스키마.

- outcomes 는 최소 1개 항목 ("energy": 7 형태)
- story 는 최대 1000자
- website 는 봇 차단용 허니팟 필드 (값이 있으면 라우터에서 400)

"""

import uuid
from datetime import datetime
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from peptitrace.models.experience import (
    STORY_MAX_LENGTH,
    Frequency,
    Lifecycle,
    OnsetTimeline,
    RouteOfAdministration,
)


class ExperienceDemographics(BaseModel):
    age_range: Optional[Literal["18-25", "25-30", "30-35", "35-40", "40-45", "45-50", "50+"]] = None
    biological_sex: Optional[Literal["male", "female", "prefer-not-to-say"]] = None
    activity_level: Optional[Literal["sedentary", "moderate", "active", "athletic"]] = None


class Sourcing(BaseModel):
    vendor_url: Optional[str] = None
    batch_id: Optional[str] = None
    purity_percentage: Optional[float] = Field(default=None, ge=0, le=100)
    volume_ml: Optional[float] = Field(default=None, ge=0)


class Vendor(BaseModel):
    name: Optional[str] = None
    quantity: Optional[str] = None
    batch_id: Optional[str] = None

    @field_validator("name", "quantity", "batch_id")
    @classmethod
    def _strip(cls, v):
        return v.strip() if isinstance(v, str) else v


def _check_outcomes(value):
    if value is not None and len(value) == 0:
        raise ValueError("Outcomes must be a non-empty mapping")
    return value


class ExperienceCreate(BaseModel):
    peptide_id: uuid.UUID
    dosage: str = Field(min_length=1, max_length=120)
    frequency: Frequency
    duration: int = Field(ge=1)
    route_of_administration: RouteOfAdministration
    primary_purpose: List[str] = []
    demographics: Optional[ExperienceDemographics] = None
    outcomes: Dict[str, float]
    effects: List[str] = []
    timeline: OnsetTimeline
    story: Optional[str] = Field(default=None, max_length=STORY_MAX_LENGTH)
    stack: List[str] = []
    sourcing: Optional[Sourcing] = None
    vendor: Optional[Vendor] = None

    website: Optional[str] = None

    @field_validator("outcomes")
    @classmethod
    def _outcomes_not_empty(cls, v):
        return _check_outcomes(v)


class ExperienceUpdate(BaseModel):
    peptide_id: Optional[uuid.UUID] = None
    dosage: Optional[str] = Field(default=None, min_length=1, max_length=120)
    frequency: Optional[Frequency] = None
    duration: Optional[int] = Field(default=None, ge=1)
    route_of_administration: Optional[RouteOfAdministration] = None
    primary_purpose: Optional[List[str]] = None
    demographics: Optional[ExperienceDemographics] = None
    outcomes: Optional[Dict[str, float]] = None
    effects: Optional[List[str]] = None
    timeline: Optional[OnsetTimeline] = None
    story: Optional[str] = Field(default=None, max_length=STORY_MAX_LENGTH)
    stack: Optional[List[str]] = None
    sourcing: Optional[Sourcing] = None
    vendor: Optional[Vendor] = None

    @field_validator("outcomes")
    @classmethod
    def _outcomes_not_empty(cls, v):
        return _check_outcomes(v)


class ExperienceOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user_id: Optional[uuid.UUID] = None
    peptide_id: uuid.UUID
    peptide_name: str
    tracking_id: str
    dosage: str
    frequency: Frequency
    duration: int
    route_of_administration: RouteOfAdministration
    primary_purpose: List[str] = []
    demographics: dict = {}
    outcomes: Dict[str, float]
    effects: List[str] = []
    timeline: OnsetTimeline
    story: Optional[str] = None
    stack: List[str] = []
    sourcing: Optional[dict] = None
    vendor: Optional[dict] = None
    helpful_votes: int
    total_votes: int
    lifecycle: Lifecycle
    is_active: bool
    average_rating: float
    created_at: datetime
    updated_at: datetime


class ExperiencePublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    peptide_name: str
    created_at: datetime
    story: Optional[str] = None
    dosage: str
    outcomes: Dict[str, float]
