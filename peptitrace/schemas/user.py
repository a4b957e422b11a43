"""
schemas/user.py

사용자 프로필 요청 / 응답 스키마.

- height 는 항상 cm 로 저장하고, preferences.units.height 가 ft 이면
  응답에서 ft 로 변환해 내려준다 (1 ft = 30.48 cm)
- 비밀번호 해시 / refresh_token_id 는 응답에 포함하지 않음

"""

import copy
import uuid
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from peptitrace.models.user import Role, UserStatus

CM_PER_FOOT = 30.48

Gender = Literal["male", "female", "other", "prefer-not-to-say"]
ActivityLevel = Literal["sedentary", "lightly-active", "moderately-active", "very-active", "extremely-active"]
FitnessGoal = Literal["weight-loss", "muscle-gain", "strength", "endurance", "general-health", "recovery", "anti-aging"]


class DemographicsIn(BaseModel):
    age: Optional[int] = Field(default=None, ge=18, le=120)
    gender: Optional[Gender] = None
    weight: Optional[float] = Field(default=None, ge=30, le=500)
    # 단위는 preferences.units.height 기준 (cm 범위 검사는 변환 후 service 에서)
    height: Optional[float] = Field(default=None, gt=0)
    activity_level: Optional[ActivityLevel] = None
    fitness_goals: Optional[List[FitnessGoal]] = None
    medical_conditions: Optional[List[str]] = None
    allergies: Optional[List[str]] = None


class UnitsIn(BaseModel):
    weight: Optional[Literal["kg", "lbs"]] = None
    height: Optional[Literal["cm", "ft"]] = None


class PrivacyIn(BaseModel):
    share_age: Optional[bool] = None
    share_gender: Optional[bool] = None
    share_weight: Optional[bool] = None
    share_height: Optional[bool] = None


class NotificationsIn(BaseModel):
    email: Optional[bool] = None
    new_experiences: Optional[bool] = None
    weekly_digest: Optional[bool] = None


class PreferencesIn(BaseModel):
    units: Optional[UnitsIn] = None
    privacy: Optional[PrivacyIn] = None
    notifications: Optional[NotificationsIn] = None


class ProfileUpdateRequest(BaseModel):
    username: Optional[str] = Field(default=None, min_length=3, max_length=100)
    demographics: Optional[DemographicsIn] = None
    preferences: Optional[PreferencesIn] = None


class RejectRequest(BaseModel):
    notes: Optional[str] = Field(default=None, max_length=2000)


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    username: str
    email: str
    role: Role
    status: UserStatus
    demographics: dict = {}
    preferences: dict = {}
    is_active: bool
    approval_date: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    last_login_at: Optional[datetime] = None
    profile_updated_at: Optional[datetime] = None


class ModerationUserOut(UserOut):
    moderator_notes: Optional[str] = None


def cm_to_ft(cm: float) -> float:
    return round(cm / CM_PER_FOOT, 2)


def ft_to_cm(ft: float) -> float:
    return round(ft * CM_PER_FOOT)


def user_out(user, moderation: bool = False) -> UserOut:
    schema = ModerationUserOut if moderation else UserOut
    out = schema.model_validate(user)

    demographics = copy.deepcopy(user.demographics or {})
    height_unit = ((user.preferences or {}).get("units") or {}).get("height")
    if height_unit == "ft" and demographics.get("height"):
        demographics["height"] = cm_to_ft(demographics["height"])
    out.demographics = demographics
    return out
