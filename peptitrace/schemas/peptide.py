import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from peptitrace.models.peptide import PeptideCategory, is_valid_sequence


class DosageRanges(BaseModel):
    low: str
    medium: str
    high: str


class PeptideTimeline(BaseModel):
    onset: str
    peak: str
    duration: str


def _check_sequence(value: Optional[str]) -> Optional[str]:
    if value is not None and not is_valid_sequence(value):
        raise ValueError(f"{value} is not a valid peptide sequence!")
    return value


class PeptideCreate(BaseModel):
    name: str = Field(min_length=1, max_length=120)
    peptide_sequence: str
    category: PeptideCategory
    description: str = Field(min_length=1)
    detailed_description: str = Field(min_length=1)
    mechanism: str = Field(min_length=1)
    common_dosage: str = Field(min_length=1)
    common_frequency: str = Field(min_length=1)
    common_effects: List[str] = []
    side_effects: List[str] = []
    dosage_ranges: DosageRanges
    timeline: PeptideTimeline

    @field_validator("peptide_sequence")
    @classmethod
    def _valid_sequence(cls, v):
        return _check_sequence(v)


class PeptideUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=120)
    peptide_sequence: Optional[str] = None
    category: Optional[PeptideCategory] = None
    description: Optional[str] = None
    detailed_description: Optional[str] = None
    mechanism: Optional[str] = None
    common_dosage: Optional[str] = None
    common_frequency: Optional[str] = None
    common_effects: Optional[List[str]] = None
    side_effects: Optional[List[str]] = None
    dosage_ranges: Optional[DosageRanges] = None
    timeline: Optional[PeptideTimeline] = None

    @field_validator("peptide_sequence")
    @classmethod
    def _valid_sequence(cls, v):
        return _check_sequence(v)


class PeptideOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    peptide_sequence: str
    category: PeptideCategory
    description: str
    detailed_description: str
    mechanism: str
    common_dosage: str
    common_frequency: str
    common_effects: List[str]
    side_effects: List[str]
    dosage_ranges: dict
    timeline: dict
    created_at: datetime
    updated_at: datetime


class PeptideWithStats(PeptideOut):
    total_experiences: int = 0
    average_rating: float = 0
    popularity: Optional[int] = None


class PeptidePublic(BaseModel):
    id: uuid.UUID
    name: str
    category: PeptideCategory
    total_experiences: int = 0
    average_rating: float = 0
