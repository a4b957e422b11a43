import uuid

from pydantic import BaseModel, ConfigDict

from peptitrace.models.effect import EffectCategory, EffectFrequency, EffectType, Severity


class EffectOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    description: str
    type: EffectType
    category: EffectCategory
    severity: Severity
    frequency: EffectFrequency
    is_common: bool
