from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from peptitrace.core.deps import get_db
from peptitrace.core.errors import ok
from peptitrace.models.effect import EffectCategory, EffectType
from peptitrace.schemas.effect import EffectOut
from peptitrace.services import effect as effect_service

router = APIRouter(prefix="/effects", tags=["effects"])


# 공개 API: type / category 로 필터
@router.get("")
def list_effects(
    type: EffectType | None = Query(default=None),
    category: EffectCategory | None = Query(default=None),
    db: Session = Depends(get_db),
):
    effects = effect_service.list_effects(db, effect_type=type, category=category)
    return ok({"effects": [EffectOut.model_validate(e).model_dump(mode="json") for e in effects]})
