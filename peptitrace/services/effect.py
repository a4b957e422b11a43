from sqlalchemy import select
from sqlalchemy.orm import Session

from peptitrace.models.effect import Effect, EffectCategory, EffectType


def list_effects(
    db: Session,
    *,
    effect_type: EffectType | None = None,
    category: EffectCategory | None = None,
) -> list[Effect]:
    query = select(Effect).order_by(Effect.name)
    if effect_type is not None:
        query = query.where(Effect.type == effect_type)
    if category is not None:
        query = query.where(Effect.category == category)
    return list(db.scalars(query).all())
