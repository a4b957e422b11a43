"""
services/seed.py

카탈로그 / 효과(Effect) 초기 데이터 시딩.

- seed_peptides : 이름 기준 upsert (경험이 참조 중인 펩타이드도 안전하게 갱신)
- clear_peptides: 경험이 하나라도 참조 중이면 거부 (ValueError)
- seed_effects  : 카탈로그의 common_effects -> positive, side_effects -> negative
- clear_effects : 전체 삭제

"""

import copy
import logging

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from peptitrace.data.seed_peptides import PEPTIDE_SEED_DATA
from peptitrace.models.effect import Effect, EffectCategory, EffectFrequency, EffectType, Severity
from peptitrace.models.experience import Experience
from peptitrace.models.peptide import Peptide, PeptideCategory

logger = logging.getLogger(__name__)


def seed_peptides(db: Session, data: list[dict] | None = None) -> list[Peptide]:
    rows = data if data is not None else PEPTIDE_SEED_DATA
    existing = {p.name: p for p in db.scalars(select(Peptide)).all()}

    seeded = []
    for row in rows:
        values = copy.deepcopy(row)
        values["category"] = PeptideCategory(values["category"])
        peptide = existing.get(values["name"])
        if peptide is None:
            peptide = Peptide(**values)
            db.add(peptide)
        else:
            for field, value in values.items():
                setattr(peptide, field, value)
        seeded.append(peptide)

    db.flush()
    logger.info("seeded %d peptides", len(seeded))
    return seeded


def clear_peptides(db: Session) -> int:
    referenced = db.scalar(select(func.count(Experience.id)))
    if referenced:
        raise ValueError("Cannot clear peptides while experiences reference them")

    result = db.execute(delete(Peptide))
    db.flush()
    logger.info("cleared %d peptides", result.rowcount)
    return result.rowcount


def _effect_rows(catalog: list[dict]) -> list[dict]:
    rows: dict[str, dict] = {}
    for peptide in catalog:
        for name in peptide.get("common_effects") or []:
            rows.setdefault(name, {
                "name": name,
                "type": EffectType.POSITIVE,
                "category": EffectCategory.PHYSICAL_PERFORMANCE,
            })
        for name in peptide.get("side_effects") or []:
            rows.setdefault(name, {
                "name": name,
                "type": EffectType.NEGATIVE,
                "category": EffectCategory.SIDE_EFFECT,
            })
    return list(rows.values())


"""
효과 시딩

- 기존 효과는 모두 지우고 다시 생성
- description 은 "Effect related to <name>"

"""

def seed_effects(db: Session, catalog: list[dict] | None = None) -> list[Effect]:
    db.execute(delete(Effect))

    effects = [
        Effect(
            name=row["name"],
            description=f"Effect related to {row['name']}",
            type=row["type"],
            category=row["category"],
            severity=Severity.MILD,
            frequency=EffectFrequency.COMMON,
            is_common=True,
        )
        for row in _effect_rows(catalog if catalog is not None else PEPTIDE_SEED_DATA)
    ]
    db.add_all(effects)
    db.flush()
    logger.info("seeded %d effects", len(effects))
    return effects


def clear_effects(db: Session) -> int:
    result = db.execute(delete(Effect))
    db.flush()
    logger.info("cleared %d effects", result.rowcount)
    return result.rowcount
