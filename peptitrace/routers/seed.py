"""
seed.py

초기 데이터 시딩 API (admin 전용).

- POST   /seed/peptides : 카탈로그 upsert
- DELETE /seed/peptides : 카탈로그 전체 삭제 (경험이 참조 중이면 400)
- POST   /seed/effects  : 카탈로그 기반 효과 재생성
- DELETE /seed/effects  : 효과 전체 삭제

"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from peptitrace.core.deps import get_current_admin, get_db
from peptitrace.core.errors import ok, to_http
from peptitrace.models.user import User
from peptitrace.services import seed as seed_service

router = APIRouter(prefix="/seed", tags=["seed"])


@router.post("/peptides")
def seed_peptides(db: Session = Depends(get_db), _: User = Depends(get_current_admin)):
    try:
        peptides = seed_service.seed_peptides(db)
        db.commit()
    except ValueError as e:
        db.rollback()
        raise to_http(e)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=400, detail="Peptide with this name already exists")
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Failed to seed peptides: {type(e).__name__}")

    return ok({"count": len(peptides)}, message="Peptides seeded successfully")


@router.delete("/peptides")
def clear_peptides(db: Session = Depends(get_db), _: User = Depends(get_current_admin)):
    try:
        deleted = seed_service.clear_peptides(db)
        db.commit()
    except ValueError as e:
        db.rollback()
        raise to_http(e)
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Failed to clear peptides: {type(e).__name__}")

    return ok({"deleted_count": deleted}, message="All peptides cleared successfully")


@router.post("/effects")
def seed_effects(db: Session = Depends(get_db), _: User = Depends(get_current_admin)):
    try:
        effects = seed_service.seed_effects(db)
        db.commit()
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Failed to seed effects: {type(e).__name__}")

    return ok({"count": len(effects)}, message="Effects seeded successfully")


@router.delete("/effects")
def clear_effects(db: Session = Depends(get_db), _: User = Depends(get_current_admin)):
    try:
        deleted = seed_service.clear_effects(db)
        db.commit()
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Failed to clear effects: {type(e).__name__}")

    return ok({"deleted_count": deleted}, message="All effects cleared successfully")
