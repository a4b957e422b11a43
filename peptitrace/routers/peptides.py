"""
peptides.py

펩타이드 카탈로그 API 모음.

주요 기능:
- 홈 화면용 상위 6개 요약 (공개)
- 전체 목록 + 통계 / 단건 + 통계 (공개)
- 생성 / 수정 (moderator 이상), 삭제 (admin)
- 검색 (인증 필요)
- 인기 / 급상승 분석 (analytics read 권한)

관련 파일:
- peptitrace.services.peptide : 카탈로그 / 통계 로직
- peptitrace.schemas.peptide  : 요청 / 응답 스키마

"""

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from peptitrace.core.deps import get_db, require_permission
from peptitrace.core.errors import ok, to_http
from peptitrace.core.permissions import Operation, Resource
from peptitrace.models.user import User
from peptitrace.schemas.peptide import (
    PeptideCreate,
    PeptideOut,
    PeptidePublic,
    PeptideUpdate,
    PeptideWithStats,
)
from peptitrace.services import peptide as peptide_service

router = APIRouter(prefix="/peptides", tags=["peptides"])


def _dump(peptide) -> dict:
    return PeptideOut.model_validate(peptide).model_dump(mode="json")


def _dump_stats(row: dict) -> dict:
    out = PeptideWithStats.model_validate(row["peptide"]).model_copy(update={
        "total_experiences": row["total_experiences"],
        "average_rating": row["average_rating"],
        "popularity": row["popularity"],
    })
    return out.model_dump(mode="json")


@router.get("/public")
def list_public(db: Session = Depends(get_db)):
    rows = sorted(peptide_service.list_with_stats(db), key=lambda r: -r["popularity"])[:6]
    return ok({
        "peptides": [
            PeptidePublic(
                id=r["peptide"].id,
                name=r["peptide"].name,
                category=r["peptide"].category,
                total_experiences=r["total_experiences"],
                average_rating=r["average_rating"],
            ).model_dump(mode="json")
            for r in rows
        ],
    })


@router.get("")
def list_peptides(db: Session = Depends(get_db)):
    return ok({"peptides": [_dump_stats(r) for r in peptide_service.list_with_stats(db)]})


@router.get("/analytics/popular")
def popular(
    limit: int = Query(default=10, ge=1, le=100),
    db: Session = Depends(get_db),
    _: User = Depends(require_permission(Operation.READ, Resource.ANALYTICS)),
):
    return ok({"popular_peptides": [_dump_stats(r) for r in peptide_service.popular_peptides(db, limit)]})


@router.get("/analytics/trending")
def trending(
    limit: int = Query(default=10, ge=1, le=100),
    db: Session = Depends(get_db),
    _: User = Depends(require_permission(Operation.READ, Resource.ANALYTICS)),
):
    rows = peptide_service.trending_peptides(db, limit)
    return ok({
        "trending_peptides": [
            {**r, "peptide_id": str(r["peptide_id"]), "category": r["category"].value} for r in rows
        ],
    })


"""
펩타이드 검색 API

- name / description / category / sequence 대상 부분 일치
- 대소문자 무시, 이름순

"""

@router.get("/search/{query}")
def search(
    query: str,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission(Operation.READ, Resource.PEPTIDE)),
):
    peptides = peptide_service.search_peptides(db, query)
    return ok({"peptides": [_dump(p) for p in peptides], "total": len(peptides)})


@router.get("/{id}")
def get_peptide(id: uuid.UUID, db: Session = Depends(get_db)):
    try:
        row = peptide_service.get_with_stats(db, id)
    except ValueError as e:
        raise to_http(e)
    return ok(_dump_stats(row))


@router.post("", status_code=status.HTTP_201_CREATED)
def create_peptide(
    data: PeptideCreate,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission(Operation.CREATE, Resource.PEPTIDE)),
):
    try:
        peptide = peptide_service.create_peptide(db, data)
        db.commit()
        db.refresh(peptide)
    except ValueError as e:
        db.rollback()
        raise to_http(e)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=400, detail="Peptide with this name already exists")
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")

    return ok(_dump(peptide), message="Peptide created successfully")


@router.put("/{id}")
def update_peptide(
    id: uuid.UUID,
    data: PeptideUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission(Operation.UPDATE, Resource.PEPTIDE)),
):
    try:
        peptide = peptide_service.update_peptide(db, id, data)
        db.commit()
        db.refresh(peptide)
    except ValueError as e:
        db.rollback()
        raise to_http(e)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=400, detail="Peptide with this name already exists")
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")

    return ok(_dump(peptide), message="Peptide updated successfully")


"""
펩타이드 삭제 API (admin)

- 경험이 참조 중이면 400 (카탈로그 무결성 유지)

"""

@router.delete("/{id}")
def delete_peptide(
    id: uuid.UUID,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission(Operation.DELETE, Resource.PEPTIDE)),
):
    try:
        peptide_service.delete_peptide(db, id)
        db.commit()
    except ValueError as e:
        db.rollback()
        raise to_http(e)
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")

    return ok(message="Peptide deleted successfully")
