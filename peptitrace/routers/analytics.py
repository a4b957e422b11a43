"""
analytics.py

경험 데이터 분석 API 모음.

주요 기능:
- 사용 현황 + 펩타이드별 효과
- 기간별 추세 / 펩타이드 비교 / 월별 추세 / 대시보드
- 데이터 내보내기 (json / csv / xlsx)
- 홈 화면용 공개 통계 (인증 불필요)

설계 원칙:
- 공개 통계를 제외한 모든 API 는 analytics read 권한 (moderator / admin)
- 내보내기는 analytics export 권한
- CSV 는 BOM + UTF-8 스트리밍, XLSX 는 openpyxl 로 생성

관련 파일:
- peptitrace.services.analytics : 집계 / 직렬화

"""

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from starlette.responses import Response, StreamingResponse

from peptitrace.core.deps import get_db, require_permission
from peptitrace.core.errors import ok, to_http
from peptitrace.core.permissions import Operation, Resource
from peptitrace.db.base import utcnow
from peptitrace.models.user import User
from peptitrace.services import analytics as analytics_service

router = APIRouter(prefix="/analytics", tags=["analytics"])

read_analytics = require_permission(Operation.READ, Resource.ANALYTICS)
export_analytics = require_permission(Operation.EXPORT, Resource.ANALYTICS)


@router.get("")
def overview(db: Session = Depends(get_db), _: User = Depends(read_analytics)):
    usage = analytics_service.usage_analytics(db)
    return ok({**usage, "effectiveness_data": analytics_service.peptide_effectiveness(db)})


@router.get("/public")
def public(db: Session = Depends(get_db)):
    return ok(analytics_service.public_summary(db))


@router.get("/peptide-effectiveness")
def peptide_effectiveness(db: Session = Depends(get_db), _: User = Depends(read_analytics)):
    return ok(analytics_service.peptide_effectiveness(db))


@router.get("/peptide-trends")
def peptide_trends(
    period: str = Query(default="monthly"),
    limit: int = Query(default=12, ge=1, le=365),
    db: Session = Depends(get_db),
    _: User = Depends(read_analytics),
):
    try:
        data = analytics_service.peptide_trends(db, period=period, limit=limit)
    except ValueError as e:
        raise to_http(e)
    return ok(data)


"""
펩타이드 비교 API

- ids 쿼리: 콤마 구분 UUID 목록 (예: ?ids=a,b)
- 비어 있으면 400 "Peptide IDs are required"

"""

@router.get("/peptide-comparison")
def peptide_comparison(
    ids: str | None = Query(default=None),
    db: Session = Depends(get_db),
    _: User = Depends(read_analytics),
):
    raw = [part.strip() for part in (ids or "").split(",") if part.strip()]
    if not raw:
        raise HTTPException(status_code=400, detail="Peptide IDs are required")

    try:
        peptide_ids = [uuid.UUID(part) for part in raw]
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid peptide id")

    return ok(analytics_service.peptide_comparison(db, peptide_ids))


@router.get("/trends")
def trends(db: Session = Depends(get_db), _: User = Depends(read_analytics)):
    return ok(analytics_service.monthly_trends(db))


@router.get("/dashboard")
def dashboard(db: Session = Depends(get_db), _: User = Depends(read_analytics)):
    return ok(analytics_service.dashboard(db))


"""
데이터 내보내기 API

- format: json(기본) / csv / xlsx
- type  : all(기본) / experiences / peptides
- csv / xlsx 는 파일 다운로드 응답

"""

@router.get("/export")
def export(
    format: str = Query(default="json"),
    type: str = Query(default="all"),
    db: Session = Depends(get_db),
    _: User = Depends(export_analytics),
):
    if format not in analytics_service.EXPORT_FORMATS:
        raise HTTPException(status_code=400, detail="format must be one of json, csv, xlsx")

    try:
        tables = analytics_service.export_tables(db, type)
    except ValueError as e:
        raise to_http(e)

    stamp = utcnow().strftime("%Y%m%d")
    filename = f"peptitrace_{type}_{stamp}.{format}"
    headers = {"Content-Disposition": f'attachment; filename="{filename}"'}

    if format == "csv":
        return StreamingResponse(
            analytics_service.iter_csv(tables),
            media_type="text/csv; charset=utf-8",
            headers=headers,
        )

    if format == "xlsx":
        return Response(
            content=analytics_service.build_xlsx(tables),
            media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            headers=headers,
        )

    return ok(analytics_service.export_json(tables))
