"""
services/analytics.py

경험(Experience) 데이터 집계 / 통계 / 내보내기 로직.

이 파일은 moderator / admin 대시보드와 홈 화면 공개 통계에 쓰이는
집계 결과를 만든다. 집계는 활성(ACTIVE) 경험만 대상으로 하며
outcomes 매핑의 숫자 값을 평균해 "평점" 으로 사용한다.

주요 기능:
- 사용 현황(usage) / 펩타이드별 효과(effectiveness)
- 기간별(daily / weekly / monthly) 추세와 증감률
- 펩타이드 비교 / 월별 추세
- 대시보드 묶음 / 공개 통계
- 내보내기용 행 데이터 + CSV / XLSX 직렬화

설계 원칙:
- 건수 집계는 DB 의 COUNT / GROUP BY 로, outcomes(JSON) 평균과 기간 버킷은
  방언(PostgreSQL / SQLite)에 의존하지 않도록 Python 에서 계산
- 라우터는 결과를 그대로 응답하거나 파일로 내려주기만 한다

관련 파일:
- peptitrace.routers.analytics : 분석 API
- peptitrace.routers.peptides  : popular / trending

"""

import csv
import io
import uuid
from collections import defaultdict
from datetime import datetime, timedelta
from typing import Iterable, Iterator

from openpyxl import Workbook
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from peptitrace.db.base import as_utc, utcnow
from peptitrace.models.experience import Experience, Lifecycle
from peptitrace.models.peptide import Peptide

ACTIVE_USER_WINDOW = timedelta(days=30)

PERIOD_FORMATS = {
    "daily": "%Y-%m-%d",
    "weekly": "%Y-W%U",
    "monthly": "%Y-%m",
}

EXPORT_FORMATS = ("json", "csv", "xlsx")
EXPORT_TYPES = ("all", "experiences", "peptides")

EXPERIENCE_COLUMNS = [
    "tracking_id", "peptide_name", "dosage", "frequency", "duration",
    "route_of_administration", "timeline", "average_rating", "helpful_votes",
    "total_votes", "created_at",
]
PEPTIDE_COLUMNS = ["name", "category", "peptide_sequence", "common_dosage", "common_frequency", "created_at"]


def _rating(outcomes: dict | None) -> float | None:
    values = [v for v in (outcomes or {}).values() if isinstance(v, (int, float))]
    if not values:
        return None
    return sum(values) / len(values)


def _mean(values: Iterable[float]) -> float:
    values = list(values)
    return sum(values) / len(values) if values else 0


def _active_experiences(db: Session) -> list[Experience]:
    return list(db.scalars(
        select(Experience)
        .where(Experience.lifecycle == Lifecycle.ACTIVE)
        .order_by(Experience.created_at)
    ).all())


def _outcome_averages(experiences: Iterable[Experience], digits: int | None = None) -> dict:
    buckets = defaultdict(list)
    for exp in experiences:
        for key, value in (exp.outcomes or {}).items():
            if isinstance(value, (int, float)):
                buckets[key].append(value)
    return {k: (round(_mean(v), digits) if digits is not None else _mean(v)) for k, v in buckets.items()}


def _by_peptide_name(experiences: Iterable[Experience]) -> dict[str, list[Experience]]:
    grouped = defaultdict(list)
    for exp in experiences:
        grouped[exp.peptide_name].append(exp)
    return grouped


def _active_count(db: Session, column=None, *criteria) -> int:
    target = func.count(func.distinct(column)) if column is not None else func.count(Experience.id)
    return int(db.scalar(
        select(target).where(Experience.lifecycle == Lifecycle.ACTIVE, *criteria)
    ) or 0)


def _active_ratings(db: Session) -> list[float]:
    outcomes = db.scalars(select(Experience.outcomes).where(Experience.lifecycle == Lifecycle.ACTIVE))
    return [r for r in (_rating(o) for o in outcomes) if r is not None]


"""
사용 현황 집계

- total_experiences / total_peptides
- average_rating       : 경험별 평점의 평균
- top_peptides_count   : 경험이 있는 펩타이드 수 (최대 5)
- active_users_count   : 최근 30일 내 경험을 등록한 사용자 수

건수는 DB 에서 COUNT 로 계산하고, 평점만 outcomes 컬럼을 읽어 계산한다.

"""

def usage_analytics(db: Session) -> dict:
    total_peptides = db.scalar(select(func.count(Peptide.id))) or 0
    since = utcnow() - ACTIVE_USER_WINDOW

    return {
        "total_experiences": _active_count(db),
        "total_peptides": int(total_peptides),
        "average_rating": round(_mean(_active_ratings(db)), 1),
        "top_peptides_count": min(_active_count(db, Experience.peptide_name), 5),
        "active_users_count": _active_count(
            db, Experience.user_id, Experience.user_id.is_not(None), Experience.created_at >= since
        ),
    }


def peptide_effectiveness(db: Session) -> list[dict]:
    grouped = _by_peptide_name(_active_experiences(db))
    rows = [
        {
            "peptide": name,
            "experiences": len(items),
            "effectiveness": _outcome_averages(items, digits=2),
        }
        for name, items in grouped.items()
    ]
    rows.sort(key=lambda r: (-r["experiences"], r["peptide"]))
    return rows


def _growth_rate(current: int, previous: int) -> int:
    if previous == 0:
        return 100 if current > 0 else 0
    return round((current - previous) / previous * 100)


"""
기간별 펩타이드 추세

- period: daily / weekly / monthly (그 외 값은 ValueError)
- 최근 limit 개 기간만 대상으로 하며 결과는 오래된 순
- 각 기간의 상위 5개 펩타이드 + 직전 기간 대비 증감률(%)
- fastest_growing: 2개 이상 기간에 등장한 펩타이드의 첫 기간 대비 마지막 기간 증감률 상위 5개

"""

def peptide_trends(db: Session, period: str = "monthly", limit: int = 12) -> dict:
    if period not in PERIOD_FORMATS:
        raise ValueError("period must be one of daily, weekly, monthly")
    if limit < 1:
        raise ValueError("limit must be a positive integer")
    fmt = PERIOD_FORMATS[period]

    periods: dict[str, dict] = {}
    peptide_periods: dict[uuid.UUID, dict] = {}

    for exp in _active_experiences(db):
        key = as_utc(exp.created_at).strftime(fmt)
        bucket = periods.setdefault(key, {"total": 0, "peptides": {}})
        bucket["total"] += 1

        entry = bucket["peptides"].setdefault(
            exp.peptide_id, {"name": exp.peptide_name, "count": 0, "ratings": []}
        )
        entry["count"] += 1
        rating = _rating(exp.outcomes)
        if rating is not None:
            entry["ratings"].append(rating)

        growth = peptide_periods.setdefault(exp.peptide_id, {"name": exp.peptide_name, "periods": defaultdict(int)})
        growth["periods"][key] += 1

    # 최신순으로 limit 개
    keys = sorted(periods, reverse=True)[:limit]

    processed = []
    for index, key in enumerate(keys):
        bucket = periods[key]
        previous = periods[keys[index + 1]] if index + 1 < len(keys) else None

        top = sorted(bucket["peptides"].items(), key=lambda kv: (-kv[1]["count"], kv[1]["name"]))[:5]
        top_peptides = []
        for peptide_id, entry in top:
            row = {
                "peptide_id": str(peptide_id),
                "name": entry["name"],
                "experiences": entry["count"],
                "avg_rating": round(_mean(entry["ratings"]), 2),
                "growth_rate": 0,
            }
            if previous is not None:
                prev_entry = previous["peptides"].get(peptide_id)
                row["growth_rate"] = _growth_rate(entry["count"], prev_entry["count"] if prev_entry else 0)
            top_peptides.append(row)

        processed.append({
            "period": key,
            "total_experiences": bucket["total"],
            "top_peptides": top_peptides,
            "growth_rate": _growth_rate(bucket["total"], previous["total"]) if previous is not None else 0,
        })

    growth_rows = []
    for growth in peptide_periods.values():
        counts = growth["periods"]
        if len(counts) < 2:
            continue
        ordered = sorted(counts)
        growth_rows.append({
            "name": growth["name"],
            "overall_growth": _growth_rate(counts[ordered[-1]], counts[ordered[0]]),
            "total_experiences": sum(counts.values()),
        })
    growth_rows.sort(key=lambda r: (-r["overall_growth"], r["name"]))

    total = sum(p["total_experiences"] for p in processed)
    busiest = max(processed, key=lambda p: p["total_experiences"]) if processed else {}
    processed.reverse()

    return {
        "summary": {
            "period": period,
            "total_periods": len(processed),
            "total_experiences": total,
            "avg_experiences_per_period": round(total / len(processed)) if processed else 0,
        },
        "trends": processed,
        "fastest_growing": growth_rows[:5],
        "analysis": {"period_with_most_activity": busiest},
    }


def peptide_comparison(db: Session, peptide_ids: list[uuid.UUID]) -> list[dict]:
    if not peptide_ids:
        return []

    names = dict(db.execute(select(Peptide.id, Peptide.name).where(Peptide.id.in_(peptide_ids))).all())
    experiences = db.scalars(
        select(Experience).where(
            Experience.lifecycle == Lifecycle.ACTIVE,
            Experience.peptide_id.in_(peptide_ids),
        )
    ).all()

    grouped = defaultdict(list)
    for exp in experiences:
        grouped[exp.peptide_id].append(exp)

    return [
        {
            "peptide_id": str(peptide_id),
            "peptide_name": names.get(peptide_id, "Unknown"),
            "experiences": len(items),
            "outcomes": _outcome_averages(items, digits=1),
        }
        for peptide_id, items in grouped.items()
    ]


def monthly_trends(db: Session) -> list[dict]:
    """펩타이드별 월간 경험 수 ([{"peptide", "data": [{"month", "count"}]}])"""
    counts = defaultdict(lambda: defaultdict(int))
    for exp in _active_experiences(db):
        counts[exp.peptide_name][as_utc(exp.created_at).strftime("%Y-%m")] += 1

    return [
        {
            "peptide": name,
            "data": [{"month": m, "count": c} for m, c in sorted(months.items())],
        }
        for name, months in sorted(counts.items())
    ]


def _active_rows(db: Session):
    """집계용 (peptide_name, created_at, outcomes) 행만 조회"""
    return db.execute(
        select(Experience.peptide_name, Experience.created_at, Experience.outcomes)
        .where(Experience.lifecycle == Lifecycle.ACTIVE)
    ).all()


def _peptide_counts(db: Session) -> list[tuple[str, int]]:
    rows = db.execute(
        select(Experience.peptide_name, func.count(Experience.id))
        .where(Experience.lifecycle == Lifecycle.ACTIVE)
        .group_by(Experience.peptide_name)
    ).all()
    return sorted(((name, int(n)) for name, n in rows), key=lambda kv: (-kv[1], kv[0]))


def dashboard(db: Session) -> dict:
    rows = _active_rows(db)
    by_count = _peptide_counts(db)
    total_peptides = db.scalar(select(func.count(Peptide.id))) or 0

    ratings_by_name = defaultdict(list)
    usage = defaultdict(int)
    for row in rows:
        rating = _rating(row.outcomes)
        if rating is not None:
            ratings_by_name[row.peptide_name].append(rating)
        usage[as_utc(row.created_at).strftime("%Y-%m")] += 1

    ratings = [r for values in ratings_by_name.values() for r in values]

    def peptide_rating(name):
        return round(_mean(ratings_by_name.get(name, [])), 1)

    return {
        "total_experiences": len(rows),
        "total_peptides": int(total_peptides),
        "average_rating": round(_mean(ratings), 1),
        "top_peptides": [
            {"name": name, "experiences": n, "rating": peptide_rating(name)}
            for name, n in by_count[:10]
        ],
        "effectiveness_data": [
            {"peptide": name, "effectiveness": peptide_rating(name), "sample_size": n}
            for name, n in by_count[:15]
        ],
        "usage_trends": [{"month": m, "experiences": c} for m, c in sorted(usage.items())[-12:]],
        "outcome_distribution": _outcome_averages(rows, digits=2),
        "peptide_frequency": [{"name": name, "value": n} for name, n in by_count[:20]],
    }


def public_summary(db: Session) -> dict:
    usage = usage_analytics(db)
    ratings_by_name = defaultdict(list)
    for row in _active_rows(db):
        rating = _rating(row.outcomes)
        if rating is not None:
            ratings_by_name[row.peptide_name].append(rating)

    return {
        "total_experiences": usage["total_experiences"],
        "total_peptides": usage["total_peptides"],
        "average_rating": usage["average_rating"],
        "active_users": usage["active_users_count"],
        "top_peptides": [
            {"name": name, "experiences": n, "rating": round(_mean(ratings_by_name.get(name, [])), 1)}
            for name, n in _peptide_counts(db)[:6]
        ],
    }


def _cell(value):
    if isinstance(value, datetime):
        return value.isoformat()
    if hasattr(value, "value"):
        return value.value
    return value


"""
내보내기 데이터

- type 에 따라 experiences / peptides 시트(헤더 + 행)를 만든다
- 철회된 경험은 포함하지 않음
- UUID / datetime / Enum 은 문자열로 변환

"""

def export_tables(db: Session, export_type: str = "all") -> dict[str, tuple[list[str], list[list]]]:
    if export_type not in EXPORT_TYPES:
        raise ValueError("type must be one of all, experiences, peptides")

    tables = {}
    if export_type in ("all", "experiences"):
        rows = []
        for exp in _active_experiences(db):
            rows.append([_cell(getattr(exp, col)) for col in EXPERIENCE_COLUMNS])
        tables["experiences"] = (EXPERIENCE_COLUMNS, rows)

    if export_type in ("all", "peptides"):
        peptides = db.scalars(select(Peptide).order_by(Peptide.name)).all()
        rows = [[_cell(getattr(p, col)) for col in PEPTIDE_COLUMNS] for p in peptides]
        tables["peptides"] = (PEPTIDE_COLUMNS, rows)

    return tables


def export_json(tables: dict) -> dict:
    return {
        name: [dict(zip(headers, row)) for row in rows]
        for name, (headers, rows) in tables.items()
    }


def iter_csv(tables: dict) -> Iterator[str]:
    # Excel 호환을 위한 BOM
    yield "\ufeff"

    output = io.StringIO()
    writer = csv.writer(output)
    for index, (name, (headers, rows)) in enumerate(tables.items()):
        if len(tables) > 1:
            if index:
                writer.writerow([])
            writer.writerow([f"# {name}"])
        writer.writerow(headers)
        for row in rows:
            writer.writerow(row)
            yield output.getvalue()
            output.seek(0)
            output.truncate(0)
        yield output.getvalue()
        output.seek(0)
        output.truncate(0)


def build_xlsx(tables: dict) -> bytes:
    wb = Workbook()
    wb.remove(wb.active)
    for name, (headers, rows) in tables.items():
        ws = wb.create_sheet(title=name)
        ws.append(headers)
        for row in rows:
            ws.append(row)

    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()
