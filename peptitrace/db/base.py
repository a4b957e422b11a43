"""
base.py

SQLAlchemy ORM Base 정의 파일.

모든 모델(User, Peptide, Experience, Vote, Effect)은
이 Base 를 상속하며, Alembic 마이그레이션도 이 메타데이터를 기준으로 동작한다.

관련 파일:
- peptitrace.models.*     : 모든 ORM 모델
- alembic/env.py          : 마이그레이션 메타데이터 로드

"""

from datetime import datetime, timezone

from sqlalchemy.orm import declarative_base

Base = declarative_base()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime | None) -> datetime | None:
    # SQLite 는 tzinfo 없이 돌려주므로 UTC 로 간주
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)
