"""
session.py

데이터베이스 엔진 및 세션(Session) 관리 파일.

SQLAlchemy Engine 과 SessionLocal 을 생성하고,
요청 단위 세션은 peptitrace.core.deps.get_db 에서 열고 닫는다.

설계 원칙:
- DB 연결 설정은 한 곳에서만 정의
- pool_pre_ping=True 로 끊어진 유휴 연결을 자동 감지
- SQLite(테스트/로컬)는 스레드 공유 허용 + 외래키 제약 활성화

관련 파일:
- peptitrace.core.config     : DATABASE_URL
- peptitrace.core.deps       : get_db 의존성
- peptitrace.core.lifespan   : 기동 시 연결 확인 / 종료 시 dispose

"""

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from peptitrace.core.config import settings


def build_engine(url: str) -> Engine:
    kwargs = {"pool_pre_ping": True}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}

    eng = create_engine(url, **kwargs)

    if eng.dialect.name == "sqlite":
        # SQLite 는 기본적으로 FK 제약을 검사하지 않음
        @event.listens_for(eng, "connect")
        def _enable_foreign_keys(dbapi_conn, _record):
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return eng


def ping(eng: Engine) -> None:
    with eng.connect() as conn:
        conn.execute(text("SELECT 1"))


engine = build_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)
