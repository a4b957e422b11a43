"""

전체 테이블 삭제 스크립트 (로컬 개발용).

- alembic_version 을 포함해 모든 테이블을 지운다.
- 다시 만들 때는 alembic upgrade head

사용 방법
- (.venv) ~\backend~$ python -m scripts.drop_db

"""

from dotenv import load_dotenv
load_dotenv()

from sqlalchemy import text

from peptitrace.db.base import Base
from peptitrace.db.session import engine
import peptitrace.models  # noqa: F401


def drop_tables() -> None:
    print("Dropping all tables...")
    with engine.begin() as conn:
        conn.execute(text("DROP TABLE IF EXISTS alembic_version"))
        Base.metadata.drop_all(bind=conn)
    engine.dispose()
    print("Tables dropped.")


if __name__ == "__main__":
    drop_tables()
