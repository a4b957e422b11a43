"""

카탈로그 / 효과 초기 데이터 시딩 스크립트.

- 펩타이드 카탈로그를 이름 기준으로 upsert 한 뒤
  카탈로그의 효과 목록으로 effects 테이블을 다시 만든다.
- API 의 /seed 라우트와 같은 서비스 함수를 사용한다.

사용 방법
- (.venv) ~\backend~$ python -m scripts.seed_database

"""

import logging

from dotenv import load_dotenv
load_dotenv()

from peptitrace.core.logging import setup_logging
from peptitrace.db.session import SessionLocal
from peptitrace.services import seed as seed_service

logger = logging.getLogger("scripts.seed_database")


def main() -> None:
    setup_logging()
    db = SessionLocal()
    try:
        peptides = seed_service.seed_peptides(db)
        effects = seed_service.seed_effects(db)
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("seeding failed")
        raise
    finally:
        db.close()

    print(f"🌱 Seeded {len(peptides)} peptides and {len(effects)} effects")


if __name__ == "__main__":
    main()
