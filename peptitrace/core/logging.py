"""
logging.py

표준 logging 초기화.

- 앱 기동 시(lifespan) 및 스크립트 실행 시 한 번 호출
- 각 모듈은 logging.getLogger(__name__) 으로 로거를 얻어 사용

"""

import logging

from peptitrace.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_configured = False


def setup_logging(level: str | None = None) -> None:
    global _configured
    if _configured:
        return

    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format=LOG_FORMAT,
    )
    # uvicorn access 로그는 중복이 많아 WARNING 이상만
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    _configured = True
