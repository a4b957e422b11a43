"""
lifespan.py

애플리케이션 기동 / 종료 처리.

- 기동 시 로그 설정 후 DB 연결 확인
  (실패 시 development 환경이면 경고만, 그 외에는 기동 중단)
- DB 모니터: DB_RETRY_SECONDS 간격으로 연결을 확인하고
  끊김 / 재연결 전환을 로그로 남긴다
- 종료 시 모니터 태스크 취소 후 엔진 dispose

"""

import asyncio
import contextlib
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from peptitrace.core.config import settings
from peptitrace.core.logging import setup_logging
from peptitrace.db.session import engine, ping

logger = logging.getLogger(__name__)


async def monitor_database(eng: Engine, interval: float) -> None:
    connected = True
    while True:
        await asyncio.sleep(interval)
        try:
            await asyncio.to_thread(ping, eng)
        except SQLAlchemyError as e:
            if connected:
                logger.error("database disconnected: %s", type(e).__name__)
            else:
                logger.warning("database still unreachable, retrying in %ss", interval)
            connected = False
            continue

        if not connected:
            logger.info("database reconnected")
        connected = True


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    logger.info("starting peptitrace backend env=%s", settings.APP_ENV)

    try:
        await asyncio.to_thread(ping, engine)
        logger.info("database connection successful")
    except SQLAlchemyError as e:
        if not settings.is_development:
            logger.error("database connection failed: %s", e)
            raise RuntimeError("Database initialization failed") from e
        logger.warning("database connection failed, continuing in development mode: %s", e)

    monitor = None
    if settings.DB_MONITOR_ENABLED:
        monitor = asyncio.create_task(monitor_database(engine, settings.DB_RETRY_SECONDS))

    yield

    logger.info("shutting down peptitrace backend")
    if monitor is not None:
        monitor.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await monitor
    engine.dispose()
    logger.info("database connections closed")
