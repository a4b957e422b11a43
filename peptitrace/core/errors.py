"""
errors.py

도메인 예외 및 HTTP 에러 응답 형식 정의.

service 계층은 HTTP를 모르고 아래 예외만 발생시키며,
router 계층이 이를 HTTPException 으로 변환한다.

- NotFoundError  : 참조 대상 없음 -> 404
- ConflictError  : 고유 제약 위반 (email/username/tracking id 등) -> 400
- ValueError     : 일반 입력 검증 실패 -> 400

응답 형식:
- 성공 : {"success": true, "data": ...}
- 실패 : {"success": false, "error": "..."}

"""

import logging

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class NotFoundError(ValueError):
    pass


class ConflictError(ValueError):
    pass


class ConfigurationError(RuntimeError):
    """JWT 시크릿 등 필수 설정 누락"""


def ok(data=None, **extra) -> dict:
    body = {"success": True, "data": data}
    body.update(extra)
    return body


"""
service 예외 -> HTTPException 변환

- 라우터의 except 블록에서 공통으로 사용
- NotFoundError 는 404, 나머지 ValueError 는 400

"""

def to_http(e: ValueError) -> HTTPException:
    if isinstance(e, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts) or "Invalid request"


def register_exception_handlers(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"success": False, "error": _validation_message(exc)},
        )

    @app.exception_handler(ConfigurationError)
    async def configuration_exception_handler(request: Request, exc: ConfigurationError):
        logger.error("configuration error on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": "Server configuration error"},
        )
