"""
main.py

FastAPI 애플리케이션 진입점(Entry Point).

주요 역할:
- FastAPI 앱 인스턴스 생성 (lifespan: 로그 설정 / DB 연결 확인 / DB 모니터)
- CORS 미들웨어 / 공통 예외 핸들러 등록
- 도메인별 라우터(auth, users, peptides, experiences, effects, seed, analytics)를
  API_PREFIX(/api) 아래에 등록
- 헬스 체크 및 DB 연결 상태 확인용 엔드포인트 제공

설계 원칙:
- 비즈니스 로직은 포함하지 않고 설정 / 조립 역할만 수행
- 실제 기능은 routers / services 계층에 위임

관련 파일:
- peptitrace.core.config     : 환경 변수 및 설정 로드
- peptitrace.core.lifespan   : 기동 / 종료 처리
- peptitrace.core.errors     : 응답 형식 / 예외 핸들러
- peptitrace.routers.*       : 기능별 API 라우터

"""

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.orm import Session

from peptitrace.core.config import settings
from peptitrace.core.deps import get_db
from peptitrace.core.errors import ok, register_exception_handlers
from peptitrace.core.lifespan import lifespan
from peptitrace.routers import analytics, auth, effects, experiences, peptides, seed, users

app = FastAPI(title="PeptiTrace Backend", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

for module in (auth, users, peptides, experiences, effects, seed, analytics):
    app.include_router(module.router, prefix=settings.API_PREFIX)


"""
서버 헬스 체크 엔드포인트

- 애플리케이션 프로세스가 정상 동작 중인지 확인

"""
@app.get("/health")
def health():
    return ok({"status": "ok"})


"""
데이터베이스 연결 상태 확인 엔드포인트

- SELECT 1 로 DB 연결 여부 확인

"""
@app.get("/db-ping")
def db_ping(db: Session = Depends(get_db)):
    value = db.execute(text("SELECT 1")).scalar_one()
    return ok({"db": "ok", "value": value})


if __name__ == "__main__":
    uvicorn.run("peptitrace.main:app", host="0.0.0.0", port=settings.PORT)
