from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
import logging

from devcircle.core.config import settings
from devcircle.api import auth, post, group, users, profile

# 로깅 설정
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

# 데이터베이스 연결 정보 출력 함수
def print_database_info():
    try:
        from devcircle.db.base import get_db
        from sqlalchemy import inspect

        db = next(get_db())
        try:
            table_count = len(inspect(db.get_bind()).get_table_names())
        finally:
            db.close()

        logger.info("=" * 60)
        logger.info(f"{settings.PROJECT_NAME} 서버 시작")
        logger.info(f"DATABASE_URL: {settings.DATABASE_URL}")
        logger.info(f"테이블 개수: {table_count}")
        logger.info("=" * 60)

    except Exception as e:
        logger.error(f"데이터베이스 연결 확인 중 오류 발생: {e}")

@asynccontextmanager
async def lifespan(app: FastAPI):
    # 서버 시작 시 실행
    print_database_info()
    yield

app = FastAPI(
    title=settings.PROJECT_NAME,
    description="DevCircle 개발자 커뮤니티 API",
    version=settings.VERSION,
    lifespan=lifespan
)

# CORS 설정
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.CLIENT_URL],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 오류 응답은 {"message": ...} 형태로 통일
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.detail})

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.info(f"요청 검증 실패: {request.method} {request.url.path}")
    return JSONResponse(
        status_code=400,
        content={"message": "Invalid request", "errors": jsonable_encoder(exc.errors())},
    )

# 라우터 등록
app.include_router(auth.router, prefix=f"{settings.API_PREFIX}/auth", tags=["auth"])
app.include_router(users.router, prefix=f"{settings.API_PREFIX}/user", tags=["user"])
app.include_router(profile.router, prefix=f"{settings.API_PREFIX}/profile", tags=["profile"])
app.include_router(post.router, prefix=f"{settings.API_PREFIX}/post", tags=["post"])
app.include_router(group.router, prefix=f"{settings.API_PREFIX}/group", tags=["group"])

@app.get("/")
async def root():
    return {"message": f"Welcome to {settings.PROJECT_NAME}"}

@app.get("/health")
async def health_check():
    return {"status": "healthy"}

if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=settings.PORT)
