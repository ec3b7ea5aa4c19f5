"""FastAPI 应用入口"""
import logging
import logging.config

from .config import settings

# 日志配置：控制台输出，设置 LOG_FILE 时同时写入文件
_handlers = {
    "console": {
        "class": "logging.StreamHandler",
        "formatter": "standard",
    }
}
if settings.LOG_FILE:
    _handlers["file"] = {
        "class": "logging.FileHandler",
        "formatter": "standard",
        "filename": settings.LOG_FILE,
        "mode": "a",
        "encoding": "utf-8",
    }

logging.config.dictConfig({
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {"format": "%(asctime)s %(levelname)s:%(name)s:%(message)s"}
    },
    "handlers": _handlers,
    "root": {
        "level": settings.LOG_LEVEL,
        "handlers": list(_handlers),
    },
    "loggers": {
        "notekeeper": {"level": settings.LOG_LEVEL},
        "passlib": {"level": "ERROR"},
    }
})

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from sqlalchemy.exc import SQLAlchemyError

from .database import init_db, close_db
from .api import api_router
from .exceptions import NotekeeperError, InvalidInput, Internal

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    # 数据库不可用时启动失败
    await init_db()
    logger.info("%s v%s started", settings.APP_NAME, settings.APP_VERSION)
    yield
    await close_db()
    logger.info("%s stopped", settings.APP_NAME)


# 创建应用
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="个人笔记 API",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)

# CORS 配置，Cookie 认证需要 allow_credentials
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.CLIENT_ORIGIN],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ==================== 异常处理 ====================

@app.exception_handler(NotekeeperError)
async def notekeeper_error_handler(request: Request, exc: NotekeeperError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message},
        headers=exc.headers,
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """请求体校验失败统一返回 400"""
    message = InvalidInput.default_message
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(p) for p in first.get("loc", ()) if p not in ("body", "query", "path"))
        message = f"{message}: {field} {first.get('msg', '')}".strip() if field else message
    return JSONResponse(status_code=InvalidInput.status_code, content={"detail": message})


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("Database error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=Internal.status_code, content={"detail": Internal.default_message})


# 注册路由
app.include_router(api_router, prefix="/api")


# 健康检查
@app.get("/health", tags=["系统"], summary="健康检查")
async def health_check():
    """检查服务运行状态"""
    return {
        "status": "healthy",
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION
    }


# 根路由
@app.get("/", tags=["系统"], summary="欢迎页")
async def root():
    """返回 API 基本信息"""
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "version": settings.APP_VERSION,
        "docs": "/api/docs"
    }
