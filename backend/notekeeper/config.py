"""应用配置"""
from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Optional
from pathlib import Path
import os

# 项目根目录: backend/notekeeper/config.py -> ../../
_current_file = Path(__file__).resolve()
_backend_dir = _current_file.parent.parent
_project_root = _backend_dir.parent

# Docker 部署时数据目录挂载在 /app/data
if os.path.exists("/app/data"):
    _data_dir = Path("/app/data")
    _env_file = Path("/app/.env") if Path("/app/.env").exists() else None
else:
    _data_dir = _project_root / "data"
    _env_file = _project_root / ".env" if (_project_root / ".env").exists() else None


class Settings(BaseSettings):
    """应用设置"""
    # 应用
    APP_NAME: str = "Notekeeper"
    APP_VERSION: str = "1.0.0"
    ENV: str = "development"
    DEBUG: bool = False

    # 服务监听
    HOST: str = "0.0.0.0"
    PORT: int = 5000

    # 数据库
    DATABASE_URL: str = f"sqlite+aiosqlite:///{_data_dir}/notekeeper.db"

    # JWT / 会话 Cookie
    JWT_SECRET_KEY: str = "change-this-secret-key-in-production"
    JWT_ALGORITHM: str = "HS256"
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24  # 24 小时
    SESSION_COOKIE_NAME: str = "token"

    # 账号
    PASSWORD_MIN_LENGTH: int = 6

    # 登录/注册限流
    RATE_LIMIT_WINDOW_SECONDS: int = 60
    RATE_LIMIT_MAX_REQUESTS: int = 5
    RATE_LIMIT_MAX_CLIENTS: int = 10000

    # CORS，前端开发服务器
    CLIENT_ORIGIN: str = "http://localhost:5173"

    # 日志
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    class Config:
        env_file = str(_env_file) if _env_file else ".env"
        case_sensitive = True

    @property
    def is_production(self) -> bool:
        return self.ENV.lower() == "production"

    @property
    def session_max_age(self) -> int:
        """Cookie max-age（秒），与令牌有效期一致"""
        return self.JWT_ACCESS_TOKEN_EXPIRE_MINUTES * 60


@lru_cache()
def get_settings() -> Settings:
    """获取配置单例"""
    return Settings()


settings = get_settings()
