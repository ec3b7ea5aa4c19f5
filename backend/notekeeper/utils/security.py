"""安全相关工具"""
import logging
from datetime import datetime, timedelta
from typing import Optional
from jose import jwt, JWTError
from passlib.context import CryptContext

from ..config import settings
from ..exceptions import Unauthenticated, Internal

logger = logging.getLogger(__name__)

# 密码加密上下文
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# bcrypt 只使用前 72 字节
MAX_PASSWORD_BYTES = 72


def password_too_long(password: str) -> bool:
    return len(password.encode("utf-8")) > MAX_PASSWORD_BYTES


def hash_password(password: str) -> str:
    """哈希密码"""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """验证密码"""
    if password_too_long(plain_password):
        # 超过 72 字节一律不匹配，避免截断后误匹配
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # 存储的哈希无法识别，按不匹配处理
        return False


def issue_token(user_id: str, expires_delta: Optional[timedelta] = None) -> str:
    """签发会话令牌

    载荷为 ``{sub, iat, exp, type}``，默认有效期见
    ``JWT_ACCESS_TOKEN_EXPIRE_MINUTES``（24 小时）。
    """
    now = datetime.utcnow()
    expire = now + (expires_delta or timedelta(minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES))
    payload = {
        "sub": str(user_id),
        "iat": now,
        "exp": expire,
        "type": "access",
    }
    try:
        return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)
    except JWTError as e:
        logger.exception("Token signing failed")
        raise Internal() from e


def verify_token(token: Optional[str]) -> str:
    """校验会话令牌并返回用户 ID

    签名无效、载荷格式错误或已过期都抛出同一个 Unauthenticated。
    """
    if not token:
        raise Unauthenticated()
    try:
        payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        raise Unauthenticated()

    user_id = payload.get("sub")
    if not isinstance(user_id, str) or not user_id or payload.get("type") != "access":
        raise Unauthenticated()
    return user_id
