"""业务异常

服务层只抛出这些异常，由 main.py 中注册的处理器统一渲染为
``{"detail": message}``。
"""
from typing import Optional, Dict


class NotekeeperError(Exception):
    """业务异常基类"""
    status_code = 500
    default_message = "Server error"

    def __init__(self, message: Optional[str] = None, headers: Optional[Dict[str, str]] = None):
        self.message = message or self.default_message
        self.headers = headers
        super().__init__(self.message)


class InvalidInput(NotekeeperError):
    """请求字段缺失或格式错误"""
    status_code = 400
    default_message = "Invalid input"


class InvalidCredentials(NotekeeperError):
    """邮箱或密码错误；未知邮箱与密码错误返回同一消息"""
    status_code = 401
    default_message = "Invalid credentials"


class Unauthenticated(NotekeeperError):
    """会话缺失、无效或已过期"""
    status_code = 401
    default_message = "Not authenticated"


class NotFound(NotekeeperError):
    """资源不存在或不属于当前用户"""
    status_code = 404
    default_message = "Not found"


class Conflict(NotekeeperError):
    """邮箱已被注册"""
    status_code = 409
    default_message = "Email already registered"


class TooManyRequests(NotekeeperError):
    """超出限流窗口"""
    status_code = 429
    default_message = "Too many requests, please try again later."


class Internal(NotekeeperError):
    """存储或签名等内部错误"""
    status_code = 500
    default_message = "Server error"
