"""路由依赖：会话校验、会话 Cookie、限流"""
import logging

from fastapi import Request, Response

from ..config import settings
from ..exceptions import TooManyRequests
from ..utils.rate_limit import auth_limiter
from ..utils.security import issue_token, verify_token

logger = logging.getLogger(__name__)


async def get_current_user_id(request: Request) -> str:
    """从会话 Cookie 解析当前用户 ID

    Cookie 缺失或校验失败时抛出 Unauthenticated，后续处理函数不会执行。
    """
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    return verify_token(token)


def set_session_cookie(response: Response, user_id: str):
    """签发令牌并写入 http-only Cookie"""
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=issue_token(user_id),
        max_age=settings.session_max_age,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
        path="/",
    )


def clear_session_cookie(response: Response):
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
        path="/",
    )


def client_address(request: Request) -> str:
    return request.client.host if request.client else "unknown"


async def limit_auth_requests(request: Request):
    """注册/登录限流：每个客户端地址在固定窗口内最多 N 次"""
    address = client_address(request)
    retry_after = auth_limiter.hit(address)
    if retry_after is not None:
        logger.warning("Rate limit exceeded for %s on %s", address, request.url.path)
        raise TooManyRequests(headers={"Retry-After": str(retry_after)})
