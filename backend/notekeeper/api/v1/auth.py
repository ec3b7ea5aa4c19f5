"""认证与个人资料路由"""
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from ...database import get_db
from ...schemas import (
    SignupRequest, LoginRequest, VerifyPasswordRequest, ProfileUpdate,
    UserResponse, MessageResponse,
)
from ...services import accounts
from ..deps import get_current_user_id, set_session_cookie, clear_session_cookie, limit_auth_requests

router = APIRouter()


# ==================== 会话 ====================

@router.post(
    "/signup",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(limit_auth_requests)],
)
async def signup(data: SignupRequest, response: Response, db: AsyncSession = Depends(get_db)):
    """用户注册，成功后直接登录"""
    user = await accounts.signup(db, data)
    set_session_cookie(response, user.id)
    return MessageResponse(message="Signup successful")


@router.post("/login", response_model=MessageResponse, dependencies=[Depends(limit_auth_requests)])
async def login(data: LoginRequest, response: Response, db: AsyncSession = Depends(get_db)):
    """用户登录"""
    user = await accounts.authenticate(db, data)
    set_session_cookie(response, user.id)
    return MessageResponse(message="Login successful")


@router.post("/logout", response_model=MessageResponse)
async def logout(response: Response):
    """退出登录，只清除客户端 Cookie"""
    clear_session_cookie(response)
    return MessageResponse(message="Logged out")


# ==================== 个人资料 ====================

@router.get("/me", response_model=UserResponse)
async def get_me(
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """获取当前用户信息"""
    return await accounts.get_user(db, user_id)


@router.put("/me", response_model=UserResponse)
async def update_me(
    data: ProfileUpdate,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """更新用户名/邮箱，可选修改密码"""
    return await accounts.update_profile(db, user_id, data)


@router.post("/verify-password", response_model=MessageResponse)
async def verify_password(
    data: VerifyPasswordRequest,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """校验当前密码（修改密码前的前端提示步骤）"""
    await accounts.verify_current_password(db, user_id, data.current_password)
    return MessageResponse(message="Password verified")
