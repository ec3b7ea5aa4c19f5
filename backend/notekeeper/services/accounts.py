"""账号服务：注册、登录、个人资料与密码修改"""
import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import settings
from ..exceptions import InvalidInput, InvalidCredentials, Conflict, NotFound
from ..models import User
from ..schemas import SignupRequest, LoginRequest, ProfileUpdate
from ..utils.security import (
    hash_password, verify_password, password_too_long, pwd_context, MAX_PASSWORD_BYTES,
)

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"
INCORRECT_PASSWORD = "Incorrect current password"


def _check_password_length(password: str):
    if len(password) < settings.PASSWORD_MIN_LENGTH:
        raise InvalidInput(f"Password must be at least {settings.PASSWORD_MIN_LENGTH} characters")
    if password_too_long(password):
        raise InvalidInput(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")


async def get_user_by_email(db: AsyncSession, email: str):
    result = await db.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def get_user(db: AsyncSession, user_id: str) -> User:
    """按 ID 获取用户，不存在时抛出 NotFound"""
    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if user is None:
        raise NotFound("User not found")
    return user


async def signup(db: AsyncSession, data: SignupRequest) -> User:
    """注册新用户

    Raises:
        InvalidInput: 密码过短
        Conflict: 邮箱已被注册
    """
    _check_password_length(data.password)

    if await get_user_by_email(db, data.email):
        raise Conflict()

    user = User(
        email=data.email,
        username=data.username,
        password_hash=hash_password(data.password),
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        # 并发注册同一邮箱
        await db.rollback()
        raise Conflict()
    await db.refresh(user)

    logger.info("User signed up: %s", user.email)
    return user


async def authenticate(db: AsyncSession, data: LoginRequest) -> User:
    """校验邮箱和密码

    未知邮箱与密码错误抛出同一个 InvalidCredentials。
    """
    user = await get_user_by_email(db, data.email)
    if user is None:
        # 保持与真实校验相近的耗时
        pwd_context.dummy_verify()
        logger.info("Login failed: %s", data.email)
        raise InvalidCredentials(INVALID_CREDENTIALS)

    if not verify_password(data.password, user.password_hash):
        logger.info("Login failed: %s", data.email)
        raise InvalidCredentials(INVALID_CREDENTIALS)

    logger.info("Login succeeded: %s", user.email)
    return user


async def verify_current_password(db: AsyncSession, user_id: str, current_password: str):
    """重新校验当前密码，不修改任何状态"""
    user = await get_user(db, user_id)
    if not verify_password(current_password, user.password_hash):
        raise InvalidCredentials(INCORRECT_PASSWORD)


async def update_profile(db: AsyncSession, user_id: str, data: ProfileUpdate) -> User:
    """更新用户名、邮箱，以及可选的新密码

    修改密码时在本次请求内重新校验 current_password，
    之前的 verify-password 调用不作为凭据。所有校验都在写入前完成。

    Raises:
        InvalidInput: 修改密码但缺少 current_password，或新密码过短
        InvalidCredentials: current_password 不匹配
        Conflict: 新邮箱已被其他用户使用
    """
    user = await get_user(db, user_id)

    new_hash = None
    # 空字符串视为未修改密码
    if data.password:
        if not data.current_password:
            raise InvalidInput("Current password is required to change password")
        _check_password_length(data.password)
        if not verify_password(data.current_password, user.password_hash):
            logger.info("Password change rejected for user %s", user.id)
            raise InvalidCredentials(INCORRECT_PASSWORD)
        new_hash = hash_password(data.password)

    if data.email is not None and data.email != user.email:
        existing = await get_user_by_email(db, data.email)
        if existing is not None and existing.id != user.id:
            raise Conflict()
        user.email = data.email

    if data.username is not None:
        user.username = data.username

    if new_hash is not None:
        user.password_hash = new_hash

    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise Conflict()
    await db.refresh(user)

    if new_hash is not None:
        logger.info("Password changed for user %s", user.id)
    return user
