"""用户相关 Schema"""
from pydantic import BaseModel, EmailStr, Field, BeforeValidator, field_validator
from datetime import datetime
from typing import Optional, Any, Annotated


def _normalize_email(v: Any) -> Any:
    """去除首尾空白并转小写，邮箱大小写不敏感"""
    if isinstance(v, str):
        return v.strip().lower()
    return v


NormalizedEmail = Annotated[EmailStr, BeforeValidator(_normalize_email)]


class SignupRequest(BaseModel):
    """用户注册"""
    email: NormalizedEmail
    password: str
    username: str = Field("", max_length=50)


class LoginRequest(BaseModel):
    """用户登录

    email 不做格式校验，格式错误与未知邮箱一样返回 Invalid credentials。
    """
    email: Annotated[str, BeforeValidator(_normalize_email)]
    password: str


class VerifyPasswordRequest(BaseModel):
    """校验当前密码"""
    current_password: str = Field(..., alias="currentPassword")

    class Config:
        populate_by_name = True


class ProfileUpdate(BaseModel):
    """更新个人资料

    提供 password 时必须同时提供 currentPassword，服务端会重新校验。
    """
    username: Optional[str] = Field(None, max_length=50)
    email: Optional[NormalizedEmail] = None
    password: Optional[str] = None
    current_password: Optional[str] = Field(None, alias="currentPassword")

    @field_validator("username", mode="before")
    @classmethod
    def strip_username(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v

    class Config:
        populate_by_name = True


class UserResponse(BaseModel):
    """用户响应，不含密码哈希"""
    id: str
    email: str
    username: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class MessageResponse(BaseModel):
    """通用消息响应"""
    message: str
