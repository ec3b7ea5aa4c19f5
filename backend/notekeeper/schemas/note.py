"""笔记相关 Schema"""
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional, List


class NoteCreate(BaseModel):
    """创建笔记"""
    title: str = Field("", max_length=255)
    content: str = ""
    tags: List[str] = []
    pinned: bool = False


class NoteUpdate(BaseModel):
    """更新笔记，未提供的字段保持不变"""
    title: Optional[str] = Field(None, max_length=255)
    content: Optional[str] = None
    tags: Optional[List[str]] = None
    pinned: Optional[bool] = None


class NoteResponse(BaseModel):
    """笔记响应"""
    id: str
    title: str
    content: str
    tags: List[str] = []
    pinned: bool
    owner_id: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
