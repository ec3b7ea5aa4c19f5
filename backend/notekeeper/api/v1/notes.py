"""笔记路由"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from ...database import get_db
from ...schemas import NoteCreate, NoteUpdate, NoteResponse, MessageResponse
from ...services import notes as note_service
from ..deps import get_current_user_id

router = APIRouter()


@router.get("", response_model=List[NoteResponse])
async def get_notes(
    tags: Optional[str] = Query(None, description="逗号分隔，需同时包含所有标签"),
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """获取笔记列表（最近更新在前）"""
    return await note_service.list_notes(db, user_id, tags)


@router.get("/tags", response_model=List[str])
async def get_tags(
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """获取当前用户使用过的标签"""
    return await note_service.list_tags(db, user_id)


@router.post("", response_model=NoteResponse, status_code=status.HTTP_201_CREATED)
async def create_note(
    note_in: NoteCreate,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """创建笔记"""
    return await note_service.create_note(db, user_id, note_in)


@router.get("/{note_id}", response_model=NoteResponse)
async def get_note(
    note_id: str,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """获取单个笔记"""
    return await note_service.get_note(db, user_id, note_id)


@router.put("/{note_id}", response_model=NoteResponse)
async def update_note(
    note_id: str,
    note_in: NoteUpdate,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """更新笔记"""
    return await note_service.update_note(db, user_id, note_id, note_in)


@router.delete("/{note_id}", response_model=MessageResponse)
async def delete_note(
    note_id: str,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """删除笔记"""
    await note_service.delete_note(db, user_id, note_id)
    return MessageResponse(message="Note deleted")
