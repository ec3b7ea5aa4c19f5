"""笔记服务

每个查询的过滤条件都包含 owner_id；非本人笔记与不存在的笔记
同样返回 NotFound。
"""
from datetime import datetime
from typing import List, Optional, Iterable

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import NotFound
from ..models import Note
from ..schemas import NoteCreate, NoteUpdate

NOTE_NOT_FOUND = "Note not found"


def parse_tag_filter(raw: Optional[str]) -> List[str]:
    """将逗号分隔的标签过滤串拆分为小写词项，忽略空项"""
    if not raw:
        return []
    return [term.strip().lower() for term in raw.split(",") if term.strip()]


def matches_all_tags(tags: Iterable[str], terms: List[str]) -> bool:
    """笔记标签是否包含所有词项（大小写不敏感，逐项精确匹配）"""
    lowered = {tag.lower() for tag in tags or [] if isinstance(tag, str)}
    return all(term in lowered for term in terms)


def _owned_by(user_id: str):
    return select(Note).where(Note.owner_id == user_id)


async def list_notes(db: AsyncSession, user_id: str, tag_filter: Optional[str] = None) -> List[Note]:
    """按 updated_at 倒序列出用户笔记，可按标签过滤（AND）"""
    result = await db.execute(
        _owned_by(user_id).order_by(Note.updated_at.desc(), Note.created_at.desc())
    )
    notes = list(result.scalars().all())

    terms = parse_tag_filter(tag_filter)
    if terms:
        notes = [note for note in notes if matches_all_tags(note.tags, terms)]
    return notes


async def list_tags(db: AsyncSession, user_id: str) -> List[str]:
    """用户所有笔记中出现过的标签，大小写不敏感去重，保留首次出现的写法"""
    result = await db.execute(
        select(Note.tags).where(Note.owner_id == user_id).order_by(Note.created_at)
    )
    seen = {}
    for tags in result.scalars().all():
        for tag in tags or []:
            if isinstance(tag, str) and tag.strip():
                seen.setdefault(tag.lower(), tag)
    return sorted(seen.values(), key=str.lower)


async def create_note(db: AsyncSession, user_id: str, data: NoteCreate) -> Note:
    """为用户创建笔记"""
    note = Note(
        owner_id=user_id,
        title=data.title,
        content=data.content,
        tags=list(data.tags),
        pinned=data.pinned,
    )
    db.add(note)
    await db.commit()
    await db.refresh(note)
    return note


async def get_note(db: AsyncSession, user_id: str, note_id: str) -> Note:
    """获取单个笔记"""
    result = await db.execute(_owned_by(user_id).where(Note.id == note_id))
    note = result.scalar_one_or_none()
    if note is None:
        raise NotFound(NOTE_NOT_FOUND)
    return note


async def update_note(db: AsyncSession, user_id: str, note_id: str, data: NoteUpdate) -> Note:
    """更新笔记，只修改请求中提供的字段"""
    note = await get_note(db, user_id, note_id)

    if data.title is not None:
        note.title = data.title
    if data.content is not None:
        note.content = data.content
    if data.tags is not None:
        note.tags = list(data.tags)
    if data.pinned is not None:
        note.pinned = data.pinned
    # 字段未变化时也刷新，保证列表排序
    note.updated_at = datetime.utcnow()

    await db.commit()
    await db.refresh(note)
    return note


async def delete_note(db: AsyncSession, user_id: str, note_id: str):
    """删除笔记"""
    result = await db.execute(
        delete(Note).where(Note.id == note_id, Note.owner_id == user_id)
    )
    if result.rowcount == 0:
        raise NotFound(NOTE_NOT_FOUND)
    await db.commit()
