"""笔记模型"""
from sqlalchemy import Column, String, Boolean, DateTime, Text, ForeignKey, JSON, Index
from sqlalchemy.orm import relationship
from datetime import datetime
import uuid

from ..database import Base


class Note(Base):
    """笔记表"""
    __tablename__ = "notes"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    owner_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    title = Column(String(255), nullable=False, default="")
    content = Column(Text, nullable=False, default="")  # Markdown 原文
    tags = Column(JSON, nullable=False, default=list)  # 有序标签列表，允许重复
    pinned = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # 关系
    owner = relationship("User", back_populates="notes")

    __table_args__ = (
        Index("ix_notes_owner_updated", "owner_id", "updated_at"),
    )
