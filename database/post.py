# database/post.py
from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from database.database import Base


class Post(Base):
    __tablename__ = "posts"

    id:             Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    author_id:      Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    content:        Mapped[str] = mapped_column(Text, nullable=False)
    comments_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")  # commentaires racine seulement
    created_at:     Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at:     Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    __table_args__ = (CheckConstraint("comments_count >= 0", name="ck_posts_comments_count"),)
