# database/comment.py
from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from database.database import Base


class Comment(Base):
    __tablename__ = "comments"

    id:                Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    author_id:         Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    post_id:           Mapped[int] = mapped_column(Integer, ForeignKey("posts.id"), nullable=False, index=True)
    parent_comment_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("comments.id"), nullable=True, index=True
    )                                                       # None = commentaire racine, sinon reply
    content:           Mapped[str] = mapped_column(Text, nullable=False)
    replies_count:     Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    created_at:        Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at:        Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    __table_args__ = (CheckConstraint("replies_count >= 0", name="ck_comments_replies_count"),)

    @property
    def is_reply(self) -> bool:
        return self.parent_comment_id is not None
