from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class CommentView(BaseModel):
    """Commentaire ou reply, avec le nom affiché de l'auteur."""
    id: int
    author_id: int
    author_name: str
    post_id: int
    parent_comment_id: Optional[int] = None
    content: str
    replies_count: int = Field(0, ge=0)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    replies: List["CommentView"] = Field(default_factory=list)


class PostView(BaseModel):
    id: int
    author_id: int
    author_name: str
    content: str
    comments_count: int = Field(0, ge=0)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    comments: List[CommentView] = Field(default_factory=list)


# Référence sur soi-même (replies)
CommentView.model_rebuild()
