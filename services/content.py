# services/content.py
from __future__ import annotations

import logging

from database.repository import ContentRepository
from database.schemas import CommentView, PostView
from database.utils import clean_content
from errors import Forbidden, ValidationError


def _check_owner(target: PostView | CommentView, caller_id: int) -> None:
    # égalité native sur l'id (int des deux côtés), pas de conversion str/int
    if target.author_id != caller_id:
        logging.warning("user %s denied on %s %s", caller_id, type(target).__name__, target.id)
        raise Forbidden()


class ContentService:
    """
    Seule couche qui connaît l'appelant : contrôle de propriété puis délégation.

    Validation et contrôle d'auteur se font avant toute écriture.
    """

    def __init__(self, repository: ContentRepository):
        self.repository = repository

    # ─── lecture
    async def list_wall(self) -> list[PostView]:
        return await self.repository.list_posts_with_threads()

    async def get_post(self, post_id: int) -> PostView:
        return await self.repository.get_post(post_id)

    async def get_comment(self, comment_id: int) -> CommentView:
        return await self.repository.get_comment(comment_id)

    # ─── création
    async def create_post(self, caller_id: int, content: str) -> PostView:
        content = clean_content(content)
        return await self.repository.create_post(caller_id, content)

    async def create_comment(self, caller_id: int, post_id: int, content: str) -> CommentView:
        content = clean_content(content)
        await self.repository.get_post(post_id)   # NotFound avant l'écriture
        return await self.repository.create_comment(caller_id, post_id, content)

    async def create_reply(self, caller_id: int, parent_comment_id: int, content: str) -> CommentView:
        content = clean_content(content)
        parent = await self.repository.get_comment(parent_comment_id)
        if parent.parent_comment_id is not None:
            raise ValidationError("Replies cannot be nested")
        return await self.repository.create_comment(
            caller_id, parent.post_id, content, parent_comment_id=parent.id
        )

    # ─── modification / suppression (auteur uniquement)
    async def update_post(self, caller_id: int, post_id: int, content: str) -> PostView:
        content = clean_content(content)
        post = await self.repository.get_post(post_id)
        _check_owner(post, caller_id)
        return await self.repository.update_post(post_id, content)

    async def delete_post(self, caller_id: int, post_id: int) -> None:
        post = await self.repository.get_post(post_id)
        _check_owner(post, caller_id)
        await self.repository.delete_post(post_id)

    async def update_comment(self, caller_id: int, comment_id: int, content: str) -> CommentView:
        content = clean_content(content)
        comment = await self.repository.get_comment(comment_id)
        _check_owner(comment, caller_id)
        return await self.repository.update_comment(comment_id, content)

    async def delete_comment(self, caller_id: int, comment_id: int) -> None:
        comment = await self.repository.get_comment(comment_id)
        _check_owner(comment, caller_id)
        await self.repository.delete_comment(comment_id)
