# database/repository.py
from __future__ import annotations

import logging
from collections import defaultdict
from datetime import datetime, timezone

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from database.comment import Comment
from database.database import Store
from database.post import Post
from database.schemas import CommentView, PostView
from database.user import User
from database.utils import clean_content
from errors import NotFound, ValidationError


def _post_view(post: Post, author_name: str) -> PostView:
    return PostView(
        id=post.id,
        author_id=post.author_id,
        author_name=author_name,
        content=post.content,
        comments_count=post.comments_count,
        created_at=post.created_at,
        updated_at=post.updated_at,
    )


def _comment_view(comment: Comment, author_name: str) -> CommentView:
    return CommentView(
        id=comment.id,
        author_id=comment.author_id,
        author_name=author_name,
        post_id=comment.post_id,
        parent_comment_id=comment.parent_comment_id,
        content=comment.content,
        replies_count=comment.replies_count,
        created_at=comment.created_at,
        updated_at=comment.updated_at,
    )


def _posts_query():
    return (
        select(Post, User.first_name)
        .join(User, Post.author_id == User.id)
        .execution_options(populate_existing=True)
    )


def _comments_query():
    return (
        select(Comment, User.first_name)
        .join(User, Comment.author_id == User.id)
        .execution_options(populate_existing=True)
    )


class ContentRepository:
    """
    Posts, commentaires et replies du mur.

    Toute opération multi-requêtes (création de commentaire, suppressions) passe
    par une seule Store.transaction() ; les compteurs sont modifiés par des
    UPDATE relatifs exécutés par la base, jamais en lecture-écriture côté Python.
    """

    def __init__(self, store: Store):
        self.store = store

    # ───────────────────────────────  WALL  ───────────────────────────────────
    async def list_posts_with_threads(self) -> list[PostView]:
        async with self.store.session() as ses:
            post_rows = (await ses.execute(
                _posts_query().order_by(Post.created_at.desc(), Post.id.desc())
            )).all()
            if not post_rows:
                return []

            comment_rows = (await ses.execute(
                _comments_query()
                .where(Comment.post_id.in_([p.id for p, _ in post_rows]))
                .order_by(Comment.created_at.asc(), Comment.id.asc())
            )).all()

        # regroupement en mémoire : comments par post, replies par comment
        top_level: dict[int, list[CommentView]] = defaultdict(list)
        replies: dict[int, list[CommentView]] = defaultdict(list)
        for comment, name in comment_rows:
            view = _comment_view(comment, name)
            if comment.is_reply:
                replies[comment.parent_comment_id].append(view)   # ordre croissant conservé
            else:
                top_level[comment.post_id].append(view)

        wall = []
        for post, name in post_rows:
            view = _post_view(post, name)
            view.comments = list(reversed(top_level.get(post.id, [])))   # plus récents d'abord
            for c in view.comments:
                c.replies = replies.get(c.id, [])
            wall.append(view)
        return wall

    # ───────────────────────────────  POSTS  ──────────────────────────────────
    async def _load_post(self, ses: AsyncSession, post_id: int) -> PostView:
        row = (await ses.execute(_posts_query().where(Post.id == post_id))).first()
        if row is None:
            raise NotFound("Post not found")
        return _post_view(*row)

    async def get_post(self, post_id: int) -> PostView:
        async with self.store.session() as ses:
            return await self._load_post(ses, post_id)

    async def create_post(self, author_id: int, content: str) -> PostView:
        content = clean_content(content)
        async with self.store.transaction() as ses:
            post = Post(author_id=author_id, content=content, comments_count=0)
            ses.add(post)
            await ses.flush()
            view = await self._load_post(ses, post.id)
        logging.info("post %s created by user %s", view.id, author_id)
        return view

    async def update_post(self, post_id: int, content: str) -> PostView:
        content = clean_content(content)
        async with self.store.transaction() as ses:
            res = await ses.execute(
                update(Post)
                .where(Post.id == post_id)
                .values(content=content, updated_at=datetime.now(timezone.utc))
                .execution_options(synchronize_session=False)
            )
            if res.rowcount == 0:
                raise NotFound("Post not found")
            return await self._load_post(ses, post_id)

    async def delete_post(self, post_id: int) -> None:
        async with self.store.transaction() as ses:
            # replies d'abord, puis commentaires racine, puis le post (FK)
            await ses.execute(
                delete(Comment)
                .where(Comment.post_id == post_id, Comment.parent_comment_id.is_not(None))
                .execution_options(synchronize_session=False)
            )
            await ses.execute(
                delete(Comment)
                .where(Comment.post_id == post_id)
                .execution_options(synchronize_session=False)
            )
            res = await ses.execute(
                delete(Post).where(Post.id == post_id).execution_options(synchronize_session=False)
            )
            if res.rowcount == 0:
                raise NotFound("Post not found")
        logging.info("post %s deleted with its thread", post_id)

    # ───────────────────────────────  COMMENTS  ───────────────────────────────
    async def _load_comment(self, ses: AsyncSession, comment_id: int) -> CommentView:
        row = (await ses.execute(_comments_query().where(Comment.id == comment_id))).first()
        if row is None:
            raise NotFound("Comment not found")
        return _comment_view(*row)

    async def _adjust_counter(self, ses: AsyncSession, comment: Comment, delta: int) -> None:
        """
        comments_count du post (commentaire racine) ou replies_count du parent (reply),
        en un seul UPDATE relatif. Un décrément ne descend jamais sous 0.
        """
        if not comment.is_reply:
            model, column, key = Post, Post.comments_count, comment.post_id
            missing = "Post not found"
        else:
            model, column, key = Comment, Comment.replies_count, comment.parent_comment_id
            missing = "Parent comment not found"

        stmt = update(model).where(model.id == key)
        if delta < 0:
            stmt = stmt.where(column >= -delta)
        res = await ses.execute(
            stmt.values({column: column + delta}).execution_options(synchronize_session=False)
        )
        if res.rowcount == 0 and delta > 0:
            raise NotFound(missing)

    async def get_comment(self, comment_id: int) -> CommentView:
        async with self.store.session() as ses:
            return await self._load_comment(ses, comment_id)

    async def create_comment(self, author_id: int, post_id: int, content: str,
                             parent_comment_id: int | None = None) -> CommentView:
        content = clean_content(content)
        async with self.store.transaction() as ses:
            if parent_comment_id is not None:
                parent = await ses.get(Comment, parent_comment_id)
                if parent is None:
                    raise NotFound("Parent comment not found")
                if parent.is_reply:
                    raise ValidationError("Replies cannot be nested")
                if parent.post_id != post_id:
                    raise ValidationError("Reply must belong to the parent comment's post")

            comment = Comment(
                author_id=author_id,
                post_id=post_id,
                parent_comment_id=parent_comment_id,
                content=content,
                replies_count=0,
            )
            ses.add(comment)
            await ses.flush()
            await self._adjust_counter(ses, comment, +1)
            view = await self._load_comment(ses, comment.id)

        kind = "reply" if parent_comment_id is not None else "comment"
        logging.info("%s %s created on post %s by user %s", kind, view.id, post_id, author_id)
        return view

    async def update_comment(self, comment_id: int, content: str) -> CommentView:
        content = clean_content(content)
        async with self.store.transaction() as ses:
            res = await ses.execute(
                update(Comment)
                .where(Comment.id == comment_id)
                .values(content=content, updated_at=datetime.now(timezone.utc))
                .execution_options(synchronize_session=False)
            )
            if res.rowcount == 0:
                raise NotFound("Comment not found")
            return await self._load_comment(ses, comment_id)

    async def delete_comment(self, comment_id: int) -> None:
        """
        Supprime un commentaire ou une reply et met à jour le compteur concerné.
        Un commentaire racine emporte ses replies dans la même transaction.
        """
        async with self.store.transaction() as ses:
            comment = await ses.get(Comment, comment_id)
            if comment is None:
                raise NotFound("Comment not found")

            removed = 0
            if not comment.is_reply:
                res = await ses.execute(
                    delete(Comment)
                    .where(Comment.parent_comment_id == comment.id)
                    .execution_options(synchronize_session=False)
                )
                removed = res.rowcount

            await self._adjust_counter(ses, comment, -1)
            await ses.execute(
                delete(Comment).where(Comment.id == comment.id).execution_options(synchronize_session=False)
            )
        logging.info("comment %s deleted (%s replies removed)", comment_id, removed)
