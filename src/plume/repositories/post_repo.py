"""Data access helpers for working with posts."""
from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import ColumnElement, and_, delete, select, update
from sqlalchemy.orm import Query, Session

from plume.models import Category, Comment, Post, Reaction
from plume.models.post import POST_STATUS_PUBLISHED

__all__ = ["PostRepository", "published_filter"]


def published_filter(now: datetime) -> ColumnElement[bool]:
    """Return the predicate for posts that are publicly visible at ``now``.

    A published post whose ``published_at`` lies in the future stays hidden
    until that instant passes.
    """
    return and_(
        Post.status == POST_STATUS_PUBLISHED,
        Post.published_at.is_not(None),
        Post.published_at <= now,
    )


class PostRepository:
    """Thin wrapper around database access for post entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, post_id: int) -> Post | None:
        """Return a post by identifier."""
        return self.session.get(Post, post_id)

    def get_published_by_slug(self, slug: str, now: datetime) -> Post | None:
        """Return a publicly visible post by slug."""
        return (
            self.session.query(Post)
            .filter(Post.slug == slug, published_filter(now))
            .first()
        )

    def slug_taken(self, slug: str, *, exclude_id: int | None = None) -> bool:
        """Return True when another post already uses ``slug``."""
        stmt = select(Post.id).where(Post.slug == slug)
        if exclude_id is not None:
            stmt = stmt.where(Post.id != exclude_id)
        return self.session.execute(stmt.limit(1)).first() is not None

    def published(self, now: datetime) -> Query[Any]:
        """Return a query of visible posts, newest publication first."""
        return (
            self.session.query(Post)
            .filter(published_filter(now))
            .order_by(Post.published_at.desc(), Post.id.desc())
        )

    def published_in_category(self, category_slug: str, now: datetime) -> Query[Any]:
        """Return visible posts of the category with the given slug."""
        return self.published(now).filter(
            Post.category_id.in_(select(Category.id).where(Category.slug == category_slug))
        )

    def related(self, post: Post, now: datetime, limit: int) -> list[Post]:
        """Return the latest visible posts sharing the category of ``post``."""
        return (
            self.published(now)
            .filter(Post.category_id == post.category_id, Post.id != post.id)
            .limit(limit)
            .all()
        )

    def increment_views(self, post_id: int) -> None:
        """Bump the view counter with a relative update so concurrent hits are not lost."""
        self.session.execute(
            update(Post)
            .where(Post.id == post_id)
            .values(views_count=Post.views_count + 1)
            .execution_options(synchronize_session=False)
        )

    def delete_many(self, post_ids: list[int]) -> None:
        """Remove posts together with their reactions and comments."""
        if not post_ids:
            return
        self.session.execute(delete(Reaction).where(Reaction.post_id.in_(post_ids)))
        self.session.execute(delete(Comment).where(Comment.post_id.in_(post_ids)))
        self.session.execute(delete(Post).where(Post.id.in_(post_ids)))
