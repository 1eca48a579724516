"""Post lifecycle: slug assignment, publication stamping and public queries.

Slug and ``published_at`` are set by explicit pre-persist functions
(:func:`assign_slug`, :func:`stamp_publication`) called from the write path
rather than by ORM lifecycle hooks, so each rule can be exercised on its own.

State machine::

    draft --(status set to "published")--> published

Going back to draft is allowed by the data model, but ``published_at`` keeps
the instant of the *first* publication.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query, Session

from plume.core.errors import ConflictError, NotFoundError, ValidationError
from plume.db.time import utcnow
from plume.models import Category, Post
from plume.models.post import POST_STATUS_PUBLISHED
from plume.repositories.pagination import PageResult, paginate
from plume.repositories.post_repo import PostRepository
from plume.schemas.post import PostCreate, PostUpdate
from plume.utils.slug import slugify

logger = logging.getLogger(__name__)

_REQUIRED_FIELDS = ("title", "content", "status")
_NULLABLE_FIELDS = ("excerpt", "featured_image")


def assign_slug(post: Post, explicit: str | None = None) -> str:
    """Give ``post`` a slug unless it already has one.

    Args:
        post: Post about to be persisted.
        explicit: Caller-supplied slug; must already be URL-safe.

    Returns:
        The slug carried by the post afterwards.

    Raises:
        ValidationError: If the explicit slug is not URL-safe or the title yields
            an empty slug.
    """
    if post.slug:
        return post.slug
    if explicit is not None:
        if not explicit or slugify(explicit) != explicit:
            raise ValidationError("Slug may only contain lower-case letters, digits and dashes")
        post.slug = explicit
        return post.slug
    derived = slugify(post.title or "")
    if not derived:
        raise ValidationError("Cannot derive a slug from this title; supply one explicitly")
    post.slug = derived
    return post.slug


def stamp_publication(post: Post, now: datetime | None = None) -> bool:
    """Record the first publication instant.

    Returns True only when this call set ``published_at``. Later calls, and calls
    on drafts, leave the post untouched.
    """
    if post.status != POST_STATUS_PUBLISHED or post.published_at is not None:
        return False
    post.published_at = now or utcnow()
    return True


class PublicationService:
    """Write and read operations over posts."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.repo = PostRepository(db)

    # -- write path -------------------------------------------------------

    def create_post(self, author_id: int, data: PostCreate) -> Post:
        """Persist a new post authored by ``author_id``.

        Raises:
            ValidationError: Unknown category or unusable slug.
            ConflictError: The slug is already used by another post.
        """
        self._require_category(data.category_id)
        post = Post(
            user_id=author_id,
            category_id=data.category_id,
            title=data.title,
            excerpt=data.excerpt,
            content=data.content,
            featured_image=data.featured_image,
            status=data.status,
            published_at=data.published_at if data.status == POST_STATUS_PUBLISHED else None,
            views_count=0,
        )
        slug = assign_slug(post, data.slug)
        if self.repo.slug_taken(slug):
            raise ConflictError(f"Slug '{slug}' is already in use")
        stamped = stamp_publication(post)

        self.db.add(post)
        self._commit(slug)
        self.db.refresh(post)
        logger.info("Created post %s (%s)", post.id, post.slug)
        if stamped:
            logger.info("Post %s published at %s", post.id, post.published_at)
        return post

    def update_post(self, post_id: int, changes: PostUpdate) -> Post:
        """Apply an edit. The slug only changes when one is supplied explicitly."""
        post = self.get_post(post_id)
        fields = changes.model_dump(exclude_unset=True)

        if fields.get("category_id") is not None:
            self._require_category(fields["category_id"])
        new_slug = fields.get("slug")
        if new_slug is not None and new_slug != post.slug:
            if not new_slug or slugify(new_slug) != new_slug:
                raise ValidationError("Slug may only contain lower-case letters, digits and dashes")
            if self.repo.slug_taken(new_slug, exclude_id=post.id):
                raise ConflictError(f"Slug '{new_slug}' is already in use")
            post.slug = new_slug

        for name in _REQUIRED_FIELDS:
            if fields.get(name) is not None:
                setattr(post, name, fields[name])
        for name in _NULLABLE_FIELDS:
            if name in fields:
                setattr(post, name, fields[name])
        if fields.get("category_id") is not None:
            post.category_id = fields["category_id"]

        # A schedule can be set only on a published post that was never stamped.
        if (
            fields.get("published_at") is not None
            and post.published_at is None
            and post.status == POST_STATUS_PUBLISHED
        ):
            post.published_at = fields["published_at"]

        stamped = stamp_publication(post)
        self._commit(post.slug)
        self.db.refresh(post)
        if stamped:
            logger.info("Post %s published at %s", post.id, post.published_at)
        return post

    def delete_post(self, post_id: int) -> None:
        """Delete a post with its comments and reactions."""
        self.get_post(post_id)
        self.repo.delete_many([post_id])
        self.db.commit()
        logger.info("Deleted post %s", post_id)

    def increment_views(self, post: Post) -> Post:
        """Count one view of ``post`` and reload its counter."""
        self.repo.increment_views(post.id)
        self.db.commit()
        self.db.refresh(post)
        return post

    # -- read path --------------------------------------------------------

    def get_post(self, post_id: int) -> Post:
        """Return any post (draft or published) by id."""
        post = self.repo.get_by_id(post_id)
        if post is None:
            raise NotFoundError("Post not found")
        return post

    def get_published(self, slug: str) -> Post:
        """Return a publicly visible post by slug."""
        post = self.repo.get_published_by_slug(slug, utcnow())
        if post is None:
            raise NotFoundError("Post not found")
        return post

    def show(self, slug: str) -> Post:
        """Return a visible post by slug and count the view."""
        return self.increment_views(self.get_published(slug))

    def list_published(self, page: int, per_page: int) -> PageResult[Post]:
        """Return visible posts, newest publication first."""
        return paginate(self.repo.published(utcnow()), page, per_page)

    def search(self, term: str | None, page: int, per_page: int) -> PageResult[Post]:
        """Search visible posts by title, content or excerpt."""
        term = (term or "").strip()
        if not term:
            raise ValidationError("Search query is required")
        query = self.repo.published(utcnow()).filter(
            Post.title.icontains(term, autoescape=True)
            | Post.content.icontains(term, autoescape=True)
            | Post.excerpt.icontains(term, autoescape=True)
        )
        return paginate(query, page, per_page)

    def related(self, slug: str, limit: int) -> list[Post]:
        """Return the latest visible posts from the same category."""
        now = utcnow()
        post = self.repo.get_published_by_slug(slug, now)
        if post is None:
            raise NotFoundError("Post not found")
        return self.repo.related(post, now, limit)

    def list_by_category(self, category_slug: str, page: int, per_page: int) -> PageResult[Post]:
        """Return visible posts of a category; an unknown slug yields an empty page."""
        return paginate(self.repo.published_in_category(category_slug, utcnow()), page, per_page)

    def admin_list(
        self,
        *,
        page: int,
        per_page: int,
        search: str | None = None,
        status: str | None = None,
        category: str | None = None,
    ) -> PageResult[Post]:
        """Return all posts including drafts, newest first, with optional filters.

        Args:
            page: 1-based page number.
            per_page: Page size.
            search: Substring matched against the title.
            status: ``draft``, ``published`` or ``all``.
            category: Category name, or ``all``.
        """
        query: Query[Any] = self.db.query(Post)
        if search:
            query = query.filter(Post.title.icontains(search, autoescape=True))
        if status and status != "all":
            query = query.filter(Post.status == status)
        if category and category != "all":
            query = query.filter(
                Post.category_id.in_(
                    self.db.query(Category.id).filter(Category.name == category).scalar_subquery()
                )
            )
        query = query.order_by(Post.created_at.desc(), Post.id.desc())
        return paginate(query, page, per_page)

    # -- helpers ----------------------------------------------------------

    def _require_category(self, category_id: int) -> None:
        if self.db.get(Category, category_id) is None:
            raise ValidationError("Selected category does not exist")

    def _commit(self, slug: str) -> None:
        try:
            self.db.commit()
        except IntegrityError as err:
            self.db.rollback()
            logger.warning("Slug collision while saving post %s: %s", slug, err.orig)
            raise ConflictError(f"Slug '{slug}' is already in use") from err
