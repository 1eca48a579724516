"""Category management."""

from __future__ import annotations

import logging

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from plume.core.errors import ConflictError, NotFoundError, ValidationError
from plume.models import Category, Post
from plume.repositories.post_repo import PostRepository
from plume.utils.slug import slugify

logger = logging.getLogger(__name__)


class CategoryService:
    """CRUD over categories; deleting one removes its posts."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def list_with_counts(self) -> list[tuple[Category, int]]:
        """Return every category with the number of posts it holds."""
        rows = (
            self.db.query(Category, func.count(Post.id))
            .outerjoin(Post, Post.category_id == Category.id)
            .group_by(Category.id)
            .order_by(Category.name.asc())
            .all()
        )
        return [(category, count) for category, count in rows]

    def get_by_slug(self, slug: str) -> tuple[Category, int]:
        """Return a category by slug with its post count."""
        category = self.db.query(Category).filter(Category.slug == slug).first()
        if category is None:
            raise NotFoundError("Category not found")
        return category, self._post_count(category.id)

    def create(self, name: str, description: str | None = None) -> Category:
        """Create a category; the slug is derived from the name."""
        slug = slugify(name)
        if not slug:
            raise ValidationError("Category name must contain letters or digits")
        if self.db.query(Category.id).filter(
            (Category.name == name) | (Category.slug == slug)
        ).first():
            raise ConflictError("A category with this name already exists")

        category = Category(name=name, slug=slug, description=description)
        self.db.add(category)
        self._commit()
        self.db.refresh(category)
        logger.info("Created category %s (%s)", category.id, category.slug)
        return category

    def update(self, category_id: int, name: str, description: str | None = None) -> Category:
        """Rename or re-describe a category. The slug stays as created."""
        category = self._get(category_id)
        duplicate = self.db.query(Category.id).filter(
            Category.name == name, Category.id != category_id
        ).first()
        if duplicate:
            raise ConflictError("A category with this name already exists")
        category.name = name
        category.description = description
        self._commit()
        self.db.refresh(category)
        return category

    def delete(self, category_id: int) -> int:
        """Delete a category and every post in it. Returns the number of posts removed."""
        self._get(category_id)
        post_ids = list(
            self.db.execute(select(Post.id).where(Post.category_id == category_id)).scalars()
        )
        PostRepository(self.db).delete_many(post_ids)
        self.db.query(Category).filter(Category.id == category_id).delete()
        self.db.commit()
        logger.info("Deleted category %s and %d posts", category_id, len(post_ids))
        return len(post_ids)

    def _post_count(self, category_id: int) -> int:
        return self.db.query(func.count(Post.id)).filter(Post.category_id == category_id).scalar() or 0

    def _get(self, category_id: int) -> Category:
        category = self.db.get(Category, category_id)
        if category is None:
            raise NotFoundError("Category not found")
        return category

    def _commit(self) -> None:
        try:
            self.db.commit()
        except IntegrityError as err:
            self.db.rollback()
            raise ConflictError("A category with this name already exists") from err
