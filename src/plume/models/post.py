"""SQLAlchemy model for blog posts."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from plume.db.session import Base
from plume.db.time import UTCDateTime, utcnow
from plume.models.category import Category
from plume.models.user import User

POST_STATUS_DRAFT = "draft"
POST_STATUS_PUBLISHED = "published"
POST_STATUSES = (POST_STATUS_DRAFT, POST_STATUS_PUBLISHED)


class Post(Base):
    """Primary content entity written by an author inside one category.

    ``published_at`` records the first publication and is never cleared, so a
    post returned to draft keeps it.
    """

    __tablename__ = "posts"
    __table_args__ = (
        CheckConstraint("status IN ('draft', 'published')", name="ck_posts_status"),
        CheckConstraint("views_count >= 0", name="ck_posts_views_count"),
        Index("posts_status_index", "status"),
        Index("posts_created_at_index", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    category_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("categories.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    # Assigned once at creation; editing the title never touches it.
    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    excerpt: Mapped[str | None] = mapped_column(Text, nullable=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    featured_image: Mapped[str | None] = mapped_column(String(2048), nullable=True)

    status: Mapped[str] = mapped_column(String(16), nullable=False, default=POST_STATUS_DRAFT)
    published_at: Mapped[datetime | None] = mapped_column(UTCDateTime, nullable=True)
    views_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime, nullable=False, default=utcnow, onupdate=utcnow
    )

    author: Mapped[User] = relationship("User", lazy="joined")
    category: Mapped[Category] = relationship("Category", lazy="joined")

    @property
    def is_published(self) -> bool:
        """Return True when the status flag says published."""
        return self.status == POST_STATUS_PUBLISHED
