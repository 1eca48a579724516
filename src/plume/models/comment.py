"""SQLAlchemy model for threaded comments."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from plume.db.session import Base
from plume.db.time import UTCDateTime, utcnow
from plume.models.user import User


class Comment(Base):
    """Comment on a post, optionally replying to another comment of the same post.

    Rows form a forest per post through ``parent_id``. Authenticated comments
    carry ``user_id``; guest comments carry ``author_name``/``author_email``.
    """

    __tablename__ = "comments"
    __table_args__ = (
        Index("comments_is_approved_index", "is_approved"),
        Index("comments_created_at_index", "created_at"),
        Index("comments_author_name_index", "author_name"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=True,
    )
    # Root comments have parent_id = NULL.
    parent_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )

    author_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    author_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    is_approved: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime, nullable=False, default=utcnow, onupdate=utcnow
    )

    user: Mapped[User | None] = relationship("User", lazy="joined")
