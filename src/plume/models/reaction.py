"""Models capturing reader reactions on posts."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from plume.db.session import Base
from plume.db.time import UTCDateTime, utcnow

REACTION_JADORE = "jadore"
REACTION_JAIME = "jaime"
REACTION_INTERESSANT = "interessant"
REACTION_INSPIRANT = "inspirant"
REACTION_UTILE = "utile"

# Longest anonymous session token the ledger stores.
SESSION_ID_MAX_LENGTH = 255

REACTION_TYPES = (
    REACTION_JADORE,
    REACTION_JAIME,
    REACTION_INTERESSANT,
    REACTION_INSPIRANT,
    REACTION_UTILE,
)


class Reaction(Base):
    """One reader's reaction to a post.

    A row belongs either to a user or to an anonymous session, never both.
    """

    __tablename__ = "reactions"
    __table_args__ = (
        CheckConstraint(
            "reaction_type IN ('jadore', 'jaime', 'interessant', 'inspirant', 'utile')",
            name="ck_reactions_type",
        ),
        CheckConstraint(
            "(user_id IS NULL) <> (session_id IS NULL)",
            name="ck_reactions_single_identity",
        ),
        # NULLs never collide, so each constraint only binds its own identity kind.
        UniqueConstraint("post_id", "user_id", name="uq_reactions_post_user"),
        UniqueConstraint("post_id", "session_id", name="uq_reactions_post_session"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=True,
    )
    session_id: Mapped[str | None] = mapped_column(
        String(SESSION_ID_MAX_LENGTH), nullable=True
    )
    reaction_type: Mapped[str] = mapped_column(String(16), nullable=False)

    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime, nullable=False, default=utcnow, onupdate=utcnow
    )
