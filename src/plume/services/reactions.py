"""Reaction ledger: one reaction per (post, identity) with replace semantics."""

from __future__ import annotations

import logging
from typing import assert_never

from sqlalchemy import ColumnElement, delete, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from plume.core.errors import ConflictError, NotFoundError, ValidationError
from plume.models import Post, Reaction
from plume.models.reaction import REACTION_TYPES
from plume.services.identity import Anonymous, Authenticated, Identity

logger = logging.getLogger(__name__)


def _owner_clause(identity: Identity) -> ColumnElement[bool]:
    if isinstance(identity, Authenticated):
        return Reaction.user_id == identity.user_id
    if isinstance(identity, Anonymous):
        return Reaction.session_id == identity.session_token
    assert_never(identity)


def _owner_columns(identity: Identity) -> dict[str, int | str | None]:
    if isinstance(identity, Authenticated):
        return {"user_id": identity.user_id, "session_id": None}
    if isinstance(identity, Anonymous):
        return {"user_id": None, "session_id": identity.session_token}
    assert_never(identity)


class ReactionLedger:
    """Keeps at most one reaction per identity on each post."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def set_reaction(self, post_id: int, identity: Identity, reaction_type: str) -> Reaction:
        """Replace the caller's reaction on a post.

        The previous row is deleted and the new one inserted inside a single
        transaction. The unique constraints on (post, user) and (post, session)
        reject a concurrent duplicate insert, which surfaces as ``ConflictError``.

        Raises:
            ValidationError: If ``reaction_type`` is not a known kind.
            NotFoundError: If the post does not exist.
            ConflictError: If a concurrent request inserted a reaction first.
        """
        if reaction_type not in REACTION_TYPES:
            raise ValidationError(
                f"Invalid reaction type '{reaction_type}'; expected one of {', '.join(REACTION_TYPES)}"
            )
        self._require_post(post_id)

        reaction = Reaction(post_id=post_id, reaction_type=reaction_type, **_owner_columns(identity))
        try:
            self.db.execute(
                delete(Reaction).where(Reaction.post_id == post_id, _owner_clause(identity))
            )
            self.db.add(reaction)
            self.db.commit()
        except IntegrityError as err:
            self.db.rollback()
            logger.warning("Concurrent reaction write on post %s: %s", post_id, err.orig)
            raise ConflictError("Reaction was changed concurrently; please retry") from err

        self.db.refresh(reaction)
        logger.info("Reaction on post %s set to %s", post_id, reaction_type)
        return reaction

    def clear_reaction(self, post_id: int, identity: Identity) -> bool:
        """Remove the caller's reaction. Returns False when there was none."""
        self._require_post(post_id)
        result = self.db.execute(
            delete(Reaction).where(Reaction.post_id == post_id, _owner_clause(identity))
        )
        self.db.commit()
        return bool(result.rowcount)

    def reaction_for(self, post_id: int, identity: Identity) -> str | None:
        """Return the caller's current reaction kind on a post, if any."""
        self._require_post(post_id)
        return (
            self.db.query(Reaction.reaction_type)
            .filter(Reaction.post_id == post_id, _owner_clause(identity))
            .scalar()
        )

    def list_reactions(self, post_id: int) -> list[Reaction]:
        """Return every reaction on a post, oldest first."""
        self._require_post(post_id)
        return (
            self.db.query(Reaction)
            .filter(Reaction.post_id == post_id)
            .order_by(Reaction.created_at.asc(), Reaction.id.asc())
            .all()
        )

    def stats(self, post_id: int) -> dict[str, int]:
        """Return a count per reaction kind plus ``total``, from one grouped query."""
        self._require_post(post_id)
        counts: dict[str, int] = {kind: 0 for kind in REACTION_TYPES}
        rows = (
            self.db.query(Reaction.reaction_type, func.count(Reaction.id))
            .filter(Reaction.post_id == post_id)
            .group_by(Reaction.reaction_type)
            .all()
        )
        for reaction_type, count in rows:
            counts[reaction_type] = count
        counts["total"] = sum(counts[kind] for kind in REACTION_TYPES)
        return counts

    def _require_post(self, post_id: int) -> None:
        if self.db.get(Post, post_id) is None:
            raise NotFoundError("Post not found")
