"""Comment tree engine: submission, moderation, deletion and threaded reads.

Comments are stored as an adjacency list (``parent_id``). Reads fetch every
approved comment of a post in one query and assemble the forest in memory by
grouping children under their parent id, so cost stays linear in the number of
comments. Assembly starts from approved roots only, which means a comment is
visible iff it and every one of its ancestors is approved.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, assert_never

from sqlalchemy import delete, select
from sqlalchemy.orm import Query, Session

from plume.core.errors import AuthorizationError, NotFoundError, ValidationError
from plume.models import Comment, Post, User
from plume.repositories.pagination import PageResult, paginate
from plume.services.identity import Anonymous, Authenticated, Identity

logger = logging.getLogger(__name__)


@dataclass
class CommentNode:
    """An approved comment with its approved replies attached."""

    id: int
    post_id: int
    parent_id: int | None
    user_id: int | None
    author_name: str | None
    content: str
    is_approved: bool
    created_at: datetime
    user: User | None
    replies: list[CommentNode] = field(default_factory=list)

    @classmethod
    def from_comment(cls, comment: Comment) -> CommentNode:
        return cls(
            id=comment.id,
            post_id=comment.post_id,
            parent_id=comment.parent_id,
            user_id=comment.user_id,
            author_name=comment.author_name,
            content=comment.content,
            is_approved=comment.is_approved,
            created_at=comment.created_at,
            user=comment.user,
        )


def approval_for(identity: Identity | None) -> bool:
    """Return the initial approval flag for a comment written by ``identity``.

    Signed-in authors are trusted; guests wait for a moderator.
    """
    if identity is None or isinstance(identity, Anonymous):
        return False
    if isinstance(identity, Authenticated):
        return True
    assert_never(identity)


def build_forest(comments: list[Comment]) -> list[CommentNode]:
    """Assemble approved comments into root nodes with nested replies.

    ``comments`` must be ordered oldest first. Replies keep that order; roots are
    returned newest first. Comments whose parent is absent from ``comments``
    (unapproved or otherwise filtered out) are dropped along with their subtrees.
    """
    nodes = {comment.id: CommentNode.from_comment(comment) for comment in comments}
    children: dict[int, list[CommentNode]] = defaultdict(list)
    roots: list[CommentNode] = []
    for comment in comments:
        node = nodes[comment.id]
        if comment.parent_id is None:
            roots.append(node)
        else:
            children[comment.parent_id].append(node)

    # Walk down from the roots so orphaned branches are never attached.
    stack = list(roots)
    while stack:
        node = stack.pop()
        node.replies = children.get(node.id, [])
        stack.extend(node.replies)

    roots.reverse()
    return roots


class CommentService:
    """Service handling comment threads on posts."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def submit(
        self,
        post_id: int,
        content: str,
        *,
        parent_id: int | None = None,
        identity: Identity | None = None,
        author_name: str | None = None,
        author_email: str | None = None,
    ) -> Comment:
        """Store a comment or reply.

        Args:
            post_id: Post being commented on.
            content: Comment body; must not be blank.
            parent_id: Comment being replied to; must belong to the same post.
            identity: Caller identity, if any. Only ``Authenticated`` callers are
                recorded as the author; everyone else is a guest.
            author_name: Guest display name, ignored for signed-in authors.
            author_email: Guest email, ignored for signed-in authors.

        Returns:
            The persisted comment.

        Raises:
            NotFoundError: If the post does not exist.
            ValidationError: If the content is blank or the parent is unknown or
                belongs to another post.
        """
        self._require_post(post_id)
        if not content or not content.strip():
            raise ValidationError("Comment content cannot be empty")

        if parent_id is not None:
            parent = self.db.get(Comment, parent_id)
            if parent is None:
                raise ValidationError("Parent comment does not exist")
            if parent.post_id != post_id:
                raise ValidationError("Parent comment belongs to a different post")

        comment = Comment(
            post_id=post_id,
            parent_id=parent_id,
            content=content,
            is_approved=approval_for(identity),
        )
        if isinstance(identity, Authenticated):
            comment.user_id = identity.user_id
        elif identity is None or isinstance(identity, Anonymous):
            comment.author_name = author_name
            comment.author_email = author_email
        else:
            assert_never(identity)

        self.db.add(comment)
        self.db.commit()
        self.db.refresh(comment)
        logger.info(
            "Comment %s submitted on post %s (approved=%s)",
            comment.id,
            post_id,
            comment.is_approved,
        )
        return comment

    def list_approved_tree(self, post_id: int) -> list[CommentNode]:
        """Return approved root comments of a post, each with approved replies."""
        self._require_post(post_id)
        comments = (
            self.db.query(Comment)
            .filter(Comment.post_id == post_id, Comment.is_approved.is_(True))
            .order_by(Comment.created_at.asc(), Comment.id.asc())
            .all()
        )
        return build_forest(comments)

    def approve(self, comment_id: int) -> Comment:
        """Mark a comment approved. Approving twice is harmless."""
        comment = self._get(comment_id)
        if not comment.is_approved:
            comment.is_approved = True
            self.db.commit()
            self.db.refresh(comment)
            logger.info("Comment %s approved", comment_id)
        return comment

    def edit(self, comment_id: int, identity: Identity | None, content: str) -> Comment:
        """Replace the body of a comment owned by the caller."""
        comment = self._get(comment_id)
        if not isinstance(identity, Authenticated) or comment.user_id != identity.user_id:
            raise AuthorizationError("You can only edit your own comments")
        if not content or not content.strip():
            raise ValidationError("Comment content cannot be empty")
        comment.content = content
        self.db.commit()
        self.db.refresh(comment)
        return comment

    def delete(self, comment_id: int, identity: Identity | None) -> int:
        """Delete a comment and its whole reply subtree.

        Returns:
            Number of comments removed (the comment plus all descendants).

        Raises:
            NotFoundError: If the comment does not exist.
            AuthorizationError: If the caller is neither the owner nor an admin.
        """
        comment = self._get(comment_id)
        if not self._can_delete(comment, identity):
            raise AuthorizationError("You are not allowed to delete this comment")

        doomed = self._subtree_ids(comment)
        self.db.execute(delete(Comment).where(Comment.id.in_(doomed)))
        self.db.commit()
        logger.info("Deleted comment %s with %d replies", comment_id, len(doomed) - 1)
        return len(doomed)

    def list_for_moderation(
        self,
        *,
        page: int,
        per_page: int,
        is_approved: bool | None = None,
    ) -> PageResult[Comment]:
        """Return every comment newest first, optionally filtered by approval."""
        query: Query[Any] = self.db.query(Comment)
        if is_approved is not None:
            query = query.filter(Comment.is_approved.is_(is_approved))
        query = query.order_by(Comment.created_at.desc(), Comment.id.desc())
        return paginate(query, page, per_page)

    def _can_delete(self, comment: Comment, identity: Identity | None) -> bool:
        if identity is None or isinstance(identity, Anonymous):
            return False
        if isinstance(identity, Authenticated):
            return identity.is_admin or comment.user_id == identity.user_id
        assert_never(identity)

    def _subtree_ids(self, root: Comment) -> list[int]:
        rows = self.db.execute(
            select(Comment.id, Comment.parent_id).where(Comment.post_id == root.post_id)
        ).all()
        children: dict[int, list[int]] = defaultdict(list)
        for comment_id, parent_id in rows:
            if parent_id is not None:
                children[parent_id].append(comment_id)

        collected: list[int] = []
        stack = [root.id]
        while stack:
            current = stack.pop()
            collected.append(current)
            stack.extend(children.get(current, []))
        return collected

    def _get(self, comment_id: int) -> Comment:
        comment = self.db.get(Comment, comment_id)
        if comment is None:
            raise NotFoundError("Comment not found")
        return comment

    def _require_post(self, post_id: int) -> None:
        if self.db.get(Post, post_id) is None:
            raise NotFoundError("Post not found")
