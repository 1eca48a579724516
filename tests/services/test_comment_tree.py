"""Tests for the comment tree engine."""
from __future__ import annotations

from collections.abc import Callable

import pytest
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from plume.core.errors import AuthorizationError, NotFoundError, ValidationError
from plume.models import Comment, Post, User
from plume.services import Anonymous, Authenticated, CommentService
from plume.services.comments import approval_for, build_forest


def _count_comments(db: Session, post_id: int) -> int:
    return db.execute(
        select(func.count()).select_from(Comment).where(Comment.post_id == post_id)
    ).scalar_one()


def test_approval_depends_on_identity() -> None:
    assert approval_for(Authenticated(user_id=1)) is True
    assert approval_for(Anonymous(session_token="abc")) is False
    assert approval_for(None) is False


def test_guest_comment_waits_for_moderation(db_session: Session, published_post: Post) -> None:
    service = CommentService(db_session)

    comment = service.submit(
        published_post.id,
        "Nice read",
        author_name="Guest",
        author_email="guest@example.com",
    )

    assert comment.is_approved is False
    assert comment.user_id is None
    assert comment.author_name == "Guest"
    assert service.list_approved_tree(published_post.id) == []


def test_signed_in_comment_is_approved_and_drops_guest_fields(
    db_session: Session, published_post: Post, reader: User
) -> None:
    service = CommentService(db_session)

    comment = service.submit(
        published_post.id,
        "Hello",
        identity=Authenticated(user_id=reader.id),
        author_name="Ignored",
        author_email="ignored@example.com",
    )

    assert comment.is_approved is True
    assert comment.user_id == reader.id
    assert comment.author_name is None
    assert comment.author_email is None


def test_blank_content_is_rejected(db_session: Session, published_post: Post) -> None:
    service = CommentService(db_session)
    with pytest.raises(ValidationError):
        service.submit(published_post.id, "   ")


def test_unknown_post_is_not_found(db_session: Session) -> None:
    service = CommentService(db_session)
    with pytest.raises(NotFoundError):
        service.submit(999_999, "Hello")


def test_unknown_parent_is_rejected(db_session: Session, published_post: Post) -> None:
    service = CommentService(db_session)
    with pytest.raises(ValidationError):
        service.submit(published_post.id, "Reply", parent_id=424_242)


def test_parent_must_belong_to_same_post(
    db_session: Session,
    make_post: Callable[..., Post],
    reader: User,
) -> None:
    service = CommentService(db_session)
    first, second = make_post(), make_post()
    parent = service.submit(first.id, "On first", identity=Authenticated(user_id=reader.id))

    with pytest.raises(ValidationError):
        service.submit(
            second.id, "Cross-post reply", parent_id=parent.id, identity=Authenticated(user_id=reader.id)
        )


def test_tree_orders_roots_newest_first_and_replies_oldest_first(
    db_session: Session, published_post: Post, reader: User
) -> None:
    service = CommentService(db_session)
    me = Authenticated(user_id=reader.id)
    older_root = service.submit(published_post.id, "root 1", identity=me)
    newer_root = service.submit(published_post.id, "root 2", identity=me)
    first_reply = service.submit(published_post.id, "reply a", parent_id=older_root.id, identity=me)
    second_reply = service.submit(published_post.id, "reply b", parent_id=older_root.id, identity=me)
    nested = service.submit(published_post.id, "reply a.1", parent_id=first_reply.id, identity=me)

    tree = service.list_approved_tree(published_post.id)

    assert [node.id for node in tree] == [newer_root.id, older_root.id]
    older = tree[1]
    assert [node.id for node in older.replies] == [first_reply.id, second_reply.id]
    assert [node.id for node in older.replies[0].replies] == [nested.id]
    assert older.replies[0].replies[0].user is not None


def test_reply_under_unapproved_parent_stays_hidden_until_parent_approved(
    db_session: Session, published_post: Post, reader: User
) -> None:
    service = CommentService(db_session)
    guest_root = service.submit(published_post.id, "guest root", author_name="Guest")
    reply = service.submit(
        published_post.id,
        "approved reply",
        parent_id=guest_root.id,
        identity=Authenticated(user_id=reader.id),
    )
    assert reply.is_approved is True

    assert service.list_approved_tree(published_post.id) == []

    service.approve(guest_root.id)
    tree = service.list_approved_tree(published_post.id)
    assert [node.id for node in tree] == [guest_root.id]
    assert [node.id for node in tree[0].replies] == [reply.id]


def test_build_forest_drops_orphans(
    db_session: Session, published_post: Post, reader: User
) -> None:
    service = CommentService(db_session)
    me = Authenticated(user_id=reader.id)
    root = service.submit(published_post.id, "root", identity=me)
    child = service.submit(published_post.id, "child", parent_id=root.id, identity=me)

    # Feed only the child: its parent is absent, so nothing is reachable.
    assert build_forest([child]) == []
    assert [node.id for node in build_forest([root, child])] == [root.id]


def test_delete_removes_whole_subtree(
    db_session: Session, published_post: Post, reader: User
) -> None:
    service = CommentService(db_session)
    me = Authenticated(user_id=reader.id)
    root = service.submit(published_post.id, "root", identity=me)
    reply = service.submit(published_post.id, "reply", parent_id=root.id, identity=me)
    service.submit(published_post.id, "reply 2", parent_id=root.id, author_name="Guest")
    service.submit(published_post.id, "nested", parent_id=reply.id, identity=me)
    survivor = service.submit(published_post.id, "other root", identity=me)

    removed = service.delete(root.id, me)

    assert removed == 4
    assert _count_comments(db_session, published_post.id) == 1
    assert db_session.get(Comment, survivor.id) is not None


def test_only_owner_or_admin_may_delete(
    db_session: Session,
    published_post: Post,
    reader: User,
    make_user: Callable[..., User],
) -> None:
    service = CommentService(db_session)
    comment = service.submit(published_post.id, "mine", identity=Authenticated(user_id=reader.id))
    stranger = make_user()
    admin = make_user(is_admin=True)

    with pytest.raises(AuthorizationError):
        service.delete(comment.id, Authenticated(user_id=stranger.id))
    with pytest.raises(AuthorizationError):
        service.delete(comment.id, Anonymous(session_token="s-1"))

    assert service.delete(comment.id, Authenticated(user_id=admin.id, is_admin=True)) == 1


def test_edit_requires_ownership(
    db_session: Session,
    published_post: Post,
    reader: User,
    make_user: Callable[..., User],
) -> None:
    service = CommentService(db_session)
    comment = service.submit(published_post.id, "draft", identity=Authenticated(user_id=reader.id))
    other = make_user()

    with pytest.raises(AuthorizationError):
        service.edit(comment.id, Authenticated(user_id=other.id), "hijacked")

    edited = service.edit(comment.id, Authenticated(user_id=reader.id), "final")
    assert edited.content == "final"


def test_moderation_listing_filters_on_approval(
    db_session: Session, published_post: Post, reader: User
) -> None:
    service = CommentService(db_session)
    service.submit(published_post.id, "approved", identity=Authenticated(user_id=reader.id))
    pending = service.submit(published_post.id, "pending", author_name="Guest")

    result = service.list_for_moderation(page=1, per_page=20, is_approved=False)

    assert result.total == 1
    assert [comment.id for comment in result.items] == [pending.id]
    assert service.list_for_moderation(page=1, per_page=20).total == 2
