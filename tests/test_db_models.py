"""Unit tests for the ORM models defined in plume.models.

These tests verify mapping details the services rely on: table names, the
uniqueness rules behind slugs and reactions, and cascading foreign keys.
"""

from datetime import timedelta

from sqlalchemy import UniqueConstraint
from sqlalchemy.orm import Session, attributes

from plume.models import Category, Comment, NewsletterSubscription, Post, Reaction, User


def test_table_names():
    """Model classes expose expected __tablename__ values."""
    assert User.__tablename__ == "users"
    assert Category.__tablename__ == "categories"
    assert Post.__tablename__ == "posts"
    assert Comment.__tablename__ == "comments"
    assert Reaction.__tablename__ == "reactions"
    assert NewsletterSubscription.__tablename__ == "newsletter_subscriptions"


def test_unique_columns():
    """Slugs and emails are unique at the database level."""
    assert Post.__table__.c.slug.unique
    assert Category.__table__.c.slug.unique
    assert User.__table__.c.email.unique
    assert NewsletterSubscription.__table__.c.email.unique


def test_reaction_uniqueness_per_identity():
    """Each identity kind gets its own (post, identity) unique constraint."""
    constraints = {
        tuple(column.name for column in constraint.columns)
        for constraint in Reaction.__table__.constraints
        if isinstance(constraint, UniqueConstraint)
    }
    assert ("post_id", "user_id") in constraints
    assert ("post_id", "session_id") in constraints


def test_child_rows_cascade_on_delete():
    """Comments and reactions disappear with their post."""
    for table in (Comment.__table__, Reaction.__table__):
        fk = next(iter(table.c.post_id.foreign_keys))
        assert fk.ondelete == "CASCADE"
    parent_fk = next(iter(Comment.__table__.c.parent_id.foreign_keys))
    assert parent_fk.column.table.name == "comments"
    assert parent_fk.ondelete == "CASCADE"


def test_relationships_are_instrumented_attributes():
    """Relationships embedded in responses are mapped descriptors."""
    for attr in (Post.author, Post.category, Comment.user):
        assert isinstance(attr, attributes.InstrumentedAttribute)


def test_timestamps_read_back_as_utc(db_session: Session, published_post: Post):
    """Datetimes come back timezone-aware even on SQLite."""
    db_session.expire_all()
    post = db_session.get(Post, published_post.id)
    assert post.created_at.tzinfo is not None
    assert post.published_at.utcoffset() == timedelta(0)


def test_parent_delete_cascades_to_replies(db_session: Session, published_post: Post):
    """Deleting a comment row removes its replies through the foreign key."""
    root = Comment(post_id=published_post.id, content="root", is_approved=True)
    db_session.add(root)
    db_session.commit()
    reply = Comment(post_id=published_post.id, parent_id=root.id, content="reply", is_approved=True)
    db_session.add(reply)
    db_session.commit()

    db_session.delete(root)
    db_session.commit()
    db_session.expire_all()

    assert db_session.query(Comment).count() == 0
