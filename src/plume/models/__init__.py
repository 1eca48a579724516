"""SQLAlchemy models for the Plume application."""

from .category import Category
from .comment import Comment
from .newsletter import NewsletterSubscription
from .post import Post
from .reaction import Reaction
from .user import User

__all__ = [
    "Category",
    "Comment",
    "NewsletterSubscription",
    "Post",
    "Reaction",
    "User",
]
