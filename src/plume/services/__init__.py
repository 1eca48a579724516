"""Business logic services for the Plume application."""

from .categories import CategoryService
from .comments import CommentService
from .identity import Anonymous, Authenticated, Identity
from .newsletter import NewsletterService
from .publication import PublicationService
from .reactions import ReactionLedger

__all__ = [
    "Anonymous",
    "Authenticated",
    "CategoryService",
    "CommentService",
    "Identity",
    "NewsletterService",
    "PublicationService",
    "ReactionLedger",
]
