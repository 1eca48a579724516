"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .category import CategoryCreate, CategoryResponse, CategorySummary, CategoryUpdate
from .comment import (
    CommentAdminResponse,
    CommentCreate,
    CommentResponse,
    CommentTreeResponse,
    CommentUpdate,
)
from .common import MessageResponse, Page
from .newsletter import SubscribeResult, SubscriptionRequest, SubscriptionResponse
from .post import PostCreate, PostResponse, PostUpdate
from .reaction import MyReaction, ReactionCreate, ReactionResponse, ReactionStats
from .user import UserSummary

__all__ = [
    "CategoryCreate", "CategoryResponse", "CategorySummary", "CategoryUpdate",
    "CommentAdminResponse", "CommentCreate", "CommentResponse", "CommentTreeResponse",
    "CommentUpdate",
    "MessageResponse", "Page",
    "SubscribeResult", "SubscriptionRequest", "SubscriptionResponse",
    "PostCreate", "PostResponse", "PostUpdate",
    "MyReaction", "ReactionCreate", "ReactionResponse", "ReactionStats",
    "UserSummary",
]
