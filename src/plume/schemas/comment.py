"""Comment-related Pydantic schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from .user import UserSummary


class CommentCreate(BaseModel):
    """Schema for submitting a comment or a reply."""

    content: str = Field(..., max_length=10_000)
    parent_id: int | None = Field(None, description="Comment being replied to")
    author_name: str | None = Field(None, max_length=255, description="Guest display name")
    author_email: EmailStr | None = Field(None, description="Guest contact email")


class CommentUpdate(BaseModel):
    """Schema for editing one's own comment."""

    content: str = Field(..., max_length=10_000)


class CommentResponse(BaseModel):
    """Schema for a single comment returned by the API."""

    id: int
    post_id: int
    parent_id: int | None
    user_id: int | None
    author_name: str | None
    content: str
    is_approved: bool
    created_at: datetime
    user: UserSummary | None = None

    model_config = ConfigDict(from_attributes=True)


class CommentTreeResponse(CommentResponse):
    """Approved comment together with its approved replies."""

    replies: list[CommentTreeResponse] = []


class CommentAdminResponse(CommentResponse):
    """Moderation view; includes the guest email."""

    author_email: str | None


CommentTreeResponse.model_rebuild()
