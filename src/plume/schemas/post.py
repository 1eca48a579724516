"""Post-related Pydantic schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .category import CategorySummary
from .user import UserSummary

PostStatus = Literal["draft", "published"]


class PostCreate(BaseModel):
    """Schema for creating a new post."""

    title: str = Field(..., min_length=1, max_length=255)
    slug: str | None = Field(None, max_length=255, description="Derived from the title when omitted")
    excerpt: str | None = None
    content: str = Field(..., min_length=1)
    category_id: int
    featured_image: str | None = Field(None, max_length=2048)
    status: PostStatus
    published_at: datetime | None = Field(
        None,
        description="Optional publication instant; a future value schedules the post",
    )


class PostUpdate(BaseModel):
    """Schema for editing a post; omitted fields are left untouched."""

    title: str | None = Field(None, min_length=1, max_length=255)
    slug: str | None = Field(None, max_length=255)
    excerpt: str | None = None
    content: str | None = Field(None, min_length=1)
    category_id: int | None = None
    featured_image: str | None = Field(None, max_length=2048)
    status: PostStatus | None = None
    published_at: datetime | None = None


class PostResponse(BaseModel):
    """Schema for post information returned by the API."""

    id: int
    title: str
    slug: str
    excerpt: str | None
    content: str
    featured_image: str | None
    status: PostStatus
    published_at: datetime | None
    views_count: int
    created_at: datetime
    updated_at: datetime
    author: UserSummary
    category: CategorySummary

    model_config = ConfigDict(from_attributes=True)
