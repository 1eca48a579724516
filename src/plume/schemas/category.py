"""Category-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field


class CategoryCreate(BaseModel):
    """Schema for creating a category."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None


class CategoryUpdate(BaseModel):
    """Schema for renaming or re-describing a category; the slug is kept."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None


class CategorySummary(BaseModel):
    """Category as embedded in a post."""

    id: int
    name: str
    slug: str

    model_config = ConfigDict(from_attributes=True)


class CategoryResponse(CategorySummary):
    """Schema for category information returned by the API."""

    description: str | None
    posts_count: int = 0
