"""Reaction-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ReactionCreate(BaseModel):
    """Schema for setting the caller's reaction on a post."""

    reaction_type: str = Field(
        ...,
        description="One of jadore, jaime, interessant, inspirant, utile",
    )


class ReactionResponse(BaseModel):
    """Schema for a stored reaction; session tokens are never echoed."""

    id: int
    post_id: int
    user_id: int | None
    reaction_type: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ReactionStats(BaseModel):
    """Per-kind reaction counts for a post."""

    jadore: int = 0
    jaime: int = 0
    interessant: int = 0
    inspirant: int = 0
    utile: int = 0
    total: int = 0


class MyReaction(BaseModel):
    """The caller's current reaction, if any."""

    reaction_type: str | None
