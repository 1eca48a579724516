"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

ItemT = TypeVar("ItemT")


class Page(BaseModel, Generic[ItemT]):
    """One page of a paginated listing."""

    items: list[ItemT]
    total: int = Field(..., description="Number of matching rows across all pages.")
    page: int
    per_page: int
    last_page: int

    model_config = ConfigDict(from_attributes=True)


class MessageResponse(BaseModel):
    """Plain acknowledgement returned by mutation endpoints."""

    message: str
