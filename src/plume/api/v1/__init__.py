# src/plume/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    admin_router,
    categories_router,
    comments_router,
    newsletter_router,
    posts_router,
    reactions_router,
)

__all__ = [
    "admin_router",
    "categories_router",
    "comments_router",
    "newsletter_router",
    "posts_router",
    "reactions_router",
]
