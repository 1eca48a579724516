# src/plume/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .admin import router as admin_router
from .categories import router as categories_router
from .comments import router as comments_router
from .newsletter import router as newsletter_router
from .posts import router as posts_router
from .reactions import router as reactions_router

__all__ = [
    "admin_router",
    "categories_router",
    "comments_router",
    "newsletter_router",
    "posts_router",
    "reactions_router",
]
