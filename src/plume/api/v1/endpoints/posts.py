"""Public post endpoints for the Plume API."""

from fastapi import APIRouter, Query

from plume.api.v1.dependencies import PageQuery, PublicationServiceDep, per_page_query
from plume.core.settings import settings
from plume.models import Post
from plume.repositories.pagination import PageResult
from plume.schemas.common import Page
from plume.schemas.post import PostResponse

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("/", response_model=Page[PostResponse])
async def list_posts(
    service: PublicationServiceDep,
    page: PageQuery = 1,
    per_page: int = per_page_query(settings.posts_per_page),
) -> PageResult[Post]:
    """List published posts, newest publication first."""
    return service.list_published(page, per_page)


@router.get("/search", response_model=Page[PostResponse])
async def search_posts(
    service: PublicationServiceDep,
    q: str | None = Query(None, description="Text searched in title, content and excerpt"),
    page: PageQuery = 1,
) -> PageResult[Post]:
    """Search published posts."""
    return service.search(q, page, settings.search_per_page)


@router.get("/{slug}", response_model=PostResponse)
async def get_post(slug: str, service: PublicationServiceDep) -> Post:
    """Get a published post by slug and count the view."""
    return service.show(slug)


@router.get("/{slug}/related", response_model=list[PostResponse])
async def related_posts(slug: str, service: PublicationServiceDep) -> list[Post]:
    """Get the latest published posts from the same category."""
    return service.related(slug, settings.related_posts_limit)
