"""Public category endpoints for the Plume API."""

from fastapi import APIRouter

from plume.api.v1.dependencies import (
    CategoryServiceDep,
    PageQuery,
    PublicationServiceDep,
    per_page_query,
)
from plume.core.settings import settings
from plume.models import Category, Post
from plume.repositories.pagination import PageResult
from plume.schemas.category import CategoryResponse
from plume.schemas.common import Page
from plume.schemas.post import PostResponse

router = APIRouter(prefix="/categories", tags=["categories"])


def to_category_response(category: Category, posts_count: int) -> CategoryResponse:
    """Convert a Category ORM instance and its post count to an API schema."""
    return CategoryResponse(
        id=category.id,
        name=category.name,
        slug=category.slug,
        description=category.description,
        posts_count=posts_count,
    )


@router.get("/", response_model=list[CategoryResponse])
async def list_categories(service: CategoryServiceDep) -> list[CategoryResponse]:
    """List all categories with their post counts."""
    return [to_category_response(category, count) for category, count in service.list_with_counts()]


@router.get("/{slug}", response_model=CategoryResponse)
async def get_category(slug: str, service: CategoryServiceDep) -> CategoryResponse:
    """Get a category by slug."""
    category, count = service.get_by_slug(slug)
    return to_category_response(category, count)


@router.get("/{slug}/posts", response_model=Page[PostResponse])
async def list_category_posts(
    slug: str,
    service: PublicationServiceDep,
    page: PageQuery = 1,
    per_page: int = per_page_query(settings.search_per_page),
) -> PageResult[Post]:
    """List published posts of a category."""
    return service.list_by_category(slug, page, per_page)
