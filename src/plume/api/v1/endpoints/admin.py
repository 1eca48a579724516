"""Administration endpoints for the Plume API.

Every route here requires a signed-in administrator.
"""

from typing import Literal

from fastapi import APIRouter, Depends, Query, status

from plume.api.v1.dependencies import (
    AdminUserDep,
    CategoryServiceDep,
    CommentServiceDep,
    NewsletterServiceDep,
    PageQuery,
    PublicationServiceDep,
    per_page_query,
    require_admin,
)
from plume.api.v1.endpoints.categories import to_category_response
from plume.core.settings import settings
from plume.models import Comment, NewsletterSubscription, Post
from plume.repositories.pagination import PageResult
from plume.schemas.category import CategoryCreate, CategoryResponse, CategoryUpdate
from plume.schemas.comment import CommentAdminResponse
from plume.schemas.common import MessageResponse, Page
from plume.schemas.newsletter import SubscriptionResponse
from plume.schemas.post import PostCreate, PostResponse, PostUpdate

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


# -- posts ---------------------------------------------------------------


@router.get("/posts", response_model=Page[PostResponse])
async def admin_list_posts(
    service: PublicationServiceDep,
    page: PageQuery = 1,
    per_page: int = per_page_query(settings.admin_posts_per_page),
    search: str | None = Query(None, description="Substring of the title"),
    status_filter: Literal["draft", "published", "all"] | None = Query(None, alias="status"),
    category: str | None = Query(None, description="Category name, or 'all'"),
) -> PageResult[Post]:
    """List every post, drafts and scheduled posts included."""
    return service.admin_list(
        page=page,
        per_page=per_page,
        search=search,
        status=status_filter,
        category=category,
    )


@router.get("/posts/{post_id}", response_model=PostResponse)
async def admin_get_post(post_id: int, service: PublicationServiceDep) -> Post:
    """Get any post by id."""
    return service.get_post(post_id)


@router.post("/posts", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def admin_create_post(
    payload: PostCreate,
    admin: AdminUserDep,
    service: PublicationServiceDep,
) -> Post:
    """Create a post authored by the calling administrator."""
    return service.create_post(admin.id, payload)


@router.put("/posts/{post_id}", response_model=PostResponse)
async def admin_update_post(
    post_id: int,
    payload: PostUpdate,
    service: PublicationServiceDep,
) -> Post:
    """Edit a post. The first publication instant is never overwritten."""
    return service.update_post(post_id, payload)


@router.delete("/posts/{post_id}", response_model=MessageResponse)
async def admin_delete_post(post_id: int, service: PublicationServiceDep) -> MessageResponse:
    """Delete a post together with its comments and reactions."""
    service.delete_post(post_id)
    return MessageResponse(message="Post deleted successfully")


# -- categories ----------------------------------------------------------


@router.post("/categories", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def admin_create_category(
    payload: CategoryCreate,
    service: CategoryServiceDep,
) -> CategoryResponse:
    """Create a category."""
    category = service.create(payload.name, payload.description)
    return to_category_response(category, 0)


@router.put("/categories/{category_id}", response_model=CategoryResponse)
async def admin_update_category(
    category_id: int,
    payload: CategoryUpdate,
    service: CategoryServiceDep,
) -> CategoryResponse:
    """Rename a category; its slug is left as created."""
    category = service.update(category_id, payload.name, payload.description)
    return to_category_response(category, service.get_by_slug(category.slug)[1])


@router.delete("/categories/{category_id}")
async def admin_delete_category(
    category_id: int,
    service: CategoryServiceDep,
) -> dict[str, str | int]:
    """Delete a category and every post filed under it."""
    removed = service.delete(category_id)
    return {"message": "Category deleted successfully", "deleted_posts": removed}


# -- comments ------------------------------------------------------------


@router.get("/comments", response_model=Page[CommentAdminResponse])
async def admin_list_comments(
    service: CommentServiceDep,
    page: PageQuery = 1,
    per_page: int = per_page_query(settings.admin_comments_per_page),
    is_approved: bool | None = Query(None, description="Filter on moderation state"),
) -> PageResult[Comment]:
    """List comments for moderation, newest first."""
    return service.list_for_moderation(page=page, per_page=per_page, is_approved=is_approved)


@router.put("/comments/{comment_id}/approve", response_model=CommentAdminResponse)
async def admin_approve_comment(comment_id: int, service: CommentServiceDep) -> Comment:
    """Approve a pending comment."""
    return service.approve(comment_id)


# -- newsletter ----------------------------------------------------------


@router.get("/newsletter", response_model=Page[SubscriptionResponse])
async def admin_list_subscribers(
    service: NewsletterServiceDep,
    page: PageQuery = 1,
    per_page: int = per_page_query(settings.subscribers_per_page),
    active: bool | None = Query(None, description="Filter on subscription state"),
) -> PageResult[NewsletterSubscription]:
    """List newsletter subscriptions."""
    return service.list_subscribers(page=page, per_page=per_page, active=active)


@router.delete("/newsletter/{subscription_id}", response_model=MessageResponse)
async def admin_delete_subscriber(
    subscription_id: int,
    service: NewsletterServiceDep,
) -> MessageResponse:
    """Remove a subscription entirely."""
    service.delete(subscription_id)
    return MessageResponse(message="Subscriber deleted successfully")
