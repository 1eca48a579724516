"""Comment endpoints for the Plume API."""

from fastapi import APIRouter, status

from plume.api.v1.dependencies import CommentServiceDep, CurrentUserDep, IdentityDep
from plume.models import Comment
from plume.schemas.comment import (
    CommentCreate,
    CommentResponse,
    CommentTreeResponse,
    CommentUpdate,
)
from plume.services import Authenticated

router = APIRouter(tags=["comments"])


@router.get("/posts/{post_id}/comments", response_model=list[CommentTreeResponse])
async def list_comments(post_id: int, service: CommentServiceDep) -> list[CommentTreeResponse]:
    """Get the approved comment threads of a post, newest thread first."""
    return [CommentTreeResponse.model_validate(node) for node in service.list_approved_tree(post_id)]


@router.post(
    "/posts/{post_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    post_id: int,
    payload: CommentCreate,
    identity: IdentityDep,
    service: CommentServiceDep,
) -> Comment:
    """Post a comment or reply.

    Signed-in users are published immediately; guest comments wait for moderation.
    """
    return service.submit(
        post_id,
        payload.content,
        parent_id=payload.parent_id,
        identity=identity,
        author_name=payload.author_name,
        author_email=payload.author_email,
    )


@router.put("/comments/{comment_id}", response_model=CommentResponse)
async def update_comment(
    comment_id: int,
    payload: CommentUpdate,
    current_user: CurrentUserDep,
    service: CommentServiceDep,
) -> Comment:
    """Edit one's own comment."""
    identity = Authenticated(user_id=current_user.id, is_admin=current_user.is_admin)
    return service.edit(comment_id, identity, payload.content)


@router.delete("/comments/{comment_id}")
async def delete_comment(
    comment_id: int,
    current_user: CurrentUserDep,
    service: CommentServiceDep,
) -> dict[str, str | int]:
    """Delete a comment and all of its replies (owner or admin only)."""
    identity = Authenticated(user_id=current_user.id, is_admin=current_user.is_admin)
    removed = service.delete(comment_id, identity)
    return {"message": "Comment deleted successfully", "deleted": removed}
