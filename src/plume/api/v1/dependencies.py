"""Shared API dependencies for authentication and service wiring."""

from typing import Annotated, Any

from fastapi import Depends, HTTPException, Query, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from plume.core.security import decode_access_token
from plume.core.settings import settings
from plume.db.session import get_db
from plume.models import User
from plume.models.reaction import SESSION_ID_MAX_LENGTH
from plume.services import (
    Anonymous,
    Authenticated,
    CategoryService,
    CommentService,
    Identity,
    NewsletterService,
    PublicationService,
    ReactionLedger,
)

# HTTP Bearer scheme; optional so guests can reach public and guest-enabled routes
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_optional_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: SessionDep,
) -> User | None:
    """Return the user named by the bearer token, or None when no token was sent.

    Raises:
        HTTPException: If a token was sent but is invalid or names no user
    """
    if credentials is None:
        return None
    try:
        user_id = decode_access_token(credentials.credentials)
    except ValueError as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        ) from err

    user = db.get(User, user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )
    return user


OptionalUserDep = Annotated[User | None, Depends(get_optional_user)]


def get_current_user(user: OptionalUserDep) -> User:
    """Require an authenticated user."""
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


CurrentUserDep = Annotated[User, Depends(get_current_user)]


def require_admin(user: CurrentUserDep) -> User:
    """Require an authenticated administrator."""
    if not user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin privileges required",
        )
    return user


AdminUserDep = Annotated[User, Depends(require_admin)]


def get_identity(request: Request, user: OptionalUserDep) -> Identity | None:
    """Resolve the caller to a user, an anonymous session, or nobody."""
    if user is not None:
        return Authenticated(user_id=user.id, is_admin=user.is_admin)
    token = (request.headers.get(settings.session_header) or "").strip()
    if token:
        if len(token) > SESSION_ID_MAX_LENGTH:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=f"{settings.session_header} must be at most {SESSION_ID_MAX_LENGTH} characters",
            )
        return Anonymous(session_token=token)
    return None


IdentityDep = Annotated[Identity | None, Depends(get_identity)]


def require_identity(identity: IdentityDep) -> Identity:
    """Require either a signed-in user or an anonymous session token."""
    if identity is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Sign in or send an {settings.session_header} header",
        )
    return identity


RequiredIdentityDep = Annotated[Identity, Depends(require_identity)]


def get_publication_service(db: SessionDep) -> PublicationService:
    return PublicationService(db)


def get_comment_service(db: SessionDep) -> CommentService:
    return CommentService(db)


def get_reaction_ledger(db: SessionDep) -> ReactionLedger:
    return ReactionLedger(db)


def get_category_service(db: SessionDep) -> CategoryService:
    return CategoryService(db)


def get_newsletter_service(db: SessionDep) -> NewsletterService:
    return NewsletterService(db)


PublicationServiceDep = Annotated[PublicationService, Depends(get_publication_service)]
CommentServiceDep = Annotated[CommentService, Depends(get_comment_service)]
ReactionLedgerDep = Annotated[ReactionLedger, Depends(get_reaction_ledger)]
CategoryServiceDep = Annotated[CategoryService, Depends(get_category_service)]
NewsletterServiceDep = Annotated[NewsletterService, Depends(get_newsletter_service)]

PageQuery = Annotated[int, Query(ge=1, description="1-based page number")]


def per_page_query(default: int) -> Any:
    """Build a ``per_page`` query parameter bounded by the configured maximum."""
    return Query(default, ge=1, le=settings.max_per_page, description="Items per page")
