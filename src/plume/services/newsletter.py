"""Newsletter subscription bookkeeping."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from plume.core.errors import ConflictError, NotFoundError
from plume.db.time import utcnow
from plume.models import NewsletterSubscription
from plume.repositories.pagination import PageResult, paginate

logger = logging.getLogger(__name__)


def _normalize(email: str) -> str:
    return email.strip().lower()


class NewsletterService:
    """Subscribe, unsubscribe and list newsletter recipients."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def subscribe(self, email: str) -> tuple[NewsletterSubscription, bool]:
        """Subscribe ``email``.

        Returns:
            The subscription and True when a new row was created, False when an
            inactive subscription was reactivated in place.

        Raises:
            ConflictError: If the address is already actively subscribed.
        """
        email = _normalize(email)
        existing = (
            self.db.query(NewsletterSubscription)
            .filter(NewsletterSubscription.email == email)
            .first()
        )
        if existing is not None:
            if existing.is_active:
                raise ConflictError("This email is already subscribed to our newsletter.")
            existing.is_active = True
            existing.subscribed_at = utcnow()
            existing.unsubscribed_at = None
            self.db.commit()
            self.db.refresh(existing)
            logger.info("Reactivated newsletter subscription %s", existing.id)
            return existing, False

        subscription = NewsletterSubscription(email=email, is_active=True, subscribed_at=utcnow())
        self.db.add(subscription)
        self.db.commit()
        self.db.refresh(subscription)
        logger.info("New newsletter subscription %s", subscription.id)
        return subscription, True

    def unsubscribe(self, email: str) -> NewsletterSubscription:
        """Deactivate an active subscription."""
        subscription = (
            self.db.query(NewsletterSubscription)
            .filter(
                NewsletterSubscription.email == _normalize(email),
                NewsletterSubscription.is_active.is_(True),
            )
            .first()
        )
        if subscription is None:
            raise NotFoundError("Email not found in our subscriber list.")
        subscription.is_active = False
        subscription.unsubscribed_at = utcnow()
        self.db.commit()
        self.db.refresh(subscription)
        logger.info("Newsletter subscription %s deactivated", subscription.id)
        return subscription

    def list_subscribers(
        self,
        *,
        page: int,
        per_page: int,
        active: bool | None = None,
    ) -> PageResult[NewsletterSubscription]:
        """Return subscriptions, most recently subscribed first."""
        query = self.db.query(NewsletterSubscription)
        if active is not None:
            query = query.filter(NewsletterSubscription.is_active.is_(active))
        query = query.order_by(
            NewsletterSubscription.subscribed_at.desc(), NewsletterSubscription.id.desc()
        )
        return paginate(query, page, per_page)

    def delete(self, subscription_id: int) -> None:
        """Remove a subscription row entirely."""
        subscription = self.db.get(NewsletterSubscription, subscription_id)
        if subscription is None:
            raise NotFoundError("Subscriber not found")
        self.db.delete(subscription)
        self.db.commit()
