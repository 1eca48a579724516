"""Newsletter-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr


class SubscriptionRequest(BaseModel):
    """Schema for subscribing or unsubscribing an address."""

    email: EmailStr


class SubscriptionResponse(BaseModel):
    """Schema for a newsletter subscription."""

    id: int
    email: str
    is_active: bool
    subscribed_at: datetime
    unsubscribed_at: datetime | None

    model_config = ConfigDict(from_attributes=True)


class SubscribeResult(BaseModel):
    """Outcome of a subscribe call."""

    message: str
    subscription: SubscriptionResponse
