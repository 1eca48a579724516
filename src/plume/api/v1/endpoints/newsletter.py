"""Newsletter endpoints for the Plume API."""

from fastapi import APIRouter, Response, status

from plume.api.v1.dependencies import NewsletterServiceDep
from plume.schemas.newsletter import SubscribeResult, SubscriptionRequest, SubscriptionResponse

router = APIRouter(prefix="/newsletter", tags=["newsletter"])


@router.post("/subscribe", response_model=SubscribeResult, status_code=status.HTTP_201_CREATED)
async def subscribe(
    payload: SubscriptionRequest,
    response: Response,
    service: NewsletterServiceDep,
) -> SubscribeResult:
    """Subscribe an address; an inactive subscription is reactivated."""
    subscription, created = service.subscribe(payload.email)
    if created:
        message = "Successfully subscribed to the newsletter!"
    else:
        response.status_code = status.HTTP_200_OK
        message = "Successfully resubscribed to the newsletter!"
    return SubscribeResult(
        message=message,
        subscription=SubscriptionResponse.model_validate(subscription),
    )


@router.post("/unsubscribe")
async def unsubscribe(
    payload: SubscriptionRequest,
    service: NewsletterServiceDep,
) -> dict[str, str]:
    """Deactivate a subscription."""
    service.unsubscribe(payload.email)
    return {"message": "Successfully unsubscribed from the newsletter."}
