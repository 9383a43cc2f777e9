import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from inkwell import dependencies as deps
from inkwell.schemas.subscription import SubscriptionRequest
from inkwell.services.subscription_service import SubscriptionService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/subscribe")
def subscribe(
    body: SubscriptionRequest,
    service: SubscriptionService = Depends(deps.get_subscription_service),
):
    """Add an address to the newsletter. Re-subscribing is a no-op."""
    try:
        service.subscribe(body.email)
    except Exception as e:
        logger.error(f"Failed to store subscription: {e}")
        return JSONResponse(status_code=500, content={"msg": "Something went wrong"})
    return {}


@router.api_route(
    "/subscribe", methods=["GET", "HEAD", "PUT", "PATCH", "DELETE", "OPTIONS"]
)
def subscribe_method_not_allowed():
    return JSONResponse(status_code=405, content={"msg": "Method not allowed"})
