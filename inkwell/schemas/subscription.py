from pydantic import BaseModel


class SubscriptionRequest(BaseModel):
    # Format is checked by the caller before submitting
    email: str
