"""
Module: request.py
Description: API request models for the webhooks service.

Key Components:
- CreateDeliveryRequest: Model for POST /webhooks/deliveries requests

Dependencies: pydantic
"""

from pydantic import BaseModel, Field


class CreateDeliveryRequest(BaseModel):
    """
    Request model for dispatching a webhook delivery.

    The URL is passed through to the delivery job unvalidated and
    unmodified; the request-performing side decides whether it can be
    called.

    Attributes:
        url: Target URL of the webhook endpoint
    """

    url: str = Field(
        ...,
        min_length=1,
        max_length=2048,
        description="Target webhook URL"
    )
