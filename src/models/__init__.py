"""
Module: models
Description: Package initialization for Pydantic data models.

This package contains all data models used by the webhooks service:
- JobEnvelope: Serialized unit of work placed on a queue
- DeliveryResult: Outcome of a webhook request
- CreateDeliveryRequest: API request model for dispatching a webhook
- DeliveryEnqueuedResponse: API response model for accepted dispatches
"""

from .job import JobEnvelope, new_job_id
from .delivery import DeliveryResult
from .request import CreateDeliveryRequest
from .response import DeliveryEnqueuedResponse

__all__ = [
    "JobEnvelope",
    "new_job_id",
    "DeliveryResult",
    "CreateDeliveryRequest",
    "DeliveryEnqueuedResponse",
]
