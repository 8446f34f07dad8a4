"""
Module: response.py
Description: API response models for the webhooks service.

Key Components:
- DeliveryEnqueuedResponse: Model for accepted dispatch requests

Dependencies: pydantic, datetime
"""

from datetime import datetime

from pydantic import BaseModel, Field


class DeliveryEnqueuedResponse(BaseModel):
    """
    Response returned once a delivery job is recorded on its queue.

    Attributes:
        job_id: Identifier of the queued job
        queue_name: Queue the job was placed on
        url: Target URL carried by the job
        enqueued_at: When the job was scheduled
        message: Human-readable status message
    """

    job_id: str = Field(..., description="Queued job identifier")
    queue_name: str = Field(..., description="Logical queue name")
    url: str = Field(..., description="Target webhook URL")
    enqueued_at: datetime = Field(..., description="Enqueue timestamp")
    message: str = Field(..., description="Human-readable status message")
