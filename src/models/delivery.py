"""
Module: delivery.py
Description: Outcome model for webhook delivery requests.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field


class DeliveryResult(BaseModel):
    """
    Outcome of one logical webhook request.

    Attributes:
        url: Target URL the request was sent to
        success: Whether the endpoint answered with a 2xx status
        status_code: HTTP status returned (None when no response)
        error: Short failure reason (None on success)
        retryable: Whether a later attempt may succeed
        duration_ms: Wall time spent on the request, retries included
        attempted_at: When the request started
    """

    url: str
    success: bool
    status_code: Optional[int] = Field(default=None, ge=100, le=599)
    error: Optional[str] = None
    retryable: bool = False
    duration_ms: float = Field(default=0.0, ge=0)
    attempted_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
