"""
Module: webhooks.py
Description: Webhook dispatch endpoint.

Exposes the dispatch trigger over HTTP. A request schedules one
MakeRequestJob on the spree_webhooks queue and returns as soon as the
job is recorded; the request itself is made later by the worker.

Key Components:
- create_delivery(): POST /webhooks/deliveries
- get_job_queue(): Dependency injection for the queue client
- get_ability(): Dependency injection for the caller's Ability

Dependencies: FastAPI, typing, models, jobs, sqs_queue, auth, config, utils
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, Depends, Header
from fastapi import status as status_codes

from auth.ability import Ability, WEBHOOK_DELIVERY, ability_for_api_key
from config.settings import settings
from jobs.make_request import MakeRequestJob
from models.request import CreateDeliveryRequest
from models.response import DeliveryEnqueuedResponse
from sqs_queue.base import JobQueue
from sqs_queue.sqs import SQSJobQueue
from utils.logger import get_logger

router = APIRouter(prefix="/webhooks", tags=["webhooks"])
logger = get_logger(__name__)


def get_job_queue() -> JobQueue:
    """
    Dependency to get the job queue client.

    Returns:
        SQSJobQueue mapped to the configured queues
    """
    return SQSJobQueue(queue_urls=settings.queue_urls, region_name=settings.aws_region)


def get_ability(x_api_key: Optional[str] = Header(default=None)) -> Ability:
    """
    Dependency to resolve the caller's Ability from the X-API-Key header.

    Raises:
        HTTPException: 401 if authorization is enabled and no key is sent
    """
    if not settings.auth_enabled:
        return Ability.admin()

    if not x_api_key:
        raise HTTPException(
            status_code=status_codes.HTTP_401_UNAUTHORIZED,
            detail="Missing API key"
        )

    return ability_for_api_key(x_api_key, settings.api_key_hash)


@router.post(
    "/deliveries",
    response_model=DeliveryEnqueuedResponse,
    status_code=status_codes.HTTP_202_ACCEPTED
)
async def create_delivery(
    request: CreateDeliveryRequest,
    job_queue: JobQueue = Depends(get_job_queue),
    ability: Ability = Depends(get_ability)
) -> DeliveryEnqueuedResponse:
    """
    Schedule a webhook delivery.

    Args:
        request: CreateDeliveryRequest with the target url
        job_queue: Queue client (injected via dependency)
        ability: Caller permissions (injected via dependency)

    Returns:
        DeliveryEnqueuedResponse describing the queued job

    Raises:
        HTTPException: 403 if the caller may not create deliveries
        HTTPException: 500 if the job could not be enqueued

    Example:
        POST /webhooks/deliveries
        {"url": "http://url.com/"}

        Response (202 Accepted):
        {
            "job_id": "job_1a2b3c4d5e6f",
            "queue_name": "spree_webhooks",
            "url": "http://url.com/",
            "enqueued_at": "2024-01-15T10:30:01Z",
            "message": "Webhook delivery enqueued"
        }
    """
    if ability.cannot("create", WEBHOOK_DELIVERY):
        logger.warning("Webhook delivery not permitted", url=request.url)
        raise HTTPException(
            status_code=status_codes.HTTP_403_FORBIDDEN,
            detail="Not authorized to create webhook deliveries"
        )

    try:
        envelope = await MakeRequestJob.perform_later(request.url, queue=job_queue)

    except Exception as e:
        logger.error(
            "Failed to enqueue webhook delivery",
            url=request.url,
            error=str(e),
            error_type=type(e).__name__
        )
        raise HTTPException(
            status_code=status_codes.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to enqueue webhook delivery"
        )

    return DeliveryEnqueuedResponse(
        job_id=envelope.job_id,
        queue_name=envelope.queue_name,
        url=request.url,
        enqueued_at=envelope.enqueued_at,
        message="Webhook delivery enqueued"
    )
