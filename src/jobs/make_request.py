"""
Module: make_request.py
Description: Job that performs one outbound webhook request.

MakeRequestJob.perform_later(url, queue=...) is the webhook dispatch
trigger: it records one job on the spree_webhooks queue and returns.
The HTTP request happens later, on a worker, through MakeRequest.
"""

from config.settings import settings
from delivery.make_request import MakeRequest, DeliveryFailedError
from jobs.base import Job
from models.delivery import DeliveryResult
from utils.logger import get_logger

logger = get_logger(__name__)


class MakeRequestJob(Job):
    """Deliver a webhook request to a single URL."""

    queue_name = settings.webhooks_queue_name

    def perform(self, url: str) -> DeliveryResult:
        """
        Send the webhook request.

        Returns:
            DeliveryResult of the successful request

        Raises:
            DeliveryFailedError: If the endpoint could not be reached or
                did not answer with a 2xx status
        """
        result = MakeRequest(
            url,
            timeout_seconds=settings.delivery_timeout,
            retry_attempts=settings.delivery_retry_attempts,
            retry_wait_seconds=settings.delivery_retry_wait
        ).call()

        if not result.success:
            raise DeliveryFailedError(result)

        logger.info(
            "Webhook delivered",
            job_id=self.job_id,
            url=url,
            status_code=result.status_code
        )
        return result
