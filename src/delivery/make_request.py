"""
Module: make_request.py
Description: HTTP request to a webhook endpoint.

Sends one JSON POST to the target URL and classifies the outcome so
the worker can decide between redelivery and discarding the job.

Key Components:
- MakeRequest: Performs the request and returns a DeliveryResult
- DeliveryFailedError: Raised by jobs when a delivery did not succeed
- is_retryable_status(): Status code classification

Dependencies: httpx, tenacity, models, utils
"""

import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from urllib.parse import urlparse

import httpx

from config.settings import settings
from delivery.retry import connection_retrying
from models.delivery import DeliveryResult
from utils.logger import get_logger

logger = get_logger(__name__)

RETRYABLE_STATUS_CODES = frozenset({408, 429})


def is_retryable_status(status_code: int) -> bool:
    """Whether an HTTP status may succeed on a later attempt."""
    return status_code >= 500 or status_code in RETRYABLE_STATUS_CODES


class DeliveryFailedError(Exception):
    """Webhook delivery did not succeed."""

    def __init__(self, result: DeliveryResult):
        self.result = result
        super().__init__(
            f"Delivery to {result.url} failed: {result.error}"
        )

    @property
    def retryable(self) -> bool:
        return self.result.retryable


class MakeRequest:
    """
    One logical webhook request.

    Connection failures are retried in-process according to
    retry_attempts; the returned result covers all attempts.

    Attributes:
        url: Target webhook URL
        body: JSON body sent with the request
        timeout: httpx timeout configuration
    """

    def __init__(
        self,
        url: str,
        body: Optional[Dict[str, Any]] = None,
        timeout_seconds: int = 10,
        retry_attempts: int = 3,
        retry_wait_seconds: float = 1.0,
        transport: Optional[httpx.BaseTransport] = None
    ):
        self.url = url
        self.body = body if body is not None else {}
        self.timeout = httpx.Timeout(timeout_seconds, connect=timeout_seconds)
        self.retry_attempts = retry_attempts
        self.retry_wait_seconds = retry_wait_seconds
        self.transport = transport
        self.headers = {
            'Content-Type': 'application/json',
            'User-Agent': f"{settings.app_name.replace(' ', '')}/{settings.app_version}"
        }

    def valid_url(self) -> bool:
        if not self.url or not isinstance(self.url, str):
            return False
        try:
            parsed = urlparse(self.url)
            # Accessing port validates it
            parsed.port
        except ValueError:
            return False
        return parsed.scheme in ('http', 'https') and bool(parsed.netloc)

    def call(self) -> DeliveryResult:
        """
        Perform the request.

        Returns:
            DeliveryResult describing the outcome
        """
        attempted_at = datetime.now(timezone.utc)

        if not self.valid_url():
            logger.warning("Webhook URL rejected", url=self.url)
            return DeliveryResult(
                url=str(self.url),
                success=False,
                error="invalid_url",
                retryable=False,
                attempted_at=attempted_at
            )

        started = time.monotonic()

        def result(**kwargs) -> DeliveryResult:
            return DeliveryResult(
                url=self.url,
                attempted_at=attempted_at,
                duration_ms=(time.monotonic() - started) * 1000,
                **kwargs
            )

        with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
            try:
                logger.debug("Attempting webhook request", url=self.url)

                response = None
                for attempt in connection_retrying(self.retry_attempts, self.retry_wait_seconds):
                    with attempt:
                        response = client.post(
                            self.url,
                            json=self.body,
                            headers=self.headers
                        )

                response.raise_for_status()

                logger.info(
                    "Webhook request succeeded",
                    url=self.url,
                    status_code=response.status_code
                )
                return result(success=True, status_code=response.status_code)

            except (httpx.InvalidURL, httpx.UnsupportedProtocol) as e:
                logger.warning(
                    "Webhook URL rejected by client",
                    url=self.url,
                    error=str(e)
                )
                return result(success=False, error="invalid_url", retryable=False)

            except httpx.HTTPStatusError as e:
                status_code = e.response.status_code
                logger.warning(
                    "Webhook request HTTP error",
                    url=self.url,
                    status_code=status_code,
                    response=e.response.text[:500]  # Truncate large responses
                )
                return result(
                    success=False,
                    status_code=status_code,
                    error=f"http_{status_code}",
                    retryable=is_retryable_status(status_code)
                )

            except httpx.TimeoutException:
                logger.warning("Webhook request timeout", url=self.url)
                return result(success=False, error="timeout", retryable=True)

            except httpx.NetworkError as e:
                logger.warning(
                    "Webhook request network error",
                    url=self.url,
                    error=str(e)
                )
                return result(success=False, error="network_error", retryable=True)

            except httpx.HTTPError as e:
                logger.error(
                    "Webhook request failed",
                    url=self.url,
                    error=str(e),
                    error_type=type(e).__name__
                )
                return result(success=False, error=type(e).__name__, retryable=False)
