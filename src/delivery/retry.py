"""
Module: delivery/retry.py
Description: Retry policy for webhook connection failures.

Only failures that happen before the endpoint sees the request are
retried in-process. Everything else is left to queue redelivery.
"""

import logging

import httpx
from tenacity import (
    Retrying,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
    before_sleep_log
)

from utils.logger import get_logger

logger = get_logger(__name__)

CONNECTION_ERRORS = (
    httpx.ConnectError,
    httpx.ConnectTimeout,
    httpx.PoolTimeout
)


def connection_retrying(attempts: int = 3, wait_seconds: float = 1.0) -> Retrying:
    """
    Build a Retrying controller for connection-level failures.

    Args:
        attempts: Total attempts, first one included
        wait_seconds: Base of the exponential backoff (0 disables waiting)

    Returns:
        tenacity Retrying instance that re-raises the last error
    """
    if attempts < 1:
        raise ValueError("attempts must be at least 1")

    return Retrying(
        stop=stop_after_attempt(attempts),
        wait=wait_exponential(multiplier=wait_seconds, min=0, max=wait_seconds * 8),
        retry=retry_if_exception_type(CONNECTION_ERRORS),
        before_sleep=before_sleep_log(logger, logging.INFO),
        reraise=True
    )
