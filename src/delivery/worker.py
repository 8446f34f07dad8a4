"""
Module: delivery/worker.py
Description: SQS worker Lambda for queued jobs.

Processes job envelopes from the webhooks queue, performs them, and
reports failed messages back to SQS for redelivery. Jobs that can
never succeed, or that have used up their attempts, are discarded.
"""

import json
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

import jobs  # noqa: F401  registers job classes
from config.settings import settings
from delivery.make_request import DeliveryFailedError
from jobs.base import Job, UnknownJobError
from models.job import JobEnvelope
from utils.logger import configure_logging, get_logger
from utils.metrics import DELIVERED, DISCARDED, FAILED, MetricsClient

logger = get_logger(__name__)


def _receive_count(record: Dict[str, Any]) -> int:
    try:
        return int(record.get('attributes', {}).get('ApproximateReceiveCount', 1))
    except (TypeError, ValueError):
        return 1


def process_record(
    record: Dict[str, Any],
    metrics_client: Optional[MetricsClient] = None,
    max_attempts: int = 5
) -> bool:
    """
    Process a single SQS record.

    Args:
        record: SQS record from the Lambda event
        metrics_client: Optional metrics publisher
        max_attempts: Executions after which a failing job is discarded

    Returns:
        True if the message should be returned to the queue
    """
    message_id = record.get('messageId')

    try:
        envelope = JobEnvelope(**json.loads(record['body']))
    except (KeyError, TypeError, ValueError, ValidationError) as e:
        logger.error(
            "Discarding malformed job message",
            message_id=message_id,
            error=str(e)
        )
        _record(metrics_client, DISCARDED, reason="malformed")
        return False

    envelope.executions = _receive_count(record)

    try:
        Job.execute(envelope)

    except UnknownJobError as e:
        logger.error(
            "Discarding job with unknown class",
            job_id=envelope.job_id,
            job_class=envelope.job_class,
            error=str(e)
        )
        _record(metrics_client, DISCARDED, reason="unknown_job")
        return False

    except DeliveryFailedError as e:
        _record(metrics_client, FAILED, reason=e.result.error or "unknown")

        if e.retryable and envelope.executions < max_attempts:
            logger.warning(
                "Job failed, will retry",
                job_id=envelope.job_id,
                url=e.result.url,
                error=e.result.error,
                executions=envelope.executions,
                max_attempts=max_attempts
            )
            return True

        logger.error(
            "Discarding failed job",
            job_id=envelope.job_id,
            url=e.result.url,
            error=e.result.error,
            retryable=e.retryable,
            executions=envelope.executions
        )
        _record(metrics_client, DISCARDED, reason="exhausted" if e.retryable else "permanent")
        return False

    except Exception as e:
        logger.error(
            "Error performing job",
            job_id=envelope.job_id,
            job_class=envelope.job_class,
            error=str(e),
            error_type=type(e).__name__,
            executions=envelope.executions
        )
        return envelope.executions < max_attempts

    _record(metrics_client, DELIVERED)
    return False


def _record(metrics_client: Optional[MetricsClient], outcome: str, reason: Optional[str] = None) -> None:
    if metrics_client is not None:
        metrics_client.record_delivery(outcome, reason=reason)


def process_batch(
    records: List[Dict[str, Any]],
    metrics_client: Optional[MetricsClient] = None,
    max_attempts: int = 5
) -> Dict[str, List[Dict[str, str]]]:
    """
    Process an SQS batch.

    Returns:
        Lambda partial batch response listing messages to redeliver
    """
    batch_failures = []

    for record in records:
        if process_record(record, metrics_client=metrics_client, max_attempts=max_attempts):
            batch_failures.append({
                'itemIdentifier': record['messageId']
            })

    logger.info(
        "Batch processed",
        records=len(records),
        failures=len(batch_failures)
    )
    return {'batchItemFailures': batch_failures}


def handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Lambda handler for SQS job processing.

    Args:
        event: SQS event with batch of messages
        context: Lambda context

    Returns:
        Response with batch item failures (if any)
    """
    configure_logging(settings.log_level)
    metrics_client = MetricsClient(
        namespace=settings.metrics_namespace,
        region_name=settings.aws_region
    )

    return process_batch(
        event.get('Records', []),
        metrics_client=metrics_client,
        max_attempts=settings.max_attempts
    )
