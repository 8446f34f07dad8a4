"""
Module: metrics.py
Description: CloudWatch counters for webhook delivery outcomes.

The worker reports one outcome per processed job. Each outcome maps to
a fixed metric name; failures and discards carry a Reason dimension
(an error code such as "http_503", or a discard cause such as
"permanent").

Key Components:
- DELIVERED, FAILED, DISCARDED: Outcomes reported by the worker
- MetricsClient.record_delivery(): Count one outcome
- MetricsClient.put_metric(): Raw CloudWatch publication

Publishing never raises; a CloudWatch outage must not turn a delivered
webhook into a redelivered one.

Dependencies: boto3, logger
"""

from typing import Dict, Optional

import boto3

from utils.logger import get_logger

logger = get_logger(__name__)

DELIVERED = "delivered"
FAILED = "failed"
DISCARDED = "discarded"

OUTCOME_METRICS = {
    DELIVERED: "WebhookDelivered",
    FAILED: "WebhookDeliveryFailed",
    DISCARDED: "WebhookDiscarded",
}


class MetricsClient:
    """Publishes webhook delivery counters to one CloudWatch namespace."""

    def __init__(self, namespace: str = "SpreeWebhooks", region_name: Optional[str] = None):
        self.namespace = namespace
        self.cloudwatch = boto3.client('cloudwatch', region_name=region_name)

    def record_delivery(self, outcome: str, reason: Optional[str] = None) -> None:
        """
        Count one delivery outcome.

        Args:
            outcome: DELIVERED, FAILED or DISCARDED
            reason: Error code or discard cause, sent as the Reason dimension

        Raises:
            ValueError: If the outcome is not one of the known outcomes
        """
        if outcome not in OUTCOME_METRICS:
            raise ValueError(f"Unknown delivery outcome: {outcome}")

        dimensions = {'Reason': reason} if reason else None
        self.put_metric(OUTCOME_METRICS[outcome], dimensions=dimensions)

    def put_metric(
        self,
        metric_name: str,
        value: float = 1.0,
        unit: str = 'Count',
        dimensions: Optional[Dict[str, str]] = None
    ) -> None:
        datum = {'MetricName': metric_name, 'Value': value, 'Unit': unit}
        if dimensions:
            datum['Dimensions'] = [
                {'Name': name, 'Value': str(dimension)}
                for name, dimension in sorted(dimensions.items())
            ]

        try:
            self.cloudwatch.put_metric_data(Namespace=self.namespace, MetricData=[datum])
        except Exception as e:
            logger.warning(
                "Dropped delivery metric",
                metric_name=metric_name,
                namespace=self.namespace,
                error=str(e),
                error_type=type(e).__name__
            )
            return

        logger.debug("Delivery metric published", metric_name=metric_name, dimensions=dimensions)
