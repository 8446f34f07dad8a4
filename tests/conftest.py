"""
Module: conftest.py
Description: Shared pytest fixtures for webhooks service tests.

Provides queue clients, job envelopes, SQS records and HTTP transports
reused across tests. Environment defaults are set before any
application module is imported so the global settings load without a
.env file.
"""

import os

os.environ.setdefault("WEBHOOKS_QUEUE_URL", "https://sqs.us-east-1.amazonaws.com/123456789012/spree-webhooks-test")
os.environ.setdefault("DELIVERY_RETRY_WAIT", "0")
os.environ.setdefault("LOG_LEVEL", "DEBUG")
os.environ.setdefault("STAGE", "test")
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")
os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")

from unittest.mock import patch

import httpx
import pytest

from delivery.make_request import MakeRequest
from jobs.make_request import MakeRequestJob
from sqs_queue.memory import InMemoryJobQueue


@pytest.fixture
def webhook_url():
    """Target URL used by webhook tests."""
    return "http://url.com/"


@pytest.fixture
def job_queue():
    """Provide an empty in-memory job queue."""
    return InMemoryJobQueue()


@pytest.fixture
def sample_envelope(webhook_url):
    """Envelope for a MakeRequestJob targeting webhook_url."""
    return MakeRequestJob.serialize(webhook_url)


@pytest.fixture
def sqs_record():
    """
    Build SQS Lambda records.

    Returns a factory taking a JobEnvelope (or raw body string) and the
    receive count SQS would report.
    """
    def make_record(envelope, receive_count=1, message_id="msg-1"):
        body = envelope if isinstance(envelope, str) else envelope.model_dump_json()
        return {
            "messageId": message_id,
            "body": body,
            "attributes": {
                "ApproximateReceiveCount": str(receive_count)
            }
        }

    return make_record


@pytest.fixture
def recorded_requests():
    """Requests seen by the transport built with webhook_transport."""
    return []


@pytest.fixture
def webhook_transport(recorded_requests):
    """
    Build an httpx.MockTransport answering every request the same way.

    The factory accepts a status code or an exception class raised for
    each request.
    """
    def make_transport(status_code=200, raises=None):
        def handle(request):
            recorded_requests.append(request)
            if raises is not None:
                raise raises("simulated failure", request=request)
            return httpx.Response(status_code, json={"received": True})

        return httpx.MockTransport(handle)

    return make_transport


@pytest.fixture
def patch_transport():
    """
    Route MakeRequestJob's HTTP requests through a given transport.

    Usage: with patch_transport(transport): ...
    """
    def install(transport):
        return patch(
            "jobs.make_request.MakeRequest",
            side_effect=lambda url, **kwargs: MakeRequest(url, transport=transport, **kwargs)
        )

    return install
