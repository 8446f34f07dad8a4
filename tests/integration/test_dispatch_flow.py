"""
Module: test_dispatch_flow.py
Description: Dispatch-to-delivery flow through the API and queue.

Schedules deliveries through the HTTP endpoint, then performs the
queued jobs and runs them through the SQS worker path, with outbound
requests answered by httpx.MockTransport.
"""

import json

import pytest
from fastapi.testclient import TestClient

from config.settings import settings
from delivery.make_request import DeliveryFailedError
from delivery.worker import process_batch
from handlers.webhooks import get_job_queue
from main import app


@pytest.fixture
def client(job_queue, monkeypatch):
    monkeypatch.setattr(settings, "auth_enabled", False)
    app.dependency_overrides[get_job_queue] = lambda: job_queue
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides = {}


class TestDispatchFlow:
    """End-to-end dispatch scenarios."""

    def test_dispatch_then_perform(self, client, job_queue, webhook_url, webhook_transport,
                                   patch_transport, recorded_requests):
        """Test a dispatched delivery is sent only when the queue is worked."""
        response = client.post("/webhooks/deliveries", json={"url": webhook_url})
        assert response.status_code == 202
        assert recorded_requests == []

        with patch_transport(webhook_transport(200)):
            assert job_queue.perform_enqueued_jobs() == 1

        assert len(recorded_requests) == 1
        assert str(recorded_requests[0].url) == webhook_url
        assert json.loads(recorded_requests[0].content) == {}
        assert job_queue.enqueued_jobs() == []

    def test_failed_delivery_surfaces_on_perform(self, client, job_queue, webhook_url,
                                                 webhook_transport, patch_transport):
        """Test delivery failures are raised by the job, not by the dispatch."""
        response = client.post("/webhooks/deliveries", json={"url": webhook_url})
        assert response.status_code == 202

        with patch_transport(webhook_transport(500)):
            with pytest.raises(DeliveryFailedError):
                job_queue.perform_enqueued_jobs()

    def test_dispatched_jobs_through_worker(self, client, job_queue, webhook_transport,
                                            patch_transport, sqs_record):
        """Test enqueued envelopes are understood by the SQS worker."""
        for url in ("http://one.example.com/", "http://two.example.com/"):
            client.post("/webhooks/deliveries", json={"url": url})

        records = [
            sqs_record(envelope, message_id=envelope.job_id)
            for envelope in job_queue.enqueued_jobs("spree_webhooks")
        ]

        with patch_transport(webhook_transport(503)):
            response = process_batch(records, max_attempts=3)

        assert response == {
            "batchItemFailures": [{"itemIdentifier": record["messageId"]} for record in records]
        }
