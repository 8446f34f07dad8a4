"""
Module: test_job.py
Description: Unit tests for JobEnvelope validation.

Tests Pydantic model validation, field constraints, custom validators,
and model methods for the queued job envelope.
"""

import json
import pytest
from datetime import datetime
from pydantic import ValidationError

from models.job import JobEnvelope, new_job_id


class TestJobEnvelope:
    """Test cases for JobEnvelope validation and behavior."""

    def test_defaults(self):
        """Test generated identifier, timestamp and counters."""
        envelope = JobEnvelope(job_class="MakeRequestJob", queue_name="spree_webhooks")

        assert envelope.job_id.startswith("job_")
        assert len(envelope.job_id) == 16  # job_ + 12 chars
        assert envelope.arguments == []
        assert envelope.executions == 0
        assert isinstance(envelope.enqueued_at, datetime)
        assert envelope.enqueued_at.tzinfo is not None

    def test_new_job_ids_are_unique(self):
        """Test generated job IDs do not repeat."""
        ids = {new_job_id() for _ in range(100)}
        assert len(ids) == 100

    def test_job_id_validation(self):
        """Test job_id pattern validation."""
        with pytest.raises(ValidationError):
            JobEnvelope(job_id="evt_abc123xyz456", job_class="MakeRequestJob", queue_name="spree_webhooks")

        with pytest.raises(ValidationError):
            JobEnvelope(job_id="job_short", job_class="MakeRequestJob", queue_name="spree_webhooks")

    def test_queue_name_validation(self):
        """Test queue names are restricted to lowercase identifiers."""
        invalid_names = ["", "Spree Webhooks", "spree-webhooks", "spree.webhooks"]
        for queue_name in invalid_names:
            with pytest.raises(ValidationError):
                JobEnvelope(job_class="MakeRequestJob", queue_name=queue_name)

    def test_job_class_required(self):
        """Test job_class cannot be empty."""
        with pytest.raises(ValidationError):
            JobEnvelope(job_class="", queue_name="spree_webhooks")

    def test_arguments_must_be_json_serializable(self):
        """Test arguments validation."""
        envelope = JobEnvelope(
            job_class="MakeRequestJob",
            queue_name="spree_webhooks",
            arguments=["http://url.com/", {"nested": [1, 2.5, True, None]}]
        )
        assert envelope.arguments[1] == {"nested": [1, 2.5, True, None]}

        with pytest.raises(ValidationError):
            JobEnvelope(job_class="MakeRequestJob", queue_name="spree_webhooks", arguments=[{1, 2}])

    def test_executions_validation(self):
        """Test executions cannot be negative."""
        with pytest.raises(ValidationError):
            JobEnvelope(job_class="MakeRequestJob", queue_name="spree_webhooks", executions=-1)

    def test_increment_executions(self, sample_envelope):
        """Test increment_executions method."""
        sample_envelope.increment_executions()
        sample_envelope.increment_executions()

        assert sample_envelope.executions == 2

    def test_json_round_trip(self, sample_envelope):
        """Test the queued body decodes back to an equal envelope."""
        body = sample_envelope.model_dump_json()

        assert json.loads(body)["arguments"] == ["http://url.com/"]
        assert JobEnvelope(**json.loads(body)) == sample_envelope
