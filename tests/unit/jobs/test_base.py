"""
Module: test_base.py
Description: Unit tests for the Job base class and registry.
"""

import pytest
from pydantic import ValidationError

from jobs.base import Job, UnknownJobError
from jobs.make_request import MakeRequestJob
from models.job import JobEnvelope


class RecordingJob(Job):
    """Job that records the arguments it was performed with."""

    queue_name = "recordings"
    performed = []

    def perform(self, *args):
        RecordingJob.performed.append((self.job_id, self.executions, args))
        return sum(args)


@pytest.fixture(autouse=True)
def reset_recordings():
    RecordingJob.performed = []


class TestJobRegistry:
    """Test cases for job class registration."""

    def test_subclasses_are_registered_by_name(self):
        """Test defining a subclass registers it."""
        assert Job.lookup("RecordingJob") is RecordingJob
        assert Job.lookup("MakeRequestJob") is MakeRequestJob

    def test_lookup_unknown_class(self):
        """Test unknown names raise UnknownJobError."""
        with pytest.raises(UnknownJobError, match="Unknown job class 'MissingJob'"):
            Job.lookup("MissingJob")

    def test_duplicate_name_rejected(self):
        """Test a second class with a registered name is rejected."""
        with pytest.raises(ValueError, match="already registered"):
            type("RecordingJob", (Job,), {"perform": lambda self: None})

        assert Job.lookup("RecordingJob") is RecordingJob


class TestJobSerialization:
    """Test cases for envelope building."""

    def test_serialize_binds_queue_and_arguments(self):
        """Test serialize uses the class queue and positional arguments."""
        envelope = RecordingJob.serialize(1, 2)

        assert envelope.job_class == "RecordingJob"
        assert envelope.queue_name == "recordings"
        assert envelope.arguments == [1, 2]
        assert envelope.job_id.startswith("job_")

    def test_default_queue_name(self):
        """Test jobs without queue_name go to the default queue."""
        assert Job.queue_name == "default"

    def test_serialize_rejects_non_json_arguments(self):
        """Test arguments that cannot be queued are rejected."""
        with pytest.raises(ValidationError):
            RecordingJob.serialize(object())


class TestJobExecution:
    """Test cases for running jobs."""

    def test_perform_now_runs_inline(self):
        """Test perform_now calls perform with the given arguments."""
        assert RecordingJob.perform_now(2, 3) == 5
        assert RecordingJob.performed == [(None, 0, (2, 3))]

    def test_execute_resolves_envelope(self):
        """Test execute runs the registered class with envelope state."""
        envelope = JobEnvelope(
            job_class="RecordingJob",
            queue_name="recordings",
            arguments=[4, 5],
            executions=2
        )

        assert Job.execute(envelope) == 9
        assert RecordingJob.performed == [(envelope.job_id, 2, (4, 5))]

    def test_execute_unknown_class(self):
        """Test execute fails for unregistered classes."""
        envelope = JobEnvelope(job_class="GhostJob", queue_name="default")

        with pytest.raises(UnknownJobError):
            Job.execute(envelope)

    def test_base_perform_not_implemented(self):
        """Test the base class has no perform implementation."""
        with pytest.raises(NotImplementedError):
            Job().perform()
