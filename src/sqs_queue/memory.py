"""
Module: memory.py
Description: In-process job queue for tests and local development.
"""

from collections import defaultdict
from typing import Dict, List, Optional

from jobs.base import Job
from models.job import JobEnvelope
from sqs_queue.base import JobQueue
from utils.logger import get_logger

logger = get_logger(__name__)


class InMemoryJobQueue(JobQueue):
    """
    Holds enqueued jobs per logical queue until they are performed or cleared.

    Example:
        >>> queue = InMemoryJobQueue()
        >>> await MakeRequestJob.perform_later("http://url.com/", queue=queue)
        >>> [job.arguments for job in queue.enqueued_jobs("spree_webhooks")]
        [['http://url.com/']]
    """

    def __init__(self):
        self._queues: Dict[str, List[JobEnvelope]] = defaultdict(list)
        self._delays: Dict[str, int] = {}

    async def enqueue(self, envelope: JobEnvelope, delay_seconds: int = 0) -> str:
        if not isinstance(envelope, JobEnvelope):
            raise ValueError("envelope must be a JobEnvelope instance")
        if delay_seconds < 0:
            raise ValueError("delay_seconds cannot be negative")

        self._queues[envelope.queue_name].append(envelope)
        self._delays[envelope.job_id] = delay_seconds

        logger.debug(
            "Job recorded in memory",
            job_id=envelope.job_id,
            queue_name=envelope.queue_name
        )
        return envelope.job_id

    def enqueued_jobs(self, queue_name: Optional[str] = None) -> List[JobEnvelope]:
        """Pending jobs, optionally restricted to one queue, in enqueue order."""
        if queue_name is not None:
            return list(self._queues.get(queue_name, []))
        jobs = [job for queued in self._queues.values() for job in queued]
        return sorted(jobs, key=lambda job: job.enqueued_at)

    def delay_for(self, job_id: str) -> int:
        """Delay the job was enqueued with."""
        return self._delays[job_id]

    def clear(self) -> None:
        self._queues.clear()
        self._delays.clear()

    def perform_enqueued_jobs(self) -> int:
        """
        Run every pending job inline, oldest first.

        Jobs are removed before they run, so a failing job is not
        performed again. Exceptions from perform() propagate.

        Returns:
            Number of jobs performed
        """
        performed = 0
        for envelope in self.enqueued_jobs():
            self._queues[envelope.queue_name].remove(envelope)
            self._delays.pop(envelope.job_id, None)
            envelope.increment_executions()
            Job.execute(envelope)
            performed += 1
        return performed
