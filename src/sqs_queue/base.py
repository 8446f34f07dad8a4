"""
Module: base.py
Description: Queue client interface shared by all backends.
"""

from abc import ABC, abstractmethod

from models.job import JobEnvelope


class JobQueue(ABC):
    """
    Destination for scheduled jobs.

    Implementations return once the envelope is durably recorded;
    they never run the job themselves.
    """

    @abstractmethod
    async def enqueue(self, envelope: JobEnvelope, delay_seconds: int = 0) -> str:
        """
        Record a job on the queue named by envelope.queue_name.

        Args:
            envelope: Job to record
            delay_seconds: Delay before the job becomes visible to workers

        Returns:
            Backend message identifier
        """
