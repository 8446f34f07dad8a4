"""
Module: base.py
Description: Base class for queued jobs.

Jobs bind themselves to a logical queue through the queue_name class
attribute. perform_later() serializes the arguments into a JobEnvelope
and hands it to an injected JobQueue; workers resolve the envelope back
to its job class through the registry and call perform().

Key Components:
- Job: Base class with perform_later(), perform_now(), execute()
- UnknownJobError: Raised when an envelope names an unregistered class

Dependencies: typing, models, utils
"""

from typing import Any, ClassVar, Dict, Type, TYPE_CHECKING

from models.job import JobEnvelope
from utils.logger import get_logger

if TYPE_CHECKING:
    from sqs_queue.base import JobQueue

logger = get_logger(__name__)


class UnknownJobError(LookupError):
    """Raised when no job class is registered under a name."""


class Job:
    """
    Base class for units of work executed by queue workers.

    Subclasses set queue_name and implement perform(). Every subclass
    is registered under its class name when it is defined.

    Example:
        >>> class PingJob(Job):
        ...     queue_name = "pings"
        ...     def perform(self, host):
        ...         ...
        >>> await PingJob.perform_later("example.com", queue=job_queue)
    """

    queue_name: ClassVar[str] = "default"

    _registry: ClassVar[Dict[str, Type["Job"]]] = {}

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        name = cls.__name__
        existing = Job._registry.get(name)
        if existing is not None and existing is not cls:
            raise ValueError(f"A job class named '{name}' is already registered")
        Job._registry[name] = cls

    @classmethod
    def lookup(cls, job_class: str) -> Type["Job"]:
        """
        Resolve a registered job class by name.

        Raises:
            UnknownJobError: If no class is registered under job_class
        """
        try:
            return Job._registry[job_class]
        except KeyError:
            raise UnknownJobError(f"Unknown job class '{job_class}'")

    @classmethod
    def serialize(cls, *args: Any) -> JobEnvelope:
        """Build the envelope for a call with the given arguments."""
        return JobEnvelope(
            job_class=cls.__name__,
            queue_name=cls.queue_name,
            arguments=list(args)
        )

    @classmethod
    async def perform_later(
        cls,
        *args: Any,
        queue: "JobQueue",
        delay_seconds: int = 0
    ) -> JobEnvelope:
        """
        Schedule the job on its queue.

        Returns once the queue backend has recorded the job. Backend
        errors propagate to the caller.

        Args:
            *args: Arguments for perform()
            queue: Queue client to record the job on
            delay_seconds: Delay before the job becomes visible

        Returns:
            The recorded JobEnvelope
        """
        envelope = cls.serialize(*args)
        await queue.enqueue(envelope, delay_seconds=delay_seconds)

        logger.info(
            "Job enqueued",
            job_id=envelope.job_id,
            job_class=envelope.job_class,
            queue_name=envelope.queue_name
        )
        return envelope

    @classmethod
    def perform_now(cls, *args: Any) -> Any:
        """Run the job inline in the current process."""
        return cls().perform(*args)

    @staticmethod
    def execute(envelope: JobEnvelope) -> Any:
        """
        Run a job read back from a queue.

        Raises:
            UnknownJobError: If envelope.job_class is not registered
        """
        job_cls = Job.lookup(envelope.job_class)
        job = job_cls()
        job.job_id = envelope.job_id
        job.executions = envelope.executions

        logger.info(
            "Performing job",
            job_id=envelope.job_id,
            job_class=envelope.job_class,
            queue_name=envelope.queue_name,
            executions=envelope.executions
        )
        return job.perform(*envelope.arguments)

    def __init__(self):
        self.job_id = None
        self.executions = 0

    def perform(self, *args: Any) -> Any:
        raise NotImplementedError(f"{type(self).__name__} must implement perform()")
