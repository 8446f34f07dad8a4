"""
Module: job.py
Description: Job envelope model for queued units of work.

Defines the durable record that is placed on a queue when a job is
scheduled and read back by workers when the job is executed.

Key Components:
- JobEnvelope: Serialized job with class, queue, and arguments
- new_job_id(): Job identifier generation

Dependencies: pydantic, datetime, typing, uuid
"""

import json
from datetime import datetime, timezone
from typing import Any, List
from uuid import uuid4

from pydantic import BaseModel, Field, ConfigDict, field_validator


def new_job_id() -> str:
    """Generate a unique job identifier."""
    return f"job_{uuid4().hex[:12]}"


class JobEnvelope(BaseModel):
    """
    Queued unit of work.

    Attributes:
        job_id: Unique job identifier (generated)
        job_class: Registered name of the job class to run
        queue_name: Logical queue the job is bound to
        arguments: Positional arguments passed to the job's perform()
        enqueued_at: Timestamp when the job was scheduled
        executions: Number of times a worker has started this job
    """

    model_config = ConfigDict(
        str_strip_whitespace=True,
        validate_assignment=True
    )

    job_id: str = Field(
        default_factory=new_job_id,
        description="Unique job identifier",
        pattern=r"^job_[a-z0-9]{12}$"
    )
    job_class: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Registered job class name"
    )
    queue_name: str = Field(
        ...,
        min_length=1,
        max_length=80,
        pattern=r"^[a-z0-9_]+$",
        description="Logical queue name"
    )
    arguments: List[Any] = Field(
        default_factory=list,
        description="Positional job arguments"
    )
    enqueued_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Enqueue timestamp"
    )
    executions: int = Field(
        default=0,
        ge=0,
        description="Number of executions started"
    )

    @field_validator('arguments')
    @classmethod
    def validate_arguments(cls, v: List[Any]) -> List[Any]:
        """Arguments must survive a JSON round trip through the queue."""
        try:
            json.dumps(v)
        except (TypeError, ValueError):
            raise ValueError("arguments must be JSON serializable")
        return v

    def increment_executions(self) -> None:
        """Record that a worker started the job."""
        self.executions += 1
