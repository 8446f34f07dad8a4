"""
Package: jobs
Description: Queued job definitions.

Importing this package registers every job class so workers can
resolve envelopes by class name.
"""

from .base import Job, UnknownJobError
from .make_request import MakeRequestJob

__all__ = [
    "Job",
    "UnknownJobError",
    "MakeRequestJob",
]
