"""
Module: logger.py
Description: Structured logging configuration for the webhooks service.

Configures structlog for JSON output optimized for CloudWatch Logs.
Provides consistent logging across all modules with proper context
and structured data.

Key Components:
- JSON output for CloudWatch compatibility
- Timestamp and log level processors
- configure_logging() to apply the configured level
- get_logger() helper function

Dependencies: structlog, logging
"""

import logging

import structlog


def configure_logging(level: str = "INFO") -> None:
    """
    Configure structlog for JSON output at the given level.

    Args:
        level: Standard logging level name (DEBUG, INFO, ...)
    """
    structlog.configure(
        processors=[
            # Add timestamp and log level
            structlog.processors.TimeStamper(fmt="iso", utc=True, key="timestamp"),
            structlog.processors.add_log_level,
            # Add exception information
            structlog.processors.format_exc_info,
            # Render as JSON for CloudWatch compatibility
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.WriteLoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level.upper())
        ),
        # Loggers are re-created after reconfiguration
        cache_logger_on_first_use=False,
    )


configure_logging()


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("Job enqueued", job_id="job_1a2b3c4d5e6f", queue_name="spree_webhooks")
        {"job_id": "job_1a2b3c4d5e6f", "queue_name": "spree_webhooks", "event": "Job enqueued", "timestamp": "...", "level": "info"}
    """
    return structlog.get_logger(name)
