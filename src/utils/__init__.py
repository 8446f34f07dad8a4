"""
Module: utils
Description: Package initialization for utility functions.

This package contains shared helpers used throughout the service.

Current utilities:
- logger: Structured logging configuration and helpers
- metrics: CloudWatch custom metrics
"""

__all__ = []
