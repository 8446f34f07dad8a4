"""
Module: handlers
Description: Package initialization for API route handlers.

Current handlers:
- webhooks: POST /webhooks/deliveries dispatch endpoint
"""

__all__ = []
