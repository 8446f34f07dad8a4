"""
Module: auth
Description: Package initialization for authentication and authorization.

This package contains authentication and authorization components:
- api_key: API key hashing and validation functions
- ability: Capability object passed to handlers
"""

__all__ = []
