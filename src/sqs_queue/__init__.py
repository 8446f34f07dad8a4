"""
Package: sqs_queue
Description: Job queue clients.

Provides the JobQueue interface with an SQS backend for deployed
environments and an in-memory backend for tests and local runs.
"""
