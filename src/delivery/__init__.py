"""
Package: delivery
Description: Webhook delivery for queued jobs.

Provides the HTTP request to webhook endpoints, the connection retry
policy, and the SQS worker that executes queued jobs.
"""
