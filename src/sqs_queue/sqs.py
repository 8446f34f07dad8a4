"""
Module: sqs.py
Description: SQS backend for job queues.

Sends job envelopes to the SQS queue mapped to each logical queue
name. Workers consume the same queues through the Lambda SQS trigger.
"""

from typing import Dict, Optional
from aioboto3 import Session
from botocore.exceptions import ClientError

from models.job import JobEnvelope
from sqs_queue.base import JobQueue
from utils.logger import get_logger

logger = get_logger(__name__)

# SQS rejects larger DelaySeconds values
MAX_DELAY_SECONDS = 900


class SQSJobQueue(JobQueue):
    """
    SQS client for job queue operations.

    Attributes:
        queue_urls: Mapping of logical queue name to SQS queue URL
        session: aioboto3 session used to open SQS clients
    """

    def __init__(self, queue_urls: Dict[str, str], region_name: Optional[str] = None):
        """
        Initialize SQS job queue.

        Args:
            queue_urls: Logical queue name to SQS queue URL mapping
            region_name: AWS region of the queues

        Raises:
            ValueError: If no queue URLs are given
        """
        if not queue_urls or not isinstance(queue_urls, dict):
            raise ValueError("queue_urls must be a non-empty dictionary")

        self.queue_urls = dict(queue_urls)
        self.region_name = region_name
        self.session = Session()

        logger.info(
            "SQS job queue initialized",
            queues=sorted(self.queue_urls)
        )

    def queue_url_for(self, queue_name: str) -> str:
        """
        Resolve the SQS URL for a logical queue name.

        Raises:
            ValueError: If the queue name is not configured
        """
        try:
            return self.queue_urls[queue_name]
        except KeyError:
            raise ValueError(f"No queue URL configured for queue '{queue_name}'")

    async def enqueue(self, envelope: JobEnvelope, delay_seconds: int = 0) -> str:
        """
        Send a job envelope to SQS.

        Args:
            envelope: Job to send
            delay_seconds: Optional delay before message becomes available

        Returns:
            Message ID from SQS

        Raises:
            ClientError: If SQS operation fails
            ValueError: If parameters are invalid
        """
        if not isinstance(envelope, JobEnvelope):
            raise ValueError("envelope must be a JobEnvelope instance")
        if not 0 <= delay_seconds <= MAX_DELAY_SECONDS:
            raise ValueError(f"delay_seconds must be between 0 and {MAX_DELAY_SECONDS}")

        queue_url = self.queue_url_for(envelope.queue_name)

        try:
            async with self.session.client('sqs', region_name=self.region_name) as sqs:
                response = await sqs.send_message(
                    QueueUrl=queue_url,
                    MessageBody=envelope.model_dump_json(),
                    MessageAttributes={
                        'JobId': {
                            'StringValue': envelope.job_id,
                            'DataType': 'String'
                        },
                        'JobClass': {
                            'StringValue': envelope.job_class,
                            'DataType': 'String'
                        },
                        'QueueName': {
                            'StringValue': envelope.queue_name,
                            'DataType': 'String'
                        }
                    },
                    DelaySeconds=delay_seconds
                )

                message_id = response['MessageId']
                logger.info(
                    "Job sent to SQS",
                    job_id=envelope.job_id,
                    job_class=envelope.job_class,
                    queue_name=envelope.queue_name,
                    message_id=message_id
                )

                return message_id

        except ClientError as e:
            logger.error(
                "Failed to send job to SQS",
                job_id=envelope.job_id,
                queue_name=envelope.queue_name,
                error_code=e.response['Error']['Code'],
                error_message=e.response['Error']['Message']
            )
            raise

        except Exception as e:
            logger.error(
                "Unexpected error sending job to SQS",
                job_id=envelope.job_id,
                queue_name=envelope.queue_name,
                error=str(e)
            )
            raise
