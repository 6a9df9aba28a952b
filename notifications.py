# notifications.py
import logging
import os

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger(__name__)


class NotificationError(Exception):
    """A reminder could not be delivered."""


class LogNotifier:
    """Stand-in sender: records the reminder in the function log only."""

    def send(self, customer_id: str, message: str) -> None:
        logger.info('Notification sent: %s', message)


class SnsNotifier:
    def __init__(self, topic_arn: str, client=None):
        self.topic_arn = topic_arn
        self._client = client

    @property
    def client(self):
        if self._client is None:
            config = Config(
                region_name=os.environ.get('AWS_REGION', 'us-east-1'),
                retries={'max_attempts': 3, 'mode': 'standard'},
            )
            self._client = boto3.client('sns', config=config)
        return self._client

    def send(self, customer_id: str, message: str) -> None:
        attrs = {}
        if customer_id:
            attrs['customer_id'] = {'DataType': 'String', 'StringValue': customer_id}
        try:
            self.client.publish(TopicArn=self.topic_arn, Message=message, MessageAttributes=attrs)
        except (ClientError, BotoCoreError) as e:
            raise NotificationError(f'SNS publish failed for {customer_id}: {e}') from e


def build_notifier(topic_arn=None):
    if topic_arn:
        return SnsNotifier(topic_arn)
    return LogNotifier()
