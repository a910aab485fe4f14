"""
SNS notifications
"""
from typing import Dict

from dynascale.connection.base import Connection, BOTOCORE_EXCEPTIONS
from dynascale.constants import SNS_SERVICE_NAME, PUBLISH, TOPIC_ARN, SUBJECT, MESSAGE, MAX_SUBJECT_LENGTH
from dynascale.exceptions import PublishError


class SNSConnection(Connection):
    service_name = SNS_SERVICE_NAME

    def post_notification(self, topic_arn: str, subject: str, body: str) -> Dict:
        """
        Publishes a message to an SNS topic.

        SNS rejects subjects longer than ``MAX_SUBJECT_LENGTH``; such subjects are
        truncated and the full subject is prepended to the body.
        """
        if len(subject) > MAX_SUBJECT_LENGTH:
            body = "{}\n\n{}".format(subject, body)
            subject = subject[:MAX_SUBJECT_LENGTH]
        operation_kwargs = {
            TOPIC_ARN: topic_arn,
            SUBJECT: subject,
            MESSAGE: body,
        }
        try:
            return self.dispatch(PUBLISH, operation_kwargs)
        except BOTOCORE_EXCEPTIONS as e:
            raise PublishError("Failed to publish to {}: {}".format(topic_arn, e), e)
