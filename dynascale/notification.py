"""
Best effort escalation of scaling problems
"""
import logging
from typing import Optional

from dynascale.connection.sns import SNSConnection

log = logging.getLogger(__name__)


class NotificationGateway(object):
    """
    Logs every event and, when a topic is configured, publishes it to SNS.

    Publication failures are logged and never raised, so a broken topic
    cannot take down the scaling loop.
    """

    def __init__(self, sns_connection: Optional[SNSConnection], notification_arn: Optional[str]) -> None:
        self.sns_connection = sns_connection
        self.notification_arn = notification_arn or ''

    @property
    def enabled(self) -> bool:
        return bool(self.notification_arn) and self.sns_connection is not None

    def notify(self, subject: str, body: str) -> None:
        if self.enabled:
            try:
                self.sns_connection.post_notification(self.notification_arn, subject, body)  # type: ignore
            except Exception:
                log.exception("Failed to send notification to %s", self.notification_arn)
        log.error("(%s) %s", subject, body)
