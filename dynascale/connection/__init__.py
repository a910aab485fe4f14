"""
DynaScale lowest level connections
"""

from dynascale.connection.base import Connection
from dynascale.connection.cloudwatch import CloudWatchConnection
from dynascale.connection.dynamodb import DynamoConnection
from dynascale.connection.sns import SNSConnection


__all__ = [
    "Connection",
    "CloudWatchConnection",
    "DynamoConnection",
    "SNSConnection",
]
