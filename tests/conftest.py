from unittest import mock

import pytest

from dynascale.config import ScalingServiceConfig
from dynascale.connection import CloudWatchConnection, DynamoConnection, SNSConnection
from dynascale.service import ScalingService
from .data import NOTIFICATION_ARN


@pytest.fixture
def dynamo_connection():
    return mock.create_autospec(DynamoConnection, instance=True)


@pytest.fixture
def cloudwatch_connection():
    return mock.create_autospec(CloudWatchConnection, instance=True)


@pytest.fixture
def sns_connection():
    return mock.create_autospec(SNSConnection, instance=True)


@pytest.fixture
def service(dynamo_connection, cloudwatch_connection, sns_connection):
    service = ScalingService(
        ScalingServiceConfig(check_interval_seconds=0.01, notification_arn=NOTIFICATION_ARN),
        dynamo_connection=dynamo_connection,
        cloudwatch_connection=cloudwatch_connection,
        sns_connection=sns_connection,
    )
    yield service
    service.stop(timeout=5)
