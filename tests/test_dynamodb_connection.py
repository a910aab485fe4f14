"""
Tests for the DynamoDB connection
"""
import copy
from datetime import datetime, timezone
from unittest.mock import patch

import pytest
from botocore.client import ClientError
from botocore.exceptions import BotoCoreError

from dynascale.connection import DynamoConnection
from dynascale.exceptions import IndexDoesNotExist, TableDoesNotExist, TableError
from dynascale.index import DynamoIndex
from .data import DESCRIBE_TABLE_DATA

PATCH_METHOD = 'dynascale.connection.base.Connection._make_api_call'
TEST_TABLE_NAME = DESCRIBE_TABLE_DATA['Table']['TableName']
REGION = 'us-east-1'


def _timestamp(value):
    return datetime.fromtimestamp(value, tz=timezone.utc)


def test_connection_describe_table():
    """
    DynamoConnection.describe_table
    """
    with patch(PATCH_METHOD) as req:
        req.return_value = DESCRIBE_TABLE_DATA
        conn = DynamoConnection(REGION)
        assert conn.describe_table(TEST_TABLE_NAME) == DESCRIBE_TABLE_DATA['Table']
        assert req.call_args[0][1] == {'TableName': TEST_TABLE_NAME}

    with pytest.raises(TableDoesNotExist):
        with patch(PATCH_METHOD) as req:
            req.side_effect = ClientError({'Error': {'Code': 'ResourceNotFoundException', 'Message': 'Not Found'}}, "DescribeTable")
            conn = DynamoConnection(REGION)
            conn.describe_table(TEST_TABLE_NAME)

    with pytest.raises(TableError):
        with patch(PATCH_METHOD) as req:
            req.side_effect = BotoCoreError
            conn = DynamoConnection(REGION)
            conn.describe_table(TEST_TABLE_NAME)


def test_connection_describe_table__client_error_is_wrapped():
    error = ClientError({'Error': {'Code': 'AccessDeniedException', 'Message': 'Denied'}}, "DescribeTable")
    with patch(PATCH_METHOD) as req:
        req.side_effect = error
        conn = DynamoConnection(REGION)
        with pytest.raises(TableError) as excinfo:
            conn.describe_table(TEST_TABLE_NAME)
    assert excinfo.value.cause is error
    assert excinfo.value.cause_response_code == 'AccessDeniedException'


def test_connection_get_description__primary_index():
    with patch(PATCH_METHOD) as req:
        req.return_value = DESCRIBE_TABLE_DATA
        conn = DynamoConnection(REGION)
        description = conn.get_description(DynamoIndex(TEST_TABLE_NAME))

    throughput = DESCRIBE_TABLE_DATA['Table']['ProvisionedThroughput']
    assert description.status == 'ACTIVE'
    assert description.is_active
    assert description.read_capacity == 7
    assert description.write_capacity == 8
    assert description.created == _timestamp(DESCRIBE_TABLE_DATA['Table']['CreationDateTime'])
    assert description.last_decrease == _timestamp(throughput['LastDecreaseDateTime'])
    assert description.last_increase == _timestamp(throughput['LastIncreaseDateTime'])


def test_connection_get_description__global_secondary_index():
    with patch(PATCH_METHOD) as req:
        req.return_value = DESCRIBE_TABLE_DATA
        conn = DynamoConnection(REGION)
        description = conn.get_description(DynamoIndex(TEST_TABLE_NAME, 'LastPostIndex'))

    created = _timestamp(DESCRIBE_TABLE_DATA['Table']['CreationDateTime'])
    assert description.status == 'UPDATING'
    assert not description.is_active
    assert description.read_capacity == 20
    assert description.write_capacity == 15
    # never decreased, so the creation time stands in
    assert description.last_decrease == created
    assert description.last_increase == _timestamp(1.363801701282E9)


def test_connection_get_description__missing_global_secondary_index():
    with patch(PATCH_METHOD) as req:
        req.return_value = DESCRIBE_TABLE_DATA
        conn = DynamoConnection(REGION)
        with pytest.raises(IndexDoesNotExist) as excinfo:
            conn.get_description(DynamoIndex(TEST_TABLE_NAME, 'NoSuchIndex'))
    assert 'Thread:NoSuchIndex' in str(excinfo.value)

    data = copy.deepcopy(DESCRIBE_TABLE_DATA)
    del data['Table']['GlobalSecondaryIndexes']
    with patch(PATCH_METHOD) as req:
        req.return_value = data
        conn = DynamoConnection(REGION)
        with pytest.raises(IndexDoesNotExist):
            conn.get_description(DynamoIndex(TEST_TABLE_NAME, 'LastPostIndex'))


def test_connection_get_description__datetime_values():
    data = copy.deepcopy(DESCRIBE_TABLE_DATA)
    created = datetime(2015, 6, 1, 12, 0, tzinfo=timezone.utc)
    data['Table']['CreationDateTime'] = created
    data['Table']['ProvisionedThroughput']['LastIncreaseDateTime'] = datetime(2015, 6, 2, 12, 0)
    with patch(PATCH_METHOD) as req:
        req.return_value = data
        conn = DynamoConnection(REGION)
        description = conn.get_description(DynamoIndex(TEST_TABLE_NAME))

    assert description.created == created
    assert description.last_increase == datetime(2015, 6, 2, 12, 0, tzinfo=timezone.utc)


def test_connection_update_table():
    """
    DynamoConnection.update_table
    """
    with patch(PATCH_METHOD) as req:
        req.return_value = None
        conn = DynamoConnection(REGION)
        params = {
            'ProvisionedThroughput': {
                'WriteCapacityUnits': 2,
                'ReadCapacityUnits': 2
            },
            'TableName': TEST_TABLE_NAME,
        }
        conn.update_table(
            TEST_TABLE_NAME,
            read_capacity_units=2,
            write_capacity_units=2
        )
        assert req.call_args[0][1] == params

    with pytest.raises(ValueError):
        conn.update_table(TEST_TABLE_NAME, read_capacity_units=2)

    with patch(PATCH_METHOD) as req:
        req.side_effect = BotoCoreError
        conn = DynamoConnection(REGION)
        with pytest.raises(TableError):
            conn.update_table(TEST_TABLE_NAME, read_capacity_units=2, write_capacity_units=2)

    with patch(PATCH_METHOD) as req:
        req.return_value = None
        conn = DynamoConnection(REGION)

        global_secondary_index_updates = [
            {
                "index_name": "foo-index",
                "read_capacity_units": 2,
                "write_capacity_units": 2
            }
        ]
        params = {
            'TableName': TEST_TABLE_NAME,
            'ProvisionedThroughput': {
                'ReadCapacityUnits': 2,
                'WriteCapacityUnits': 2,
            },
            'GlobalSecondaryIndexUpdates': [
                {
                    'Update': {
                        'IndexName': 'foo-index',
                        'ProvisionedThroughput': {
                            'ReadCapacityUnits': 2,
                            'WriteCapacityUnits': 2,
                        }
                    }
                }
            ]
        }
        conn.update_table(
            TEST_TABLE_NAME,
            read_capacity_units=2,
            write_capacity_units=2,
            global_secondary_index_updates=global_secondary_index_updates
        )
        assert req.call_args[0][1] == params


def test_connection_update_provisioning__primary_index():
    with patch(PATCH_METHOD) as req:
        req.return_value = None
        conn = DynamoConnection(REGION)
        conn.update_provisioning(DynamoIndex(TEST_TABLE_NAME), 3, 4)
        assert req.call_args[0][0] == 'UpdateTable'
        assert req.call_args[0][1] == {
            'TableName': TEST_TABLE_NAME,
            'ProvisionedThroughput': {
                'ReadCapacityUnits': 3,
                'WriteCapacityUnits': 4,
            },
        }


def test_connection_update_provisioning__global_secondary_index():
    with patch(PATCH_METHOD) as req:
        req.return_value = None
        conn = DynamoConnection(REGION)
        conn.update_provisioning(DynamoIndex(TEST_TABLE_NAME, 'LastPostIndex'), 3, 4)
        params = req.call_args[0][1]
        assert 'ProvisionedThroughput' not in params
        assert params == {
            'TableName': TEST_TABLE_NAME,
            'GlobalSecondaryIndexUpdates': [
                {
                    'Update': {
                        'IndexName': 'LastPostIndex',
                        'ProvisionedThroughput': {
                            'ReadCapacityUnits': 3,
                            'WriteCapacityUnits': 4,
                        }
                    }
                }
            ]
        }
