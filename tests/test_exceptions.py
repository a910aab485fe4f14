from botocore.exceptions import ClientError

from dynascale.exceptions import (
    DynaScaleConnectionError, IndexDoesNotExist, InvalidConfigError, MetricsError, TableDoesNotExist, TableError
)


def test_get_cause_response_code():
    error = TableError(
        cause=ClientError(
            error_response={
                'Error': {
                    'Code': 'hello'
                }
            },
            operation_name='test'
        )
    )
    assert error.cause_response_code == 'hello'


def test_get_cause_response_code__no_code():
    error = TableError()
    assert error.cause_response_code is None


def test_get_cause_response_message():
    error = MetricsError(
        cause=ClientError(
            error_response={
                'Error': {
                    'Message': 'hiya'
                }
            },
            operation_name='test'
        )
    )
    assert error.cause_response_message == 'hiya'


def test_get_cause_response_message__no_message():
    error = MetricsError()
    assert error.cause_response_message is None


def test_default_messages():
    assert str(TableError()) == 'Error performing a table operation'
    assert str(MetricsError('custom')) == 'custom'
    assert isinstance(MetricsError(), DynaScaleConnectionError)


def test_does_not_exist_messages():
    assert str(TableDoesNotExist('Thread')) == 'Table does not exist: `Thread`'
    assert str(IndexDoesNotExist('Thread', 'LastPostIndex')) == \
        'Could not find global secondary index `Thread:LastPostIndex`'


def test_invalid_config_is_value_error():
    assert isinstance(InvalidConfigError('bad'), ValueError)
