"""
DynaScale exceptions
"""
from typing import Optional


class DynaScaleException(Exception):
    """
    Base class for all DynaScale exceptions.
    """

    msg: str = "DynaScale Error"

    def __init__(self, msg: Optional[str] = None, cause: Optional[Exception] = None) -> None:
        self.msg = msg if msg is not None else self.msg
        self.cause = cause
        super(DynaScaleException, self).__init__(self.msg)

    @property
    def cause_response_code(self) -> Optional[str]:
        """
        The AWS response code such as:

        - ``ResourceNotFoundException``
        - ``LimitExceededException``
        - ``ThrottlingException``

        Inspect this value to determine the cause of the error and handle it.
        """
        return getattr(self.cause, 'response', {}).get('Error', {}).get('Code')

    @property
    def cause_response_message(self) -> Optional[str]:
        """
        The human-readable description of the error returned by AWS.
        """
        return getattr(self.cause, 'response', {}).get('Error', {}).get('Message')


class DynaScaleConnectionError(DynaScaleException):
    """
    A base class for errors talking to AWS
    """
    msg = "Connection Error"


class TableError(DynaScaleConnectionError):
    """
    An error involving a dynamodb table operation
    """
    msg = "Error performing a table operation"


class MetricsError(DynaScaleConnectionError):
    """
    Raised when consumed capacity metrics cannot be retrieved
    """
    msg = "Error retrieving metrics"


class PublishError(DynaScaleConnectionError):
    """
    Raised when a notification fails to be published
    """
    msg = "Error publishing notification"


class TableDoesNotExist(DynaScaleException):
    """
    Raised when an operation is attempted on a table that doesn't exist
    """
    def __init__(self, table_name: str, cause: Optional[Exception] = None) -> None:
        msg = "Table does not exist: `{}`".format(table_name)
        super(TableDoesNotExist, self).__init__(msg, cause)


class IndexDoesNotExist(DynaScaleException):
    """
    Raised when a configured global secondary index is not found on its table
    """
    def __init__(self, table_name: str, index_name: str) -> None:
        msg = "Could not find global secondary index `{}:{}`".format(table_name, index_name)
        super(IndexDoesNotExist, self).__init__(msg)


class InvalidConfigError(DynaScaleException, ValueError):
    """
    Raised when a scaling configuration is inconsistent
    """
    msg = "Invalid scaling configuration"


class InvalidStateError(DynaScaleException):
    """
    Raised when the scaling service is asked to do something its current state does not allow.
    """
    msg = "Service in invalid state"
