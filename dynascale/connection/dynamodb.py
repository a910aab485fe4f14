"""
DynamoDB table descriptions and provisioning updates
"""
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

from botocore.client import ClientError
from botocore.exceptions import BotoCoreError

from dynascale.connection.base import Connection, BOTOCORE_EXCEPTIONS
from dynascale.constants import (
    DYNAMODB_SERVICE_NAME, DESCRIBE_TABLE, UPDATE_TABLE, TABLE_NAME, TABLE_KEY, TABLE_STATUS,
    INDEX_NAME, INDEX_STATUS, GLOBAL_SECONDARY_INDEXES, GLOBAL_SECONDARY_INDEX_UPDATES,
    PROVISIONED_THROUGHPUT, READ_CAPACITY_UNITS, WRITE_CAPACITY_UNITS, CREATION_DATE_TIME,
    LAST_DECREASE_DATE_TIME, LAST_INCREASE_DATE_TIME, UPDATE
)
from dynascale.exceptions import TableError, TableDoesNotExist, IndexDoesNotExist
from dynascale.index import DynamoIndex, IndexDescription


def _to_datetime(value: Union[datetime, float, int, None]) -> Optional[datetime]:
    if value is None:
        return None
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value
    return datetime.fromtimestamp(value, tz=timezone.utc)


class DynamoConnection(Connection):
    """
    Reads and updates the provisioned throughput of DynamoDB tables and their global secondary indexes
    """
    service_name = DYNAMODB_SERVICE_NAME

    def describe_table(self, table_name: str) -> Dict:
        """
        Performs the DescribeTable operation and returns the table description
        """
        operation_kwargs = {
            TABLE_NAME: table_name
        }
        try:
            data = self.dispatch(DESCRIBE_TABLE, operation_kwargs)
        except BotoCoreError as e:
            raise TableError("Unable to describe table: {}".format(e), e)
        except ClientError as e:
            if 'ResourceNotFound' in e.response['Error']['Code']:
                raise TableDoesNotExist(table_name, e)
            raise TableError("Unable to describe table: {}".format(e), e)
        return data.get(TABLE_KEY, {})

    def get_description(self, index: DynamoIndex) -> IndexDescription:
        """
        Returns the status and provisioned throughput of a primary or global secondary index

        :raises TableDoesNotExist: if the table does not exist
        :raises IndexDoesNotExist: if the global secondary index is not on the table
        """
        table = self.describe_table(index.table_name)
        status = table.get(TABLE_STATUS)
        throughput = table.get(PROVISIONED_THROUGHPUT, {})

        if index.is_global_secondary_index:
            indexes = table.get(GLOBAL_SECONDARY_INDEXES) or []
            gsi = next((i for i in indexes if i.get(INDEX_NAME) == index.gsi_name), None)
            if gsi is None:
                raise IndexDoesNotExist(index.table_name, index.gsi_name)
            status = gsi.get(INDEX_STATUS)
            throughput = gsi.get(PROVISIONED_THROUGHPUT, {})

        created = _to_datetime(table.get(CREATION_DATE_TIME)) or datetime.now(timezone.utc)
        # Throughput that was never changed carries no timestamps
        last_decrease = _to_datetime(throughput.get(LAST_DECREASE_DATE_TIME)) or created
        last_increase = _to_datetime(throughput.get(LAST_INCREASE_DATE_TIME)) or created
        return IndexDescription(
            status=status,
            created=created,
            last_decrease=last_decrease,
            last_increase=last_increase,
            read_capacity=int(throughput.get(READ_CAPACITY_UNITS, 0)),
            write_capacity=int(throughput.get(WRITE_CAPACITY_UNITS, 0)),
        )

    def update_table(
        self,
        table_name: str,
        read_capacity_units: Optional[int] = None,
        write_capacity_units: Optional[int] = None,
        global_secondary_index_updates: Optional[List[Dict[str, Any]]] = None,
    ) -> Dict:
        """
        Performs the UpdateTable operation
        """
        operation_kwargs: Dict[str, Any] = {
            TABLE_NAME: table_name
        }
        if (read_capacity_units is None) != (write_capacity_units is None):
            raise ValueError("read_capacity_units and write_capacity_units are required together")
        if read_capacity_units is not None:
            operation_kwargs[PROVISIONED_THROUGHPUT] = {
                READ_CAPACITY_UNITS: read_capacity_units,
                WRITE_CAPACITY_UNITS: write_capacity_units
            }
        if global_secondary_index_updates:
            global_secondary_indexes_list = []
            for index in global_secondary_index_updates:
                global_secondary_indexes_list.append({
                    UPDATE: {
                        INDEX_NAME: index.get('index_name'),
                        PROVISIONED_THROUGHPUT: {
                            READ_CAPACITY_UNITS: index.get('read_capacity_units'),
                            WRITE_CAPACITY_UNITS: index.get('write_capacity_units')
                        }
                    }
                })
            operation_kwargs[GLOBAL_SECONDARY_INDEX_UPDATES] = global_secondary_indexes_list
        try:
            return self.dispatch(UPDATE_TABLE, operation_kwargs)
        except BOTOCORE_EXCEPTIONS as e:
            raise TableError("Failed to update table: {}".format(e), e)

    def update_provisioning(self, index: DynamoIndex, read_capacity_units: int, write_capacity_units: int) -> Dict:
        """
        Updates the provisioned throughput of a single index.

        A primary index is updated through the table's throughput, a global secondary
        index through an update action scoped to that index, never both.
        """
        if index.is_global_secondary_index:
            return self.update_table(
                index.table_name,
                global_secondary_index_updates=[{
                    'index_name': index.gsi_name,
                    'read_capacity_units': read_capacity_units,
                    'write_capacity_units': write_capacity_units,
                }]
            )
        return self.update_table(
            index.table_name,
            read_capacity_units=read_capacity_units,
            write_capacity_units=write_capacity_units,
        )
