"""
Consumed capacity metrics from CloudWatch
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List

from dynascale.connection.base import Connection, BOTOCORE_EXCEPTIONS
from dynascale.constants import (
    CLOUDWATCH_SERVICE_NAME, GET_METRIC_STATISTICS, NAMESPACE, METRIC_NAME, DIMENSIONS, START_TIME,
    END_TIME, PERIOD, STATISTICS, UNIT, DATAPOINTS, NAME, VALUE, SUM, COUNT, DYNAMODB_NAMESPACE,
    TABLE_NAME, GLOBAL_SECONDARY_INDEX_NAME, CONSUMED_READ_CAPACITY_UNITS, CONSUMED_WRITE_CAPACITY_UNITS,
    LOOKBACK_BUFFER_MINUTES, PERIOD_SECONDS
)
from dynascale.exceptions import MetricsError
from dynascale.index import DynamoIndex


class CloudWatchConnection(Connection):
    """
    Reads DynamoDB consumed capacity metrics
    """
    service_name = CLOUDWATCH_SERVICE_NAME

    def get_table_metric_average(self, index: DynamoIndex, metric_name: str) -> float:
        """
        Returns the per second average of ``metric_name`` on a primary or global secondary index over
        the ``PERIOD_SECONDS`` ending ``LOOKBACK_BUFFER_MINUTES`` ago, or zero if there are no data points.

        DynamoDB does not record metrics for an idle table, so no data points means no consumption.
        """
        end = datetime.now(timezone.utc) - timedelta(minutes=LOOKBACK_BUFFER_MINUTES)
        start = end - timedelta(seconds=PERIOD_SECONDS)

        dimensions: List[Dict[str, str]] = [{NAME: TABLE_NAME, VALUE: index.table_name}]
        if index.is_global_secondary_index:
            dimensions.append({NAME: GLOBAL_SECONDARY_INDEX_NAME, VALUE: index.gsi_name})

        # The period spans the whole window, so at most one data point comes back
        operation_kwargs: Dict[str, Any] = {
            NAMESPACE: DYNAMODB_NAMESPACE,
            METRIC_NAME: metric_name,
            DIMENSIONS: dimensions,
            START_TIME: start,
            END_TIME: end,
            PERIOD: PERIOD_SECONDS,
            STATISTICS: [SUM],
            UNIT: COUNT,
        }
        try:
            data = self.dispatch(GET_METRIC_STATISTICS, operation_kwargs)
        except BOTOCORE_EXCEPTIONS as e:
            raise MetricsError("Failed to get {} for {}: {}".format(metric_name, index, e), e)

        total = sum(datapoint.get(SUM, 0.0) for datapoint in data.get(DATAPOINTS, []))
        return total / float(PERIOD_SECONDS)

    def get_consumed_reads(self, index: DynamoIndex) -> float:
        """
        Returns the average consumed read units per second, zero if no data points were recorded
        """
        return self.get_table_metric_average(index, CONSUMED_READ_CAPACITY_UNITS)

    def get_consumed_writes(self, index: DynamoIndex) -> float:
        """
        Returns the average consumed write units per second, zero if no data points were recorded
        """
        return self.get_table_metric_average(index, CONSUMED_WRITE_CAPACITY_UNITS)
