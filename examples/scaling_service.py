"""
Examples using the scaling service
"""
import logging
import time

from dynascale.config import IndexScalingConfig, ScalingServiceConfig
from dynascale.connection import CloudWatchConnection, DynamoConnection, SNSConnection
from dynascale.index import DynamoIndex
from dynascale.service import ScalingService

logging.basicConfig(level=logging.INFO)

# Look at a table directly
conn = DynamoConnection(region='us-east-1')
print(conn.get_description(DynamoIndex('Thread')))

# Consumed capacity over the last metrics window
print(CloudWatchConnection(region='us-east-1').get_consumed_reads(DynamoIndex('Thread')))

# Scale a table and one of its global secondary indexes
service = ScalingService(
    ScalingServiceConfig(check_interval_seconds=60, notification_arn='arn:aws:sns:us-east-1:123456789012:dynascale'),
    dynamo_connection=conn,
    cloudwatch_connection=CloudWatchConnection(region='us-east-1'),
    sns_connection=SNSConnection(region='us-east-1'),
)
service.add_index(IndexScalingConfig(DynamoIndex('Thread'), max_read=100, max_write=20))
service.add_index(IndexScalingConfig(DynamoIndex('Thread', 'LastPostIndex'), enable_downscale=False))
service.start()

try:
    time.sleep(600)
finally:
    service.stop()
