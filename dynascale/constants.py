"""
DynaScale constants
"""

# Service names
DYNAMODB_SERVICE_NAME = 'dynamodb'
CLOUDWATCH_SERVICE_NAME = 'cloudwatch'
SNS_SERVICE_NAME = 'sns'

# DynamoDB operations
DESCRIBE_TABLE = 'DescribeTable'
UPDATE_TABLE = 'UpdateTable'

# DynamoDB request / response parameters
GLOBAL_SECONDARY_INDEX_UPDATES = 'GlobalSecondaryIndexUpdates'
GLOBAL_SECONDARY_INDEXES = 'GlobalSecondaryIndexes'
PROVISIONED_THROUGHPUT = 'ProvisionedThroughput'
READ_CAPACITY_UNITS = 'ReadCapacityUnits'
WRITE_CAPACITY_UNITS = 'WriteCapacityUnits'
LAST_DECREASE_DATE_TIME = 'LastDecreaseDateTime'
LAST_INCREASE_DATE_TIME = 'LastIncreaseDateTime'
CREATION_DATE_TIME = 'CreationDateTime'
TABLE_STATUS = 'TableStatus'
INDEX_STATUS = 'IndexStatus'
TABLE_NAME = 'TableName'
INDEX_NAME = 'IndexName'
TABLE_KEY = 'Table'
UPDATE = 'Update'

# Table and index statuses
ACTIVE = 'ACTIVE'
UPDATING = 'UPDATING'
CREATING = 'CREATING'
DELETING = 'DELETING'

# CloudWatch operations and parameters
GET_METRIC_STATISTICS = 'GetMetricStatistics'
NAMESPACE = 'Namespace'
METRIC_NAME = 'MetricName'
DIMENSIONS = 'Dimensions'
START_TIME = 'StartTime'
END_TIME = 'EndTime'
PERIOD = 'Period'
STATISTICS = 'Statistics'
UNIT = 'Unit'
DATAPOINTS = 'Datapoints'
NAME = 'Name'
VALUE = 'Value'
SUM = 'Sum'
COUNT = 'Count'
DYNAMODB_NAMESPACE = 'AWS/DynamoDB'
GLOBAL_SECONDARY_INDEX_NAME = 'GlobalSecondaryIndexName'
CONSUMED_READ_CAPACITY_UNITS = 'ConsumedReadCapacityUnits'
CONSUMED_WRITE_CAPACITY_UNITS = 'ConsumedWriteCapacityUnits'

# Metrics are read from a single PERIOD_SECONDS window ending
# LOOKBACK_BUFFER_MINUTES ago, since CloudWatch lags behind real time
LOOKBACK_BUFFER_MINUTES = 5
PERIOD_SECONDS = 300

# SNS operations and parameters
PUBLISH = 'Publish'
TOPIC_ARN = 'TopicArn'
SUBJECT = 'Subject'
MESSAGE = 'Message'
MAX_SUBJECT_LENGTH = 100

# Index scaling defaults
DEFAULT_MIN_READ = 5
DEFAULT_MAX_READ = 50
DEFAULT_MIN_WRITE = 5
DEFAULT_MAX_WRITE = 50
DEFAULT_UPSCALE_PERCENT = 0.85
DEFAULT_DOWNSCALE_PERCENT = 0.15
DEFAULT_SCALE_UP_FACTOR = 0.50
DEFAULT_SCALE_DOWN_FACTOR = 0.80
# AWS only allows a handful of decreases per day
DEFAULT_DOWNSCALE_WAIT_MINUTES = 60

# Notification subjects
UNEXPECTED_EXCEPTION_SUBJECT = 'Dynamo Scaling - Unexpected Exception'
MAXIMUM_REACHED_SUBJECT = 'Dynamo Scaling - Maximum Reached'
