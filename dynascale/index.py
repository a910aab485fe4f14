"""
DynamoDB index identity and throughput descriptions
"""
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from dynascale.constants import ACTIVE


@dataclass(frozen=True)
class DynamoIndex:
    """
    A table's primary index (when ``gsi_name`` is empty) or one of its global secondary indexes.
    """
    table_name: str
    gsi_name: Optional[str] = None

    def __post_init__(self) -> None:
        # '' and None both mean the primary index
        if not self.gsi_name:
            object.__setattr__(self, 'gsi_name', None)

    @property
    def is_global_secondary_index(self) -> bool:
        return self.gsi_name is not None

    def __str__(self) -> str:
        if self.gsi_name:
            return "{}:{}".format(self.table_name, self.gsi_name)
        return self.table_name


@dataclass(frozen=True)
class IndexDescription:
    """
    Point in time status and provisioned throughput of a primary or global secondary index.

    Naive timestamps are taken to be UTC.
    """
    status: str
    created: datetime
    last_decrease: datetime
    last_increase: datetime
    read_capacity: int
    write_capacity: int

    def __post_init__(self) -> None:
        for name in ('created', 'last_decrease', 'last_increase'):
            value = getattr(self, name)
            if value.tzinfo is None:
                object.__setattr__(self, name, value.replace(tzinfo=timezone.utc))

    @property
    def is_active(self) -> bool:
        return self.status == ACTIVE
