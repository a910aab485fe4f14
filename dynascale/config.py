"""
Scaling configuration
"""
import numbers
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Mapping

from dynascale.constants import (
    DEFAULT_MIN_READ, DEFAULT_MAX_READ, DEFAULT_MIN_WRITE, DEFAULT_MAX_WRITE,
    DEFAULT_UPSCALE_PERCENT, DEFAULT_DOWNSCALE_PERCENT, DEFAULT_SCALE_UP_FACTOR,
    DEFAULT_SCALE_DOWN_FACTOR, DEFAULT_DOWNSCALE_WAIT_MINUTES
)
from dynascale.exceptions import InvalidConfigError
from dynascale.index import DynamoIndex
from dynascale.settings import get_settings_value

_NUMERIC_FIELDS = (
    'min_read', 'max_read', 'min_write', 'max_write', 'upscale_percent', 'downscale_percent',
    'scale_up_factor', 'scale_down_factor', 'downscale_wait_minutes',
)


@dataclass(frozen=True)
class IndexScalingConfig:
    """
    Scaling options of a single primary or global secondary index.

    :param index: the index to scale
    :param min_read: the minimum allowed read capacity
    :param max_read: the maximum allowed read capacity
    :param min_write: the minimum allowed write capacity
    :param max_write: the maximum allowed write capacity
    :param enable_upscale: if True, provisioning may be increased
    :param enable_downscale: if True, provisioning may be decreased
    :param upscale_percent: consumed / provisioned ratio at or above which provisioning is increased
    :param downscale_percent: consumed / provisioned ratio at or below which provisioning is decreased
    :param scale_up_factor: growth on upscale, new = current * (1 + factor)
    :param scale_down_factor: shrink on downscale, new = current * (1 - factor)
    :param downscale_wait_minutes: minutes since the last increase and the last decrease
     that must pass before a downscale
    """
    index: DynamoIndex
    min_read: int = DEFAULT_MIN_READ
    max_read: int = DEFAULT_MAX_READ
    min_write: int = DEFAULT_MIN_WRITE
    max_write: int = DEFAULT_MAX_WRITE
    enable_upscale: bool = True
    enable_downscale: bool = True
    upscale_percent: float = DEFAULT_UPSCALE_PERCENT
    downscale_percent: float = DEFAULT_DOWNSCALE_PERCENT
    scale_up_factor: float = DEFAULT_SCALE_UP_FACTOR
    scale_down_factor: float = DEFAULT_SCALE_DOWN_FACTOR
    downscale_wait_minutes: int = DEFAULT_DOWNSCALE_WAIT_MINUTES

    def __post_init__(self) -> None:
        if not isinstance(self.index, DynamoIndex):
            raise InvalidConfigError("index must be a DynamoIndex, got {!r}".format(self.index))
        for name in ('enable_upscale', 'enable_downscale'):
            if not isinstance(getattr(self, name), bool):
                raise InvalidConfigError("{} must be a boolean for {}".format(name, self.index))
        for name in _NUMERIC_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                raise InvalidConfigError("{} must be a number for {}, got {!r}".format(name, self.index, value))
        for name in ('min_read', 'max_read', 'min_write', 'max_write'):
            if getattr(self, name) < 0:
                raise InvalidConfigError("{} must not be negative for {}".format(name, self.index))
        if self.min_read > self.max_read:
            raise InvalidConfigError("min_read ({}) exceeds max_read ({}) for {}".format(
                self.min_read, self.max_read, self.index))
        if self.min_write > self.max_write:
            raise InvalidConfigError("min_write ({}) exceeds max_write ({}) for {}".format(
                self.min_write, self.max_write, self.index))
        for name in ('upscale_percent', 'downscale_percent', 'scale_down_factor'):
            if not 0 <= getattr(self, name) <= 1:
                raise InvalidConfigError("{} must be between 0 and 1 for {}".format(name, self.index))
        if self.scale_up_factor < 0:
            raise InvalidConfigError("scale_up_factor must not be negative for {}".format(self.index))
        if self.downscale_wait_minutes < 0:
            raise InvalidConfigError("downscale_wait_minutes must not be negative for {}".format(self.index))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'IndexScalingConfig':
        """
        Builds a config from a mapping of field names, where ``table_name`` and
        the optional ``gsi_name`` identify the index
        """
        values: Dict[str, Any] = dict(data)
        try:
            index = DynamoIndex(values.pop('table_name'), values.pop('gsi_name', None))
        except KeyError:
            raise InvalidConfigError("table_name is required")
        known = {f.name for f in fields(cls)} - {'index'}
        unknown = set(values) - known
        if unknown:
            raise InvalidConfigError("Unknown scaling options for {}: {}".format(index, sorted(unknown)))
        return cls(index=index, **values)


@dataclass(frozen=True)
class ScalingServiceConfig:
    """
    Process wide settings of the scaling service.
    An empty ``notification_arn`` disables notifications.
    """
    check_interval_seconds: float = field(default_factory=lambda: get_settings_value('check_interval_seconds'))
    notification_arn: str = field(default_factory=lambda: get_settings_value('notification_arn') or '')

    def __post_init__(self) -> None:
        interval = self.check_interval_seconds
        if isinstance(interval, bool) or not isinstance(interval, numbers.Real) or interval <= 0:
            raise InvalidConfigError("check_interval_seconds must be positive")

    @property
    def notifications_enabled(self) -> bool:
        return bool(self.notification_arn)
