"""
Scaling decisions

Everything in this module is a pure function of its arguments so the same
inputs always yield the same targets.
"""
from datetime import datetime, timezone
from typing import Optional, Tuple

from dynascale.config import IndexScalingConfig
from dynascale.index import IndexDescription


def _minutes_since(moment: datetime, now: datetime) -> int:
    # whole minutes, matching how the cooldown is configured
    return int((now - moment).total_seconds() // 60)


def _percent_consumed(consumed: float, provisioned: int) -> Optional[float]:
    # Nothing provisioned means there is no ratio to act on
    if provisioned <= 0:
        return None
    return consumed / float(provisioned)


def is_scaling_overridden(config: IndexScalingConfig, description: IndexDescription) -> bool:
    """
    Returns True if the provisioning has been set outside the configured bounds,
    usually by hand in the AWS console.

    Either dimension being out of bounds freezes scaling of both reads and writes.
    """
    return (description.read_capacity > config.max_read
            or description.read_capacity < config.min_read
            or description.write_capacity > config.max_write
            or description.write_capacity < config.min_write)


def should_upscale(config: IndexScalingConfig, description: IndexDescription) -> bool:
    """
    True if upscaling is enabled and scaling is not overridden
    """
    return config.enable_upscale and not is_scaling_overridden(config, description)


def should_downscale(
    config: IndexScalingConfig,
    description: IndexDescription,
    now: Optional[datetime] = None,
) -> bool:
    """
    True if downscaling is enabled, scaling is not overridden, and both the last
    increase and the last decrease happened more than ``config.downscale_wait_minutes`` ago.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    return (config.enable_downscale
            and not is_scaling_overridden(config, description)
            and _minutes_since(description.last_decrease, now) > config.downscale_wait_minutes
            and _minutes_since(description.last_increase, now) > config.downscale_wait_minutes)


def compute_target_unit(current: int, scale: float, minimum: int, maximum: int) -> int:
    """
    Multiplies the current provisioning by ``scale`` and clamps the result,
    capping at ``maximum`` first and then flooring at ``minimum``.
    Fractional units are truncated.
    """
    clamped = max(min(current * scale, float(maximum)), float(minimum))
    # 1 - 0.8 is 0.19999999999999996, don't let that cost a unit
    return int(round(clamped, 9))


def compute_target_throughput(
    config: IndexScalingConfig,
    description: IndexDescription,
    consumed_reads: float,
    consumed_writes: float,
    now: Optional[datetime] = None,
) -> Tuple[int, int]:
    """
    Computes the read and write provisioning the index should have.

    :param config: the index configuration
    :param description: the current provisioning of the index
    :param consumed_reads: average consumed read units per second
    :param consumed_writes: average consumed write units per second
    :param now: the time cooldowns are measured against, defaults to the current time
    :return: a ``(target_reads, target_writes)`` tuple
    """
    upscale = should_upscale(config, description)
    downscale = should_downscale(config, description, now)

    def target(consumed: float, current: int, minimum: int, maximum: int) -> int:
        percent = _percent_consumed(consumed, current)
        if percent is None:
            return current
        if upscale and percent >= config.upscale_percent:
            return compute_target_unit(current, 1 + config.scale_up_factor, minimum, maximum)
        if downscale and percent <= config.downscale_percent:
            return compute_target_unit(current, 1 - config.scale_down_factor, minimum, maximum)
        return current

    target_reads = target(consumed_reads, description.read_capacity, config.min_read, config.max_read)
    target_writes = target(consumed_writes, description.write_capacity, config.min_write, config.max_write)
    return target_reads, target_writes


def needs_update(description: IndexDescription, target_reads: int, target_writes: int) -> bool:
    return target_reads != description.read_capacity or target_writes != description.write_capacity
