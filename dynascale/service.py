"""
DynaScale scaling service
~~~~~~~~~~~~~~~~~~~~~~~~~

Periodically polls consumed throughput of the registered indexes and
updates their provisioned throughput when necessary.
"""
import enum
import logging
from threading import Event, Lock, Thread, current_thread
from typing import Optional

from dynascale import decision
from dynascale.config import IndexScalingConfig, ScalingServiceConfig
from dynascale.connection import CloudWatchConnection, DynamoConnection, SNSConnection
from dynascale.constants import UNEXPECTED_EXCEPTION_SUBJECT, MAXIMUM_REACHED_SUBJECT
from dynascale.exceptions import InvalidStateError
from dynascale.index import DynamoIndex, IndexDescription
from dynascale.notification import NotificationGateway
from dynascale.registry import ScalingRegistry
from dynascale.settings import get_settings_value

log = logging.getLogger(__name__)


class ServiceState(enum.Enum):
    NEW = 'NEW'
    RUNNING = 'RUNNING'
    STOPPED = 'STOPPED'


class ScalingService(object):
    """
    Drives scaling of every registered index from a single background thread.

    A service runs at most once: ``NEW -> RUNNING -> STOPPED``.  To resume
    scaling after :meth:`stop`, create a new service.

    :param service_config: poll interval and notification settings
    :param dynamo_connection: used to describe and update tables
    :param cloudwatch_connection: used to read consumed capacity
    :param sns_connection: used to publish notifications
    :param registry: the indexes to scale, a new empty registry if not given
    """

    def __init__(
        self,
        service_config: Optional[ScalingServiceConfig] = None,
        dynamo_connection: Optional[DynamoConnection] = None,
        cloudwatch_connection: Optional[CloudWatchConnection] = None,
        sns_connection: Optional[SNSConnection] = None,
        registry: Optional[ScalingRegistry] = None,
    ) -> None:
        self.service_config = service_config or ScalingServiceConfig()
        self.dynamo_connection = dynamo_connection or DynamoConnection()
        self.cloudwatch_connection = cloudwatch_connection or CloudWatchConnection()
        self.registry = registry if registry is not None else ScalingRegistry()
        if sns_connection is None and self.service_config.notifications_enabled:
            sns_connection = SNSConnection()
        self.gateway = NotificationGateway(sns_connection, self.service_config.notification_arn)

        self._state = ServiceState.NEW
        self._thread: Optional[Thread] = None
        self._stop_event = Event()
        self._lock = Lock()

    def __repr__(self) -> str:
        return "ScalingService<{}, {} indexes>".format(self._state.value, len(self.registry))

    @classmethod
    def from_settings(cls) -> 'ScalingService':
        """
        Builds a service from the global settings, registering any ``indices`` they define
        """
        service = cls(ScalingServiceConfig())
        for data in get_settings_value('indices') or []:
            service.add_index(IndexScalingConfig.from_dict(data))
        return service

    @property
    def state(self) -> ServiceState:
        return self._state

    def add_index(self, config: IndexScalingConfig) -> None:
        """
        Adds or replaces the configuration of an index.  It is read on the next poll.
        """
        self.registry.add_index(config)

    def remove_index(self, index: DynamoIndex) -> Optional[IndexScalingConfig]:
        """
        Stops scaling an index and returns its configuration, or None if it was not registered
        """
        return self.registry.remove_index(index)

    def start(self) -> None:
        """
        Starts polling and adjusting provisioned throughput in a background thread
        """
        with self._lock:
            if self._state is not ServiceState.NEW:
                raise InvalidStateError("Cannot start a service that is {}".format(self._state.value))
            self._thread = Thread(target=self._run, name='dynascale-scaling', daemon=True)
            self._state = ServiceState.RUNNING
            self._thread.start()
        log.info("Scaling service started, checking every %ss", self.service_config.check_interval_seconds)

    def stop(self, timeout: Optional[float] = None) -> None:
        """
        Stops the service and waits up to ``timeout`` seconds for the current pass to finish.
        Once stopped, the service cannot be restarted.
        """
        with self._lock:
            if self._state is ServiceState.STOPPED:
                return
            self._state = ServiceState.STOPPED
            thread = self._thread
        self._stop_event.set()
        if thread is not None and thread is not current_thread():
            thread.join(timeout)
        log.info("Scaling service stopped")

    def is_running(self) -> bool:
        """
        Returns True between :meth:`start` and :meth:`stop`
        """
        return self._state is ServiceState.RUNNING

    def _run(self) -> None:
        while not self._stop_event.is_set():
            # One failure aborts the rest of the pass; everything is retried next interval
            try:
                self.run_once()
            except Exception as e:
                self.error(UNEXPECTED_EXCEPTION_SUBJECT, "{}: {}".format(type(e).__name__, e))
            self._stop_event.wait(self.service_config.check_interval_seconds)

    def run_once(self) -> int:
        """
        Checks every registered index once and returns how many were checked.
        Errors propagate and leave the remaining indexes unchecked.
        """
        checked = 0
        for config in self.registry.snapshot():
            if self._stop_event.is_set():
                break
            self.check_and_update_provisioning(config)
            checked += 1
        return checked

    def check_and_update_provisioning(self, config: IndexScalingConfig) -> None:
        """
        Checks the consumed and provisioned throughput of an index and updates
        the provisioning if necessary.

        :raises DynaScaleException: if an AWS request failed or the index could not be found
        """
        description = self.dynamo_connection.get_description(config.index)
        consumed_reads = self.cloudwatch_connection.get_consumed_reads(config.index)
        consumed_writes = self.cloudwatch_connection.get_consumed_writes(config.index)
        target_reads, target_writes = decision.compute_target_throughput(
            config, description, consumed_reads, consumed_writes)
        log.debug("%s consumed (R: %.2f, W: %.2f) provisioned (R: %s, W: %s) target (R: %s, W: %s)",
                  config.index, consumed_reads, consumed_writes, description.read_capacity,
                  description.write_capacity, target_reads, target_writes)
        if decision.needs_update(description, target_reads, target_writes):
            self.update_provisioned_throughput(config, description, target_reads, target_writes,
                                               consumed_reads, consumed_writes)

    def update_provisioned_throughput(
        self,
        config: IndexScalingConfig,
        description: IndexDescription,
        target_reads: int,
        target_writes: int,
        consumed_reads: float,
        consumed_writes: float,
    ) -> None:
        """
        Updates an index to the target throughput.

        Reaching the configured maximum sends a notification, but the update still goes
        through.  Nothing is sent to DynamoDB unless the index is ACTIVE, since an update
        is already in progress otherwise.
        """
        if self.gateway.enabled and (target_reads >= config.max_read or target_writes >= config.max_write):
            message = (
                "Scaling has reached maximum provisioning and cannot increase further. "
                "Index: {}, Consumed: (R: {:.2f}, W: {:.2f}), Target: (R: {}, W: {}), "
                "Config: (R: {}, W: {}).  You should either modify the config or manually "
                "override the value in AWS."
            ).format(config.index, consumed_reads, consumed_writes, target_reads, target_writes,
                     config.max_read, config.max_write)
            self.error(MAXIMUM_REACHED_SUBJECT, message)

        if not description.is_active:
            log.warning("Not updating %s while it is %s", config.index, description.status)
            return
        log.info("Updating %s provisioning from (R: %s, W: %s) to (R: %s, W: %s)",
                 config.index, description.read_capacity, description.write_capacity,
                 target_reads, target_writes)
        self.dynamo_connection.update_provisioning(config.index, target_reads, target_writes)

    def error(self, subject: str, message: str) -> None:
        """
        Logs an error and publishes it to the notification topic, if any
        """
        self.gateway.notify(subject, message)
