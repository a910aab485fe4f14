"""
Thread safe store of the indexes being scaled
"""
from threading import Lock
from typing import Dict, List, Optional

from dynascale.config import IndexScalingConfig
from dynascale.index import DynamoIndex


class ScalingRegistry(object):
    """
    Maps each index to its scaling configuration.

    Callers may add and remove indexes while the scaling service iterates a
    :meth:`snapshot`; changes are picked up no later than the next pass.
    """

    def __init__(self) -> None:
        self._configs: Dict[DynamoIndex, IndexScalingConfig] = {}
        self._lock = Lock()

    def __repr__(self) -> str:
        return "ScalingRegistry<{}>".format(len(self))

    def __len__(self) -> int:
        with self._lock:
            return len(self._configs)

    def __contains__(self, index: object) -> bool:
        with self._lock:
            return index in self._configs

    def add_index(self, config: IndexScalingConfig) -> None:
        """
        Adds a configuration, replacing any existing one for the same index
        """
        with self._lock:
            self._configs[config.index] = config

    def remove_index(self, index: DynamoIndex) -> Optional[IndexScalingConfig]:
        """
        Removes an index and returns its configuration, or None if it was not registered
        """
        with self._lock:
            return self._configs.pop(index, None)

    def get(self, index: DynamoIndex) -> Optional[IndexScalingConfig]:
        with self._lock:
            return self._configs.get(index)

    def snapshot(self) -> List[IndexScalingConfig]:
        with self._lock:
            return list(self._configs.values())
