"""
Process wide dynascale settings

Defaults live in ``default_settings_dict``.  Any of them, plus the ``indices``
to scale, can be overridden by a Python file whose module level names are the
setting keys.  The file is read once, at import, from ``$DYNASCALE_CONFIG``.
"""
import importlib.util
import logging
import os
from os import getenv

from typing import Any

log = logging.getLogger(__name__)

default_settings_dict = {
    'connect_timeout_seconds': 15,
    'read_timeout_seconds': 30,
    'region': 'us-east-1',
    'max_pool_connections': 10,
    'check_interval_seconds': 60,
    'notification_arn': '',
    'indices': None,
}

OVERRIDE_SETTINGS_PATH = getenv('DYNASCALE_CONFIG', '/etc/dynascale/global_default_settings.py')


def _exec_settings_file(path):
    # https://docs.python.org/3/library/importlib.html#importing-a-source-file-directly
    spec = importlib.util.spec_from_file_location('__dynascale_override_settings__', path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)  # type: ignore
    return module


override_settings = {}
if os.path.isfile(OVERRIDE_SETTINGS_PATH):
    override_settings = _exec_settings_file(OVERRIDE_SETTINGS_PATH)
    log.info('Scaling settings loaded from %s', OVERRIDE_SETTINGS_PATH)
else:
    log.info('No scaling settings at %s, using defaults', OVERRIDE_SETTINGS_PATH)


def get_settings_value(key: str) -> Any:
    """
    Returns the overridden value of a setting, else its default, else None
    """
    if hasattr(override_settings, key):
        return getattr(override_settings, key)
    return default_settings_dict.get(key)
