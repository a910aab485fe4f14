"""
Lowest level connection
"""
import logging
import uuid
from threading import local
from typing import Any, Dict, Optional

import botocore.client
import botocore.session
from botocore.client import ClientError
from botocore.exceptions import BotoCoreError
from botocore.session import get_session

from dynascale.settings import get_settings_value
from dynascale.signals import pre_aws_send, post_aws_send
from dynascale.constants import TABLE_NAME

BOTOCORE_EXCEPTIONS = (BotoCoreError, ClientError)

log = logging.getLogger(__name__)
log.addHandler(logging.NullHandler())


class Connection(object):
    """
    A higher level abstraction over a botocore client for one AWS service.

    Subclasses set ``service_name`` and build their operations on :meth:`dispatch`.
    """

    service_name: str

    def __init__(self,
                 region: Optional[str] = None,
                 host: Optional[str] = None,
                 read_timeout_seconds: Optional[float] = None,
                 connect_timeout_seconds: Optional[float] = None,
                 max_pool_connections: Optional[int] = None,
                 aws_access_key_id: Optional[str] = None,
                 aws_secret_access_key: Optional[str] = None,
                 aws_session_token: Optional[str] = None):
        self.host = host
        self._local = local()
        self._client = None
        if region:
            self.region = region
        else:
            self.region = get_settings_value('region')

        if connect_timeout_seconds is not None:
            self._connect_timeout_seconds = connect_timeout_seconds
        else:
            self._connect_timeout_seconds = get_settings_value('connect_timeout_seconds')

        if read_timeout_seconds is not None:
            self._read_timeout_seconds = read_timeout_seconds
        else:
            self._read_timeout_seconds = get_settings_value('read_timeout_seconds')

        if max_pool_connections is not None:
            self._max_pool_connections = max_pool_connections
        else:
            self._max_pool_connections = get_settings_value('max_pool_connections')

        self._credentials = None
        if aws_access_key_id and aws_secret_access_key:
            self._credentials = (aws_access_key_id, aws_secret_access_key, aws_session_token)

    def __repr__(self) -> str:
        return "{}<{}>".format(self.__class__.__name__, self.client.meta.endpoint_url)

    def dispatch(self, operation_name: str, operation_kwargs: Dict) -> Dict:
        """
        Dispatches `operation_name` with arguments `operation_kwargs`
        """
        log.debug("Calling %s.%s with arguments %s", self.service_name, operation_name, operation_kwargs)

        table_name = operation_kwargs.get(TABLE_NAME)
        req_uuid = uuid.uuid4()

        self.send_pre_aws_callback(operation_name, req_uuid, table_name)
        data = self._make_api_call(operation_name, operation_kwargs)
        self.send_post_aws_callback(operation_name, req_uuid, table_name)
        return data

    def send_post_aws_callback(self, operation_name, req_uuid, table_name):
        try:
            post_aws_send.send(self, service_name=self.service_name, operation_name=operation_name,
                               table_name=table_name, req_uuid=req_uuid)
        except Exception:
            log.exception("post_aws callback threw an exception.")

    def send_pre_aws_callback(self, operation_name, req_uuid, table_name):
        try:
            pre_aws_send.send(self, service_name=self.service_name, operation_name=operation_name,
                              table_name=table_name, req_uuid=req_uuid)
        except Exception:
            log.exception("pre_aws callback threw an exception.")

    def _make_api_call(self, operation_name: str, operation_kwargs: Dict) -> Dict:
        """
        The single place requests leave the process, and the place to patch them for unit testing.
        botocore parses the response and raises ClientError for error responses.
        """
        return self.client._make_api_call(operation_name, operation_kwargs)

    @property
    def session(self) -> botocore.session.Session:
        """
        Returns a valid botocore session
        """
        # botocore client creation is not thread safe as of v1.2.5+ (see PynamoDB issue #153)
        if getattr(self._local, 'session', None) is None:
            self._local.session = get_session()
            if self._credentials is not None:
                self._local.session.set_credentials(*self._credentials)
        return self._local.session

    @property
    def client(self) -> Any:
        """
        Returns a botocore client for ``service_name``
        """
        # botocore has a known issue where it will cache empty credentials
        # https://github.com/boto/botocore/blob/4d55c9b4142/botocore/credentials.py#L1016-L1021
        # if the client does not have credentials, we create a new client
        # otherwise the client is permanently poisoned in the case of metadata service flakiness when using IAM roles
        if not self._client or (self._client._request_signer and not self._client._request_signer._credentials):
            config = botocore.client.Config(
                connect_timeout=self._connect_timeout_seconds,
                read_timeout=self._read_timeout_seconds,
                max_pool_connections=self._max_pool_connections)
            self._client = self.session.create_client(self.service_name, self.region, endpoint_url=self.host,
                                                      config=config)
        return self._client
