"""
Request signals, based on blinker.

Receivers are called with the connection as sender and the keyword
arguments ``service_name``, ``operation_name``, ``table_name`` and ``req_uuid``.
"""
from blinker import Namespace

# The namespace for DynaScale signals.  If you are not DynaScale code, do
# not put signals in here.  Create your own namespace instead.
_signals = Namespace()

pre_aws_send = _signals.signal('pre_aws_send')
post_aws_send = _signals.signal('post_aws_send')
