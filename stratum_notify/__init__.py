"""
Stratum v1 mining.notify codec.

Validates the positional params of a mining.notify notification, decodes
them into typed work-template fields and encodes typed fields back to the
wire form. Pure functions over JSON values: no sockets, no state.
"""

from .errors import InvalidNotify, NotifyFailure, StratumError
from .job import NotifyJob
from .notify import NOTIFY, NOTIFY_PARAMS, Notify, NotifyParams
from .version import __version__

__all__ = [
    "InvalidNotify",
    "NotifyFailure",
    "StratumError",
    "NotifyJob",
    "NOTIFY",
    "NOTIFY_PARAMS",
    "Notify",
    "NotifyParams",
    "__version__",
]
