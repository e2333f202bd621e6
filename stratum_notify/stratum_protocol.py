"""
Stratum v1 Envelope (JSON-RPC over TCP)
=======================================

Purpose
-------
Generic message shapes shared by every Stratum v1 method, and the helpers
that turn one JSON value into its wire text and back. Method-specific payload
codecs (see notify.py) build on top of these.

Envelope
--------
Requests:
  {"id": 1, "method": "mining.subscribe", "params": [...]}
Notifications (server -> client, no reply expected):
  {"id": null, "method": "mining.notify", "params": [...]}

A notification is recognised by its null id; params is always a positional
array in v1.

Serialisation
-------------
  - dumps(obj) -> bytes   compact UTF-8 JSON, stable key order
  - loads(data) -> Any    raises InvalidRequest on undecodable input

Line framing and sockets live with the transport, not here.
"""

from __future__ import annotations

import json
import logging
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Union

from .errors import InvalidRequest

log = logging.getLogger(__name__)

JSON = Dict[str, Any]
MessageID = Union[int, str, None]


# ---------------------- Methods ----------------------


class Method(str, Enum):
    SUBSCRIBE = "mining.subscribe"
    AUTHORIZE = "mining.authorize"
    SET_DIFFICULTY = "mining.set_difficulty"
    NOTIFY = "mining.notify"
    SUBMIT = "mining.submit"
    EXTRANONCE_SUBSCRIBE = "mining.extranonce.subscribe"


def valid_method(name: Any) -> bool:
    return isinstance(name, str) and len(name) > 0


def valid_message_id(value: Any) -> bool:
    # bool is an int subclass but never a message id
    if isinstance(value, bool):
        return False
    return value is None or isinstance(value, (int, str))


# ---------------------- Notifications ----------------------


def read_notification(value: Any) -> Optional[JSON]:
    """
    Return ``value`` if it is shaped like a notification, else None.

    The check is structural only: a mapping with a null ``id``, a method
    name and a positional ``params`` array. It never raises.
    """
    if not isinstance(value, Mapping):
        return None
    if "id" not in value or value["id"] is not None:
        return None
    if not valid_method(value.get("method")):
        return None
    if not isinstance(value.get("params"), list):
        return None
    return dict(value)


def make_notification(method: Union[str, Method], params: List[Any]) -> JSON:
    if isinstance(method, Method):
        method = method.value
    if not valid_method(method):
        raise InvalidRequest("method must be non-empty string")
    return {"id": None, "method": method, "params": params}


# ---------------------- Serialisation ----------------------


def dumps(obj: Any) -> bytes:
    """
    Canonical JSON dump suitable for wire use (UTF-8, no spaces, stable key order).
    """
    return json.dumps(obj, separators=(",", ":"), sort_keys=True).encode("utf-8")


def loads(data: Union[bytes, bytearray, str]) -> Any:
    try:
        if isinstance(data, (bytes, bytearray)):
            data = data.decode("utf-8", errors="strict")
        return json.loads(data)
    except (UnicodeDecodeError, ValueError) as e:
        log.debug(f"undecodable message: {e}")
        raise InvalidRequest(f"undecodable JSON: {e}") from e


__all__ = [
    "JSON",
    "MessageID",
    "Method",
    "valid_method",
    "valid_message_id",
    "read_notification",
    "make_notification",
    "dumps",
    "loads",
]
