from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional

JSON = Dict[str, Any]


class RpcErrorCodes(int, Enum):
    """JSON-RPC error codes used when a notify failure is reported upstream."""

    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603


class NotifyFailure(str, Enum):
    """Why a mining.notify payload was rejected."""

    ENVELOPE = "envelope"  # not {id: null, method: str, params: list}
    METHOD = "method"  # method is not mining.notify
    NOT_A_LIST = "not_a_list"
    WRONG_LENGTH = "wrong_length"  # params must hold exactly nine elements
    JOB_ID = "job_id"
    PREV_HASH = "prev_hash"
    GENERATION_TX1 = "generation_tx1"
    GENERATION_TX2 = "generation_tx2"
    MERKLE_BRANCH = "merkle_branch"  # field 4 is not a list
    MERKLE_DIGEST = "merkle_digest"  # one branch element is malformed
    VERSION = "version"
    NBITS = "nbits"
    TIME = "time"
    CLEAN = "clean"


class StratumError(Exception):
    """Base exception for protocol validation and builder helpers."""

    code: int = RpcErrorCodes.INTERNAL_ERROR

    def to_error_obj(self) -> JSON:
        return {
            "code": int(self.code),
            "message": self.__class__.__name__,
            "data": str(self),
        }


class InvalidRequest(StratumError):
    code = RpcErrorCodes.INVALID_REQUEST


class InvalidNotify(StratumError):
    """
    A mining.notify parameter array failed validation.

    Attributes
    ----------
    reason : Optional[NotifyFailure]
        The first check that failed, when known.
    """

    code = RpcErrorCodes.INVALID_PARAMS

    def __init__(self, reason: Optional[NotifyFailure] = None) -> None:
        self.reason = reason
        msg = "invalid notify"
        if reason is not None:
            msg += f" ({reason.value})"
        super().__init__(msg)

    def to_error_obj(self) -> JSON:
        err = super().to_error_obj()
        if self.reason is not None:
            err["reason"] = self.reason.value
        return err


__all__ = [
    "RpcErrorCodes",
    "NotifyFailure",
    "StratumError",
    "InvalidRequest",
    "InvalidNotify",
]
