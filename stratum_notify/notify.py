"""
mining.notify codec
===================

Positional params (Stratum v1):

  [0] job_id          str, opaque
  [1] prevhash        64 hex, byte order reversed w.r.t. the header digest
  [2] coinb1          hex
  [3] coinb2          hex
  [4] merkle_branch   list of 64-hex digests, may be empty
  [5] version         8 hex, int32
  [6] nbits           8 hex, compact target
  [7] ntime           8 hex, uint32
  [8] clean_jobs      bool

NotifyParams validates and converts the array; Notify binds it to the
{"id": null, "method": "mining.notify", "params": [...]} envelope.

Every decoder re-validates the whole array and raises InvalidNotify on any
failure. The probes (``valid``, ``check``, ``Notify.read``) never raise.
"""

from __future__ import annotations

import logging
import re
from typing import Any, List, Optional, Sequence

from .errors import InvalidNotify, NotifyFailure
from .job import NotifyJob
from .primitives.interfaces import (DEFAULT_CODECS, Codecs, Digest, HexValue,
                                    IntValue)
from .session_id import valid_session_id
from .stratum_protocol import (JSON, Method, make_notification,
                               read_notification)

log = logging.getLogger(__name__)

NOTIFY_METHOD = Method.NOTIFY.value
NOTIFY_PARAMS_LENGTH = 9
DIGEST_HEX_LENGTH = 64

# Whole string of lowercase pairs or whole string of uppercase pairs; mixed
# case is rejected.
_HEX_RE = re.compile(r"(?:[0-9a-f]{2})*|(?:[0-9A-F]{2})*")


def is_hex(value: Any) -> bool:
    return isinstance(value, str) and _HEX_RE.fullmatch(value) is not None


def is_digest_hex(value: Any) -> bool:
    return is_hex(value) and len(value) == DIGEST_HEX_LENGTH


class NotifyParams:
    """Validator, decoders and encoder for the nine positional params."""

    def __init__(self, codecs: Codecs = DEFAULT_CODECS) -> None:
        self.codecs = codecs

    # ------------- validation -------------

    def check(self, params: Any) -> Optional[NotifyFailure]:
        """
        Return the first failed check, or None when ``params`` is valid.
        """
        if not isinstance(params, list):
            return NotifyFailure.NOT_A_LIST
        if len(params) != NOTIFY_PARAMS_LENGTH:
            return NotifyFailure.WRONG_LENGTH
        if not isinstance(params[0], str):
            return NotifyFailure.JOB_ID
        if not is_digest_hex(params[1]):
            return NotifyFailure.PREV_HASH
        if not is_hex(params[2]):
            return NotifyFailure.GENERATION_TX1
        if not is_hex(params[3]):
            return NotifyFailure.GENERATION_TX2
        if not isinstance(params[4], list):
            return NotifyFailure.MERKLE_BRANCH
        for digest in params[4]:
            if not is_digest_hex(digest):
                return NotifyFailure.MERKLE_DIGEST
        if not valid_session_id(params[5]):
            return NotifyFailure.VERSION
        if not valid_session_id(params[6]):
            return NotifyFailure.NBITS
        if not valid_session_id(params[7]):
            return NotifyFailure.TIME
        if not isinstance(params[8], bool):
            return NotifyFailure.CLEAN
        return None

    def valid(self, params: Any) -> bool:
        reason = self.check(params)
        if reason is not None:
            log.debug(f"invalid notify params: {reason.value}")
        return reason is None

    def _checked(self, params: Any) -> Sequence[Any]:
        reason = self.check(params)
        if reason is not None:
            raise InvalidNotify(reason)
        return params

    # ------------- decoders -------------

    def job_id(self, params: Any) -> str:
        return self._checked(params)[0]

    def prev_hash(self, params: Any) -> Digest:
        p = self._checked(params)
        return self.codecs.digest.from_hex(p[1]).reversed()

    def generation_tx1(self, params: Any) -> HexValue:
        return self.codecs.bytes.from_hex(self._checked(params)[2])

    def generation_tx2(self, params: Any) -> HexValue:
        return self.codecs.bytes.from_hex(self._checked(params)[3])

    def merkle_branch(self, params: Any) -> List[Digest]:
        p = self._checked(params)
        return [self.codecs.digest.from_hex(d) for d in p[4]]

    def version(self, params: Any) -> IntValue:
        return self.codecs.int32.from_hex(self._checked(params)[5])

    def nbits(self, params: Any) -> HexValue:
        p = self._checked(params)
        bits = self.codecs.uint32.from_hex(p[6])
        return self.codecs.difficulty.from_bits(int(bits))

    def time(self, params: Any) -> IntValue:
        return self.codecs.uint32.from_hex(self._checked(params)[7])

    def clean(self, params: Any) -> bool:
        return self._checked(params)[8]

    def decode(self, params: Any) -> NotifyJob:
        """Decode every field at once; raises InvalidNotify like the single-field decoders."""
        self._checked(params)
        return NotifyJob(
            job_id=self.job_id(params),
            prev_hash=self.prev_hash(params),
            generation_tx1=self.generation_tx1(params),
            generation_tx2=self.generation_tx2(params),
            merkle_branch=tuple(self.merkle_branch(params)),
            version=self.version(params),
            nbits=self.nbits(params),
            time=self.time(params),
            clean=self.clean(params),
        )

    # ------------- encoder -------------

    def make(
        self,
        job_id: str,
        prev_hash: Digest,
        gtx1: HexValue,
        gtx2: HexValue,
        branch: Sequence[Digest],
        version: IntValue,
        bits: HexValue,
        time: IntValue,
        clean: bool,
    ) -> List[Any]:
        return [
            job_id,
            prev_hash.reversed().hex(),
            gtx1.hex(),
            gtx2.hex(),
            [d.hex() for d in branch],
            version.hex(),
            bits.hex(),
            time.hex(),
            clean,
        ]

    def encode(self, job: NotifyJob) -> List[Any]:
        return self.make(
            job.job_id,
            job.prev_hash,
            job.generation_tx1,
            job.generation_tx2,
            job.merkle_branch,
            job.version,
            job.nbits,
            job.time,
            job.clean,
        )


# Expected JSON type of each positional param, checked before any lexical rule.
_PARAM_TYPES = (str, str, str, str, list, str, str, str, bool)


class Notify:
    """The mining.notify envelope: {"id": null, "method": ..., "params": [...]}."""

    def __init__(self, params_codec: Optional[NotifyParams] = None) -> None:
        self.params = params_codec or NotifyParams()

    def check(self, message: Any) -> Optional[NotifyFailure]:
        n = read_notification(message)
        if n is None:
            return NotifyFailure.ENVELOPE
        if n["method"] != NOTIFY_METHOD:
            return NotifyFailure.METHOD
        return self.params.check(n["params"])

    def valid(self, message: Any) -> bool:
        return self.check(message) is None

    def read(self, value: Any) -> Optional[JSON]:
        """
        Permissive parse of untrusted input. Returns the message or None.
        """
        n = read_notification(value)
        if n is None or n["method"] != NOTIFY_METHOD:
            return None
        params = n["params"]
        if len(params) != NOTIFY_PARAMS_LENGTH:
            return None
        for x, expected in zip(params, _PARAM_TYPES):
            if not isinstance(x, expected):
                return None
        for x in params[4]:
            if not isinstance(x, str):
                return None
        if not self.params.valid(params):
            return None
        return n

    def decode(self, message: Any) -> NotifyJob:
        reason = self.check(message)
        if reason is not None:
            raise InvalidNotify(reason)
        return self.params.decode(message["params"])

    def make(
        self,
        job_id: str,
        prev_hash: Digest,
        gtx1: HexValue,
        gtx2: HexValue,
        branch: Sequence[Digest],
        version: IntValue,
        bits: HexValue,
        time: IntValue,
        clean: bool,
    ) -> JSON:
        return make_notification(
            Method.NOTIFY,
            self.params.make(
                job_id, prev_hash, gtx1, gtx2, branch, version, bits, time, clean
            ),
        )

    def from_job(self, job: NotifyJob) -> JSON:
        return make_notification(Method.NOTIFY, self.params.encode(job))


NOTIFY_PARAMS = NotifyParams()
NOTIFY = Notify(NOTIFY_PARAMS)

__all__ = [
    "NOTIFY_METHOD",
    "NOTIFY_PARAMS_LENGTH",
    "DIGEST_HEX_LENGTH",
    "is_hex",
    "is_digest_hex",
    "NotifyParams",
    "Notify",
    "NOTIFY_PARAMS",
    "NOTIFY",
]
