from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Tuple

from .primitives import Bytes, Difficulty, Digest32, Int32Little, UInt32Little


@dataclass(frozen=True)
class NotifyJob:
    """
    Immutable, typed view of one mining.notify work template.

    Attributes:
        job_id: Opaque identifier chosen by the server.
        prev_hash: Previous block hash in native (header) byte order.
        generation_tx1: Coinbase bytes before the extranonces.
        generation_tx2: Coinbase bytes after the extranonces.
        merkle_branch: Sibling hashes from the coinbase up to the root.
        version: Block version.
        nbits: Compact network target.
        time: Block timestamp (ntime).
        clean: Whether earlier jobs must be dropped.
    """

    job_id: str
    prev_hash: Digest32
    generation_tx1: Bytes
    generation_tx2: Bytes
    merkle_branch: Tuple[Digest32, ...]
    version: Int32Little
    nbits: Difficulty
    time: UInt32Little
    clean: bool

    def __post_init__(self) -> None:
        object.__setattr__(self, "merkle_branch", tuple(self.merkle_branch))

    @property
    def target(self) -> int:
        """
        Network target expanded from nbits.
        """
        return self.nbits.target

    def coinbase(self, extranonce1: Bytes, extranonce2: Bytes) -> Bytes:
        return self.generation_tx1 + extranonce1 + extranonce2 + self.generation_tx2

    def to_params(self) -> List[Any]:
        from .notify import NOTIFY_PARAMS

        return NOTIFY_PARAMS.encode(self)
