"""
Binary primitives used by the notify codec.

Exports
-------
Digest32, Bytes, Int32Little, UInt32Little, Difficulty
    In-tree value types for the wire fields.
Codecs, DEFAULT_CODECS
    The bundle the notify codec depends on.
"""

from .codecs import Bytes, Difficulty, Digest32, Int32Little, UInt32Little
from .interfaces import DEFAULT_CODECS, Codecs

__all__ = [
    "Bytes",
    "Difficulty",
    "Digest32",
    "Int32Little",
    "UInt32Little",
    "Codecs",
    "DEFAULT_CODECS",
]
