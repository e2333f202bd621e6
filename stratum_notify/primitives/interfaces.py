from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from . import codecs


@runtime_checkable
class HexValue(Protocol):
    def hex(self) -> str: ...


@runtime_checkable
class IntValue(HexValue, Protocol):
    """4-byte integer with an 8-hex-digit wire form."""

    def __int__(self) -> int: ...


@runtime_checkable
class Digest(HexValue, Protocol):
    """Fixed 32-byte digest; ``reversed()`` flips byte order."""

    @property
    def buffer(self) -> bytes: ...

    def reversed(self) -> "Digest": ...


class DigestCodec(Protocol):
    def from_hex(self, hex_str: str) -> Digest: ...


class BytesCodec(Protocol):
    def from_hex(self, hex_str: str) -> HexValue: ...


class IntCodec(Protocol):
    def from_hex(self, hex_str: str) -> IntValue: ...


class DifficultyCodec(Protocol):
    def from_bits(self, bits: int) -> HexValue: ...


@dataclass(frozen=True)
class Codecs:
    """The collaborator codecs a notify codec is built on."""

    digest: DigestCodec
    bytes: BytesCodec
    int32: IntCodec
    uint32: IntCodec
    difficulty: DifficultyCodec


DEFAULT_CODECS = Codecs(
    digest=codecs.Digest32,
    bytes=codecs.Bytes,
    int32=codecs.Int32Little,
    uint32=codecs.UInt32Little,
    difficulty=codecs.Difficulty,
)

__all__ = [
    "HexValue",
    "IntValue",
    "Digest",
    "DigestCodec",
    "BytesCodec",
    "IntCodec",
    "DifficultyCodec",
    "Codecs",
    "DEFAULT_CODECS",
]
