"""
Binary field codecs for Stratum v1 work templates
=================================================

Small immutable value types for the binary fields carried by mining.notify:

  Digest32      : 32-byte hash (prevhash, merkle branch entries)
  Bytes         : arbitrary-length buffer (coinbase halves)
  Int32Little   : signed 4-byte integer serialised little-endian (version)
  UInt32Little  : unsigned 4-byte integer serialised little-endian (ntime)
  Difficulty    : compact "nBits" target encoding

Hex conventions
---------------
Digest32 and Bytes hex-encode their buffer as-is. The 4-byte integers use the
Stratum number form: eight hex digits giving the value most-significant digit
first (``"1d00ffff"`` is 0x1d00ffff), while ``buffer`` holds the little-endian
header serialisation.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass

DIGEST_SIZE = 32
UINT32_MAX = 0xFFFFFFFF

# Bitcoin difficulty-1 target (nBits 0x1d00ffff).
DIFF1_BITS = 0x1D00FFFF


def _unhex(hex_str: str) -> bytes:
    if not isinstance(hex_str, str):
        raise ValueError("hex input must be a string")
    try:
        return bytes.fromhex(hex_str)
    except ValueError:
        raise ValueError(f"invalid hex: {hex_str!r}")


@dataclass(frozen=True)
class Digest32:
    buffer: bytes

    def __post_init__(self) -> None:
        if len(self.buffer) != DIGEST_SIZE:
            raise ValueError(f"digest must be {DIGEST_SIZE} bytes, got {len(self.buffer)}")
        object.__setattr__(self, "buffer", bytes(self.buffer))

    @classmethod
    def from_hex(cls, hex_str: str) -> "Digest32":
        return cls(_unhex(hex_str))

    def hex(self) -> str:
        return self.buffer.hex()

    def reversed(self) -> "Digest32":
        return type(self)(self.buffer[::-1])

    def __int__(self) -> int:
        # little-endian, as hashes are compared against targets
        return int.from_bytes(self.buffer, "little")


@dataclass(frozen=True)
class Bytes:
    buffer: bytes = b""

    def __post_init__(self) -> None:
        object.__setattr__(self, "buffer", bytes(self.buffer))

    @classmethod
    def from_hex(cls, hex_str: str) -> "Bytes":
        return cls(_unhex(hex_str))

    def hex(self) -> str:
        return self.buffer.hex()

    def __len__(self) -> int:
        return len(self.buffer)

    def __add__(self, other: "Bytes") -> "Bytes":
        return Bytes(self.buffer + other.buffer)


def _word_from_hex(hex_str: str) -> int:
    raw = _unhex(hex_str)
    if len(raw) != 4:
        raise ValueError(f"expected 8 hex digits, got {hex_str!r}")
    return int.from_bytes(raw, "big")


@dataclass(frozen=True)
class UInt32Little:
    value: int

    def __post_init__(self) -> None:
        if not 0 <= self.value <= UINT32_MAX:
            raise ValueError(f"uint32 out of range: {self.value}")

    @classmethod
    def from_hex(cls, hex_str: str) -> "UInt32Little":
        return cls(_word_from_hex(hex_str))

    @classmethod
    def from_buffer(cls, buf: bytes) -> "UInt32Little":
        return cls(struct.unpack("<I", buf)[0])

    @property
    def buffer(self) -> bytes:
        return struct.pack("<I", self.value)

    def hex(self) -> str:
        return f"{self.value:08x}"

    def __int__(self) -> int:
        return self.value


@dataclass(frozen=True)
class Int32Little:
    value: int

    def __post_init__(self) -> None:
        if not -0x80000000 <= self.value <= 0x7FFFFFFF:
            raise ValueError(f"int32 out of range: {self.value}")

    @classmethod
    def from_hex(cls, hex_str: str) -> "Int32Little":
        word = _word_from_hex(hex_str)
        if word & 0x80000000:
            word -= 1 << 32
        return cls(word)

    @classmethod
    def from_buffer(cls, buf: bytes) -> "Int32Little":
        return cls(struct.unpack("<i", buf)[0])

    @property
    def buffer(self) -> bytes:
        return struct.pack("<i", self.value)

    def hex(self) -> str:
        return f"{self.value & UINT32_MAX:08x}"

    def __int__(self) -> int:
        return self.value


@dataclass(frozen=True)
class Difficulty:
    """
    Compact target ("nBits"): one exponent byte followed by a 3-byte mantissa.

        target = mantissa * 256 ** (exponent - 3)

    Bit 0x00800000 is the sign bit of the mantissa; negative targets expand
    to zero.
    """

    bits: int

    def __post_init__(self) -> None:
        if not 0 <= self.bits <= UINT32_MAX:
            raise ValueError(f"compact bits out of range: {self.bits}")

    @classmethod
    def from_bits(cls, bits: int) -> "Difficulty":
        return cls(int(bits))

    @classmethod
    def from_target(cls, target: int) -> "Difficulty":
        if target < 0:
            raise ValueError("target must be non-negative")
        size = (target.bit_length() + 7) // 8
        if size <= 3:
            mantissa = target << (8 * (3 - size))
        else:
            mantissa = target >> (8 * (size - 3))
        # keep the mantissa positive
        if mantissa & 0x00800000:
            mantissa >>= 8
            size += 1
        if size > 0xFF:
            raise ValueError("target too large for compact encoding")
        return cls((size << 24) | mantissa)

    @property
    def exponent(self) -> int:
        return self.bits >> 24

    @property
    def mantissa(self) -> int:
        return self.bits & 0x007FFFFF

    @property
    def negative(self) -> bool:
        return bool(self.bits & 0x00800000) and self.mantissa != 0

    @property
    def target(self) -> int:
        if self.negative:
            return 0
        if self.exponent <= 3:
            return self.mantissa >> (8 * (3 - self.exponent))
        return self.mantissa << (8 * (self.exponent - 3))

    @property
    def difficulty(self) -> float:
        t = self.target
        if t == 0:
            return float("inf")
        return Difficulty(DIFF1_BITS).target / t

    def hex(self) -> str:
        return f"{self.bits:08x}"

    def __int__(self) -> int:
        return self.bits


__all__ = [
    "DIGEST_SIZE",
    "DIFF1_BITS",
    "Digest32",
    "Bytes",
    "UInt32Little",
    "Int32Little",
    "Difficulty",
]
