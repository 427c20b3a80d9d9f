"""Incremental SHAKE hashing with single and four-way contexts.

A security parameter of 128 selects SHAKE128; any other value selects SHAKE256.
"""

from __future__ import annotations

import hashlib
from typing import Sequence, Tuple

__all__ = ["HashContext", "HashContextX4"]

_LANES = 4


def _check_byte(value: int) -> int:
    if not 0 <= value <= 0xFF:
        raise ValueError(f"prefix must fit in one byte, got {value}")
    return value


def _uint16_le(value: int) -> bytes:
    if not 0 <= value <= 0xFFFF:
        raise ValueError(f"value must fit in 16 bits, got {value}")
    return value.to_bytes(2, "little")


class HashContext:
    """A SHAKE instance that absorbs data, is finalized once, then squeezes output."""

    def __init__(self, security_param: int) -> None:
        self.security_param = security_param
        self._hash = hashlib.shake_128() if security_param == 128 else hashlib.shake_256()
        self._finalized = False
        self._output = b""
        self._position = 0

    @classmethod
    def with_prefix(cls, security_param: int, prefix: int) -> "HashContext":
        """Create a context that has already absorbed a one-byte domain prefix."""
        ctx = cls(security_param)
        ctx.update(bytes([_check_byte(prefix)]))
        return ctx

    @property
    def is_shake256(self) -> bool:
        return self.security_param != 128

    def update(self, data: bytes) -> None:
        """Absorb data."""
        if self._finalized:
            raise RuntimeError("cannot absorb data after finalize()")
        self._hash.update(bytes(data))

    def update_uint16_le(self, value: int) -> None:
        """Absorb a 16-bit unsigned integer in little-endian byte order."""
        self.update(_uint16_le(value))

    def finalize(self) -> None:
        """End the absorbing phase; output may be squeezed afterwards."""
        if self._finalized:
            raise RuntimeError("context is already finalized")
        self._finalized = True

    def squeeze(self, length: int) -> bytes:
        """Return the next ``length`` bytes of output."""
        if not self._finalized:
            raise RuntimeError("finalize() must be called before squeeze()")
        if length < 0:
            raise ValueError("length must not be negative")
        end = self._position + length
        if end > len(self._output):
            self._output = self._hash.digest(max(end, 2 * len(self._output)))
        chunk = self._output[self._position:end]
        self._position = end
        return chunk


class HashContextX4:
    """Four independent SHAKE instances driven together."""

    def __init__(self, security_param: int) -> None:
        self.security_param = security_param
        self._instances = [HashContext(security_param) for _ in range(_LANES)]

    @classmethod
    def with_prefix(cls, security_param: int, prefix: int) -> "HashContextX4":
        """Create four contexts that each absorbed the same one-byte prefix."""
        ctx = cls(security_param)
        ctx.update_all(bytes([_check_byte(prefix)]))
        return ctx

    def update(self, data0: bytes, data1: bytes, data2: bytes, data3: bytes) -> None:
        """Absorb one input into each of the four instances."""
        inputs = (data0, data1, data2, data3)
        if len({len(d) for d in inputs}) != 1:
            raise ValueError("all four inputs must have the same length")
        for instance, data in zip(self._instances, inputs):
            instance.update(data)

    def update_all(self, data: bytes) -> None:
        """Absorb the same input into all four instances."""
        for instance in self._instances:
            instance.update(data)

    def update_uint16_le(self, value: int) -> None:
        """Absorb the same little-endian 16-bit value into all four instances."""
        self.update_all(_uint16_le(value))

    def update_uint16s_le(self, values: Sequence[int]) -> None:
        """Absorb one little-endian 16-bit value into each instance."""
        if len(values) != _LANES:
            raise ValueError(f"expected {_LANES} values, got {len(values)}")
        self.update(*(_uint16_le(v) for v in values))

    def finalize(self) -> None:
        """Finalize all four instances."""
        for instance in self._instances:
            instance.finalize()

    def squeeze(self, length: int) -> Tuple[bytes, bytes, bytes, bytes]:
        """Return the next ``length`` bytes from each instance."""
        a, b, c, d = (instance.squeeze(length) for instance in self._instances)
        return a, b, c, d