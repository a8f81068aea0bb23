"""GHASH universal hash over GF(2^128) as used by GCM."""

from __future__ import annotations

from collections.abc import Iterable

BLOCK_SIZE = 16

_MASK = (1 << 128) - 1
_MSB = 1 << 127
# Reduction constant for x^128 + x^7 + x^2 + x + 1 in GCM's reflected bit order.
_R = 0xE1 << 120


def _split_blocks(data: bytes) -> Iterable[bytes]:
    for offset in range(0, len(data), BLOCK_SIZE):
        yield data[offset : offset + BLOCK_SIZE]


class GHash:
    """Incremental GHASH keyed with a 16-byte hash subkey."""

    __slots__ = ("_powers", "_state")

    def __init__(self, key: bytes) -> None:
        key = bytes(key)
        if len(key) != BLOCK_SIZE:
            raise ValueError(f"GHASH key must be {BLOCK_SIZE} bytes, got {len(key)}")
        powers = []
        value = int.from_bytes(key, "big")
        for _ in range(128):
            powers.append(value)
            value = (value >> 1) ^ _R if value & 1 else value >> 1
        self._powers: tuple[int, ...] = tuple(powers)
        self._state = 0

    def _multiply(self, x: int) -> int:
        product = 0
        for power in self._powers:
            if x & _MSB:
                product ^= power
            x = (x << 1) & _MASK
        return product

    def _absorb(self, block: bytes) -> None:
        if len(block) != BLOCK_SIZE:
            raise ValueError(f"GHASH blocks must be {BLOCK_SIZE} bytes, got {len(block)}")
        self._state = self._multiply(self._state ^ int.from_bytes(block, "big"))

    def update(self, blocks: Iterable[bytes] | bytes | bytearray | memoryview) -> None:
        """Absorb whole blocks: an iterable of 16-byte blocks or bytes of a multiple of 16."""
        if isinstance(blocks, (bytes, bytearray, memoryview)):
            data = bytes(blocks)
            if len(data) % BLOCK_SIZE:
                raise ValueError("data length must be a multiple of the block size")
            blocks = _split_blocks(data)
        for block in blocks:
            self._absorb(bytes(block))

    def update_padded(self, data: bytes) -> None:
        """Absorb data, zero-padding the final partial block."""
        for chunk in _split_blocks(bytes(data)):
            self._absorb(chunk.ljust(BLOCK_SIZE, b"\x00"))

    def finalize(self) -> bytes:
        """Return the current hash value."""
        return self._state.to_bytes(BLOCK_SIZE, "big")

    def copy(self) -> GHash:
        """Return an independent copy sharing the same key."""
        clone = GHash.__new__(GHash)
        clone._powers = self._powers
        clone._state = self._state
        return clone