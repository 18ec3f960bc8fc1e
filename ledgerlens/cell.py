"""
cell.py - Message bodies as bit strings

A Cell holds up to MAX_CELL_BITS bits, stored big-endian in bytes. Reading is
done through a Slice, which tracks how many bits remain. Only what ledgerlens
reads is modelled: unsigned integers from the front of the body.
"""

from __future__ import annotations
from dataclasses import dataclass

from .core import CellUnderflow


MAX_CELL_BITS = 1023


@dataclass(frozen=True, slots=True)
class Cell:
    """
    An immutable bit string.

    Attributes:
        data: Bits packed big-endian; bits past bit_length must be zero.
        bit_length: Number of meaningful bits in data.
    """
    data: bytes = b""
    bit_length: int = 0

    def __post_init__(self):
        if not 0 <= self.bit_length <= MAX_CELL_BITS:
            raise ValueError(f"Cell bit length out of range: {self.bit_length}")
        if len(self.data) != (self.bit_length + 7) // 8:
            raise ValueError(
                f"Cell data has {len(self.data)} bytes for {self.bit_length} bits"
            )

    @classmethod
    def from_uint(cls, value: int, bits: int) -> Cell:
        """Build a cell holding a single unsigned integer of the given width."""
        if value < 0 or value.bit_length() > bits:
            raise ValueError(f"{value} does not fit in {bits} unsigned bits")
        padding = (-bits) % 8
        return cls((value << padding).to_bytes((bits + padding) // 8, "big"), bits)

    @classmethod
    def from_bytes(cls, data: bytes) -> Cell:
        return cls(bytes(data), len(data) * 8)

    def begin_parse(self) -> Slice:
        return Slice(self)


class Slice:
    """Read cursor over a Cell."""

    def __init__(self, cell: Cell):
        self._cell = cell
        self._offset = 0

    @property
    def remaining_bits(self) -> int:
        return self._cell.bit_length - self._offset

    def preload_uint(self, bits: int) -> int:
        """Read an unsigned integer without advancing the cursor."""
        if bits < 0:
            raise ValueError(f"Bit count must be non-negative, got {bits}")
        if bits > self.remaining_bits:
            raise CellUnderflow(
                f"Cannot read {bits} bits, only {self.remaining_bits} remaining"
            )
        if bits == 0:
            return 0
        whole = int.from_bytes(self._cell.data, "big")
        total = len(self._cell.data) * 8
        shift = total - self._offset - bits
        return (whole >> shift) & ((1 << bits) - 1)

    def load_uint(self, bits: int) -> int:
        """Read an unsigned integer and advance the cursor."""
        value = self.preload_uint(bits)
        self._offset += bits
        return value

    def skip(self, bits: int) -> Slice:
        if bits > self.remaining_bits:
            raise CellUnderflow(
                f"Cannot skip {bits} bits, only {self.remaining_bits} remaining"
            )
        self._offset += bits
        return self

    def __repr__(self) -> str:
        return f"Slice(remaining_bits={self.remaining_bits})"
