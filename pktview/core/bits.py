"""
Byte-order and bit-field primitives.

The u8/u16/u32/u64 readers accumulate bytes least-significant first:
read_u16(data, i) == data[i + 1] << 8 | data[i]. Network-order fields are
read through read_be16/read_be32, which reverse the fixed-width slice with
swap_bytes before accumulating.

All readers raise IndexError on a short buffer instead of reading past the
end. Views validate their length at construction, so this never triggers
from a public accessor.
"""

from __future__ import annotations

import struct

from pktview.errors import InvalidRange

_U16 = struct.Struct('<H')
_U32 = struct.Struct('<I')
_U64 = struct.Struct('<Q')

# Integer widths the extractor may select, smallest first.
_WIDTHS = (8, 16, 32, 64)


def _check(data, offset: int, width: int) -> None:
    if offset < 0 or offset + width > len(data):
        raise IndexError(
            f"read of {width} bytes at offset {offset} exceeds buffer of {len(data)}"
        )


def read_u8(data, offset: int) -> int:
    _check(data, offset, 1)
    return data[offset]


def read_u16(data, offset: int) -> int:
    _check(data, offset, 2)
    return _U16.unpack_from(data, offset)[0]


def read_u32(data, offset: int) -> int:
    _check(data, offset, 4)
    return _U32.unpack_from(data, offset)[0]


def read_u64(data, offset: int) -> int:
    _check(data, offset, 8)
    return _U64.unpack_from(data, offset)[0]


def swap_bytes(data) -> bytes:
    """Reverse a fixed-width value end to end (first byte with last, etc.)."""
    return bytes(data)[::-1]


def read_be16(data, offset: int) -> int:
    _check(data, offset, 2)
    return read_u16(swap_bytes(data[offset:offset + 2]), 0)


def read_be32(data, offset: int) -> int:
    _check(data, offset, 4)
    return read_u32(swap_bytes(data[offset:offset + 4]), 0)


_READERS = {8: read_u8, 16: read_u16, 32: read_u32, 64: read_u64}


class BitArray:
    """
    Bit-range extractor over a byte buffer.

    Bits are numbered least-significant first within the little-endian
    accumulation, so bit 0 is the low bit of data[0] and bit 8 is the low
    bit of data[1].
    """

    __slots__ = ('data',)

    def __init__(self, data):
        self.data = data

    def at(self, start: int, end: int) -> int:
        """Extract the half-open bit range [start, end) as an unsigned int."""
        length = end - start
        if start < 0 or length < 1:
            raise InvalidRange(f"Invalid range, must be 1-64 bits, got [{start}, {end})")

        shift = start % 8
        width = next((w for w in _WIDTHS if w >= shift + length), None)
        if width is None:
            raise InvalidRange(f"Invalid range, must be 1-64 bits, got {length}")

        value = _READERS[width](self.data, start // 8)
        return (value >> shift) & ((1 << length) - 1)

    def bit(self, index: int) -> int:
        return self.at(index, index + 1)

    def __getitem__(self, item):
        if isinstance(item, slice):
            if item.step not in (None, 1):
                raise InvalidRange("Bit ranges do not support a step")
            return self.at(item.start or 0, item.stop)
        return self.bit(item)
