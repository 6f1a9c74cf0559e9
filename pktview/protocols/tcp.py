"""
TCP segment view (RFC 793) and lazy option decoding.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Iterator

from pktview.core.bits import BitArray, read_be16, read_be32, read_u8
from pktview.errors import HeaderTooLarge, TooShort

MIN_HEADER_SIZE = 20


@dataclass(frozen=True)
class TcpOption:
    """Base class for decoded TCP options."""
    kind: ClassVar[int] = -1


@dataclass(frozen=True)
class NoOperation(TcpOption):
    kind: ClassVar[int] = 1


@dataclass(frozen=True)
class MaximumSegmentSize(TcpOption):
    kind: ClassVar[int] = 2
    size: int = 0


@dataclass(frozen=True)
class WindowScale(TcpOption):
    kind: ClassVar[int] = 3
    scale: int = 0


@dataclass(frozen=True)
class SackPermitted(TcpOption):
    kind: ClassVar[int] = 4


@dataclass(frozen=True)
class Sack(TcpOption):
    """Selective acknowledgment; only the first block is decoded."""
    kind: ClassVar[int] = 5
    begin: int = 0
    end: int = 0


@dataclass(frozen=True)
class Sack2(TcpOption):
    """Reserved for two-block SACK; never produced."""
    kind: ClassVar[int] = 5


@dataclass(frozen=True)
class Sack3(TcpOption):
    """Reserved for three-block SACK; never produced."""
    kind: ClassVar[int] = 5


@dataclass(frozen=True)
class Sack4(TcpOption):
    """Reserved for four-block SACK; never produced."""
    kind: ClassVar[int] = 5


@dataclass(frozen=True)
class Timestamp(TcpOption):
    kind: ClassVar[int] = 8
    timestamp: int = 0
    echo: int = 0


OPTION_END = 0
OPTION_NOP = 1

# Total on-wire size (kind + length + value) of each fixed-size option.
_OPTION_SIZES = {
    MaximumSegmentSize.kind: 4,
    WindowScale.kind: 3,
    SackPermitted.kind: 2,
    Sack.kind: 10,
    Timestamp.kind: 10,
}


class OptionIter:
    """
    Forward-only cursor over TCP option bytes.

    Stops at End-Of-Options, at an unsupported kind, or when an option is
    cut short; truncation is not reported.
    """

    __slots__ = ('data', 'index')

    def __init__(self, data, index: int = 0):
        self.data = data
        self.index = index

    def __iter__(self) -> OptionIter:
        return self

    def __next__(self) -> TcpOption:
        option = self._decode()
        if option is None:
            # Exhausted for good, even if called again.
            self.index = len(self.data)
            raise StopIteration
        return option

    def _decode(self) -> TcpOption | None:
        data = self.data
        start = self.index
        if start >= len(data):
            return None

        kind = data[start]
        if kind == OPTION_END:
            return None
        if kind == OPTION_NOP:
            self.index = start + 1
            return NoOperation()

        size = _OPTION_SIZES.get(kind)
        if size is None:
            return None
        if start + 2 > len(data):
            return None
        length = data[start + 1]
        if length < size or start + length > len(data):
            return None

        value = start + 2
        if kind == MaximumSegmentSize.kind:
            option = MaximumSegmentSize(size=read_be16(data, value))
        elif kind == WindowScale.kind:
            option = WindowScale(scale=read_u8(data, value))
        elif kind == SackPermitted.kind:
            option = SackPermitted()
        elif kind == Sack.kind:
            option = Sack(begin=read_be32(data, value), end=read_be32(data, value + 4))
        else:
            option = Timestamp(timestamp=read_be32(data, value), echo=read_be32(data, value + 4))

        self.index = start + length
        return option


class Tcp:
    """Zero-copy view over a TCP header and its payload."""

    __slots__ = ('_data', '_bits')

    RESERVED_BITS = (96, 100)
    DATA_OFFSET_BITS = (100, 104)
    FIN_BIT = 104
    SYN_BIT = 105
    RST_BIT = 106
    PSH_BIT = 107
    ACK_BIT = 108
    URG_BIT = 109
    ECE_BIT = 110
    CWR_BIT = 111

    def __init__(self, data):
        view = memoryview(data).toreadonly()
        if len(view) < MIN_HEADER_SIZE:
            raise TooShort("Tcp", MIN_HEADER_SIZE, len(view))
        self._data = view
        self._bits = BitArray(view)

        if self.header_size > len(view):
            raise HeaderTooLarge(
                f"Tcp header size too big, expected at most {len(view)}, got {self.header_size}"
            )

    @classmethod
    def from_bytes(cls, data) -> Tcp:
        return cls(data)

    @property
    def data(self) -> memoryview:
        return self._data

    @property
    def source_port(self) -> int:
        return read_be16(self._data, 0)

    @property
    def destination_port(self) -> int:
        return read_be16(self._data, 2)

    @property
    def sequence_number(self) -> int:
        return read_be32(self._data, 4)

    @property
    def acknowledgment_number(self) -> int:
        return read_be32(self._data, 8)

    @property
    def reserved(self) -> int:
        return self._bits.at(*self.RESERVED_BITS)

    @property
    def data_offset(self) -> int:
        """Header length in 32-bit words."""
        return self._bits.at(*self.DATA_OFFSET_BITS)

    @property
    def flags(self) -> int:
        return read_u8(self._data, 13)

    @property
    def cwr(self) -> int:
        return self._bits.bit(self.CWR_BIT)

    @property
    def ece(self) -> int:
        return self._bits.bit(self.ECE_BIT)

    @property
    def urg(self) -> int:
        return self._bits.bit(self.URG_BIT)

    @property
    def ack(self) -> int:
        return self._bits.bit(self.ACK_BIT)

    @property
    def psh(self) -> int:
        return self._bits.bit(self.PSH_BIT)

    @property
    def rst(self) -> int:
        return self._bits.bit(self.RST_BIT)

    @property
    def syn(self) -> int:
        return self._bits.bit(self.SYN_BIT)

    @property
    def fin(self) -> int:
        return self._bits.bit(self.FIN_BIT)

    @property
    def window_size(self) -> int:
        return read_be16(self._data, 14)

    @property
    def check_sum(self) -> int:
        return read_be16(self._data, 16)

    @property
    def urgent_pointer(self) -> int:
        return read_be16(self._data, 18)

    @property
    def header_size(self) -> int:
        return self.data_offset * 4

    @property
    def raw_payload(self) -> memoryview:
        return self._data[self.header_size:]

    @property
    def payload_size(self) -> int:
        return len(self._data) - self.header_size

    def options(self) -> Iterator[TcpOption]:
        """Lazily decode the options between the fixed header and header_size."""
        return OptionIter(self._data[MIN_HEADER_SIZE:self.header_size])

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return (
            f"Tcp(sport={self.source_port}, dport={self.destination_port}, "
            f"seq={self.sequence_number}, flags=0x{self.flags:02x})"
        )
