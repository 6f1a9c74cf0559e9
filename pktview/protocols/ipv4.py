"""
IPv4 datagram view (RFC 791).
"""

from __future__ import annotations

from enum import IntEnum

from pktview.core.addresses import Ipv4Address
from pktview.core.bits import BitArray, read_be16, read_u8
from pktview.errors import (
    HeaderLengthOutOfRange,
    ReservedBitSet,
    TooShort,
    Unimplemented,
    VersionMismatch,
)
from pktview.protocols.tcp import Tcp


MIN_HEADER_SIZE = 20
MIN_HEADER_LENGTH = 5
MAX_HEADER_LENGTH = 20


class Protocol(IntEnum):
    """IP payload protocol numbers."""
    UNKNOWN = 0x92  # Unassigned
    TCP = 6
    UDP = 17

    @classmethod
    def from_value(cls, value: int) -> Protocol:
        if value == cls.TCP:
            return cls.TCP
        if value == cls.UDP:
            return cls.UDP
        return cls.UNKNOWN


class IPv4:
    """Zero-copy view over an IPv4 header and its payload."""

    __slots__ = ('_data', '_bits')

    # Bit positions, least-significant first within each byte.
    HEADER_LENGTH_BITS = (0, 4)
    VERSION_BITS = (4, 8)
    RESERVED1_BIT = 8
    COST_BIT = 9
    RELIABILITY_BIT = 10
    THROUGHPUT_BIT = 11
    DELAY_BIT = 12
    PRECEDENCE_BITS = (13, 16)
    ECN_BITS = (8, 10)
    DSCP_BITS = (10, 16)
    MF_BIT = 53
    DF_BIT = 54
    RESERVED2_BIT = 55

    def __init__(self, data):
        view = memoryview(data).toreadonly()
        if len(view) < MIN_HEADER_SIZE:
            raise TooShort("Ipv4", MIN_HEADER_SIZE, len(view))
        self._data = view
        self._bits = BitArray(view)

        if self.version != 4:
            raise VersionMismatch(f"Version must be 4, got {self.version}")
        if not MIN_HEADER_LENGTH <= self.header_length <= MAX_HEADER_LENGTH:
            raise HeaderLengthOutOfRange(
                f"Header length must be within [{MIN_HEADER_LENGTH}, {MAX_HEADER_LENGTH}], "
                f"got {self.header_length}"
            )
        if self.reserved1 != 0:
            raise ReservedBitSet("Reserved flag is not 0")

    @classmethod
    def from_bytes(cls, data) -> IPv4:
        return cls(data)

    @property
    def data(self) -> memoryview:
        return self._data

    @property
    def version(self) -> int:
        return self._bits.at(*self.VERSION_BITS)

    @property
    def header_length(self) -> int:
        """Header length in 32-bit words."""
        return self._bits.at(*self.HEADER_LENGTH_BITS)

    @property
    def header_size(self) -> int:
        return self.header_length * 4

    # Type of service, historical layout.
    @property
    def reserved1(self) -> int:
        return self._bits.bit(self.RESERVED1_BIT)

    @property
    def cost(self) -> int:
        return self._bits.bit(self.COST_BIT)

    @property
    def reliability(self) -> int:
        return self._bits.bit(self.RELIABILITY_BIT)

    @property
    def throughput(self) -> int:
        return self._bits.bit(self.THROUGHPUT_BIT)

    @property
    def delay(self) -> int:
        return self._bits.bit(self.DELAY_BIT)

    @property
    def precedence(self) -> int:
        return self._bits.at(*self.PRECEDENCE_BITS)

    # Same byte, RFC 2474 / RFC 3168 layout.
    @property
    def dscp(self) -> int:
        return self._bits.at(*self.DSCP_BITS)

    @property
    def ecn(self) -> int:
        return self._bits.at(*self.ECN_BITS)

    @property
    def total_length(self) -> int:
        return read_be16(self._data, 2)

    @property
    def identification(self) -> int:
        return read_be16(self._data, 4)

    @property
    def reserved2(self) -> int:
        return self._bits.bit(self.RESERVED2_BIT)

    @property
    def df(self) -> int:
        return self._bits.bit(self.DF_BIT)

    @property
    def mf(self) -> int:
        return self._bits.bit(self.MF_BIT)

    @property
    def fragment_offset(self) -> int:
        return read_be16(self._data, 6) & 0x1FFF

    @property
    def is_fragment(self) -> bool:
        return self.mf == 1 or self.fragment_offset != 0

    @property
    def time_to_live(self) -> int:
        return read_u8(self._data, 8)

    @property
    def protocol_number(self) -> int:
        return read_u8(self._data, 9)

    @property
    def protocol(self) -> Protocol:
        return Protocol.from_value(self.protocol_number)

    @property
    def header_checksum(self) -> int:
        # Not verified against the header contents.
        return read_be16(self._data, 10)

    @property
    def source_address(self) -> Ipv4Address:
        return Ipv4Address(bytes(self._data[12:16]))

    @property
    def destination_address(self) -> Ipv4Address:
        return Ipv4Address(bytes(self._data[16:20]))

    @property
    def options(self) -> memoryview:
        return self._data[MIN_HEADER_SIZE:self.header_size]

    @property
    def raw_payload(self) -> memoryview:
        start = self.header_size
        end = self.total_length
        if not start <= end <= len(self._data):
            end = len(self._data)
        return self._data[start:end]

    def payload(self) -> Tcp:
        protocol = self.protocol
        if protocol == Protocol.TCP:
            return Tcp(self.raw_payload)
        if protocol == Protocol.UDP:
            raise Unimplemented("UDP not implemented")
        raise Unimplemented(f"Unknown protocol {self.protocol_number}")

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return (
            f"IPv4(src={self.source_address}, dst={self.destination_address}, "
            f"proto={self.protocol_number}, len={self.total_length})"
        )
