"""
Ethernet II frame view (IEEE 802.3).

Layout:
    0   destination MAC (6)
    6   source MAC      (6)
    12  ether-type      (2)
    14  payload         (variable)
    -4  CRC trailer     (4)
"""

from __future__ import annotations

from enum import IntEnum

from pktview.core.addresses import MacAddress
from pktview.core.bits import read_u16, read_u32
from pktview.errors import TooShort
from pktview.protocols.ipv4 import IPv4


ADDRESS_SIZE = 6
ETHER_TYPE_SIZE = 2
CRC_SIZE = 4

HEADER_SIZE = ADDRESS_SIZE * 2 + ETHER_TYPE_SIZE
MIN_TOTAL_SIZE = HEADER_SIZE + CRC_SIZE
MAX_TOTAL_SIZE = 1518
MAX_PAYLOAD_SIZE = MAX_TOTAL_SIZE - HEADER_SIZE

MINIMUM_MAXIMUM_SEGMENT_SIZE = 576


class EtherType(IntEnum):
    """Encapsulated protocol named by the ether-type field."""
    UNKNOWN = 0x0000
    IPV4 = 0x0800
    ARP = 0x0806
    RARP = 0x8035
    SLPP = 0x8102
    IPV6 = 0x86DD

    @classmethod
    def from_code(cls, code: int) -> EtherType:
        try:
            return cls(code)
        except ValueError:
            return cls.UNKNOWN


class Invalid:
    """Payload marker for ether-types that are recognized but not decoded."""
    __slots__ = ()

    def __repr__(self) -> str:
        return "Invalid"


INVALID = Invalid()


class Ethernet:
    """
    Zero-copy view over one Ethernet frame.

    The view keeps a read-only memoryview of the caller's buffer; nothing is
    copied until an accessor materializes a value.
    """

    __slots__ = ('_data',)

    DEST_MAC_OFFSET = slice(0, 6)
    SRC_MAC_OFFSET = slice(6, 12)
    ETHER_TYPE_OFFSET = 12
    PAYLOAD_OFFSET = HEADER_SIZE

    def __init__(self, data):
        view = memoryview(data).toreadonly()
        if len(view) < MIN_TOTAL_SIZE:
            raise TooShort("Ethernet", MIN_TOTAL_SIZE, len(view))
        self._data = view

    @classmethod
    def from_bytes(cls, data) -> Ethernet:
        return cls(data)

    @property
    def data(self) -> memoryview:
        return self._data

    @property
    def destination(self) -> MacAddress:
        return MacAddress.unchecked(self._data[self.DEST_MAC_OFFSET])

    @property
    def source(self) -> MacAddress:
        return MacAddress.unchecked(self._data[self.SRC_MAC_OFFSET])

    @property
    def ether_type_code(self) -> int:
        return read_u16(self._data, self.ETHER_TYPE_OFFSET)

    @property
    def ether_type(self) -> EtherType:
        # Values of 1500 and below are payload lengths under 802.3 length
        # framing; they are classified as ether-type codes regardless.
        return EtherType.from_code(self.ether_type_code)

    @property
    def raw_payload(self) -> memoryview:
        return self._data[self.PAYLOAD_OFFSET:len(self._data) - CRC_SIZE]

    @property
    def payload_size(self) -> int:
        return len(self._data) - MIN_TOTAL_SIZE

    @property
    def crc(self) -> int:
        return read_u32(self._data, len(self._data) - CRC_SIZE)

    def payload(self) -> IPv4 | Invalid:
        """Decode the encapsulated layer; non-IPv4 ether-types yield INVALID."""
        if self.ether_type == EtherType.IPV4:
            return IPv4(self.raw_payload)
        return INVALID

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return (
            f"Ethernet(src={self.source}, dst={self.destination}, "
            f"type={self.ether_type.name}, payload={self.payload_size})"
        )
