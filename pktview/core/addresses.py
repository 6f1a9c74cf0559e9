"""
Link and network address value types.
"""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass

from pktview.errors import TooShort


@dataclass(frozen=True, order=True)
class MacAddress:
    """6-byte hardware address."""
    data: bytes

    SIZE = 6

    @classmethod
    def from_bytes(cls, data) -> MacAddress:
        """Build from the first 6 bytes of data, raising TooShort otherwise."""
        if len(data) < cls.SIZE:
            raise TooShort("MacAddress", cls.SIZE, len(data))
        return cls(bytes(data[:cls.SIZE]))

    @classmethod
    def unchecked(cls, data) -> MacAddress:
        # Header parsing path: the caller has already validated the length.
        return cls(bytes(data[:cls.SIZE]))

    def __str__(self) -> str:
        return ":".join(f"{b:02x}" for b in self.data)

    def __repr__(self) -> str:
        return f"MacAddress({self})"


@dataclass(frozen=True, order=True)
class Ipv4Address:
    """4-byte IPv4 address in wire order."""
    data: bytes

    def __str__(self) -> str:
        return "{}.{}.{}.{}".format(*self.data)

    def __repr__(self) -> str:
        return f"Ipv4Address({self})"

    def to_ipaddress(self) -> ipaddress.IPv4Address:
        return ipaddress.IPv4Address(self.data)
