"""Core pktview modules."""

from pktview.core.addresses import Ipv4Address, MacAddress
from pktview.core.bits import (
    BitArray,
    read_be16,
    read_be32,
    read_u8,
    read_u16,
    read_u32,
    read_u64,
    swap_bytes,
)
from pktview.core.printer import Printer, PrinterConfig
from pktview.core.reader import PcapReader
from pktview.core.visitor import CapturedFrame, Visitor

__all__ = [
    'BitArray',
    'read_u8',
    'read_u16',
    'read_u32',
    'read_u64',
    'read_be16',
    'read_be32',
    'swap_bytes',
    'MacAddress',
    'Ipv4Address',
    'CapturedFrame',
    'Visitor',
    'Printer',
    'PrinterConfig',
    'PcapReader',
]
