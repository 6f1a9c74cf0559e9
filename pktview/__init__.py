"""
pktview - zero-copy Ethernet/IPv4/TCP frame decoding

Views interpret a captured frame in place and expose every header field as
a typed property. A Visitor walks a frame from the link layer down to the
TCP payload.

Example usage:
    from pktview import Ethernet, PcapReader, Printer

    printer = Printer()
    with PcapReader('traffic.pcap') as reader:
        for frame in reader.frames():
            eth = Ethernet(frame.data)
            print(eth.source, eth.destination, eth.ether_type.name)
            printer.visit_frame(frame)
"""

from pktview.core.addresses import Ipv4Address, MacAddress
from pktview.core.printer import Printer, PrinterConfig
from pktview.core.reader import PcapReader
from pktview.core.visitor import CapturedFrame, Visitor
from pktview.errors import (
    DecodeError,
    HeaderLengthOutOfRange,
    HeaderTooLarge,
    InvalidRange,
    ReservedBitSet,
    StructuralViolation,
    TooShort,
    Unimplemented,
    VersionMismatch,
)
from pktview.protocols.ethernet import INVALID, EtherType, Ethernet, Invalid
from pktview.protocols.ipv4 import IPv4, Protocol
from pktview.protocols.tcp import (
    MaximumSegmentSize,
    NoOperation,
    Sack,
    SackPermitted,
    Tcp,
    TcpOption,
    Timestamp,
    WindowScale,
)

__version__ = "0.1.0"

__all__ = [
    # Views
    'Ethernet',
    'IPv4',
    'Tcp',

    # Value types
    'MacAddress',
    'Ipv4Address',
    'EtherType',
    'Protocol',
    'Invalid',
    'INVALID',

    # TCP options
    'TcpOption',
    'NoOperation',
    'MaximumSegmentSize',
    'WindowScale',
    'SackPermitted',
    'Sack',
    'Timestamp',

    # Traversal
    'CapturedFrame',
    'Visitor',
    'Printer',
    'PrinterConfig',
    'PcapReader',

    # Errors
    'DecodeError',
    'TooShort',
    'StructuralViolation',
    'VersionMismatch',
    'HeaderLengthOutOfRange',
    'ReservedBitSet',
    'HeaderTooLarge',
    'Unimplemented',
    'InvalidRange',
]
