"""Protocol views."""

from pktview.protocols.ethernet import INVALID, EtherType, Ethernet, Invalid
from pktview.protocols.ipv4 import IPv4, Protocol
from pktview.protocols.tcp import (
    MaximumSegmentSize,
    NoOperation,
    OptionIter,
    Sack,
    SackPermitted,
    Tcp,
    TcpOption,
    Timestamp,
    WindowScale,
)

__all__ = [
    'Ethernet',
    'EtherType',
    'Invalid',
    'INVALID',
    'IPv4',
    'Protocol',
    'Tcp',
    'TcpOption',
    'OptionIter',
    'NoOperation',
    'MaximumSegmentSize',
    'WindowScale',
    'SackPermitted',
    'Sack',
    'Timestamp',
]
