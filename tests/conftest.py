"""Configuration and fixtures for pytest tests."""

import os
import struct
import sys

import pytest

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


# Ether-type bytes as they appear in frames this decoder classifies.
ETHER_IPV4 = b'\x00\x08'
ETHER_ARP = b'\x06\x08'
ETHER_IPV6 = b'\xdd\x86'

DST_MAC = b'\x00\x11\x22\x33\x44\x55'
SRC_MAC = b'\x00\xaa\xbb\xcc\xdd\xee'
CRC = b'\xde\xad\xbe\xef'


def build_tcp(sport=12345, dport=80, seq=1, ack=0, data_offset=None, reserved=0,
              flags=0x02, window=8192, checksum=0, urgent=0, options=b'', payload=b''):
    """Pack a TCP header; data_offset defaults to cover the options."""
    if data_offset is None:
        data_offset = 5 + (len(options) + 3) // 4
        options = options.ljust((data_offset - 5) * 4, b'\x00')
    header = struct.pack(
        '>HHIIBBHHH',
        sport, dport, seq, ack,
        (data_offset << 4) | reserved, flags,
        window, checksum, urgent,
    )
    return header + options + payload


def build_ipv4(payload=b'', proto=6, version=4, ihl=5, tos=0, ident=1, flags_offset=0,
               ttl=64, checksum=0, src=b'\xc0\xa8\x01\x01', dst=b'\xc0\xa8\x01\x02',
               total_length=None, options=b''):
    """Pack an IPv4 header followed by payload."""
    options = options.ljust((ihl - 5) * 4, b'\x00')
    if total_length is None:
        total_length = 20 + len(options) + len(payload)
    header = struct.pack(
        '>BBHHHBBH4s4s',
        (version << 4) | ihl, tos, total_length, ident, flags_offset,
        ttl, proto, checksum, src, dst,
    )
    return header + options + payload


def build_ethernet(payload=b'', ether_type=ETHER_IPV4, dst=DST_MAC, src=SRC_MAC, crc=CRC):
    """Pack an Ethernet frame with its CRC trailer."""
    return dst + src + ether_type + payload + crc


@pytest.fixture
def tcp_bytes():
    return build_tcp(
        sport=443, dport=51000, seq=0x01020304, ack=0xA0B0C0D0,
        flags=0x12, window=65535, checksum=0xBEEF, urgent=7,
        options=b'\x02\x04\x05\xb4\x01\x03\x03\x07',
        payload=b'hello world',
    )


@pytest.fixture
def ipv4_bytes(tcp_bytes):
    return build_ipv4(tcp_bytes, ident=0x1234, flags_offset=0x4000, ttl=128, checksum=0xABCD,
                      src=b'\x0a\x00\x00\x01', dst=b'\x0a\x00\x00\x02')


@pytest.fixture
def frame_bytes(ipv4_bytes):
    return build_ethernet(ipv4_bytes)
