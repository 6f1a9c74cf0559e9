"""Test the TCP segment view and option decoding."""

import pytest

from conftest import build_tcp

from pktview.errors import HeaderTooLarge, StructuralViolation, TooShort
from pktview.protocols.tcp import (
    MaximumSegmentSize,
    NoOperation,
    OptionIter,
    Sack,
    SackPermitted,
    Tcp,
    Timestamp,
    WindowScale,
)


def options_of(data):
    return list(OptionIter(data))


def test_fields(tcp_bytes):
    tcp = Tcp(tcp_bytes)
    assert tcp.source_port == 443
    assert tcp.destination_port == 51000
    assert tcp.sequence_number == 0x01020304
    assert tcp.acknowledgment_number == 0xA0B0C0D0
    assert tcp.data_offset == 7
    assert tcp.header_size == 28
    assert tcp.reserved == 0
    assert tcp.flags == 0x12
    assert tcp.syn == 1
    assert tcp.ack == 1
    assert tcp.fin == 0
    assert tcp.window_size == 65535
    assert tcp.check_sum == 0xBEEF
    assert tcp.urgent_pointer == 7
    assert bytes(tcp.raw_payload) == b'hello world'
    assert tcp.payload_size == len(b'hello world')


@pytest.mark.parametrize("name, mask", [
    ("fin", 0x01),
    ("syn", 0x02),
    ("rst", 0x04),
    ("psh", 0x08),
    ("ack", 0x10),
    ("urg", 0x20),
    ("ece", 0x40),
    ("cwr", 0x80),
])
def test_each_control_flag(name, mask):
    tcp = Tcp(build_tcp(flags=mask))
    flags = {flag: getattr(tcp, flag) for flag in ("fin", "syn", "rst", "psh", "ack", "urg", "ece", "cwr")}
    assert flags.pop(name) == 1
    assert set(flags.values()) == {0}


def test_reserved_bits():
    tcp = Tcp(build_tcp(reserved=0b1010))
    assert tcp.reserved == 0b1010
    assert tcp.data_offset == 5


@pytest.mark.parametrize("size", [0, 10, 19])
def test_too_short(size):
    with pytest.raises(TooShort):
        Tcp(bytes(size))


@pytest.mark.parametrize("data_offset, extra", [(6, 0), (15, 20), (15, 39)])
def test_header_too_large(data_offset, extra):
    data = build_tcp(data_offset=data_offset) + bytes(extra)
    with pytest.raises(HeaderTooLarge) as exc_info:
        Tcp(data)
    assert isinstance(exc_info.value, StructuralViolation)


def test_header_exactly_fills_buffer():
    tcp = Tcp(build_tcp(data_offset=15) + bytes(40))
    assert tcp.header_size == 60
    assert len(tcp.raw_payload) == 0


def test_options_from_view(tcp_bytes):
    assert list(Tcp(tcp_bytes).options()) == [
        MaximumSegmentSize(size=1460),
        NoOperation(),
        WindowScale(scale=7),
    ]


def test_options_ignore_payload_bytes():
    tcp = Tcp(build_tcp(payload=b'\x01\x01\x01'))
    assert list(tcp.options()) == []


def test_two_nops_then_end():
    assert options_of(b'\x01\x01\x00') == [NoOperation(), NoOperation()]


def test_end_of_options_stops_before_later_options():
    assert options_of(b'\x01\x00\x02\x04\x05\xb4') == [NoOperation()]


def test_maximum_segment_size():
    assert options_of(b'\x02\x04\x05\xb4') == [MaximumSegmentSize(size=1460)]


@pytest.mark.parametrize("data", [
    b'\x02',
    b'\x02\x04',
    b'\x02\x04\x05',
    b'\x03\x03',
    b'\x05\x0a\x00\x00\x00\x01\x00\x00\x00',
    b'\x08\x0a\x00\x00\x00\x01',
])
def test_truncated_option_ends_sequence(data):
    assert options_of(data) == []


def test_truncated_option_after_valid_ones():
    assert options_of(b'\x01\x04\x02\x08\x0a\x00') == [NoOperation(), SackPermitted()]


def test_length_shorter_than_option_ends_sequence():
    assert options_of(b'\x02\x02\x05\xb4') == []


def test_window_scale_and_sack_permitted():
    assert options_of(b'\x03\x03\x0e\x04\x02') == [WindowScale(scale=14), SackPermitted()]


def test_sack_first_block_only():
    data = (
        b'\x05\x12'
        + (100).to_bytes(4, 'big') + (200).to_bytes(4, 'big')
        + (300).to_bytes(4, 'big') + (400).to_bytes(4, 'big')
        + b'\x01'
    )
    assert options_of(data) == [Sack(begin=100, end=200), NoOperation()]


def test_timestamp():
    data = b'\x01\x01\x08\x0a' + (0x11223344).to_bytes(4, 'big') + (0x55667788).to_bytes(4, 'big')
    assert options_of(data) == [
        NoOperation(),
        NoOperation(),
        Timestamp(timestamp=0x11223344, echo=0x55667788),
    ]


@pytest.mark.parametrize("kind", [6, 7, 9, 30, 254])
def test_unsupported_kind_ends_sequence(kind):
    assert options_of(bytes([1, kind, 4, 0, 0, 1])) == [NoOperation()]


def test_iterator_is_forward_only():
    it = OptionIter(b'\x01\x01')
    assert next(it) == NoOperation()
    assert list(it) == [NoOperation()]
    assert list(it) == []


def test_iterator_stays_exhausted_after_end():
    it = OptionIter(b'\x00\x01')
    assert list(it) == []
    assert list(it) == []


def test_each_call_to_options_restarts(tcp_bytes):
    tcp = Tcp(tcp_bytes)
    assert len(list(tcp.options())) == 3
    assert len(list(tcp.options())) == 3


def test_options_match_dpkt():
    dpkt = pytest.importorskip("dpkt")

    opts = (
        b'\x02\x04\x05\xb4\x01\x03\x03\x07\x04\x02'
        b'\x08\x0a\x00\x00\x10\x00\x00\x00\x00\x00'
    )
    decoded = options_of(opts)
    reference = dpkt.tcp.parse_opts(opts)

    assert [type(o).kind for o in decoded] == [kind for kind, _ in reference]
    assert decoded[0].size == int.from_bytes(reference[0][1], 'big')
    assert decoded[2].scale == reference[2][1][0]
    assert decoded[4].timestamp == int.from_bytes(reference[4][1][:4], 'big')
