"""
Printer - human-readable rendering of a decoded frame.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TextIO

from pktview.core.visitor import CapturedFrame, Visitor
from pktview.protocols.ethernet import Ethernet
from pktview.protocols.ipv4 import IPv4
from pktview.protocols.tcp import Tcp


@dataclass
class PrinterConfig:
    """Configuration for Printer output."""
    bytes_per_line: int = 16
    group_size: int = 4
    show_options: bool = True
    show_payload: bool = True


def format_timestamp(timestamp: float) -> str:
    """Render a capture timestamp as HH:MM:SS.ffffff (UTC)."""
    try:
        moment = datetime.fromtimestamp(timestamp, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return "<invalid timestamp>"
    return moment.strftime("%H:%M:%S.%f")


def _printable(byte: int) -> str:
    character = chr(byte)
    if character.isspace() or not character.isprintable() or byte > 0x7E:
        return "."
    return character


def hexdump(payload, bytes_per_line: int = 16, group_size: int = 4) -> list[str]:
    """Hex and character columns for payload, one string per line."""
    lines = []
    data = bytes(payload)
    hex_width = bytes_per_line * 3 + -(-bytes_per_line // group_size)
    for offset in range(0, len(data), bytes_per_line):
        chunk = data[offset:offset + bytes_per_line]
        groups = [
            "".join(f"{b:02x} " for b in chunk[i:i + group_size])
            for i in range(0, len(chunk), group_size)
        ]
        hex_column = " ".join(groups)
        text_column = "".join(_printable(b) for b in chunk)
        lines.append(f"{hex_column:<{hex_width}}    {text_column}")
    return lines


class Printer(Visitor[None]):
    """Visitor that writes every decoded layer to a text stream."""

    RULE_WIDTH = 81

    def __init__(self, stream: TextIO | None = None, config: PrinterConfig | None = None):
        self.stream = stream if stream is not None else sys.stdout
        self.config = config or PrinterConfig()

    def _line(self, text: str = "") -> None:
        self.stream.write(text + "\n")

    def _field(self, name: str, value) -> None:
        self._line(f"|    {name:<22}: {value}")

    def visit_frame(self, frame: CapturedFrame) -> None:
        banner = f"---------- Packet [ size {frame.length} ] @ {format_timestamp(frame.timestamp)} "
        self._line(banner.ljust(self.RULE_WIDTH, "-"))
        try:
            return self.visit_frame_payload(frame)
        finally:
            self._line("-" * self.RULE_WIDTH)

    def visit_ethernet(self, packet: Ethernet) -> None:
        self._line(f"| - Ethernet [ payload size {len(packet.raw_payload)} ]")
        self._field("Source", packet.source)
        self._field("Destination", packet.destination)
        self._field("Ether Type", packet.ether_type.name)
        self._field("Crc", packet.crc)
        return self.visit_ethernet_payload(packet.payload())

    def visit_ipv4(self, packet: IPv4) -> None:
        self._line(f"| - Ipv4 [ payload size {len(packet.raw_payload)} ]")
        self._field("Header Length", packet.header_length)
        self._field("Version", packet.version)
        self._field("Reserved 1", packet.reserved1)
        self._field("Cost", packet.cost)
        self._field("Reliability", packet.reliability)
        self._field("Throughput", packet.throughput)
        self._field("Delay", packet.delay)
        self._field("Precedence", packet.precedence)
        self._field("Total Length", packet.total_length)
        self._field("Identification", packet.identification)
        self._field("Reserved 2", packet.reserved2)
        self._field("Df", packet.df)
        self._field("Mf", packet.mf)
        self._field("Fragment Offset", packet.fragment_offset)
        self._field("Time To Live", packet.time_to_live)
        self._field("Protocol", packet.protocol.name)
        self._field("Header Checksum", packet.header_checksum)
        self._field("Source Address", packet.source_address)
        self._field("Destination Address", packet.destination_address)
        return self.visit_ipv4_payload(packet.payload())

    def visit_tcp(self, packet: Tcp) -> None:
        self._line(f"| - Tcp [ payload size {len(packet.raw_payload)} ]")
        self._field("Source Port", packet.source_port)
        self._field("Destination Port", packet.destination_port)
        self._field("Sequence Number", packet.sequence_number)
        self._field("Acknowledgment Number", packet.acknowledgment_number)
        self._field("Reserved", packet.reserved)
        self._field("Data Offset", packet.data_offset)
        self._field("Cwr", packet.cwr)
        self._field("Ece", packet.ece)
        self._field("Urg", packet.urg)
        self._field("Ack", packet.ack)
        self._field("Psh", packet.psh)
        self._field("Rst", packet.rst)
        self._field("Syn", packet.syn)
        self._field("Fin", packet.fin)
        self._field("Window Size", packet.window_size)
        self._field("Check Sum", packet.check_sum)
        self._field("Urgent Pointer", packet.urgent_pointer)
        if self.config.show_options:
            for i, option in enumerate(packet.options()):
                self._field(f"Option[{i}]", option)
        return self.visit_raw_payload(packet.raw_payload)

    def visit_raw_payload(self, payload) -> None:
        self._line(f"| - Payload [ size {len(payload)} ]")
        if self.config.show_payload:
            for line in hexdump(payload, self.config.bytes_per_line, self.config.group_size):
                self._line(f"|    {line}")
        return self.default_result()
