"""
Layered traversal over a captured frame.

Visitor has one hook per layer. Each default hook decodes the next layer and
forwards to the next hook, so a subclass overrides only the layers it cares
about. visit_tcp has no default and must be supplied by the subclass.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Generic, TypeVar

from pktview.errors import Unimplemented
from pktview.protocols.ethernet import Ethernet, Invalid
from pktview.protocols.ipv4 import IPv4
from pktview.protocols.tcp import Tcp

logger = logging.getLogger(__name__)

T = TypeVar('T')


@dataclass(frozen=True)
class CapturedFrame:
    """One captured link-layer frame and its capture timestamp."""
    timestamp: float
    data: bytes
    wire_length: int | None = None

    @property
    def captured_length(self) -> int:
        return len(self.data)

    @property
    def length(self) -> int:
        return self.wire_length if self.wire_length is not None else len(self.data)


class Visitor(Generic[T]):
    """
    Base traversal contract.

    Hooks return a value of the subclass's result type; default_result()
    supplies the value for layers with nothing to report. Decode failures
    propagate unchanged.
    """

    def default_result(self) -> T | None:
        return None

    def visit_frame(self, frame: CapturedFrame) -> T | None:
        return self.visit_frame_payload(frame)

    def visit_ethernet(self, packet: Ethernet) -> T | None:
        return self.visit_ethernet_payload(packet.payload())

    def visit_ipv4(self, packet: IPv4) -> T | None:
        return self.visit_ipv4_payload(packet.payload())

    def visit_tcp(self, packet: Tcp) -> T | None:
        raise Unimplemented(f"{type(self).__name__} does not handle Tcp segments")

    def visit_frame_payload(self, frame: CapturedFrame) -> T | None:
        return self.visit_ethernet(Ethernet(frame.data))

    def visit_ethernet_payload(self, payload: IPv4 | Invalid) -> T | None:
        if isinstance(payload, IPv4):
            return self.visit_ipv4(payload)
        logger.debug("Ethernet payload not decoded: %r", payload)
        raise Unimplemented("Ethernet payload is not implemented")

    def visit_ipv4_payload(self, payload: Tcp) -> T | None:
        if isinstance(payload, Tcp):
            return self.visit_tcp(payload)
        logger.debug("Ipv4 payload not decoded: %r", payload)
        raise Unimplemented("Ipv4 payload is not implemented")

    def visit_raw_payload(self, payload: memoryview) -> T | None:
        return self.default_result()
