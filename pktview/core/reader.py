"""
PcapReader - offline capture source.

Reads pcap and pcapng files with dpkt and yields CapturedFrame units for
the traversal. Only Ethernet (DLT_EN10MB) captures can be decoded.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterator

from pktview.core.visitor import CapturedFrame
from pktview.errors import Unimplemented

logger = logging.getLogger(__name__)


# DLT (Data Link Type) constants
DLT_NULL = 0           # BSD loopback
DLT_EN10MB = 1         # Ethernet
DLT_RAW = 101          # Raw IP
DLT_LOOP = 108         # OpenBSD loopback
DLT_LINUX_SLL = 113    # Linux cooked capture
DLT_NFLOG = 239        # NFLOG

_PCAP_MAGICS = (
    b'\xd4\xc3\xb2\xa1',  # pcap, little-endian, microseconds
    b'\xa1\xb2\xc3\xd4',  # pcap, big-endian, microseconds
    b'\x4d\x3c\xb2\xa1',  # pcap, little-endian, nanoseconds
    b'\xa1\xb2\x3c\x4d',  # pcap, big-endian, nanoseconds
    b'\x0a\x0d\x0d\x0a',  # pcapng section header
)


class PcapReader:
    """
    PCAP/PCAPNG file reader.

    Usage:
        with PcapReader('capture.pcap') as reader:
            for frame in reader.frames():
                printer.visit_frame(frame)
    """

    def __init__(self, pcap_path: str | Path):
        self.pcap_path = Path(pcap_path)
        self._reader: Any | None = None
        self._file = None
        self._link_layer_type: int | None = None

    def open(self) -> None:
        """Open the PCAP file and initialize reader."""
        import dpkt

        if not self.pcap_path.exists():
            raise FileNotFoundError(f"PCAP file not found: {self.pcap_path}")

        f = open(self.pcap_path, 'rb')
        try:
            self._reader = dpkt.pcap.UniversalReader(f)
        except ValueError as e:
            f.close()
            raise ValueError(f"Unknown PCAP format: {e}") from e
        self._file = f
        self._link_layer_type = self._reader.datalink()
        logger.debug("Opened %s (link type %d)", self.pcap_path, self._link_layer_type)

    def close(self) -> None:
        """Close the PCAP file."""
        self._reader = None
        if self._file:
            self._file.close()
            self._file = None
            logger.debug("Closed %s", self.pcap_path)

    def __enter__(self) -> PcapReader:
        self.open()
        return self

    def __exit__(self, *args) -> None:
        self.close()

    @property
    def link_layer_type(self) -> int:
        """Get the DLT link layer type."""
        if self._link_layer_type is None:
            raise RuntimeError("Reader not opened")
        return self._link_layer_type

    @property
    def is_ethernet(self) -> bool:
        return self.link_layer_type == DLT_EN10MB

    def __iter__(self) -> Iterator[CapturedFrame]:
        return self.frames()

    def frames(self, limit: int | None = None) -> Iterator[CapturedFrame]:
        """
        Iterate over captured frames.

        Args:
            limit: Maximum number of frames to yield

        Yields:
            CapturedFrame for each record in the file
        """
        if self._reader is None:
            raise RuntimeError("Reader not opened. Call open() first.")
        if not self.is_ethernet:
            logger.warning("Link type %d of %s is not Ethernet", self.link_layer_type, self.pcap_path)
            raise Unimplemented(f"Link layer type {self.link_layer_type} is not implemented")

        count = 0
        for ts, buf in self._reader:
            if limit is not None and count >= limit:
                break
            yield CapturedFrame(timestamp=float(ts), data=bytes(buf), wire_length=len(buf))
            count += 1

    @staticmethod
    def is_pcap_file(path: str | Path) -> bool:
        """Check if file is a valid PCAP or PCAPNG file."""
        path = Path(path)
        if not path.exists() or not path.is_file():
            return False

        with open(path, 'rb') as f:
            magic = f.read(4)
        return magic in _PCAP_MAGICS
