"""
Command line entry point: decode and print every frame of a capture file.
"""

from __future__ import annotations

import argparse
import logging
import sys

from pktview.core.printer import Printer, PrinterConfig
from pktview.core.reader import PcapReader
from pktview.errors import DecodeError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='pktview',
        description='Decode Ethernet/IPv4/TCP frames from a pcap or pcapng file.',
    )
    parser.add_argument('pcap_file', help='Capture file to decode')
    parser.add_argument('-n', '--limit', type=int, default=None,
                        help='Stop after this many frames')
    parser.add_argument('--no-payload', action='store_true',
                        help='Do not hex dump TCP payloads')
    parser.add_argument('--no-options', action='store_true',
                        help='Do not list TCP options')
    parser.add_argument('--bytes-per-line', type=int, default=16,
                        help='Bytes per hex dump line (default: 16)')
    parser.add_argument('--log-level', default='WARNING',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        help='Logging level (default: WARNING)')
    return parser


def main(argv: list[str] | None = None, stream=None) -> int:
    args = build_parser().parse_args(argv)
    stream = stream if stream is not None else sys.stdout

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if not PcapReader.is_pcap_file(args.pcap_file):
        logger.error("Not a pcap/pcapng file: %s", args.pcap_file)
        return 1

    config = PrinterConfig(
        bytes_per_line=args.bytes_per_line,
        show_options=not args.no_options,
        show_payload=not args.no_payload,
    )
    printer = Printer(stream=stream, config=config)

    decoded = failed = 0
    try:
        with PcapReader(args.pcap_file) as reader:
            for frame in reader.frames(limit=args.limit):
                try:
                    printer.visit_frame(frame)
                    decoded += 1
                except DecodeError as error:
                    failed += 1
                    stream.write(f"[ERROR]: {error}\n")
                    logger.warning("Frame at %.6f not decoded: %s", frame.timestamp, error)
    except (OSError, ValueError) as error:
        logger.error("Cannot read %s: %s", args.pcap_file, error)
        return 1

    logger.info("%d frames decoded, %d failed", decoded, failed)
    return 0


if __name__ == '__main__':
    sys.exit(main())
