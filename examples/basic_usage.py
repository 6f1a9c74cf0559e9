"""
Basic pktview usage example.

Demonstrates:
- Reading frames from a pcap file
- Accessing Ethernet/IPv4/TCP fields through the views
- Overriding one traversal hook to collect TCP endpoints
"""

import sys
from collections import Counter

from pktview import DecodeError, Ethernet, IPv4, PcapReader, Visitor


class EndpointCounter(Visitor):
    """Count TCP segments per (src, sport, dst, dport)."""

    def __init__(self):
        self.counts = Counter()
        self._ip = None

    def visit_ipv4(self, packet: IPv4):
        self._ip = packet
        return super().visit_ipv4(packet)

    def visit_tcp(self, packet):
        key = (str(self._ip.source_address), packet.source_port,
               str(self._ip.destination_address), packet.destination_port)
        self.counts[key] += 1


path = sys.argv[1] if len(sys.argv) > 1 else 'test/single.pcap'
counter = EndpointCounter()

with PcapReader(path) as reader:
    for frame in reader.frames(limit=20):
        try:
            eth = Ethernet(frame.data)
            print(f"{frame.timestamp:.6f} {eth.source} -> {eth.destination} {eth.ether_type.name}")

            payload = eth.payload()
            if isinstance(payload, IPv4):
                print(f"  {payload.source_address} -> {payload.destination_address} ttl={payload.time_to_live}")

            counter.visit_frame(frame)
        except DecodeError as error:
            print(f"  not counted: {error}")

for (src, sport, dst, dport), count in counter.counts.most_common():
    print(f"{src}:{sport} -> {dst}:{dport}  {count} segments")
