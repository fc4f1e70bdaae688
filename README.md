# packetlens

packetlens is a set of protocol decoders that turn the bytes of a network
frame into short, readable summaries, in the style of a packet sniffer's
one-line output. It has no dependencies outside the standard library.

Decoders are provided for:

- link layers: Ethernet II and IEEE 802.3 (`packetlens.ethernet`), BSD
  loopback (`packetlens.loopback`), Linux cooked capture v1 and v2
  (`packetlens.linux_cooked`), and ARP/RARP (`packetlens.arp`);
- ICMP (`packetlens.icmp`) and ICMPv6 with neighbour discovery
  (`packetlens.icmp6`);
- TCP (`packetlens.tcp`): flags, options, checksum, relative sequence and
  acknowledgement numbers, and dispatch by port to the application printers;
- DHCP options (`packetlens.dhcp`) and the clear-text protocols FTP, SMTP,
  HTTP, POP3 and IMAP (`packetlens.application`).

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## How the decoders work

Every printer writes into a `DecodeContext` (`packetlens.context`). The
context carries the verbosity, the number of payload bytes still to be
decoded (`payload_length`), and collects the text, which `getvalue()`
returns.

The verbosity is a `Verbosity` value:

| level               | what the decoders add                                              |
|---------------------|--------------------------------------------------------------------|
| `Verbosity.NONE`    | protocol names, addresses and ports                                |
| `Verbosity.LOW`     | the same; protocols are separated by `": "`                        |
| `Verbosity.MEDIUM`  | header fields, checksum verdicts, clear-text application payloads  |
| `Verbosity.HIGH`    | everything above, MAC addresses and decoded DHCP option values     |

Above `LOW`, each protocol starts on a new indented line.

```python
from packetlens.context import DecodeContext, Verbosity
from packetlens.ethernet import print_ethernet_header

frame = bytes.fromhex("020000000002" "020000000001" "0800") + bytes(20)
ctx = DecodeContext(verbosity=Verbosity.LOW)
ether_type = print_ethernet_header(ctx, frame, len(frame))

print(hex(ether_type))   # 0x800
print(ctx.getvalue())    # " Ethernet IPv4"
```

Link-layer printers return the EtherType (or LSAP, or loopback family) they
found, so the caller can choose the next decoder. Truncated headers raise
`ValueError`.

`packetlens.tcp.print_tcp_frame(ctx, segment, ip_header, is_ipv6)` and
`packetlens.icmp6.print_icmp6_frame(ctx, data, ip6_header, length)` take the
raw enclosing IP header as well, which they use for the pseudo-header
checksum and, for TCP, to identify the connection. TCP connections opened
by a SYN or SYN+ACK are remembered for the life of the process (up to 100
of them), so later segments of the same connection are shown with relative
sequence and acknowledgement numbers.

## Helpers

Several pieces can be used on their own:

```python
from packetlens.tcp import format_tcp_flags, format_tcp_options
from packetlens.dhcp import get_dhcp_message_type_name
from packetlens.packet_utils import validate_checksum, format_packet_bytes, get_oui

format_tcp_flags(0x12)                                  # "[SYN, ACK]"
format_tcp_options(bytes([2, 4, 0x05, 0xB4, 1, 1]))     # "[mss 1460, nop, nop]"
get_dhcp_message_type_name(5)                           # "ack"
get_oui("00:00:0c:12:34:56")                            # "Cisco Systems, Inc."
```

- `validate_checksum(pseudo_header, data, num_32bit_words)` computes the
  RFC 1071 Internet checksum; a result of 0 means the checksum embedded in
  the data is correct. `pseudo_ip_header` and `pseudo_ip6_header` build the
  pseudo headers used by TCP, UDP and ICMPv6.
- `format_packet_bytes(data)` renders a hex dump with an ASCII column,
  16 bytes per row.
- `format_timestamp(seconds, microseconds)` renders a capture time as
  `[HH:MM:SS.uuuuuu]` in local time.
- `packetlens.utils.lookup(value, table)` finds a `NameValue` by value,
  falling back to one named `UNKNOWN`.

## What it does not do

packetlens is a library of decoders only. It has no command-line program,
does not capture from network interfaces, does not read capture files, and
has no decoders for the IPv4, IPv6, UDP or BOOTP layers. The caller supplies
the bytes of each layer and chains the decoders itself.