# /usr/bin/env python3

# handle /proc/net/dev
# reference: https://www.kernel.org/doc/Documentation/filesystems/proc.txt

import dataclasses
import os
from typing import List, Optional, Tuple

from .common import DEFAULT_PROCFS_ROOT, StructBase, load_proc_file, parse_int
from .errors import MalformedLine
from .tokenizer import TokenizedLine, tokenize
from .units import passthrough

# Inter-|   Receive ...
#  face |bytes ...
NET_DEV_HEADER_LINES = 2


@dataclasses.dataclass(frozen=True)
class InterfaceStats(StructBase):
    name: str = ""
    receive_bytes: int = 0
    receive_packets: int = 0
    receive_errors: int = 0
    receive_drop: int = 0
    receive_fifo: int = 0
    receive_frame: int = 0
    receive_compressed: int = 0
    receive_multicast: int = 0
    transmit_bytes: int = 0
    transmit_packets: int = 0
    transmit_errors: int = 0
    transmit_drop: int = 0
    transmit_fifo: int = 0
    transmit_collisions: int = 0
    transmit_carrier: int = 0
    transmit_compressed: int = 0


# 8 receive counters followed by 8 transmit ones, in kernel order:
NET_DEV_COUNTER_FIELDS = tuple(
    field.name for field in dataclasses.fields(InterfaceStats)
)[1:]


@dataclasses.dataclass(frozen=True)
class ProcNetDev(StructBase):
    # In file order.
    interface: Tuple[InterfaceStats, ...] = ()

    def get(self, name: str) -> Optional[InterfaceStats]:
        for interface_stats in self.interface:
            if interface_stats.name == name:
                return interface_stats
        return None


def decode_interface_stats_line(line: TokenizedLine) -> InterfaceStats:
    # The name is delimited by `:', which may be followed directly by the 1st
    # counter, e.g. `eth0:123456 ...', when the latter is wide enough.
    i = line.text.find(":")
    if i < 0:
        raise MalformedLine("missing `:'", lineno=line.lineno, line=line.text)
    name = line.text[:i].strip()
    counters = line.text[i + 1 :].split()
    if len(counters) < len(NET_DEV_COUNTER_FIELDS):
        raise MalformedLine(
            f"{name}: want {len(NET_DEV_COUNTER_FIELDS)} counters, got {len(counters)}",
            lineno=line.lineno,
            line=line.text,
        )
    return InterfaceStats(
        name=name,
        **{
            field: passthrough(parse_int(value, field, line))
            for field, value in zip(NET_DEV_COUNTER_FIELDS, counters)
        },
    )


def decode_net_dev(text: str) -> ProcNetDev:
    interface: List[InterfaceStats] = []
    for line in tokenize(text):
        # Skip the header lines:
        if line.lineno <= NET_DEV_HEADER_LINES or not line:
            continue
        interface.append(decode_interface_stats_line(line))
    return ProcNetDev(interface=tuple(interface))


def load_net_dev(procfs_root: str = DEFAULT_PROCFS_ROOT) -> ProcNetDev:
    return load_proc_file(os.path.join(procfs_root, "net", "dev"), decode_net_dev)
