# /usr/bin/env python3

# handle /proc/diskstats
# reference: https://www.kernel.org/doc/Documentation/ABI/testing/procfs-diskstats

import dataclasses
import os
from typing import List, Optional, Tuple

from .common import DEFAULT_PROCFS_ROOT, StructBase, load_proc_file, parse_int
from .errors import MalformedLine
from .tokenizer import TokenizedLine, tokenize
from .units import passthrough

# major, minor, name:
DISKSTATS_IDENTITY_FIELDS = 3


@dataclasses.dataclass(frozen=True)
class DiskStats(StructBase):
    block_major: int = 0
    block_minor: int = 0
    device_name: str = ""
    # Sector counts are in 512 byte units, times in milliseconds, both as
    # reported by the kernel:
    reads_completed_success: int = 0
    reads_merged: int = 0
    reads_sectors: int = 0
    reads_time_spent_ms: int = 0
    writes_completed_success: int = 0
    writes_merged: int = 0
    writes_sectors: int = 0
    writes_time_spent_ms: int = 0
    ios_in_progress: int = 0
    ios_time_spent_ms: int = 0
    ios_weighted_time_spent_ms: int = 0
    # Kernel 4.18+:
    discards_completed_success: int = 0
    discards_merged: int = 0
    discards_sectors: int = 0
    discards_time_spent_ms: int = 0
    # Kernel 5.5+:
    flush_requests_completed_success: int = 0
    flush_requests_time_spent_ms: int = 0


# Counters in kernel order, following the identity fields:
DISKSTATS_COUNTER_FIELDS = tuple(
    field.name for field in dataclasses.fields(DiskStats)
)[DISKSTATS_IDENTITY_FIELDS:]


@dataclasses.dataclass(frozen=True)
class ProcDiskStats(StructBase):
    # In file order.
    disk_stats: Tuple[DiskStats, ...] = ()

    def get(self, device_name: str) -> Optional[DiskStats]:
        for disk_stats in self.disk_stats:
            if disk_stats.device_name == device_name:
                return disk_stats
        return None


def decode_disk_stats_line(line: TokenizedLine) -> DiskStats:
    if len(line) < DISKSTATS_IDENTITY_FIELDS:
        raise MalformedLine(
            f"want at least {DISKSTATS_IDENTITY_FIELDS} fields, got {len(line)}",
            lineno=line.lineno,
            line=line.text,
        )
    major, minor, name = line.tokens[:DISKSTATS_IDENTITY_FIELDS]
    # Missing trailing counters, i.e. older kernels, default to 0, extra ones
    # from newer kernels are ignored:
    counters = {
        field: passthrough(parse_int(value, field, line))
        for field, value in zip(
            DISKSTATS_COUNTER_FIELDS, line.tokens[DISKSTATS_IDENTITY_FIELDS:]
        )
    }
    return DiskStats(
        block_major=parse_int(major, "block_major", line),
        block_minor=parse_int(minor, "block_minor", line),
        device_name=name,
        **counters,
    )


def decode_diskstats(text: str) -> ProcDiskStats:
    disk_stats: List[DiskStats] = []
    for line in tokenize(text):
        if line:
            disk_stats.append(decode_disk_stats_line(line))
    return ProcDiskStats(disk_stats=tuple(disk_stats))


def load_diskstats(procfs_root: str = DEFAULT_PROCFS_ROOT) -> ProcDiskStats:
    return load_proc_file(os.path.join(procfs_root, "diskstats"), decode_diskstats)
