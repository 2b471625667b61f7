# /usr/bin/env python3

#  https://github.com/prometheus/procfs like module, decoding the system wide
#  /proc files into typed, unit normalized records.

from typing import Union

from .common import DEFAULT_PROCFS_ROOT, StructBase, to_json_compat
from .diskstats import DiskStats, ProcDiskStats, decode_diskstats, load_diskstats
from .errors import (
    DecodeError,
    InvalidTickRate,
    MalformedLine,
    NumericParseFailure,
    ProcfsError,
    ProcfsReadError,
    UnsupportedVersion,
)
from .loadavg import ProcLoadavg, decode_loadavg, load_loadavg
from .meminfo import ProcMemInfo, decode_meminfo, load_meminfo
from .net_dev import InterfaceStats, ProcNetDev, decode_net_dev, load_net_dev
from .pressure import (
    PressureLine,
    PressureStats,
    ProcPressure,
    decode_pressure,
    load_pressure,
)
from .schedstat import ProcSchedStat, decode_schedstat, load_schedstat
from .stat import CpuStat, ProcStat, decode_stat, load_stat
from .tokenizer import TokenizedLine, TokenizedText, tokenize
from .units import (
    DEFAULT_CLK_TCK,
    SECTOR_SIZE,
    get_clk_tck,
    passthrough,
    sectors_to_bytes,
    ticks_to_millis,
)
from .vmstat import ProcVmStat, decode_vmstat, load_vmstat

ProcfsStructType = Union[
    ProcStat,
    ProcSchedStat,
    ProcMemInfo,
    ProcDiskStats,
    ProcNetDev,
    ProcLoadavg,
    ProcPressure,
    ProcVmStat,
]
