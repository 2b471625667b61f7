# /usr/bin/env python3

# handle /proc/stat
# reference: https://www.kernel.org/doc/Documentation/filesystems/proc.txt

import dataclasses
import logging
import os
import re
from typing import Dict, List, Optional, Tuple

from .common import (
    DEFAULT_PROCFS_ROOT,
    StructBase,
    load_proc_file,
    parse_int,
)
from .errors import MalformedLine
from .tokenizer import TokenizedLine, tokenize
from .units import check_tick_rate, get_clk_tck, passthrough, ticks_to_millis

log = logging.getLogger(__name__)

CPU_TOTAL_NAME = "cpu"
CPU_INDIVIDUAL_RE = re.compile(r"cpu\d+$")

# Kernel order for the cpu lines:
CPU_STAT_FIELDS = (
    "user",
    "nice",
    "system",
    "idle",
    "iowait",
    "irq",
    "softirq",
    "steal",
    "guest",
    "guest_nice",
)
# user, nice, system and idle are present on every kernel, the rest was added
# over time (iowait, irq, softirq: 2.6.0, steal: 2.6.11, guest: 2.6.24,
# guest_nice: 2.6.33) and defaults to 0:
CPU_STAT_MIN_FIELDS = 4

# Single value lines, label -> ProcStat field:
STAT_SCALAR_LABEL_TO_FIELD_MAP = {
    "ctxt": "context_switches",
    "btime": "boot_time",
    "processes": "processes",
    "procs_running": "processes_running",
    "procs_blocked": "processes_blocked",
}

# Vector lines, label -> ProcStat field:
STAT_VECTOR_LABEL_TO_FIELD_MAP = {
    "intr": "interrupts",
    "softirq": "softirq",
}

# softirq line layout after the total:
SOFTIRQ_CATEGORIES = (
    "hi",
    "timer",
    "net_tx",
    "net_rx",
    "block",
    "irq_poll",
    "tasklet",
    "sched",
    "hrtimer",
    "rcu",
)


@dataclasses.dataclass(frozen=True)
class CpuStat(StructBase):
    # cpu for the summed up line, cpuN for individual cpus.
    name: str = CPU_TOTAL_NAME
    # Times in milliseconds:
    user: int = 0
    # user time, reniced.
    nice: int = 0
    system: int = 0
    idle: int = 0
    # idle time attributed to waiting for I/O.
    iowait: int = 0
    irq: int = 0
    softirq: int = 0
    # Involuntary wait time, i.e. time stolen by the hypervisor.
    steal: int = 0
    guest: int = 0
    guest_nice: int = 0


@dataclasses.dataclass(frozen=True)
class ProcStat(StructBase):
    # Summed up cpu statistics.
    cpu_total: CpuStat = dataclasses.field(default_factory=CpuStat)
    # Per-CPU statistics, in file order.
    cpu_individual: Tuple[CpuStat, ...] = ()
    # intr line: the total followed by the counts for each numbered IRQ; the
    # length depends on the architecture and kernel.
    interrupts: Tuple[int, ...] = ()
    # Number of times a context switch happened.
    context_switches: int = 0
    # Boot time in seconds since the Epoch.
    boot_time: int = 0
    # Number of times a process was created.
    processes: int = 0
    # Number of processes currently running.
    processes_running: int = 0
    # Number of processes currently blocked (waiting for IO).
    processes_blocked: int = 0
    # softirq line: the total followed by SOFTIRQ_CATEGORIES.
    softirq: Tuple[int, ...] = ()

    def cpu(self, name: str) -> Optional[CpuStat]:
        if name == self.cpu_total.name:
            return self.cpu_total
        for cpu_stat in self.cpu_individual:
            if cpu_stat.name == name:
                return cpu_stat
        return None

    def softirq_categories(self) -> Dict[str, int]:
        return dict(zip(SOFTIRQ_CATEGORIES, self.softirq[1:]))


def decode_cpu_stat(line: TokenizedLine, ticks_per_second: int) -> CpuStat:
    values = line.tokens[1 : len(CPU_STAT_FIELDS) + 1]
    if len(values) < CPU_STAT_MIN_FIELDS:
        raise MalformedLine(
            f"{line.label}: want at least {CPU_STAT_MIN_FIELDS} fields, got {len(values)}",
            lineno=line.lineno,
            line=line.text,
        )
    return CpuStat(
        line.label,
        *(
            ticks_to_millis(parse_int(value, field, line), ticks_per_second)
            for field, value in zip(CPU_STAT_FIELDS, values)
        ),
    )


def decode_stat(text: str, ticks_per_second: int) -> ProcStat:
    check_tick_rate(ticks_per_second)
    cpu_total = None
    cpu_individual: List[CpuStat] = []
    fields = {}
    for line in tokenize(text):
        if not line:
            continue
        label = line.label
        if label == CPU_TOTAL_NAME:
            cpu_total = decode_cpu_stat(line, ticks_per_second)
        elif CPU_INDIVIDUAL_RE.match(label):
            cpu_individual.append(decode_cpu_stat(line, ticks_per_second))
        elif label in STAT_SCALAR_LABEL_TO_FIELD_MAP:
            if len(line) < 2:
                raise MalformedLine(
                    f"{label}: missing value", lineno=line.lineno, line=line.text
                )
            field = STAT_SCALAR_LABEL_TO_FIELD_MAP[label]
            fields[field] = passthrough(parse_int(line.tokens[1], field, line))
        elif label in STAT_VECTOR_LABEL_TO_FIELD_MAP:
            if len(line) < 2:
                raise MalformedLine(
                    f"{label}: missing total", lineno=line.lineno, line=line.text
                )
            field = STAT_VECTOR_LABEL_TO_FIELD_MAP[label]
            fields[field] = tuple(
                passthrough(parse_int(value, field, line)) for value in line.tokens[1:]
            )
        else:
            log.debug(f"stat:{line.lineno}: {label}: ignored")
    if cpu_total is None:
        cpu_total = CpuStat()
    return ProcStat(
        cpu_total=cpu_total, cpu_individual=tuple(cpu_individual), **fields
    )


def load_stat(
    procfs_root: str = DEFAULT_PROCFS_ROOT,
    clk_tck: Optional[int] = None,
) -> ProcStat:
    if clk_tck is None:
        clk_tck = get_clk_tck()
    return load_proc_file(
        os.path.join(procfs_root, "stat"),
        lambda text: decode_stat(text, clk_tck),
    )
