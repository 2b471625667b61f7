# /usr/bin/env python3

# handle /proc/schedstat
# reference: https://www.kernel.org/doc/Documentation/scheduler/sched-stats.txt
#
# The cpu and domain lines are returned as vectors, w/ the line label index
# prepended:
#
#   cpu<N> f0 f1 ... f8        -> [N, f0, f1, ..., f8]
#   domain<N> cpumask f0 f1 .. -> [N, cpumask, f0, f1, ...]
#
# so that the kernel field number has to be shifted by CPU_INDEX_SHIFT,
# respectively DOMAIN_INDEX_SHIFT, to locate the statistic in the vector.

import dataclasses
import logging
import os
import re
from typing import List, Optional, Tuple

from .common import (
    DEFAULT_PROCFS_ROOT,
    UNSIGNED_INT_RE,
    StructBase,
    load_proc_file,
    numeric_parse_failure,
    parse_int,
    parse_label_index,
)
from .errors import MalformedLine, UnsupportedVersion
from .tokenizer import TokenizedLine, tokenize
from .units import check_tick_rate, get_clk_tck, passthrough, ticks_to_millis

log = logging.getLogger(__name__)

# The only field layout known to this decoder:
SCHEDSTAT_VERSION = 15

CPU_LABEL_PREFIX = "cpu"
DOMAIN_LABEL_PREFIX = "domain"

# Vector index = kernel field number + shift:
CPU_INDEX_SHIFT = 1
DOMAIN_INDEX_SHIFT = 2

# Kernel fields on the cpu line, w/o the label:
SCHEDSTAT_CPU_FIELDS = 9
# Time spent running, respectively waiting to run, by tasks on this processor,
# converted to milliseconds:
CPU_RUNNING_TIME_FIELD = 7
CPU_WAITING_TIME_FIELD = 8
CPU_MILLIS_FIELDS = (CPU_RUNNING_TIME_FIELD, CPU_WAITING_TIME_FIELD)
CPU_MILLIS_INDEXES = frozenset(f + CPU_INDEX_SHIFT for f in CPU_MILLIS_FIELDS)

# Index of the cpumask in the domain vector:
DOMAIN_CPUMASK_INDEX = 1
CPUMASK_HEX_RE = re.compile(r"[0-9a-fA-F]+(,[0-9a-fA-F]+)*")

SchedStatVector = Tuple[int, ...]


@dataclasses.dataclass(frozen=True)
class ProcSchedStat(StructBase):
    version: int = 0
    # Jiffies at the time of the snapshot.
    timestamp: int = 0
    # Per-CPU vectors: [cpu#, kernel fields...]
    cpu: Tuple[SchedStatVector, ...] = ()
    # Per-domain vectors: [domain#, cpumask, kernel fields...]; the number of
    # fields depends on the kernel.
    domain: Tuple[SchedStatVector, ...] = ()


def parse_cpumask(token: str, line: TokenizedLine) -> int:
    if UNSIGNED_INT_RE.fullmatch(token) is not None:
        return int(token)
    # Masks wider than 32 CPUs are printed as comma separated groups:
    if CPUMASK_HEX_RE.fullmatch(token) is None:
        raise numeric_parse_failure("cpumask", token, line)
    return int(token.replace(",", ""), 16)


def decode_header_line(
    line: Optional[TokenizedLine], label: str
) -> Tuple[int, TokenizedLine]:
    if line is None:
        raise MalformedLine(f"missing {label} line")
    if line.label != label or len(line) < 2:
        raise MalformedLine(
            f"want `{label} <N>', got {line.text!r}",
            lineno=line.lineno,
            line=line.text,
        )
    return parse_int(line.tokens[1], label, line), line


def decode_cpu_vector(line: TokenizedLine, ticks_per_second: int) -> SchedStatVector:
    values = line.tokens[1:]
    if len(values) < SCHEDSTAT_CPU_FIELDS:
        raise MalformedLine(
            f"{line.label}: want at least {SCHEDSTAT_CPU_FIELDS} fields, got {len(values)}",
            lineno=line.lineno,
            line=line.text,
        )
    vector = [parse_label_index(line.label, CPU_LABEL_PREFIX, line)]
    for index, value in enumerate(values, start=CPU_INDEX_SHIFT):
        counter = parse_int(value, f"{line.label}[{index}]", line)
        if index in CPU_MILLIS_INDEXES:
            vector.append(ticks_to_millis(counter, ticks_per_second))
        else:
            vector.append(passthrough(counter))
    return tuple(vector)


def decode_domain_vector(line: TokenizedLine) -> SchedStatVector:
    if len(line) < DOMAIN_CPUMASK_INDEX + 1:
        raise MalformedLine(
            f"{line.label}: missing cpumask", lineno=line.lineno, line=line.text
        )
    vector = [
        parse_label_index(line.label, DOMAIN_LABEL_PREFIX, line),
        parse_cpumask(line.tokens[DOMAIN_CPUMASK_INDEX], line),
    ]
    vector.extend(
        passthrough(parse_int(value, f"{line.label}[{index}]", line))
        for index, value in enumerate(
            line.tokens[DOMAIN_CPUMASK_INDEX + 1 :], start=DOMAIN_INDEX_SHIFT
        )
    )
    return tuple(vector)


def decode_schedstat(text: str, ticks_per_second: int) -> ProcSchedStat:
    check_tick_rate(ticks_per_second)
    lines = (line for line in tokenize(text) if line)
    version, line = decode_header_line(next(lines, None), "version")
    if version != SCHEDSTAT_VERSION:
        raise UnsupportedVersion(version, lineno=line.lineno, line=line.text)
    timestamp, _ = decode_header_line(next(lines, None), "timestamp")
    cpu: List[SchedStatVector] = []
    domain: List[SchedStatVector] = []
    for line in lines:
        label = line.label
        if label.startswith(CPU_LABEL_PREFIX):
            cpu.append(decode_cpu_vector(line, ticks_per_second))
        elif label.startswith(DOMAIN_LABEL_PREFIX):
            domain.append(decode_domain_vector(line))
        else:
            log.debug(f"schedstat:{line.lineno}: {label}: ignored")
    return ProcSchedStat(
        version=version,
        timestamp=timestamp,
        cpu=tuple(cpu),
        domain=tuple(domain),
    )


def load_schedstat(
    procfs_root: str = DEFAULT_PROCFS_ROOT,
    clk_tck: Optional[int] = None,
) -> ProcSchedStat:
    if clk_tck is None:
        clk_tck = get_clk_tck()
    return load_proc_file(
        os.path.join(procfs_root, "schedstat"),
        lambda text: decode_schedstat(text, clk_tck),
    )
