# /usr/bin/env python3

# handle /proc/loadavg
# reference: https://man7.org/linux/man-pages/man5/proc_loadavg.5.html

import dataclasses
import os

from .common import (
    DEFAULT_PROCFS_ROOT,
    StructBase,
    load_proc_file,
    parse_float,
    parse_int,
)
from .errors import MalformedLine
from .tokenizer import tokenize

LOADAVG_FIELDS = 5


@dataclasses.dataclass(frozen=True)
class ProcLoadavg(StructBase):
    # Load averages over 1, 5 and 15 minutes.
    load_1: float = 0.0
    load_5: float = 0.0
    load_15: float = 0.0
    # Number of currently runnable scheduling entities.
    current_runnable: int = 0
    # Number of scheduling entities that currently exist.
    total: int = 0
    # PID of the most recently created process.
    last_pid: int = 0


def decode_loadavg(text: str) -> ProcLoadavg:
    line = next((line for line in tokenize(text) if line), None)
    if line is None:
        raise MalformedLine("empty loadavg")
    if len(line) < LOADAVG_FIELDS:
        raise MalformedLine(
            f"want {LOADAVG_FIELDS} fields, got {len(line)}",
            lineno=line.lineno,
            line=line.text,
        )
    load_1, load_5, load_15, entities, last_pid = line.tokens[:LOADAVG_FIELDS]
    current_runnable, sep, total = entities.partition("/")
    if not sep:
        raise MalformedLine(
            f"{entities!r}: want `<runnable>/<total>'",
            lineno=line.lineno,
            line=line.text,
        )
    return ProcLoadavg(
        load_1=parse_float(load_1, "load_1", line),
        load_5=parse_float(load_5, "load_5", line),
        load_15=parse_float(load_15, "load_15", line),
        current_runnable=parse_int(current_runnable, "current_runnable", line),
        total=parse_int(total, "total", line),
        last_pid=parse_int(last_pid, "last_pid", line),
    )


def load_loadavg(procfs_root: str = DEFAULT_PROCFS_ROOT) -> ProcLoadavg:
    return load_proc_file(os.path.join(procfs_root, "loadavg"), decode_loadavg)
