# /usr/bin/env python3

# handle /proc/pressure/{cpu,io,memory}
# reference: https://docs.kernel.org/accounting/psi.html

import dataclasses
import logging
import os
from typing import Dict, Optional

from .common import (
    DEFAULT_PROCFS_ROOT,
    StructBase,
    load_proc_file,
    parse_float,
    parse_int,
)
from .errors import MalformedLine
from .tokenizer import TokenizedLine, tokenize

log = logging.getLogger(__name__)

PRESSURE_DIR = "pressure"
PRESSURE_RESOURCES = ("cpu", "io", "memory")
PRESSURE_KINDS = ("some", "full")


@dataclasses.dataclass(frozen=True)
class PressureLine(StructBase):
    # Share of time, in percent, over the last 10, 60 and 300 seconds:
    avg10: float = 0.0
    avg60: float = 0.0
    avg300: float = 0.0
    # Total stall time, in microseconds.
    total: int = 0


@dataclasses.dataclass(frozen=True)
class PressureStats(StructBase):
    # Some tasks were stalled.
    some: PressureLine = dataclasses.field(default_factory=PressureLine)
    # All non-idle tasks were stalled; cpu has it only since kernel 5.13.
    full: Optional[PressureLine] = None


@dataclasses.dataclass(frozen=True)
class ProcPressure(StructBase):
    cpu: PressureStats = dataclasses.field(default_factory=PressureStats)
    io: PressureStats = dataclasses.field(default_factory=PressureStats)
    memory: PressureStats = dataclasses.field(default_factory=PressureStats)


def decode_pressure_line(line: TokenizedLine) -> PressureLine:
    items = {}
    for token in line.tokens[1:]:
        key, sep, value = token.partition("=")
        if not sep:
            raise MalformedLine(
                f"{token!r}: want `key=value'", lineno=line.lineno, line=line.text
            )
        items[key] = value
    values = {}
    for field in dataclasses.fields(PressureLine):
        value = items.get(field.name)
        if value is None:
            raise MalformedLine(
                f"{line.label}: missing {field.name}",
                lineno=line.lineno,
                line=line.text,
            )
        parse_fn = parse_int if field.type is int else parse_float
        values[field.name] = parse_fn(value, f"{line.label}.{field.name}", line)
    return PressureLine(**values)


def decode_pressure(text: str) -> PressureStats:
    kinds: Dict[str, PressureLine] = {}
    for line in tokenize(text):
        if not line:
            continue
        if line.label in PRESSURE_KINDS:
            kinds[line.label] = decode_pressure_line(line)
        else:
            log.debug(f"pressure:{line.lineno}: {line.label}: ignored")
    if "some" not in kinds:
        raise MalformedLine("missing `some' line")
    return PressureStats(**kinds)


def load_pressure(procfs_root: str = DEFAULT_PROCFS_ROOT) -> Optional[ProcPressure]:
    pressure_dir = os.path.join(procfs_root, PRESSURE_DIR)
    if not os.path.isdir(pressure_dir):
        # Kernel w/o CONFIG_PSI or booted w/ psi=0:
        log.info(f"{pressure_dir}: not available")
        return None
    return ProcPressure(
        **{
            resource: load_proc_file(
                os.path.join(pressure_dir, resource), decode_pressure
            )
            for resource in PRESSURE_RESOURCES
        }
    )
