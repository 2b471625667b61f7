# /usr/bin/env python3

#  https://github.com/prometheus/procfs like module

import dataclasses
import os
import re
from typing import Any, Callable, List, Optional, TypeVar

from .errors import DecodeError, NumericParseFailure, ProcfsReadError
from .tokenizer import TokenizedLine

DEFAULT_PROCFS_ROOT = os.environ.get("PROCFS_DECODE_ROOT", "/proc")

# Kernel counters are printed as unsigned ASCII decimals, averages w/ a
# fractional part:
UNSIGNED_INT_RE = re.compile(r"[0-9]+")
UNSIGNED_DECIMAL_RE = re.compile(r"[0-9]+(\.[0-9]+)?")

StructBaseVal = Any

T = TypeVar("T")


def to_json_compat(obj: Any, ignore_none: bool = False) -> Any:
    if hasattr(obj, "field_list"):
        return {
            field: to_json_compat(getattr(obj, field), ignore_none=ignore_none)
            for field in obj.field_list()
            if getattr(obj, field) is not None or not ignore_none
        }
    if isinstance(obj, (list, tuple)):
        return list(to_json_compat(o, ignore_none=ignore_none) for o in obj)
    if isinstance(obj, dict):
        return {
            str(k): to_json_compat(v, ignore_none=ignore_none)
            for k, v in obj.items()
            if v is not None or not ignore_none
        }
    return obj


@dataclasses.dataclass(frozen=True)
class StructBase:
    def field_list(self) -> List[str]:
        return [
            field for field in self.__dataclass_fields__ if not field.startswith("_")
        ]

    def get_field(self, field: str) -> StructBaseVal:
        return getattr(self, field)

    def to_json_compat(self, ignore_none: bool = False):
        return to_json_compat(self, ignore_none=ignore_none)


def numeric_parse_failure(
    field: str, token: str, line: Optional[TokenizedLine] = None
) -> NumericParseFailure:
    return NumericParseFailure(
        field,
        token,
        lineno=line.lineno if line is not None else None,
        line=line.text if line is not None else None,
    )


def parse_int(token: str, field: str, line: Optional[TokenizedLine] = None) -> int:
    # int() would also take signs, `_' separators and non ASCII digits:
    if UNSIGNED_INT_RE.fullmatch(token) is None:
        raise numeric_parse_failure(field, token, line)
    return int(token)


def parse_float(token: str, field: str, line: Optional[TokenizedLine] = None) -> float:
    if UNSIGNED_DECIMAL_RE.fullmatch(token) is None:
        raise numeric_parse_failure(field, token, line)
    return float(token)


def parse_label_index(label: str, prefix: str, line: TokenizedLine) -> int:
    # cpu7 -> 7, domain0 -> 0
    return parse_int(label[len(prefix) :], f"{prefix} index", line)


def read_proc_file(path: str) -> str:
    try:
        with open(path, "rt") as f:
            return f.read()
    except OSError as err:
        raise ProcfsReadError(path, err) from err


def load_proc_file(path: str, decode_fn: Callable[[str], T]) -> T:
    text = read_proc_file(path)
    try:
        return decode_fn(text)
    except DecodeError as err:
        err.path = path
        raise
