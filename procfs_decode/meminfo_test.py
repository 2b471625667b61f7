#! /usr/bin/env python3

# /proc/meminfo decoding tests

import dataclasses
import os

import pytest

from .errors import MalformedLine, NumericParseFailure
from .meminfo import MEMINFO_KEY_TO_FIELD_MAP, ProcMemInfo, decode_meminfo, load_meminfo
from .procfs_common_test import TestdataProcfsRoot


def read_testdata_meminfo() -> str:
    with open(os.path.join(TestdataProcfsRoot, "meminfo"), "rt") as f:
        return f.read()


def test_load_meminfo():
    proc_meminfo = load_meminfo(TestdataProcfsRoot)
    assert proc_meminfo.memtotal == 3997876
    assert proc_meminfo.memfree == 2415136
    assert proc_meminfo.memavailable == 3654096
    assert proc_meminfo.buffers == 37492
    assert proc_meminfo.active_anon == 86968
    assert proc_meminfo.inactive_file == 544236
    assert proc_meminfo.committed_as == 944240
    assert proc_meminfo.vmalloctotal == 133141626880
    assert proc_meminfo.cmafree == 31232
    assert proc_meminfo.hugepages_total == 0
    assert proc_meminfo.hugepagesize == 2048
    # Not in the file:
    assert proc_meminfo.directmap4k == 0


def test_field_values_match_file():
    proc_meminfo = decode_meminfo(read_testdata_meminfo())
    for line in read_testdata_meminfo().splitlines():
        words = line.split()
        field = MEMINFO_KEY_TO_FIELD_MAP[words[0][:-1]]
        assert getattr(proc_meminfo, field) == int(words[1]), field


def test_missing_key_is_zero():
    text = read_testdata_meminfo()
    full = decode_meminfo(text)
    partial = decode_meminfo(
        "".join(
            line
            for line in text.splitlines(keepends=True)
            if not line.startswith("Buffers:")
        )
    )
    assert partial == dataclasses.replace(full, buffers=0)


def test_unknown_keys_are_ignored():
    proc_meminfo = decode_meminfo(
        "MemTotal: 100 kB\nNewKernelCounter: 42 kB\nUnaccepted: 0 kB\nMemFree: 50 kB\n"
    )
    assert proc_meminfo == ProcMemInfo(memtotal=100, memfree=50)


def test_direct_map():
    proc_meminfo = decode_meminfo(
        "DirectMap4k:      100288 kB\nDirectMap2M:     4093952 kB\nDirectMap1G:     2097152 kB\n"
    )
    assert proc_meminfo == ProcMemInfo(
        directmap4k=100288, directmap2m=4093952, directmap1g=2097152
    )


def test_value_without_unit():
    assert decode_meminfo("HugePages_Free:  7\n").hugepages_free == 7


def test_empty():
    assert decode_meminfo("") == ProcMemInfo()


def test_missing_value():
    with pytest.raises(MalformedLine) as exc_info:
        decode_meminfo("MemTotal: 100 kB\nMemFree:\n")
    assert exc_info.value.lineno == 2


def test_missing_colon():
    with pytest.raises(MalformedLine) as exc_info:
        decode_meminfo("MemTotal 100 kB\n")
    assert exc_info.value.lineno == 1


def test_invalid_number():
    with pytest.raises(NumericParseFailure) as exc_info:
        decode_meminfo("MemTotal: 100 kB\nMemFree: 5O kB\n")
    err = exc_info.value
    assert err.field == "MemFree"
    assert err.token == "5O"
    assert err.lineno == 2


def test_field_map_covers_fields():
    field_names = {field.name for field in dataclasses.fields(ProcMemInfo)}
    assert set(MEMINFO_KEY_TO_FIELD_MAP.values()) == field_names


@pytest.mark.parametrize("token", ["1_6", "+16", "-16", "١٦", "16.0"])
def test_rejects_non_decimal_values(token):
    with pytest.raises(NumericParseFailure) as exc_info:
        decode_meminfo(f"MemTotal: {token} kB\n")
    assert exc_info.value.field == "MemTotal"
    assert exc_info.value.token == token
