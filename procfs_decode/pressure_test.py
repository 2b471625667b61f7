#! /usr/bin/env python3

# /proc/pressure decoding tests

import shutil

import pytest

from .errors import MalformedLine, NumericParseFailure, ProcfsReadError
from .pressure import (
    PressureLine,
    PressureStats,
    ProcPressure,
    decode_pressure,
    load_pressure,
)
from .procfs_common_test import TestdataProcfsRoot


def test_load_pressure():
    assert load_pressure(TestdataProcfsRoot) == ProcPressure(
        cpu=PressureStats(
            some=PressureLine(avg10=1.0, avg60=2.0, avg300=3.0, total=373300065),
            full=PressureLine(avg10=4.0, avg60=5.0, avg300=6.0, total=0),
        ),
        io=PressureStats(
            some=PressureLine(avg10=7.0, avg60=8.0, avg300=9.0, total=55345502),
            full=PressureLine(avg10=10.0, avg60=11.0, avg300=12.0, total=53895423),
        ),
        memory=PressureStats(
            some=PressureLine(avg10=13.0, avg60=14.0, avg300=15.0, total=5425111),
            full=PressureLine(avg10=16.0, avg60=17.0, avg300=18.0, total=5390695),
        ),
    )


def test_load_pressure_not_available(tmp_path):
    assert load_pressure(str(tmp_path)) is None


def test_load_pressure_missing_resource(tmp_path):
    shutil.copytree(f"{TestdataProcfsRoot}/pressure", tmp_path / "pressure")
    (tmp_path / "pressure" / "io").unlink()
    with pytest.raises(ProcfsReadError) as exc_info:
        load_pressure(str(tmp_path))
    assert exc_info.value.path == str(tmp_path / "pressure" / "io")


def test_some_only():
    # cpu pressure on pre 5.13 kernels:
    pressure_stats = decode_pressure(
        "some avg10=0.12 avg60=0.34 avg300=0.56 total=789\n"
    )
    assert pressure_stats == PressureStats(
        some=PressureLine(avg10=0.12, avg60=0.34, avg300=0.56, total=789)
    )
    assert pressure_stats.full is None


def test_keys_in_any_order():
    pressure_stats = decode_pressure(
        "some total=789 avg300=0.56 avg10=0.12 avg60=0.34\n"
    )
    assert pressure_stats.some == PressureLine(
        avg10=0.12, avg60=0.34, avg300=0.56, total=789
    )


@pytest.mark.parametrize(
    "text",
    [
        "",
        "full avg10=0.00 avg60=0.00 avg300=0.00 total=0\n",
        "some avg10=0.00 avg60=0.00 total=0\n",
        "some avg10 avg60=0.00 avg300=0.00 total=0\n",
    ],
)
def test_malformed(text):
    with pytest.raises(MalformedLine):
        decode_pressure(text)


@pytest.mark.parametrize(
    "text, field",
    [
        ("some avg10=x avg60=0.00 avg300=0.00 total=0\n", "some.avg10"),
        ("some avg10=0.00 avg60=0.00 avg300=0.00 total=1.5\n", "some.total"),
    ],
)
def test_invalid_number(text, field):
    with pytest.raises(NumericParseFailure) as exc_info:
        decode_pressure(text)
    assert exc_info.value.field == field
