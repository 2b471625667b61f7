#! /usr/bin/env python3

# unit normalization tests

import os

import pytest

from . import units
from .errors import InvalidTickRate


@pytest.fixture
def clean_clk_tck_cache():
    units.get_clk_tck.cache_clear()
    yield
    units.get_clk_tck.cache_clear()


@pytest.mark.parametrize(
    "raw_ticks, ticks_per_second, want",
    [
        (8570, 100, 85700),
        (101521, 100, 1015210),
        (0, 100, 0),
        (1, 3, 333),
        (2, 3, 666),
        (7, 250, 28),
        (5, 1000, 5),
        (1, 1024, 0),
        (2**64 - 1, 100, (2**64 - 1) * 10),
        # Rounding toward 0, not toward -inf:
        (-1, 3, -333),
        (-2, 3, -666),
        (-7, 250, -28),
    ],
)
def test_ticks_to_millis(raw_ticks, ticks_per_second, want):
    assert units.ticks_to_millis(raw_ticks, ticks_per_second) == want


@pytest.mark.parametrize("ticks_per_second", [0, -100, 1.5, "100", None, True])
def test_ticks_to_millis_invalid_tick_rate(ticks_per_second):
    with pytest.raises(InvalidTickRate) as exc_info:
        units.ticks_to_millis(100, ticks_per_second)
    assert exc_info.value.ticks_per_second == ticks_per_second
    assert isinstance(exc_info.value, ValueError)


def test_passthrough():
    assert units.passthrough(3997876) == 3997876


def test_sectors_to_bytes():
    assert units.sectors_to_bytes(0) == 0
    assert units.sectors_to_bytes(1645451) == 1645451 * 512


def test_get_clk_tck(monkeypatch, clean_clk_tck_cache):
    calls = []

    def sysconf(name):
        calls.append(name)
        return 250

    monkeypatch.setattr(os, "sysconf", sysconf)
    assert units.get_clk_tck() == 250
    assert units.get_clk_tck() == 250
    assert calls == ["SC_CLK_TCK"]


def test_get_clk_tck_fallback(monkeypatch, clean_clk_tck_cache):
    def sysconf(name):
        raise ValueError(f"unrecognized configuration name {name!r}")

    monkeypatch.setattr(os, "sysconf", sysconf)
    assert units.get_clk_tck() == units.DEFAULT_CLK_TCK


def test_get_clk_tck_invalid(monkeypatch, clean_clk_tck_cache):
    monkeypatch.setattr(os, "sysconf", lambda name: -1)
    assert units.get_clk_tck() == units.DEFAULT_CLK_TCK
