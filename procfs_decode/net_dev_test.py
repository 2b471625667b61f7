#! /usr/bin/env python3

# /proc/net/dev decoding tests

import pytest

from .errors import MalformedLine, NumericParseFailure
from .net_dev import (
    NET_DEV_COUNTER_FIELDS,
    InterfaceStats,
    ProcNetDev,
    decode_net_dev,
    load_net_dev,
)
from .procfs_common_test import TestdataProcfsRoot

NET_DEV_HEADER = (
    "Inter-|   Receive                                                |  Transmit\n"
    " face |bytes    packets errs drop fifo frame compressed multicast"
    "|bytes    packets errs drop fifo colls carrier compressed\n"
)

ETH0_STATS = InterfaceStats(
    name="eth0",
    receive_bytes=151013652,
    receive_packets=16736,
    transmit_bytes=816228,
    transmit_packets=12257,
)


def test_counter_fields():
    assert len(NET_DEV_COUNTER_FIELDS) == 16


def test_load_net_dev():
    proc_net_dev = load_net_dev(TestdataProcfsRoot)
    assert proc_net_dev == ProcNetDev(
        interface=(InterfaceStats(name="lo"), ETH0_STATS)
    )


def test_get():
    proc_net_dev = load_net_dev(TestdataProcfsRoot)
    assert proc_net_dev.get("eth0") == ETH0_STATS
    assert proc_net_dev.get("wlan0") is None


def test_name_glued_to_counter():
    proc_net_dev = decode_net_dev(
        NET_DEV_HEADER
        + "  eth0:151013652   16736    0    0    0     0          0         0"
        + "   816228   12257    0    0    0     0       0          0\n"
    )
    assert proc_net_dev.interface == (ETH0_STATS,)


def test_all_counters_in_order():
    counters = " ".join(str(i) for i in range(1, 17))
    proc_net_dev = decode_net_dev(NET_DEV_HEADER + f"enp0s3: {counters}\n")
    interface_stats = proc_net_dev.get("enp0s3")
    for i, field in enumerate(NET_DEV_COUNTER_FIELDS, start=1):
        assert getattr(interface_stats, field) == i, field


def test_headers_only():
    assert decode_net_dev(NET_DEV_HEADER) == ProcNetDev()


def test_missing_colon():
    with pytest.raises(MalformedLine) as exc_info:
        decode_net_dev(NET_DEV_HEADER + "eth0 1 2 3 4 5 6 7 8 9 10 11 12 13 14 15 16\n")
    assert exc_info.value.lineno == 3


def test_too_few_counters():
    with pytest.raises(MalformedLine) as exc_info:
        decode_net_dev(NET_DEV_HEADER + "eth0: 1 2 3 4 5 6 7 8\n")
    assert exc_info.value.lineno == 3


def test_invalid_counter():
    counters = " ".join(["0"] * 15)
    with pytest.raises(NumericParseFailure) as exc_info:
        decode_net_dev(NET_DEV_HEADER + f"eth0: {counters} n/a\n")
    assert exc_info.value.field == "transmit_compressed"
