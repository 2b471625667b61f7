# /usr/bin/env python3

# unit normalization for procfs counters

import functools
import logging
import os

from .errors import InvalidTickRate

log = logging.getLogger(__name__)

# CLK_TCK is set by CONFIG_HZ and it is 100 on most distributions:
DEFAULT_CLK_TCK = 100

MILLIS_PER_SECOND = 1000

# Block layer sector size, independent of the device's physical sector size:
SECTOR_SIZE = 512


def check_tick_rate(ticks_per_second: int) -> int:
    if (
        not isinstance(ticks_per_second, int)
        or isinstance(ticks_per_second, bool)
        or ticks_per_second <= 0
    ):
        raise InvalidTickRate(ticks_per_second)
    return ticks_per_second


def ticks_to_millis(raw_ticks: int, ticks_per_second: int) -> int:
    check_tick_rate(ticks_per_second)
    # Truncating division, i.e. rounding toward 0 also for negative input;
    # sub millisecond remainders are below the tick granularity anyway.
    millis = abs(raw_ticks) * MILLIS_PER_SECOND // ticks_per_second
    return -millis if raw_ticks < 0 else millis


def passthrough(raw: int) -> int:
    return raw


def sectors_to_bytes(sectors: int) -> int:
    return sectors * SECTOR_SIZE


@functools.lru_cache(maxsize=None)
def get_clk_tck() -> int:
    """Ticks per second for the clock tick based counters, queried once per process."""
    try:
        clk_tck = os.sysconf("SC_CLK_TCK")
    except (AttributeError, ValueError, OSError) as err:
        log.warning(f"SC_CLK_TCK unavailable ({err}), using {DEFAULT_CLK_TCK}")
        return DEFAULT_CLK_TCK
    if clk_tck <= 0:
        log.warning(f"SC_CLK_TCK={clk_tck} invalid, using {DEFAULT_CLK_TCK}")
        return DEFAULT_CLK_TCK
    return clk_tck
