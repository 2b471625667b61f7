#! /usr/bin/env python3

# Decode procfs files and display them as JSON

import argparse
import json
import logging
import sys
from typing import Any, Callable, Dict, List, Optional

from .common import DEFAULT_PROCFS_ROOT, to_json_compat
from .diskstats import load_diskstats
from .errors import ProcfsError
from .loadavg import load_loadavg
from .meminfo import load_meminfo
from .net_dev import load_net_dev
from .pressure import load_pressure
from .schedstat import load_schedstat
from .stat import load_stat
from .units import get_clk_tck
from .vmstat import load_vmstat

log = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]

# selector -> fn(procfs_root, clk_tck):
load_fn_map: Dict[str, Callable[[str, int], Any]] = {
    "stat": lambda procfs_root, clk_tck: load_stat(procfs_root, clk_tck=clk_tck),
    "schedstat": lambda procfs_root, clk_tck: load_schedstat(
        procfs_root, clk_tck=clk_tck
    ),
    "meminfo": lambda procfs_root, clk_tck: load_meminfo(procfs_root),
    "diskstats": lambda procfs_root, clk_tck: load_diskstats(procfs_root),
    "net_dev": lambda procfs_root, clk_tck: load_net_dev(procfs_root),
    "loadavg": lambda procfs_root, clk_tck: load_loadavg(procfs_root),
    "pressure": lambda procfs_root, clk_tck: load_pressure(procfs_root),
    "vmstat": lambda procfs_root, clk_tck: load_vmstat(procfs_root),
}


def load_selected(
    selectors: List[str],
    procfs_root: str = DEFAULT_PROCFS_ROOT,
    clk_tck: Optional[int] = None,
) -> Dict[str, Any]:
    if clk_tck is None:
        clk_tck = get_clk_tck()
    return {
        selector: load_fn_map[selector](procfs_root, clk_tck)
        for selector in selectors
    }


def parse_selectors(select: Optional[str]) -> List[str]:
    if select is None:
        return list(load_fn_map)
    selectors = [s.strip() for s in select.split(",") if s.strip()]
    unknown = sorted(set(selectors) - set(load_fn_map))
    if unknown:
        raise ValueError(f"unknown selector(s) {unknown}, want from {sorted(load_fn_map)}")
    return selectors


def save_to_json_file(obj: Any, f_name: str):
    print(f"{f_name!r} ...", file=sys.stderr, end="")
    with open(f_name, "wt") as f:
        json.dump(obj, f, indent=2)
        f.write("\n")
    print(" done", file=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="procfs-decode",
        description="Decode procfs files and display them as JSON",
    )
    parser.add_argument("-r", "--procfs-root", default=DEFAULT_PROCFS_ROOT)
    parser.add_argument(
        "-s",
        "--select",
        help=f"""
    Selector, comma separated list from {sorted(load_fn_map)}, default all
    """,
    )
    parser.add_argument(
        "--clk-tck",
        type=int,
        help="Ticks per second, default from sysconf(SC_CLK_TCK)",
    )
    parser.add_argument("-o", "--output", help="JSON file, default stdout")
    parser.add_argument("--log-level", choices=LOG_LEVELS, default="WARNING")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    try:
        selectors = parse_selectors(args.select)
    except ValueError as err:
        parser.error(str(err))
    try:
        records = load_selected(
            selectors, procfs_root=args.procfs_root, clk_tck=args.clk_tck
        )
    except ProcfsError as err:
        log.error(err)
        return 1

    json_compat = {
        selector: to_json_compat(record) for selector, record in records.items()
    }
    if args.output:
        save_to_json_file(json_compat, args.output)
    else:
        json.dump(json_compat, sys.stdout, indent=2)
        sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
