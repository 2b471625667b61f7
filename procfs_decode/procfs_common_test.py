#! /usr/bin/env python3

# test support: location of the procfs fixture tree and the tick rate it was
# captured with

import os

py_pkg_dir = os.path.normpath(os.path.abspath(os.path.dirname(__file__)))

PROCFS_DECODE_TOP_DIR = os.path.dirname(py_pkg_dir)
TestdataProcfsRoot = os.path.join(PROCFS_DECODE_TOP_DIR, "testdata/proc")
TestClktck = 100
