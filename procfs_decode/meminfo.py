# /usr/bin/env python3

# handle /proc/meminfo
# reference: https://www.kernel.org/doc/Documentation/filesystems/proc.txt

import dataclasses
import logging
import os

from .common import DEFAULT_PROCFS_ROOT, StructBase, load_proc_file, parse_int
from .errors import MalformedLine
from .tokenizer import tokenize
from .units import passthrough

log = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class ProcMemInfo(StructBase):
    # All values in kB, as found in the file, except for the HugePages_* counts.
    # Keys not present in the kernel's meminfo are left 0.
    memtotal: int = 0
    memfree: int = 0
    memavailable: int = 0
    buffers: int = 0
    cached: int = 0
    swapcached: int = 0
    active: int = 0
    inactive: int = 0
    active_anon: int = 0
    inactive_anon: int = 0
    active_file: int = 0
    inactive_file: int = 0
    unevictable: int = 0
    mlocked: int = 0
    swaptotal: int = 0
    swapfree: int = 0
    zswap: int = 0
    zswapped: int = 0
    dirty: int = 0
    writeback: int = 0
    anonpages: int = 0
    mapped: int = 0
    shmem: int = 0
    kreclaimable: int = 0
    slab: int = 0
    sreclaimable: int = 0
    sunreclaim: int = 0
    kernelstack: int = 0
    shadowcallstack: int = 0
    pagetables: int = 0
    secpagetables: int = 0
    nfs_unstable: int = 0
    bounce: int = 0
    writebacktmp: int = 0
    commitlimit: int = 0
    committed_as: int = 0
    vmalloctotal: int = 0
    vmallocused: int = 0
    vmallocchunk: int = 0
    percpu: int = 0
    hardwarecorrupted: int = 0
    anonhugepages: int = 0
    shmemhugepages: int = 0
    shmempmdmapped: int = 0
    filehugepages: int = 0
    filepmdmapped: int = 0
    cmatotal: int = 0
    cmafree: int = 0
    hugepages_total: int = 0
    hugepages_free: int = 0
    hugepages_rsvd: int = 0
    hugepages_surp: int = 0
    hugepagesize: int = 0
    hugetlb: int = 0
    # x86 only:
    directmap4k: int = 0
    directmap2m: int = 0
    directmap1g: int = 0


MEMINFO_KEY_TO_FIELD_MAP = {
    # key: key in /proc/meminfo, w/o the trailing `:'
    # value: field in ProcMemInfo
    "MemTotal": "memtotal",
    "MemFree": "memfree",
    "MemAvailable": "memavailable",
    "Buffers": "buffers",
    "Cached": "cached",
    "SwapCached": "swapcached",
    "Active": "active",
    "Inactive": "inactive",
    "Active(anon)": "active_anon",
    "Inactive(anon)": "inactive_anon",
    "Active(file)": "active_file",
    "Inactive(file)": "inactive_file",
    "Unevictable": "unevictable",
    "Mlocked": "mlocked",
    "SwapTotal": "swaptotal",
    "SwapFree": "swapfree",
    "Zswap": "zswap",
    "Zswapped": "zswapped",
    "Dirty": "dirty",
    "Writeback": "writeback",
    "AnonPages": "anonpages",
    "Mapped": "mapped",
    "Shmem": "shmem",
    "KReclaimable": "kreclaimable",
    "Slab": "slab",
    "SReclaimable": "sreclaimable",
    "SUnreclaim": "sunreclaim",
    "KernelStack": "kernelstack",
    "ShadowCallStack": "shadowcallstack",
    "PageTables": "pagetables",
    "SecPageTables": "secpagetables",
    "NFS_Unstable": "nfs_unstable",
    "Bounce": "bounce",
    "WritebackTmp": "writebacktmp",
    "CommitLimit": "commitlimit",
    "Committed_AS": "committed_as",
    "VmallocTotal": "vmalloctotal",
    "VmallocUsed": "vmallocused",
    "VmallocChunk": "vmallocchunk",
    "Percpu": "percpu",
    "HardwareCorrupted": "hardwarecorrupted",
    "AnonHugePages": "anonhugepages",
    "ShmemHugePages": "shmemhugepages",
    "ShmemPmdMapped": "shmempmdmapped",
    "FileHugePages": "filehugepages",
    "FilePmdMapped": "filepmdmapped",
    "CmaTotal": "cmatotal",
    "CmaFree": "cmafree",
    "HugePages_Total": "hugepages_total",
    "HugePages_Free": "hugepages_free",
    "HugePages_Rsvd": "hugepages_rsvd",
    "HugePages_Surp": "hugepages_surp",
    "Hugepagesize": "hugepagesize",
    "Hugetlb": "hugetlb",
    "DirectMap4k": "directmap4k",
    "DirectMap2M": "directmap2m",
    "DirectMap1G": "directmap1g",
}


def decode_meminfo(text: str) -> ProcMemInfo:
    fields = {}
    for line in tokenize(text):
        if not line:
            continue
        key = line.label
        if not key.endswith(":"):
            raise MalformedLine(
                f"{key!r}: missing `:'", lineno=line.lineno, line=line.text
            )
        key = key[:-1]
        field = MEMINFO_KEY_TO_FIELD_MAP.get(key)
        if field is None:
            log.debug(f"meminfo:{line.lineno}: {key}: ignored")
            continue
        if len(line) < 2:
            raise MalformedLine(
                f"{key}: missing value", lineno=line.lineno, line=line.text
            )
        # The unit, if any, is always kB; it is dropped, not applied.
        fields[field] = passthrough(parse_int(line.tokens[1], key, line))
    return ProcMemInfo(**fields)


def load_meminfo(procfs_root: str = DEFAULT_PROCFS_ROOT) -> ProcMemInfo:
    return load_proc_file(os.path.join(procfs_root, "meminfo"), decode_meminfo)
