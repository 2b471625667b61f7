# /usr/bin/env python3

# handle /proc/vmstat
# reference: https://github.com/torvalds/linux/blob/master/mm/vmstat.c

import dataclasses
import logging
import os

from .common import DEFAULT_PROCFS_ROOT, StructBase, load_proc_file, parse_int
from .errors import MalformedLine
from .tokenizer import tokenize
from .units import passthrough

log = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class ProcVmStat(StructBase):
    # The nr_* entries are absolute numbers of pages, most of the others are
    # event counters since boot; pgpgin/pgpgout are in kB. The field names are
    # the keys in the file; keys not printed by the kernel (depending on
    # version and config, e.g. numa_*, thp_*, balloon_*) are left 0.
    nr_free_pages: int = 0
    nr_zone_inactive_anon: int = 0
    nr_zone_active_anon: int = 0
    nr_zone_inactive_file: int = 0
    nr_zone_active_file: int = 0
    nr_zone_unevictable: int = 0
    nr_zone_write_pending: int = 0
    nr_mlock: int = 0
    nr_bounce: int = 0
    nr_zspages: int = 0
    nr_free_cma: int = 0
    numa_hit: int = 0
    numa_miss: int = 0
    numa_foreign: int = 0
    numa_interleave: int = 0
    numa_local: int = 0
    numa_other: int = 0
    nr_inactive_anon: int = 0
    nr_active_anon: int = 0
    nr_inactive_file: int = 0
    nr_active_file: int = 0
    nr_unevictable: int = 0
    nr_slab_reclaimable: int = 0
    nr_slab_unreclaimable: int = 0
    nr_isolated_anon: int = 0
    nr_isolated_file: int = 0
    workingset_nodes: int = 0
    workingset_refault_anon: int = 0
    workingset_refault_file: int = 0
    workingset_activate_anon: int = 0
    workingset_activate_file: int = 0
    workingset_restore_anon: int = 0
    workingset_restore_file: int = 0
    workingset_nodereclaim: int = 0
    nr_anon_pages: int = 0
    nr_mapped: int = 0
    nr_file_pages: int = 0
    nr_dirty: int = 0
    nr_writeback: int = 0
    nr_writeback_temp: int = 0
    nr_shmem: int = 0
    nr_shmem_hugepages: int = 0
    nr_shmem_pmdmapped: int = 0
    nr_file_hugepages: int = 0
    nr_file_pmdmapped: int = 0
    nr_anon_transparent_hugepages: int = 0
    nr_vmscan_write: int = 0
    nr_vmscan_immediate_reclaim: int = 0
    nr_dirtied: int = 0
    nr_written: int = 0
    nr_throttled_written: int = 0
    nr_kernel_misc_reclaimable: int = 0
    nr_foll_pin_acquired: int = 0
    nr_foll_pin_released: int = 0
    nr_kernel_stack: int = 0
    nr_shadow_call_stack: int = 0
    nr_page_table_pages: int = 0
    nr_sec_page_table_pages: int = 0
    nr_swapcached: int = 0
    pgpromote_success: int = 0
    pgpromote_candidate: int = 0
    nr_dirty_threshold: int = 0
    nr_dirty_background_threshold: int = 0
    pgpgin: int = 0
    pgpgout: int = 0
    pswpin: int = 0
    pswpout: int = 0
    pgalloc_dma: int = 0
    pgalloc_dma32: int = 0
    pgalloc_normal: int = 0
    pgalloc_movable: int = 0
    pgalloc_device: int = 0
    allocstall_dma: int = 0
    allocstall_dma32: int = 0
    allocstall_normal: int = 0
    allocstall_movable: int = 0
    allocstall_device: int = 0
    pgskip_dma: int = 0
    pgskip_dma32: int = 0
    pgskip_normal: int = 0
    pgskip_movable: int = 0
    pgskip_device: int = 0
    pgfree: int = 0
    pgactivate: int = 0
    pgdeactivate: int = 0
    pglazyfree: int = 0
    pglazyfreed: int = 0
    pgfault: int = 0
    pgmajfault: int = 0
    pgrefill: int = 0
    pgreuse: int = 0
    pgsteal_kswapd: int = 0
    pgsteal_direct: int = 0
    pgsteal_khugepaged: int = 0
    pgdemote_kswapd: int = 0
    pgdemote_direct: int = 0
    pgdemote_khugepaged: int = 0
    pgscan_kswapd: int = 0
    pgscan_direct: int = 0
    pgscan_khugepaged: int = 0
    pgscan_direct_throttle: int = 0
    pgscan_anon: int = 0
    pgscan_file: int = 0
    pgsteal_anon: int = 0
    pgsteal_file: int = 0
    zone_reclaim_failed: int = 0
    pginodesteal: int = 0
    slabs_scanned: int = 0
    kswapd_inodesteal: int = 0
    kswapd_low_wmark_hit_quickly: int = 0
    kswapd_high_wmark_hit_quickly: int = 0
    pageoutrun: int = 0
    pgrotated: int = 0
    drop_pagecache: int = 0
    drop_slab: int = 0
    oom_kill: int = 0
    numa_pte_updates: int = 0
    numa_huge_pte_updates: int = 0
    numa_hint_faults: int = 0
    numa_hint_faults_local: int = 0
    numa_pages_migrated: int = 0
    pgmigrate_success: int = 0
    pgmigrate_fail: int = 0
    thp_migration_success: int = 0
    thp_migration_fail: int = 0
    thp_migration_split: int = 0
    compact_migrate_scanned: int = 0
    compact_free_scanned: int = 0
    compact_isolated: int = 0
    compact_stall: int = 0
    compact_fail: int = 0
    compact_success: int = 0
    compact_daemon_wake: int = 0
    compact_daemon_migrate_scanned: int = 0
    compact_daemon_free_scanned: int = 0
    htlb_buddy_alloc_success: int = 0
    htlb_buddy_alloc_fail: int = 0
    cma_alloc_success: int = 0
    cma_alloc_fail: int = 0
    unevictable_pgs_culled: int = 0
    unevictable_pgs_scanned: int = 0
    unevictable_pgs_rescued: int = 0
    unevictable_pgs_mlocked: int = 0
    unevictable_pgs_munlocked: int = 0
    unevictable_pgs_cleared: int = 0
    unevictable_pgs_stranded: int = 0
    thp_fault_alloc: int = 0
    thp_fault_fallback: int = 0
    thp_fault_fallback_charge: int = 0
    thp_collapse_alloc: int = 0
    thp_collapse_alloc_failed: int = 0
    thp_file_alloc: int = 0
    thp_file_fallback: int = 0
    thp_file_fallback_charge: int = 0
    thp_file_mapped: int = 0
    thp_split_page: int = 0
    thp_split_page_failed: int = 0
    thp_deferred_split_page: int = 0
    thp_split_pmd: int = 0
    thp_scan_exceed_none_pte: int = 0
    thp_scan_exceed_swap_pte: int = 0
    thp_scan_exceed_share_pte: int = 0
    thp_zero_page_alloc: int = 0
    thp_zero_page_alloc_failed: int = 0
    thp_swpout: int = 0
    thp_swpout_fallback: int = 0
    balloon_inflate: int = 0
    balloon_deflate: int = 0
    balloon_migrate: int = 0
    swap_ra: int = 0
    swap_ra_hit: int = 0
    ksm_swpin_copy: int = 0
    cow_ksm: int = 0
    zswpin: int = 0
    zswpout: int = 0
    nr_unstable: int = 0


# key: key in /proc/vmstat
# value: field in ProcVmStat
VMSTAT_KEY_TO_FIELD_MAP = {
    field.name: field.name for field in dataclasses.fields(ProcVmStat)
}


def decode_vmstat(text: str) -> ProcVmStat:
    fields = {}
    for line in tokenize(text):
        if not line:
            continue
        key = line.label
        field = VMSTAT_KEY_TO_FIELD_MAP.get(key)
        if field is None:
            log.debug(f"vmstat:{line.lineno}: {key}: ignored")
            continue
        if len(line) < 2:
            raise MalformedLine(
                f"{key}: missing value", lineno=line.lineno, line=line.text
            )
        fields[field] = passthrough(parse_int(line.tokens[1], key, line))
    return ProcVmStat(**fields)


def load_vmstat(procfs_root: str = DEFAULT_PROCFS_ROOT) -> ProcVmStat:
    return load_proc_file(os.path.join(procfs_root, "vmstat"), decode_vmstat)
