"""Mounted-partition usage summary shown in the preview column.

Pseudo and container filesystems are skipped so the summary lists only disks
a user would browse. Any partition whose usage cannot be read is omitted.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import psutil

logger = logging.getLogger(__name__)

REAL_FILESYSTEM_TYPES = frozenset(
    {"ext4", "btrfs", "vfat", "xfs", "ntfs", "fuseblk", "apfs", "hfs+"}
)
SKIPPED_MOUNT_PREFIXES: tuple[str, ...] = ("/var/lib/docker", "/var/lib/flatpak", "/snap")


@dataclass(frozen=True)
class DiskStatus:
    """Usage numbers for one mounted partition."""

    device: str
    mountpoint: str
    fstype: str
    total: int
    used: int
    free: int
    used_percent: float


def should_skip_partition(fstype: str, mountpoint: str) -> bool:
    """Return whether a partition is not a real disk or lives under a container mount."""
    if fstype.lower() not in REAL_FILESYSTEM_TYPES:
        return True
    return mountpoint.startswith(SKIPPED_MOUNT_PREFIXES)


def list_disks() -> list[DiskStatus]:
    """Return usage for every real mounted partition, in mount order."""
    try:
        partitions = psutil.disk_partitions(all=True)
    except OSError as exc:
        logger.debug("disk partitions unavailable: %s", exc)
        return []

    statuses: list[DiskStatus] = []
    for partition in partitions:
        if should_skip_partition(partition.fstype, partition.mountpoint):
            continue
        try:
            usage = psutil.disk_usage(partition.mountpoint)
        except OSError as exc:
            logger.debug("usage unavailable for %s: %s", partition.mountpoint, exc)
            continue
        if usage.total == 0:
            continue
        statuses.append(
            DiskStatus(
                device=partition.device,
                mountpoint=partition.mountpoint,
                fstype=partition.fstype,
                total=int(usage.total),
                used=int(usage.used),
                free=int(usage.free),
                used_percent=float(usage.percent),
            )
        )
    return statuses


def free_bytes(path: Path) -> int | None:
    """Return free bytes on the filesystem holding ``path``, ``None`` on failure."""
    try:
        return int(psutil.disk_usage(str(path)).free)
    except OSError as exc:
        logger.debug("free space unavailable for %s: %s", path, exc)
        return None


__all__ = [
    "DiskStatus",
    "REAL_FILESYSTEM_TYPES",
    "SKIPPED_MOUNT_PREFIXES",
    "should_skip_partition",
    "list_disks",
    "free_bytes",
]
