"""Helpers for resource names and resource URLs."""

from __future__ import annotations

import random


def _last_segment(path: str) -> str:
    return path.rsplit("/", 1)[-1]


def extract_zone_name(zone: str) -> str:
    """Return the zone name from a zone URL, or the input if it has no slashes."""
    return _last_segment(zone)


def extract_disk_type(disk_type: str) -> str:
    """Return the disk type name from a disk type URL."""
    return _last_segment(disk_type)


def extract_machine_type(machine_type: str) -> str:
    """Return the machine type name from a machine type URL."""
    return _last_segment(machine_type)


def add_suffix(name: str) -> str:
    """Append a random lowercase hex suffix below 0xfff to ``name``."""
    return f"{name}-{random.randrange(0xFFF):x}"


def get_storage_pool_url(project_id: str, storage_pool_id: str, zone: str) -> str:
    """Return the relative storage pool URL, or "" if any part is missing."""
    if not (project_id and zone and storage_pool_id):
        return ""
    return f"projects/{project_id}/zones/{zone}/storagePools/{storage_pool_id}"


def get_disk_url(project_id: str, zone: str, disk_name: str) -> str:
    """Return the relative disk URL, or "" if any part is missing."""
    if not (project_id and zone and disk_name):
        return ""
    return f"projects/{project_id}/zones/{zone}/disks/{disk_name}"