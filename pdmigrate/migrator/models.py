"""Compute Engine resources as the migrator sees them, and migration outcomes."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Optional

from pdmigrate.utils.names import extract_zone_name


@dataclass
class AttachedDisk:
    """A disk as attached to an instance."""

    device_name: str = ""
    source: str = ""
    boot: bool = False
    mode: str = ""
    interface: str = ""
    disk_size_gb: int = 0


@dataclass
class Disk:
    """A persistent disk; ``zone`` is a zone URL or name, or None when unknown."""

    name: str = ""
    zone: Optional[str] = None
    type: str = ""
    size_gb: int = 0
    labels: dict[str, str] = field(default_factory=dict)

    def short_zone(self) -> Optional[str]:
        """Return the bare zone name, or None when the disk has no zone."""
        if self.zone is None:
            return None
        return extract_zone_name(self.zone)


@dataclass
class Instance:
    """A virtual machine instance with its attached disks."""

    name: str = ""
    zone: str = ""
    machine_type: str = ""
    status: str = ""
    disks: list[AttachedDisk] = field(default_factory=list)
    labels: dict[str, str] = field(default_factory=dict)

    def short_zone(self) -> str:
        """Return the bare zone name of the instance."""
        return extract_zone_name(self.zone)


@dataclass
class MigrationResult:
    """Outcome of migrating one disk."""

    disk_name: str = ""
    zone: str = ""
    status: str = ""
    duration: timedelta = field(default_factory=timedelta)
    snapshot_name: str = ""
    new_disk_name: str = ""
    original_disk: str = ""
    error_message: str = ""
    snapshot_cleaned: bool = False