"""Migration settings and KMS encryption parameters."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class SnapshotKmsParams:
    """Cloud KMS key used to encrypt snapshots."""

    kms_key: str = ""
    kms_key_ring: str = ""
    kms_location: str = ""
    kms_project: str = ""


@dataclass
class Config:
    """Settings that drive a disk migration run."""

    project_id: str = ""
    target_disk_type: str = ""
    label_filter: str = ""
    kms_key: str = ""
    kms_key_ring: str = ""
    kms_location: str = ""
    kms_project: str = ""
    kms_params: Optional[SnapshotKmsParams] = None
    region: str = ""
    zone: str = ""
    auto_approve_all: bool = False
    concurrency: int = 0
    retain_name: bool = False
    iops: int = 0
    throughput: int = 0
    storage_pool_id: str = ""
    instances: list[str] = field(default_factory=list)
    dry_run: bool = False

    def populate_kms_params(self) -> Optional[SnapshotKmsParams]:
        """Return KMS parameters when a key is set; the project defaults to ``project_id``."""
        if not self.kms_key:
            return None
        return SnapshotKmsParams(
            kms_key=self.kms_key,
            kms_key_ring=self.kms_key_ring,
            kms_location=self.kms_location,
            kms_project=self.kms_project or self.project_id,
        )

    def location(self) -> str:
        """Return the zone if set, otherwise the region."""
        return self.zone or self.region