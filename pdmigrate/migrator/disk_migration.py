"""Migration of detached disks to a new disk type through snapshots."""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from datetime import timedelta
from typing import Any, Iterable

from pdmigrate.migrator.config import Config
from pdmigrate.migrator.models import Disk, MigrationResult
from pdmigrate.utils.error_messages import (
    ErrorContext,
    format_error,
    permission_error,
    quota_exceeded_error,
)
from pdmigrate.utils.names import add_suffix, get_storage_pool_url

logger = logging.getLogger(__name__)

_MAX_DISK_PREFIX = 40
_TIMESTAMP_MODULUS = 100000000


def truncate_name(name: str, max_len: int) -> str:
    """Cut ``name`` down to at most ``max_len`` characters."""
    return name[:max_len]


def snapshot_name_for(disk_name: str) -> str:
    """Return a snapshot name short enough for Compute Engine (max 63 chars)."""
    stamp = int(time.time()) % _TIMESTAMP_MODULUS
    return f"{truncate_name(disk_name, _MAX_DISK_PREFIX)}-{stamp}"


def migrate_disks(config: Config, clients: Any, disks: Iterable[Disk]) -> list[MigrationResult]:
    """Migrate ``disks`` concurrently, at most ``config.concurrency`` at a time.

    ``clients`` must provide ``snapshot_client`` and ``disk_client``.
    """
    disks = list(disks)
    if config.dry_run:
        logger.info("[DRY-RUN] Starting disk migration simulation...")
    else:
        logger.info("Starting disk migration...")
    if not disks:
        logger.info("No disks to migrate")
        return []
    if config.concurrency < 1:
        raise ValueError(f"concurrency must be at least 1, got {config.concurrency}")

    logger.info("Migrating %d disks (concurrency: %d)", len(disks), config.concurrency)
    with ThreadPoolExecutor(max_workers=config.concurrency) as pool:
        results = list(pool.map(lambda disk: migrate_single_disk(config, clients, disk), disks))
    logger.info("Migration phase complete (%d disks)", len(results))
    return results


def _label_disk(clients: Any, config: Config, zone: str, disk_name: str, value: str) -> None:
    try:
        clients.disk_client.update_disk_label(
            config.project_id, zone, disk_name, "migration", value
        )
    except Exception as exc:
        logger.warning("failed to apply error label to disk %s in %s: %s", disk_name, zone, exc)


def _log_snapshot_failure(exc: Exception, disk_name: str, zone: str) -> None:
    message = str(exc)
    if "quota" in message:
        logger.error(quota_exceeded_error("snapshots", zone))
    elif "permission" in message:
        logger.error(permission_error("create snapshot", disk_name))
    else:
        logger.error(
            format_error(
                ErrorContext(
                    operation="create snapshot",
                    resource=disk_name,
                    reason=message,
                    suggestion="Check disk status and ensure it's not in use",
                    command=f"gcloud compute disks describe {disk_name} --zone={zone}",
                ),
                exc,
            )
        )


def _log_delete_failure(exc: Exception, disk_name: str, zone: str) -> None:
    if "resourceInUse" in str(exc):
        context = ErrorContext(
            operation="delete disk",
            resource=disk_name,
            reason="Disk is still attached to an instance",
            suggestion="Detach the disk from all instances before migration",
            command=f"gcloud compute disks describe {disk_name} --zone={zone}",
        )
    else:
        context = ErrorContext(
            operation="delete disk",
            resource=disk_name,
            reason=str(exc),
            suggestion="Verify disk exists and you have delete permissions",
        )
    logger.error(format_error(context, exc))


def migrate_single_disk(config: Config, clients: Any, disk: Disk) -> MigrationResult:
    """Snapshot ``disk``, optionally delete it, and recreate it with the target type."""
    start = time.monotonic()

    def elapsed() -> timedelta:
        return timedelta(seconds=time.monotonic() - start)

    disk_name = disk.name
    zone = disk.short_zone()
    if zone is None:
        zone = "unknown-zone"

    result = MigrationResult(
        disk_name=disk_name, zone=zone, original_disk=disk_name, status="Pending"
    )
    snapshot_name = snapshot_name_for(disk_name)
    result.snapshot_name = snapshot_name

    logger.info("Creating snapshot %s for %s in %s", snapshot_name, disk_name, zone)
    try:
        clients.snapshot_client.create_snapshot(
            config.project_id,
            zone,
            disk_name,
            snapshot_name,
            config.populate_kms_params(),
            disk.labels,
        )
    except Exception as exc:
        _log_snapshot_failure(exc, disk_name, zone)
        result.status = "Failed: Snapshot Creation"
        result.error_message = f"Failed to create snapshot: {exc}"
        _label_disk(clients, config, zone, disk_name, "error")
        result.duration = elapsed()
        return result

    if config.retain_name:
        logger.info("Deleting original disk %s", disk_name)
        try:
            clients.disk_client.delete_disk(config.project_id, zone, disk_name)
        except Exception as exc:
            _log_delete_failure(exc, disk_name, zone)
            result.status = "Failed: Disk Deletion"
            result.error_message = f"Failed to delete original disk: {exc}"
            logger.info("snapshot %s kept after failed disk deletion", snapshot_name)
            return result
        logger.info("original disk %s deleted successfully", disk_name)

    new_disk_name = disk_name if config.retain_name else add_suffix(disk_name)
    result.new_disk_name = new_disk_name

    labels = dict(disk.labels or {})
    labels["migration"] = "success"
    storage_pool_url = get_storage_pool_url(config.project_id, config.storage_pool_id, zone)

    logger.info("Creating %s disk %s", config.target_disk_type, new_disk_name)
    try:
        clients.disk_client.create_new_disk_from_snapshot(
            config.project_id,
            zone,
            new_disk_name,
            config.target_disk_type,
            snapshot_name,
            labels,
            disk.size_gb,
            config.iops,
            config.throughput,
            storage_pool_url,
        )
    except Exception as exc:
        logger.error("%s recreation failed: %s", new_disk_name, exc)
        result.status = "Failed: Disk Recreation"
        result.error_message = f"Failed to recreate disk from snapshot: {exc}"
        if not config.retain_name:
            _label_disk(clients, config, zone, disk_name, "error-recreation-failed")
        logger.warning("snapshot %s requires manual cleanup", snapshot_name)
        result.duration = elapsed()
        return result

    result.status = "Success"
    result.duration = elapsed()
    logger.info("%s migrated successfully to %s in %s", disk_name, new_disk_name, result.duration)
    return result