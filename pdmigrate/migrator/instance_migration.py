"""Migration of the non-boot disks attached to a compute instance."""

from __future__ import annotations

import logging
import threading
from typing import Any

from pdmigrate.migrator.config import Config, SnapshotKmsParams
from pdmigrate.migrator.disk_migration import migrate_single_disk, snapshot_name_for
from pdmigrate.migrator.models import Disk, Instance, MigrationResult

logger = logging.getLogger(__name__)

RUNNING_STATE = "RUNNING"
STOPPED_STATE = "STOPPED"

MANAGED_BY_KEY = "managed-by"
MANAGED_BY_VALUE = "pd-migrate"

_SUCCESS_STATUSES = ("Success", "Completed")

_instance_states: dict[str, str] = {}
_states_lock = threading.Lock()


def _instance_key(instance: Instance) -> str:
    return f"{instance.short_zone()}/{instance.name}"


def get_instance_state(instance: Instance, clients: Any) -> str:
    """Return RUNNING or STOPPED, remembering the first answer for each instance."""
    key = _instance_key(instance)
    with _states_lock:
        state = _instance_states.get(key)
    if state is not None:
        return state

    running = clients.compute_client.instance_is_running(instance)
    state = RUNNING_STATE if running else STOPPED_STATE
    with _states_lock:
        _instance_states[key] = state
    logger.info("Instance %s state: %s", key, state)
    return state


def _remove_instance_state(instance: Instance) -> None:
    key = _instance_key(instance)
    with _states_lock:
        _instance_states.pop(key, None)
    logger.debug("Removed instance %s from state map", key)


def _kms_params(config: Config) -> SnapshotKmsParams:
    return SnapshotKmsParams(
        kms_key=config.kms_key,
        kms_key_ring=config.kms_key_ring,
        kms_location=config.kms_location,
        kms_project=config.kms_project,
    )


def snapshot_instance_disks(config: Config, instance: Instance, clients: Any) -> None:
    """Snapshot every non-boot disk of ``instance``; disks that cannot be read are skipped."""
    logger.info("Creating snapshots for all disks attached to instance %s", instance.name)
    zone = instance.short_zone()

    for attached in instance.disks:
        if attached.boot:
            continue
        disk_name = attached.device_name
        logger.debug(
            "Processing attached disk - DeviceName: %s, Source: %s",
            attached.device_name,
            attached.source,
        )
        try:
            disk = clients.disk_client.get_disk(config.project_id, zone, disk_name)
        except Exception as exc:
            logger.error("Failed to get disk %s in zone %s: %s", disk_name, zone, exc)
            continue
        if disk is None:
            logger.warning("Disk %s not found, skipping snapshot", disk_name)
            continue

        snapshot_name = snapshot_name_for(disk_name)
        labels = {
            MANAGED_BY_KEY: MANAGED_BY_VALUE,
            "instance": instance.name,
            "phase": "pre-migration",
        }
        logger.info("Creating snapshot %s for disk %s", snapshot_name, disk.name)
        try:
            clients.snapshot_client.create_snapshot(
                config.project_id,
                zone,
                disk.name,
                snapshot_name,
                _kms_params(config),
                labels,
            )
        except Exception as exc:
            raise RuntimeError(
                f"failed to create snapshot for disk {disk.name}: {exc}"
            ) from exc
        logger.info("Snapshot %s created successfully for disk %s", snapshot_name, disk.name)

    logger.info("All disk snapshots completed for instance %s", instance.name)


def migrate_instance_non_boot_disks(
    config: Config, instance: Instance, clients: Any
) -> list[MigrationResult]:
    """Detach, migrate and reattach each non-boot disk; failures are recorded per disk."""
    logger.info("Migrating non-boot disks for instance %s", instance.name)
    zone = instance.short_zone()

    non_boot = []
    for attached in instance.disks:
        if attached.boot:
            logger.info("Skipping boot disk %s", attached.device_name)
        else:
            non_boot.append(attached)

    results: list[MigrationResult] = []
    has_errors = False
    for attached in non_boot:
        device_name = attached.device_name
        try:
            clients.compute_client.detach_disk(
                config.project_id, zone, instance.name, device_name
            )
        except Exception as exc:
            raise RuntimeError(
                f"failed to detach disk {device_name} from instance {instance.name} "
                f"in zone {zone}: {exc}"
            ) from exc

        logger.info("Migrating disk %s", device_name)
        try:
            disk = clients.disk_client.get_disk(config.project_id, zone, device_name)
        except Exception as exc:
            results.append(
                MigrationResult(
                    disk_name=device_name,
                    status="MigrationFailed",
                    error_message=str(exc),
                )
            )
            logger.error(
                "Failed to migrate disk %s: %s  continuing with the next disk", device_name, exc
            )
            has_errors = True
            continue

        outcome = MigrationResult()
        if disk is not None:
            outcome = migrate_single_disk(config, clients, disk)
            results.append(outcome)

        if outcome.status not in _SUCCESS_STATUSES:
            logger.error(
                "Skipping disk attachment for %s due to failed migration: %s",
                device_name,
                outcome.error_message,
            )
            has_errors = True
            continue

        if not outcome.new_disk_name:
            logger.error("New disk name is empty for %s, cannot reattach", device_name)
            results.append(
                MigrationResult(
                    disk_name=device_name,
                    zone=zone,
                    status="Failed: Empty Disk Name",
                    error_message="Migration did not produce a new disk name",
                )
            )
            has_errors = True
            continue

        try:
            clients.compute_client.attach_disk(
                config.project_id, zone, instance.name, outcome.new_disk_name, device_name
            )
        except Exception as exc:
            logger.error(
                "failed to reattach disk %s to instance %s in zone %s: %s",
                device_name,
                instance.name,
                zone,
                exc,
            )
            results.append(
                MigrationResult(
                    disk_name=device_name,
                    zone=zone,
                    status="Failed: Disk Attachment",
                    error_message=str(exc),
                )
            )
            has_errors = True

    if has_errors:
        logger.error(
            "Some disks failed to migrate for instance %s. Check the logs for details.",
            instance.name,
        )
    return results


def handle_instance_disk_migration(config: Config, instance: Instance, clients: Any) -> None:
    """Snapshot, stop if running, migrate non-boot disks, and restart a running instance."""
    try:
        running = get_instance_state(instance, clients) == RUNNING_STATE
        zone = instance.short_zone()

        try:
            snapshot_instance_disks(config, instance, clients)
        except Exception as exc:
            raise RuntimeError(
                f"failed to create snapshot for instance {instance.name} in zone {zone}: {exc}"
            ) from exc

        if running:
            logger.info(
                "Instance %s in zone %s is running, stopping it before migration",
                instance.name,
                zone,
            )
            try:
                clients.compute_client.stop_instance(config.project_id, zone, instance.name)
            except Exception as exc:
                raise RuntimeError(
                    f"failed to stop instance {instance.name} in zone {zone}: {exc}"
                ) from exc

        try:
            results = migrate_instance_non_boot_disks(config, instance, clients)
        except Exception as exc:
            raise RuntimeError(
                f"failed to migrate non-boot disks for instance {instance.name} "
                f"in zone {zone}: {exc}"
            ) from exc

        for result in results:
            if result.error_message:
                logger.error(
                    "Failed to migrate disk %s: %s  continuing with the next disk",
                    result.disk_name,
                    result.error_message,
                )

        if get_instance_state(instance, clients) == RUNNING_STATE:
            logger.info(
                "Instance %s in zone %s was running, starting it after migration",
                instance.name,
                zone,
            )
            try:
                clients.compute_client.start_instance(config.project_id, zone, instance.name)
            except Exception as exc:
                raise RuntimeError(
                    f"failed to start instance {instance.name} in zone {zone}: {exc}"
                ) from exc
        logger.info("All disks migrated successfully for instance %s", instance.name)
    finally:
        _remove_instance_state(instance)


def incremental_snapshot_disk(config: Config, disk: Disk, clients: Any) -> str:
    """Create a snapshot of ``disk`` and return its name."""
    logger.info("Creating incremental snapshot for disk %s in zone %s", disk.name, disk.zone)
    snapshot_name = snapshot_name_for(disk.name)
    try:
        clients.snapshot_client.create_snapshot(
            config.project_id,
            disk.zone or "",
            disk.name,
            snapshot_name,
            _kms_params(config),
            None,
        )
    except Exception as exc:
        raise RuntimeError(
            f"failed to create incremental snapshot for disk {disk.name}: {exc}"
        ) from exc
    logger.info("Incremental snapshot %s created successfully for disk %s", snapshot_name, disk.name)
    return snapshot_name