"""Discovery of the disks and instances a migration run will touch."""

from __future__ import annotations

import logging
from typing import Any

from pdmigrate.migrator.config import Config
from pdmigrate.migrator.models import Disk, Instance
from pdmigrate.utils.filters import build_gcp_label_filter, matches_label
from pdmigrate.utils.message_box import Box, MessageType, info
from pdmigrate.utils.names import extract_zone_name
from pdmigrate.utils.prompt import prompt_for_confirmation
from pdmigrate.utils.report_builder import ReportBuilder
from pdmigrate.utils.table import TableFormatter

logger = logging.getLogger(__name__)

_MINUTES_PER_DISK = 5


def _short_disk_type(type_url: str) -> str:
    if not type_url:
        return "unknown"
    return type_url.rsplit("/", 1)[-1]


def _disk_table(disks: list[Disk]) -> str:
    table = TableFormatter(["#", "Name", "Zone", "Type", "Size"])
    for number, disk in enumerate(disks, start=1):
        zone = disk.short_zone()
        table.add_row([
            str(number),
            disk.name,
            "unknown" if zone is None else zone,
            _short_disk_type(disk.type),
            f"{disk.size_gb} GB",
        ])
    return str(table)


def _summary_box(config: Config, disks: list[Disk]) -> str:
    title = "[DRY-RUN] Migration Plan" if config.dry_run else "Migration Summary"
    total_size = sum(disk.size_gb for disk in disks)
    box = (
        Box(MessageType.INFO, title)
        .add_bullet(f"Target disk type: {config.target_disk_type}")
        .add_bullet(f"Disks to migrate: {len(disks)}")
        .add_bullet(f"Total size: {total_size} GB")
        .add_bullet(f"Estimated time: ~{len(disks) * _MINUTES_PER_DISK} minutes")
        .add_bullet("Snapshots will be created: Yes")
    )
    if config.retain_name:
        box.add_bullet("Original disks will be: Deleted (names retained)")
    else:
        box.add_bullet("Original disks will be: Kept (new names will be generated)")
    return box.render()


def _dry_run_actions(config: Config, disks: list[Disk]) -> str:
    builder = ReportBuilder().section("[DRY-RUN] Would perform the following actions:")
    for number, disk in enumerate(disks, start=1):
        (
            builder.add_empty_line()
            .add_line(f"{number}. Disk: {disk.name}")
            .add_indented(f"Create snapshot 'pd-migrate-{disk.name}-TIMESTAMP'", 1)
        )
        if config.retain_name:
            builder.add_indented(f"Delete disk '{disk.name}'", 1).add_indented(
                f"Create new disk '{disk.name}' with type '{config.target_disk_type}'", 1
            )
        else:
            builder.add_indented(
                f"Create new disk '{disk.name}-migrated' with type '{config.target_disk_type}'",
                1,
            )
        builder.add_indented("Clean up snapshot after verification", 1)
    return builder.build()


def discover_disks(config: Config, clients: Any) -> list[Disk]:
    """List detached disks to migrate, show the plan and ask for confirmation.

    Returns an empty list when nothing matches or the user declines.
    ``clients`` must provide ``disk_client``.
    """
    logger.info("Discovery Phase")
    location = config.location()
    logger.info("Listing detached disks in %s (Project: %s)", location, config.project_id)
    if config.label_filter:
        logger.info("Applying label filter: %s", config.label_filter)

    try:
        disks = list(
            clients.disk_client.list_detached_disks(
                config.project_id, location, config.label_filter
            )
        )
    except Exception as exc:
        raise RuntimeError(f"failed to list detached disks: {exc}") from exc

    if not disks:
        logger.info("No detached disks found matching the criteria.")
        return []

    logger.info("Found %d detached disk(s) matching criteria:", len(disks))
    logger.info("\n%s", _disk_table(disks))
    print(_summary_box(config, disks))

    if config.dry_run:
        print(_dry_run_actions(config, disks))
        print(info("Dry-Run Mode", "No changes will be made in dry-run mode."))
        logger.info("Discovery phase completed (dry-run)")
        return disks

    confirmed = prompt_for_confirmation(
        config.auto_approve_all,
        f"migrate {len(disks)} disk(s) to type '{config.target_disk_type}'",
        "Proceed with migration?",
    )
    if not confirmed:
        logger.info("Migration cancelled by user.")
        return []
    if not config.auto_approve_all:
        logger.info("User confirmed. Proceeding with migration.")

    logger.info("Discovery phase completed")
    return disks


def _instances_by_name(config: Config, clients: Any) -> list[Instance]:
    found: list[Instance] = []
    for name in config.instances:
        logger.info("Getting compute instance %s", name)
        try:
            instance = clients.compute_client.get_instance(config.project_id, config.zone, name)
        except Exception as exc:
            raise RuntimeError(
                f"failed to get instance {name} in zone {config.zone}: {exc}"
            ) from exc
        if instance is None:
            logger.warning("Instance %s not found in zone %s", name, config.zone)
            continue
        if config.label_filter and not matches_label(instance.labels, config.label_filter):
            logger.warning(
                "Instance %s does not match label filter %s, skipping",
                name,
                config.label_filter,
            )
            continue
        found.append(instance)
    return found


def _instances_in_zone(config: Config, gcp_filter: str, clients: Any) -> list[Instance]:
    try:
        return list(
            clients.compute_client.list_instances_in_zone(
                config.project_id, config.zone, gcp_filter
            )
        )
    except Exception as exc:
        raise RuntimeError(
            f"failed to discover instances in zone {config.zone}: "
            f"failed to list instances in zone {config.zone}: {exc}"
        ) from exc


def _instances_in_region(config: Config, gcp_filter: str, clients: Any) -> list[Instance]:
    try:
        everything = clients.compute_client.aggregated_list_instances(
            config.project_id, gcp_filter
        )
    except Exception as exc:
        raise RuntimeError(
            f"failed to discover instances in region {config.region}: "
            "failed to retrieve aggregated instances list for project "
            f"{config.project_id}: {exc}"
        ) from exc
    return [
        instance
        for instance in everything
        if instance.zone and extract_zone_name(instance.zone).startswith(config.region)
    ]


def discover_instances(config: Config, clients: Any) -> list[Instance]:
    """Find instances by name, by zone or by region, honouring the label filter.

    ``clients`` must provide ``compute_client``.
    """
    logger.info("Instance Discovery")

    gcp_filter = ""
    if config.label_filter:
        try:
            gcp_filter = build_gcp_label_filter(config.label_filter)
        except ValueError as exc:
            raise ValueError(f"invalid label filter: {exc}") from exc
        logger.info("Applying label filter: %s", config.label_filter)

    if config.instances and config.instances[0] != "*":
        instances = _instances_by_name(config, clients)
    elif config.zone:
        logger.info("Listing instances in zone %s", config.zone)
        instances = _instances_in_zone(config, gcp_filter, clients)
    elif config.region:
        logger.info("Listing instances in region %s", config.region)
        instances = _instances_in_region(config, gcp_filter, clients)
    else:
        raise ValueError("you must specify either a zone or a region for instance discovery")

    if not instances:
        logger.info("No instances found matching the specified criteria.")
        return []

    logger.info("Discovered instances:")
    for number, instance in enumerate(instances, start=1):
        logger.info("  %d. %s (Zone: %s)", number, instance.name, instance.short_zone())
    return instances