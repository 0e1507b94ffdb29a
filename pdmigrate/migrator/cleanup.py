"""Removal of the snapshots that migrations leave behind."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Sequence

from pdmigrate.migrator.config import Config
from pdmigrate.migrator.instance_migration import MANAGED_BY_KEY, MANAGED_BY_VALUE
from pdmigrate.migrator.models import MigrationResult
from pdmigrate.utils.prompt import prompt_for_multiple_items

logger = logging.getLogger(__name__)

_DEFAULT_CONCURRENCY = 10
_MAX_CONCURRENCY = 200


def cleanup_snapshots(
    config: Config, clients: Any, results: Sequence[MigrationResult]
) -> None:
    """Delete snapshots labelled as managed by the migrator and mark ``results``."""
    logger.info("Cleanup Phase")
    logger.info(
        "Searching for snapshots with label '%s=%s' in project %s for cleanup...",
        MANAGED_BY_KEY,
        MANAGED_BY_VALUE,
        config.project_id,
    )
    try:
        snapshots = clients.snapshot_client.list_snapshots_by_label(
            config.project_id, MANAGED_BY_KEY, MANAGED_BY_VALUE
        )
    except Exception as exc:
        raise RuntimeError(f"failed to list snapshots for cleanup: {exc}") from exc

    names = [snapshot.name for snapshot in snapshots]
    if not names:
        logger.info("No snapshots found with the cleanup label.")
        return

    logger.info("Found %d snapshot(s) to cleanup: %s", len(names), ", ".join(names))
    try:
        confirmed = prompt_for_multiple_items(
            config.auto_approve_all, "delete snapshots", names
        )
    except Exception as exc:
        raise RuntimeError(f"failed to get user confirmation: {exc}") from exc
    if not confirmed:
        logger.info("Snapshot cleanup cancelled by user.")
        return

    limit = config.concurrency
    if limit <= 0 or limit > _MAX_CONCURRENCY:
        limit = _DEFAULT_CONCURRENCY
    logger.info(
        "Starting cleanup for %d snapshot(s) with concurrency limit of %d...", len(names), limit
    )

    deleted: dict[str, bool] = dict.fromkeys(names, False)
    failures: dict[str, Exception] = {}
    lock = threading.Lock()

    def delete(name: str) -> None:
        try:
            clients.snapshot_client.delete_snapshot(config.project_id, name)
        except Exception as exc:
            logger.warning("Failed to delete snapshot %s during cleanup: %s", name, exc)
            with lock:
                failures[name] = exc
        else:
            logger.info("Snapshot %s deleted successfully during cleanup.", name)
            with lock:
                deleted[name] = True

    with ThreadPoolExecutor(max_workers=limit) as pool:
        list(pool.map(delete, names))

    failed_count = 0
    for result in results:
        if result.snapshot_name not in deleted:
            continue
        result.snapshot_cleaned = deleted[result.snapshot_name]
        if not result.snapshot_cleaned:
            failed_count += 1
            failure = failures.get(result.snapshot_name)
            if failure is not None:
                result.error_message += f" | Cleanup Failed: {failure}"

    if failed_count:
        logger.warning(
            "%d snapshot(s) failed to delete during cleanup. Manual cleanup may be required.",
            failed_count,
        )
    else:
        logger.info("Snapshot cleanup completed successfully.")