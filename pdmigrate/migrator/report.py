"""Summaries and reports of migration results."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Sequence

from pdmigrate.migrator.config import Config
from pdmigrate.migrator.models import MigrationResult
from pdmigrate.utils.message_box import Box, MessageType
from pdmigrate.utils.report_builder import ReportBuilder

logger = logging.getLogger(__name__)

_MILLISECOND = 1_000_000
_SECOND = 1_000_000_000


@dataclass
class MigrationSummary:
    """Totals for one migration run; ``resource_type`` is "disk" or "instance"."""

    total_processed: int = 0
    success_count: int = 0
    failure_count: int = 0
    duration: timedelta = field(default_factory=timedelta)
    resource_type: str = ""


def _to_ns(duration: timedelta) -> int:
    return (duration // timedelta(microseconds=1)) * 1000


def _round_ns(ns: int, multiple: int) -> int:
    quotient, remainder = divmod(abs(ns), multiple)
    if 2 * remainder >= multiple:
        quotient += 1
    return quotient * multiple * (1 if ns >= 0 else -1)


def _fraction(value: int, unit: int) -> str:
    whole, frac = divmod(value, unit)
    if not frac:
        return str(whole)
    digits = str(frac).rjust(len(str(unit)) - 1, "0").rstrip("0")
    return f"{whole}.{digits}"


def _format_ns(ns: int) -> str:
    if ns == 0:
        return "0s"
    sign = "-" if ns < 0 else ""
    ns = abs(ns)
    if ns < 1000:
        body = f"{ns}ns"
    elif ns < _MILLISECOND:
        body = _fraction(ns, 1000) + "µs"
    elif ns < _SECOND:
        body = _fraction(ns, _MILLISECOND) + "ms"
    else:
        hours, rest = divmod(ns, 3600 * _SECOND)
        minutes, rest = divmod(rest, 60 * _SECOND)
        seconds = _fraction(rest, _SECOND) + "s"
        if hours:
            body = f"{hours}h{minutes}m{seconds}"
        elif minutes:
            body = f"{minutes}m{seconds}"
        else:
            body = seconds
    return sign + body


def _format_duration(duration: timedelta, resolution: int) -> str:
    return _format_ns(_round_ns(_to_ns(duration), resolution))


def print_migration_summary(summary: MigrationSummary) -> str:
    """Log a summary of a migration run and return its text."""
    report = (
        ReportBuilder()
        .header("\n[SUMMARY] Migration Summary")
        .add_key_value(f"Total {summary.resource_type}s processed", str(summary.total_processed))
        .add_key_value("Successful migrations", str(summary.success_count))
        .add_key_value("Failed migrations", str(summary.failure_count))
    )
    if summary.duration > timedelta(0):
        report.add_key_value("Total duration", _format_duration(summary.duration, _SECOND))
    text = report.build()
    logger.info(text)
    return text


def calculate_migration_summary(
    results: Sequence[MigrationResult], resource_type: str
) -> MigrationSummary:
    """Count successes and failures and add up durations."""
    success = sum(1 for result in results if result.status == "Success")
    return MigrationSummary(
        total_processed=len(results),
        success_count=success,
        failure_count=len(results) - success,
        duration=sum((result.duration for result in results), timedelta(0)),
        resource_type=resource_type,
    )


def print_completion_summary(
    summary: MigrationSummary, config: Config, start_time: datetime
) -> None:
    """Print a completion box, next steps and any failure warning."""
    elapsed = datetime.now(start_time.tzinfo) - start_time
    box = (
        Box(MessageType.SUCCESS, "Migration completed!")
        .add_line(f"Total {summary.resource_type}s processed: {summary.total_processed}")
        .add_line(f"Successful migrations: {summary.success_count}")
        .add_line(f"Failed migrations: {summary.failure_count}")
        .add_line(f"Duration: {_format_duration(elapsed, _SECOND)}")
    )
    print(box.render())

    if summary.success_count > 0:
        steps = ReportBuilder().section("Next steps:")
        if summary.resource_type == "disk":
            (
                steps.add_bullet("Verify disk performance meets expectations")
                .add_bullet("Update any documentation referencing disk types")
                .add_bullet("Consider deleting backup snapshots after verification period")
                .add_empty_line()
                .section("Useful commands:")
                .add_bullet(
                    f"Check disk status: gcloud compute disks list --project={config.project_id}"
                )
                .add_bullet('List snapshots: gcloud compute snapshots list --filter="name:pd-migrate-*"')
            )
        elif summary.resource_type == "instance":
            (
                steps.add_bullet("Verify instance performance and connectivity")
                .add_bullet("Update monitoring dashboards if disk metrics changed")
                .add_bullet("Test application functionality on migrated instances")
                .add_empty_line()
                .section("Useful commands:")
                .add_bullet(
                    "Check instance status: gcloud compute instances list "
                    f"--project={config.project_id}"
                )
                .add_bullet("SSH to instance: gcloud compute ssh INSTANCE_NAME --zone=ZONE")
                .add_bullet("View disk details: gcloud compute disks describe DISK_NAME --zone=ZONE")
            )
        print(steps.build())

    if summary.failure_count > 0:
        warning_box = (
            Box(MessageType.WARNING, "Some migrations failed")
            .add_line(
                f"{summary.failure_count} out of {summary.total_processed} "
                f"{summary.resource_type} migrations failed"
            )
            .add_line("Check the error report above for details")
        )
        print(warning_box.render())


def generate_reports(results: list[MigrationResult]) -> None:
    """Sort ``results`` in place by original disk and print summary and error reports."""
    logger.info("Reporting Phase")
    if not results:
        logger.info("No migration results to report.")
        return
    results.sort(key=lambda result: result.original_disk)
    _print_summary_report(results)
    _print_detailed_report(results)
    logger.info("Reporting phase completed")


def _tabulate(rows: Sequence[Sequence[str]], padding: int = 2) -> str:
    columns = len(rows[0]) - 1
    widths = [max(len(row[col]) for row in rows) + padding for col in range(columns)]
    return "\n".join(
        "".join(cell.ljust(width) for cell, width in zip(row[:-1], widths)) + row[-1]
        for row in rows
    )


def _print_summary_report(results: Sequence[MigrationResult]) -> None:
    print(ReportBuilder().header("[REPORT] Migration Summary").build())

    rows = [
        ["Original Disk", "New Disk", "Zone", "Status", "Duration", "Snapshot", "Cleaned Up", "Error"],
        ["-------------", "--------", "----", "------", "--------", "--------", "----------", "-----"],
    ]
    success_count = failure_count = 0
    total_ns = 0
    for res in results:
        error_message = ""
        if res.status.startswith("Failed"):
            failure_count += 1
            error_message = res.error_message
            if len(error_message) > 50:
                error_message = error_message[:47] + "..."
        elif res.status == "Success":
            success_count += 1

        cleaned_up = str(res.snapshot_cleaned).lower()
        if res.status == "Success" and not res.snapshot_cleaned:
            cleaned_up += " (!)"
            error_message = error_message or "Snapshot cleanup failed"

        rows.append([
            res.original_disk,
            res.new_disk_name,
            res.zone,
            res.status,
            _format_duration(res.duration, _MILLISECOND),
            res.snapshot_name,
            cleaned_up,
            error_message,
        ])
        total_ns += _to_ns(res.duration)
    print(_tabulate(rows))

    stats = (
        ReportBuilder()
        .section("[STATISTICS] Overall Summary")
        .add_key_value("Total Disks Processed", str(len(results)))
        .add_key_value("Successful Migrations", str(success_count))
        .add_key_value("Failed Migrations", str(failure_count))
        .add_key_value(
            "Average Duration/Disk",
            _format_ns(_round_ns(total_ns // len(results), _MILLISECOND)),
        )
        .add_separator()
    )
    print(stats.build())


def _print_detailed_report(results: Sequence[MigrationResult]) -> None:
    print(ReportBuilder().header("[ERRORS] Detailed Error Report").build())

    failures_found = False
    for res in results:
        if not (res.status.startswith("Failed") or (res.status == "Success" and not res.snapshot_cleaned)):
            continue
        failures_found = True
        details = (
            ReportBuilder()
            .add_empty_line()
            .add_key_value("Disk", f"{res.original_disk} (Zone: {res.zone})")
            .add_indented(f"Status: {res.status}", 1)
        )
        if res.error_message:
            details.add_indented(f"Error Details: {res.error_message}", 1)
        if not res.snapshot_cleaned:
            details.add_indented(f"Snapshot Cleanup: Failed for {res.snapshot_name}", 1)
        print(details.build())

    if not failures_found:
        print("No detailed errors to report.")
    print("-" * 30)