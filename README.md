# pdmigrate

A library for moving persistent disks to a different disk type. A
migration takes a snapshot of each disk and creates a new disk of the
target type from that snapshot. For disks attached to an instance it
snapshots the non-boot disks, stops the instance if it was running,
detaches, migrates and reattaches each non-boot disk, and starts the
instance again.

The package has no standard-library-only dependencies beyond Python 3.10.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Modules

### `pdmigrate.taskmanager`

A small workflow engine.

- `shared_context.SharedContext`: a lock-guarded key/value store with
  `set`, `get(key, default)` and `in`.
- `dag.DAG`: a dependency graph with `add_node`, `add_edge`,
  `dependencies`, `in_degree` and `topological_sort`, which raises
  `CircularDependencyError` on a cycle.
- `workflow.Task` and `workflow.Workflow`: `Workflow.execute(shared)` runs
  each task after the tasks it depends on. A dependency on an unknown task
  raises `MissingDependencyError`; a failing handler stops the run and
  raises `TaskFailedError`.
- `workflow_builder.WorkflowBuilder`: `add_task`, `add_dependency`,
  `build` (validates and returns a `Workflow`) and `show_order`.

### `pdmigrate.validation`

- `compatibility`: `is_compatible`, `get_supported_disk_types`,
  `get_all_machine_types` and `get_all_disk_types`. Each takes an optional
  `CompatibilityMatrix`; without one, the small built-in `default_matrix()`
  is used. Load a fuller matrix from a JSON file of the form
  `{"diskTypes": {"pd-ssd": {"supportedMachineTypes": [...]}}}` with
  `load_compatibility_matrix(path)` or `CompatibilityMatrix.from_dict`.
- `checks`: `validate_project_id`, `validate_concurrency`,
  `validate_throughput`, `validate_iops`, `validate_label_filter`,
  `validate_kms_config` and `validate_location_flags`; each raises
  `ValueError` on bad input.

### `pdmigrate.utils`

- `filters`: `build_gcp_label_filter` and `matches_label`.
- `names`: `extract_zone_name`, `extract_disk_type`,
  `extract_machine_type`, `add_suffix`, `get_storage_pool_url`,
  `get_disk_url`.
- `error_messages`: `ErrorContext`, `format_error`,
  `quota_exceeded_error`, `permission_error`, `resource_not_found_error`.
- `report_builder.ReportBuilder`, `table.TableFormatter`, and
  `message_box` (`Box`, `MessageType`, `info`, `success`, `warning`,
  `error`, `question`, `wrap_text`). Boxes are coloured only when standard
  output is a terminal and `NO_COLOR` is unset.
- `prompt`: `prompt_for_confirmation` and `prompt_for_multiple_items`
  read a yes/no answer from standard input unless auto-approved.

### `pdmigrate.migrator`

- `config`: `Config` and `SnapshotKmsParams`.
- `models`: `Disk`, `Instance`, `AttachedDisk`, `MigrationResult`.
- `discovery`: `discover_disks` and `discover_instances`.
- `disk_migration`: `migrate_disks` (concurrent, at most
  `config.concurrency` at a time) and `migrate_single_disk`.
- `instance_migration`: `handle_instance_disk_migration`,
  `migrate_instance_non_boot_disks`, `snapshot_instance_disks`,
  `get_instance_state`, `incremental_snapshot_disk`.
- `cleanup`: `cleanup_snapshots` deletes snapshots labelled
  `managed-by=pd-migrate` and marks the matching results.
- `report`: `calculate_migration_summary`, `print_migration_summary`,
  `print_completion_summary`, `generate_reports`.

Progress is written through the standard `logging` module.

## The `clients` object

The migration functions take a `clients` argument with three attributes,
called with positional arguments:

- `disk_client`: `get_disk`, `list_detached_disks`, `delete_disk`,
  `update_disk_label`, `create_new_disk_from_snapshot`.
- `snapshot_client`: `create_snapshot`, `delete_snapshot`,
  `list_snapshots_by_label`.
- `compute_client`: `instance_is_running`, `get_instance`,
  `list_instances_in_zone`, `aggregated_list_instances`, `detach_disk`,
  `attach_disk`, `stop_instance`, `start_instance`.

Errors are reported by raising exceptions.

## Example: a workflow

```python
from pdmigrate.taskmanager.shared_context import SharedContext
from pdmigrate.taskmanager.workflow_builder import WorkflowBuilder

def snapshot(shared):
    shared.set("snapshot_status", "completed")

def migrate(shared):
    assert shared.get("snapshot_status") == "completed"

workflow = (
    WorkflowBuilder("demo")
    .add_task("snapshot", snapshot)
    .add_task("migrate", migrate)
    .add_dependency("migrate", "snapshot")
    .build()
)
workflow.execute(SharedContext())
```

## Example: label filters

```python
from pdmigrate.utils.filters import build_gcp_label_filter, matches_label

build_gcp_label_filter("env=production")   # 'labels.env="production"'
build_gcp_label_filter("backup")           # 'labels.backup:*'
matches_label({"env": "production"}, "env=production")  # True
```

## What the package does not do

- It does not talk to a cloud API. There is no built-in client; you supply
  the `clients` object described above.
- It has no command-line program. It is used from Python code.
- It does not check credentials or authentication.
- It ships no full compatibility matrix file; the built-in default covers
  only `pd-standard` and `pd-balanced` for a few machine types.