"""Tasks and workflows that run them in dependency order."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from pdmigrate.taskmanager.dag import DAG, CircularDependencyError
from pdmigrate.taskmanager.shared_context import SharedContext

TaskFunc = Callable[[SharedContext], None]


class MissingDependencyError(ValueError):
    """Raised when a task depends on a task that does not exist."""


class TaskFailedError(RuntimeError):
    """Raised when a task handler fails during workflow execution."""

    def __init__(self, task_id: str, cause: BaseException) -> None:
        super().__init__(f"task {task_id} failed: {cause}")
        self.task_id = task_id


@dataclass
class Task:
    """A single unit of work in a workflow."""

    id: str
    handler: TaskFunc
    depends_on: list[str] = field(default_factory=list)


@dataclass
class Workflow:
    """A collection of tasks keyed by id, run in topological order."""

    id: str
    tasks: dict[str, Task] = field(default_factory=dict)

    def execute(self, shared: SharedContext) -> None:
        """Run every task after the tasks it depends on; stop at the first failure."""
        self._validate_dependencies()
        try:
            order = self._create_dag().topological_sort()
        except CircularDependencyError as exc:
            raise CircularDependencyError(
                f"failed to determine execution order: {exc}"
            ) from exc

        for task_id in order:
            try:
                self.tasks[task_id].handler(shared)
            except Exception as exc:
                raise TaskFailedError(task_id, exc) from exc

    def _validate_dependencies(self) -> None:
        for task in self.tasks.values():
            for dep_id in task.depends_on:
                if dep_id not in self.tasks:
                    raise MissingDependencyError(
                        f"task {task.id} depends on non-existent task {dep_id}"
                    )

    def _create_dag(self) -> DAG:
        dag = DAG()
        for task_id in self.tasks:
            dag.add_node(task_id)
        for task in self.tasks.values():
            for dep_id in task.depends_on:
                dag.add_edge(task.id, dep_id)
        return dag