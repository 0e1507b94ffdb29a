"""Fluent builder that assembles and validates workflows."""

from __future__ import annotations

from pdmigrate.taskmanager.dag import DAG, CircularDependencyError
from pdmigrate.taskmanager.workflow import (
    MissingDependencyError,
    Task,
    TaskFunc,
    Workflow,
)


class WorkflowBuilder:
    """Collects tasks and dependencies, then builds a validated Workflow."""

    def __init__(self, workflow_id: str) -> None:
        self.workflow_id = workflow_id
        self._tasks: dict[str, Task] = {}
        self._dependencies: dict[str, list[str]] = {}

    def add_task(self, task_id: str, handler: TaskFunc) -> "WorkflowBuilder":
        """Add (or replace) a task."""
        self._tasks[task_id] = Task(task_id, handler)
        return self

    def add_dependency(self, task_id: str, dependency_id: str) -> "WorkflowBuilder":
        """Declare that ``task_id`` depends on ``dependency_id``."""
        self._dependencies.setdefault(task_id, []).append(dependency_id)
        return self

    def build(self) -> Workflow:
        """Validate the graph and return the workflow."""
        self._validate_dependencies()
        try:
            self._create_dag().topological_sort()
        except CircularDependencyError as exc:
            raise CircularDependencyError(f"invalid workflow structure: {exc}") from exc

        for task_id, deps in self._dependencies.items():
            task = self._tasks.get(task_id)
            if task is not None:
                task.depends_on = list(deps)
        return Workflow(self.workflow_id, dict(self._tasks))

    def show_order(self) -> list[str]:
        """Return the planned execution order."""
        self._validate_dependencies()
        return self._create_dag().topological_sort()

    def _validate_dependencies(self) -> None:
        for task_id, deps in self._dependencies.items():
            for dep_id in deps:
                if dep_id not in self._tasks:
                    raise MissingDependencyError(
                        f"task '{task_id}' depends on non-existent task '{dep_id}'"
                    )

    def _create_dag(self) -> DAG:
        dag = DAG()
        for task_id in self._tasks:
            dag.add_node(task_id)
        for task_id, deps in self._dependencies.items():
            for dep_id in deps:
                dag.add_edge(task_id, dep_id)
        return dag