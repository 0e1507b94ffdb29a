"""Directed acyclic graph of task dependencies with topological ordering."""

from __future__ import annotations

from collections import deque


class CircularDependencyError(ValueError):
    """Raised when a dependency graph contains a cycle."""


class DAG:
    """Graph in which an edge ``from -> to`` means ``from`` depends on ``to``."""

    def __init__(self) -> None:
        self._edges: dict[str, list[str]] = {}
        self._in_degree: dict[str, int] = {}

    def add_node(self, node_id: str) -> None:
        """Add a node; adding an existing node changes nothing."""
        self._in_degree.setdefault(node_id, 0)

    def add_edge(self, from_node: str, to_node: str) -> None:
        """Record that ``from_node`` depends on ``to_node``."""
        self.add_node(from_node)
        self.add_node(to_node)
        self._edges.setdefault(from_node, []).append(to_node)
        self._in_degree[from_node] += 1

    def dependencies(self, node_id: str) -> list[str]:
        """Return the nodes that ``node_id`` depends on."""
        return list(self._edges.get(node_id, ()))

    def in_degree(self, node_id: str) -> int:
        """Return the number of dependencies recorded for ``node_id``."""
        return self._in_degree[node_id]

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._in_degree

    def __len__(self) -> int:
        return len(self._in_degree)

    def topological_sort(self) -> list[str]:
        """Return nodes so that each comes after everything it depends on."""
        remaining = dict(self._in_degree)
        dependents: dict[str, list[str]] = {}
        for node, deps in self._edges.items():
            for dep in deps:
                dependents.setdefault(dep, []).append(node)

        queue = deque(node for node, degree in remaining.items() if degree == 0)
        order: list[str] = []
        while queue:
            current = queue.popleft()
            order.append(current)
            for node in dependents.get(current, ()):
                remaining[node] -= 1
                if remaining[node] == 0:
                    queue.append(node)

        if len(order) != len(self._in_degree):
            raise CircularDependencyError("circular dependency detected in DAG")
        return order