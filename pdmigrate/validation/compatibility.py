"""Disk type to machine type compatibility lookups."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from os import PathLike
from typing import Any, Mapping, Optional, Union


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a compatibility check."""

    compatible: bool
    reason: str


@dataclass
class CompatibilityMatrix:
    """Supported machine types for each disk type."""

    disk_types: dict[str, list[str]] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CompatibilityMatrix":
        """Build a matrix from ``{"diskTypes": {name: {"supportedMachineTypes": [...]}}}``."""
        if not isinstance(data, Mapping):
            raise ValueError("compatibility matrix must be a JSON object")
        raw_disk_types = data.get("diskTypes") or {}
        if not isinstance(raw_disk_types, Mapping):
            raise ValueError("diskTypes must be a JSON object")

        disk_types: dict[str, list[str]] = {}
        for disk_type, info in raw_disk_types.items():
            if not isinstance(info, Mapping):
                raise ValueError(f"entry for disk type {disk_type} must be a JSON object")
            machine_types = info.get("supportedMachineTypes") or []
            if not isinstance(machine_types, list) or not all(
                isinstance(item, str) for item in machine_types
            ):
                raise ValueError(
                    f"supportedMachineTypes for disk type {disk_type} must be a list of strings"
                )
            disk_types[disk_type] = list(machine_types)
        return cls(disk_types)


def load_compatibility_matrix(path: Union[str, "PathLike[str]"]) -> CompatibilityMatrix:
    """Read a compatibility matrix from a JSON file."""
    with open(path, encoding="utf-8") as handle:
        try:
            data = json.load(handle)
        except json.JSONDecodeError as exc:
            raise ValueError(f"failed to unmarshal compatibility matrix: {exc}") from exc
    return CompatibilityMatrix.from_dict(data)


def default_matrix() -> CompatibilityMatrix:
    """Return the basic built-in compatibility matrix."""
    return CompatibilityMatrix(
        {
            "pd-standard": ["e2-micro", "f1-micro", "n2-standard-8"],
            "pd-balanced": ["e2-micro", "n2-standard-8"],
        }
    )


_DEFAULT_MATRIX = default_matrix()


def _resolve(matrix: Optional[CompatibilityMatrix]) -> CompatibilityMatrix:
    return _DEFAULT_MATRIX if matrix is None else matrix


def _normalize(value: str) -> str:
    return value.strip().lower()


def is_compatible(
    machine_type: str,
    disk_type: str,
    matrix: Optional[CompatibilityMatrix] = None,
) -> ValidationResult:
    """Check whether ``machine_type`` supports ``disk_type``."""
    machine_type = _normalize(machine_type)
    disk_type = _normalize(disk_type)

    if not machine_type:
        return ValidationResult(False, "machine type cannot be empty")
    if not disk_type:
        return ValidationResult(False, "disk type cannot be empty")

    supported = _resolve(matrix).disk_types.get(disk_type)
    if supported is None:
        return ValidationResult(False, f"unknown disk type: {disk_type}")

    if machine_type in supported:
        return ValidationResult(
            True, f"machine type {machine_type} supports disk type {disk_type}"
        )
    return ValidationResult(
        False, f"machine type {machine_type} does not support disk type {disk_type}"
    )


def get_supported_disk_types(
    machine_type: str, matrix: Optional[CompatibilityMatrix] = None
) -> list[str]:
    """Return every disk type that supports ``machine_type``."""
    machine_type = _normalize(machine_type)
    return [
        disk_type
        for disk_type, supported in _resolve(matrix).disk_types.items()
        if machine_type in supported
    ]


def get_all_machine_types(matrix: Optional[CompatibilityMatrix] = None) -> list[str]:
    """Return each machine type named in the matrix once."""
    seen: dict[str, None] = {}
    for supported in _resolve(matrix).disk_types.values():
        seen.update(dict.fromkeys(supported))
    return list(seen)


def get_all_disk_types(matrix: Optional[CompatibilityMatrix] = None) -> list[str]:
    """Return every disk type in the matrix."""
    return list(_resolve(matrix).disk_types)