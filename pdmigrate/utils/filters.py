"""Label filter helpers for server-side and client-side filtering."""

from __future__ import annotations

from typing import Mapping, Optional


def _split_filter(label_filter: str) -> tuple[str, str]:
    key, _, value = label_filter.partition("=")
    key, value = key.strip(), value.strip()
    if not key:
        raise ValueError("label key cannot be empty")
    return key, value


def build_gcp_label_filter(label_filter: str) -> str:
    """Turn ``key=value`` or ``key`` into a Compute Engine filter expression."""
    if not label_filter:
        return ""
    if "=" not in label_filter:
        return f"labels.{label_filter}:*"
    key, value = _split_filter(label_filter)
    escaped = value.replace('"', '\\"')
    return f'labels.{key}="{escaped}"'


def matches_label(labels: Optional[Mapping[str, str]], label_filter: str) -> bool:
    """Return whether ``labels`` satisfy ``key=value`` or the presence of ``key``."""
    if not label_filter:
        return True
    labels = labels or {}
    if "=" not in label_filter:
        return label_filter in labels
    key, value = _split_filter(label_filter)
    return key in labels and labels[key] == value