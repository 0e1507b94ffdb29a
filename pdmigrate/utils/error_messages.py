"""Formatting of detailed, actionable error messages."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ErrorContext:
    """Details that make an error message actionable."""

    operation: str = ""
    resource: str = ""
    reason: str = ""
    suggestion: str = ""
    command: str = ""


def format_error(context: ErrorContext, error: Optional[BaseException] = None) -> str:
    """Render a multi-line error message from ``context`` and an optional error."""
    parts = ["\n[ERROR] "]
    if context.operation:
        parts.append(f"Failed to {context.operation}")
        if context.resource:
            parts.append(f" for '{context.resource}'")
    else:
        parts.append("Operation failed")
    parts.append("\n")

    if context.reason:
        parts.append(f"        Reason: {context.reason}\n")
    elif error is not None:
        parts.append(f"        Reason: {error}\n")

    if context.suggestion:
        parts.append(f"        Action: {context.suggestion}\n")
    if context.command:
        parts.append(f"        Command to check: {context.command}\n")
    return "".join(parts)


def quota_exceeded_error(resource: str, location: str) -> str:
    """Message for an exhausted quota."""
    return format_error(
        ErrorContext(
            operation=f"allocate {resource}",
            resource=location,
            reason="Insufficient quota",
            suggestion="Increase quota or free up existing resources",
            command="gcloud compute project-info describe --project=PROJECT_ID",
        )
    )


def permission_error(operation: str, resource: str) -> str:
    """Message for missing IAM permissions."""
    return format_error(
        ErrorContext(
            operation=operation,
            resource=resource,
            reason="Insufficient permissions",
            suggestion="Ensure your service account has the required IAM roles",
            command="gcloud projects get-iam-policy PROJECT_ID",
        )
    )


def resource_not_found_error(resource_type: str, resource_name: str) -> str:
    """Message for a resource that does not exist."""
    return format_error(
        ErrorContext(
            operation=f"find {resource_type}",
            resource=resource_name,
            reason=f"{resource_type} does not exist",
            suggestion=f"Verify the {resource_type} name and location",
            command=f"gcloud compute {resource_type.lower()}s list",
        )
    )