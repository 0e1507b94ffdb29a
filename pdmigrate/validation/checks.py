"""Validation of command-line settings; each check raises ValueError on bad input."""

from __future__ import annotations


def validate_project_id(project_id: str) -> str:
    """Check that the project ID is 6 to 30 characters long and return it."""
    if not project_id:
        raise ValueError("project ID cannot be empty")
    if not 6 <= len(project_id) <= 30:
        raise ValueError("project ID must be between 6 and 30 characters")
    return project_id


def validate_concurrency(concurrency: int, maximum: int) -> int:
    """Check that concurrency lies in ``1..maximum`` and return it."""
    if not 1 <= concurrency <= maximum:
        raise ValueError(
            f"concurrency must be between 1 and {maximum}, got {concurrency}"
        )
    return concurrency


def validate_throughput(throughput: int) -> int:
    """Check that throughput lies in 140..5000 MB/s and return it."""
    if not 140 <= throughput <= 5000:
        raise ValueError(
            f"throughput must be between 140 and 5000 MB/s, got {throughput}"
        )
    return throughput


def validate_iops(iops: int) -> int:
    """Check that IOPS lies in 3000..350000 and return it."""
    if not 3000 <= iops <= 350000:
        raise ValueError(f"IOPS must be between 3000 and 350,000, got {iops}")
    return iops


def validate_label_filter(label_filter: str) -> str:
    """Check that a non-empty label filter has the form ``key=value`` and return it."""
    if label_filter and "=" not in label_filter:
        raise ValueError(f"invalid label format: {label_filter}. Expected key=value")
    return label_filter


def validate_kms_config(kms_key: str, kms_key_ring: str, kms_location: str) -> bool:
    """Check KMS settings are complete; return whether KMS encryption is requested."""
    if not kms_key:
        return False
    if not kms_key_ring or not kms_location:
        raise ValueError(
            "--kms-keyring and --kms-location are required when --kms-key is specified"
        )
    return True


def validate_location_flags(zone: str, region: str) -> str:
    """Check that exactly one of zone or region is given and return it."""
    if bool(zone) == bool(region):
        raise ValueError("exactly one of --zone or --region must be specified")
    return zone or region