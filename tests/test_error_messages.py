from pdmigrate.utils.error_messages import (
    ErrorContext,
    format_error,
    permission_error,
    quota_exceeded_error,
    resource_not_found_error,
)


def test_format_error_full_context():
    context = ErrorContext(
        operation="delete disk",
        resource="d1",
        reason="busy",
        suggestion="detach",
        command="gcloud x",
    )
    assert format_error(context) == (
        "\n[ERROR] Failed to delete disk for 'd1'\n"
        "        Reason: busy\n"
        "        Action: detach\n"
        "        Command to check: gcloud x\n"
    )


def test_format_error_without_operation():
    result = format_error(ErrorContext())
    assert result.startswith("\n[ERROR] Operation failed\n")
    assert "Reason" not in result


def test_format_error_reason_from_exception():
    result = format_error(ErrorContext(operation="create snapshot"), RuntimeError("boom"))
    assert "        Reason: boom\n" in result
    assert " for '" not in result


def test_format_error_reason_takes_precedence():
    result = format_error(ErrorContext(reason="explicit"), RuntimeError("boom"))
    assert "Reason: explicit" in result
    assert "boom" not in result


def test_format_error_omits_empty_fields():
    result = format_error(ErrorContext(operation="x", reason="r"))
    assert "Action:" not in result
    assert "Command to check:" not in result
    assert result.endswith("Reason: r\n")


def test_quota_exceeded_error():
    result = quota_exceeded_error("snapshots", "us-central1-a")
    assert "Failed to allocate snapshots for 'us-central1-a'" in result
    assert "Reason: Insufficient quota" in result
    assert "gcloud compute project-info describe --project=PROJECT_ID" in result


def test_permission_error():
    result = permission_error("create snapshot", "disk-a")
    assert "Failed to create snapshot for 'disk-a'" in result
    assert "Insufficient permissions" in result
    assert "gcloud projects get-iam-policy PROJECT_ID" in result


def test_resource_not_found_error():
    result = resource_not_found_error("Instance", "vm-1")
    assert "Failed to find Instance for 'vm-1'" in result
    assert "Instance does not exist" in result
    assert "gcloud compute instances list" in result