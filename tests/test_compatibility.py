import json

import pytest

from pdmigrate.validation.compatibility import (
    CompatibilityMatrix,
    ValidationResult,
    default_matrix,
    get_all_disk_types,
    get_all_machine_types,
    get_supported_disk_types,
    is_compatible,
    load_compatibility_matrix,
)

MATRIX_DATA = {
    "diskTypes": {
        "pd-standard": {
            "supportedMachineTypes": [
                "n2-standard-2",
                "n2-standard-8",
                "n2-standard-16",
                "n2-standard-32",
                "n2-standard-80",
                "n1-standard-8",
                "e2-micro",
                "f1-micro",
            ]
        },
        "pd-balanced": {
            "supportedMachineTypes": [
                "n2-standard-8",
                "n2-standard-80",
                "n1-standard-8",
                "e2-micro",
            ]
        },
        "pd-ssd": {"supportedMachineTypes": ["n2-standard-8", "n2-standard-80"]},
        "hyperdisk-throughput": {
            "supportedMachineTypes": [
                "n2-standard-8",
                "n2-standard-32",
                "n2-standard-80",
                "c3-standard-4",
                "c3-standard-88",
            ]
        },
        "hyperdisk-extreme": {
            "supportedMachineTypes": ["n2-standard-80", "c3-standard-88"]
        },
        "hyperdisk-balanced": {
            "supportedMachineTypes": ["c3-standard-4", "c3-standard-88"]
        },
        "local-ssd": {
            "supportedMachineTypes": [
                "n2-standard-16",
                "n2-standard-80",
                "c3-standard-4",
                "c3-standard-88",
            ]
        },
        "pd-extreme": {"supportedMachineTypes": []},
    }
}

MATRIX = CompatibilityMatrix.from_dict(MATRIX_DATA)


@pytest.mark.parametrize(
    "machine_type, disk_type, compatible, reason",
    [
        ("n2-standard-8", "pd-standard", True,
         "machine type n2-standard-8 supports disk type pd-standard"),
        ("n2-standard-80", "hyperdisk-extreme", True,
         "machine type n2-standard-80 supports disk type hyperdisk-extreme"),
        ("n2-standard-8", "hyperdisk-extreme", False,
         "machine type n2-standard-8 does not support disk type hyperdisk-extreme"),
        ("e2-micro", "pd-balanced", True,
         "machine type e2-micro supports disk type pd-balanced"),
        ("e2-micro", "hyperdisk-extreme", False,
         "machine type e2-micro does not support disk type hyperdisk-extreme"),
        ("f1-micro", "pd-standard", True,
         "machine type f1-micro supports disk type pd-standard"),
        ("f1-micro", "pd-balanced", False,
         "machine type f1-micro does not support disk type pd-balanced"),
        ("c3-standard-88", "hyperdisk-extreme", True,
         "machine type c3-standard-88 supports disk type hyperdisk-extreme"),
        ("c3-standard-4", "hyperdisk-extreme", False,
         "machine type c3-standard-4 does not support disk type hyperdisk-extreme"),
        ("c3-standard-4", "hyperdisk-balanced", True,
         "machine type c3-standard-4 supports disk type hyperdisk-balanced"),
        ("n1-standard-8", "hyperdisk-balanced", False,
         "machine type n1-standard-8 does not support disk type hyperdisk-balanced"),
        ("unknown-type", "pd-standard", False,
         "machine type unknown-type does not support disk type pd-standard"),
        ("n2-standard-8", "unknown-disk", False, "unknown disk type: unknown-disk"),
        ("", "pd-standard", False, "machine type cannot be empty"),
        ("n2-standard-8", "", False, "disk type cannot be empty"),
        ("N2-STANDARD-8", "pd-standard", True,
         "machine type n2-standard-8 supports disk type pd-standard"),
        ("n2-standard-8", "PD-STANDARD", True,
         "machine type n2-standard-8 supports disk type pd-standard"),
        ("  n2-standard-8  ", "  pd-standard  ", True,
         "machine type n2-standard-8 supports disk type pd-standard"),
        ("n2-standard-16", "local-ssd", True,
         "machine type n2-standard-16 supports disk type local-ssd"),
        ("n2-standard-2", "local-ssd", False,
         "machine type n2-standard-2 does not support disk type local-ssd"),
        ("n2-standard-32", "hyperdisk-throughput", True,
         "machine type n2-standard-32 supports disk type hyperdisk-throughput"),
    ],
)
def test_is_compatible(machine_type, disk_type, compatible, reason):
    result = is_compatible(machine_type, disk_type, MATRIX)
    assert result.compatible is compatible
    assert result.reason == reason


@pytest.mark.parametrize(
    "machine_type, contains, not_contains",
    [
        ("n2-standard-8",
         ["pd-standard", "pd-balanced", "pd-ssd", "hyperdisk-throughput"],
         ["hyperdisk-extreme"]),
        ("n2-standard-80",
         ["pd-standard", "pd-balanced", "pd-ssd", "hyperdisk-throughput",
          "hyperdisk-extreme", "local-ssd"],
         []),
        ("e2-micro", ["pd-standard", "pd-balanced"],
         ["hyperdisk-extreme", "hyperdisk-balanced", "local-ssd"]),
        ("f1-micro", ["pd-standard"], ["pd-balanced", "pd-ssd", "hyperdisk-extreme"]),
        ("c3-standard-88",
         ["hyperdisk-balanced", "hyperdisk-throughput", "hyperdisk-extreme", "local-ssd"],
         ["pd-standard", "pd-balanced"]),
        ("c3-standard-4",
         ["hyperdisk-balanced", "hyperdisk-throughput", "local-ssd"],
         ["hyperdisk-extreme", "pd-standard"]),
        ("unknown-type", [], ["pd-standard", "pd-balanced"]),
    ],
)
def test_get_supported_disk_types(machine_type, contains, not_contains):
    result = get_supported_disk_types(machine_type, MATRIX)
    for disk_type in contains:
        assert disk_type in result
    for disk_type in not_contains:
        assert disk_type not in result


def test_get_all_machine_types():
    result = get_all_machine_types(MATRIX)
    for machine_type in ("n2-standard-8", "e2-micro", "c3-standard-88", "f1-micro"):
        assert machine_type in result
    assert len(result) == len(set(result))


def test_get_all_disk_types():
    result = get_all_disk_types(MATRIX)
    for disk_type in ("pd-standard", "pd-balanced", "hyperdisk-extreme", "local-ssd"):
        assert disk_type in result
    assert len(result) > 0


def test_matrix_from_dict_contents():
    assert "pd-standard" in MATRIX.disk_types
    assert "hyperdisk-extreme" in MATRIX.disk_types
    assert "n2-standard-8" in MATRIX.disk_types["pd-standard"]
    assert "e2-micro" in MATRIX.disk_types["pd-standard"]


def test_validation_result_fields():
    result = ValidationResult(compatible=True, reason="test reason")
    assert result.compatible is True
    assert result.reason == "test reason"


def test_disk_type_with_empty_supported_list():
    result = is_compatible("n2-standard-8", "pd-extreme", MATRIX)
    assert result.compatible is False
    assert "does not support" in result.reason


def test_supported_disk_types_with_whitespace():
    result = get_supported_disk_types("  n2-standard-8  ", MATRIX)
    assert len(result) > 0
    assert "pd-standard" in result


def test_case_sensitivity_gives_same_result():
    assert is_compatible("N2-STANDARD-8", "PD-STANDARD", MATRIX) == is_compatible(
        "n2-standard-8", "pd-standard", MATRIX
    )


def test_load_matrix_round_trip(tmp_path):
    path = tmp_path / "matrix.json"
    path.write_text(json.dumps(MATRIX_DATA), encoding="utf-8")
    loaded = load_compatibility_matrix(path)
    assert loaded == MATRIX


def test_load_matrix_invalid_json(tmp_path):
    path = tmp_path / "matrix.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError, match="failed to unmarshal compatibility matrix"):
        load_compatibility_matrix(path)


def test_from_dict_rejects_bad_machine_types():
    with pytest.raises(ValueError):
        CompatibilityMatrix.from_dict(
            {"diskTypes": {"pd-ssd": {"supportedMachineTypes": "n2-standard-8"}}}
        )


def test_default_matrix_is_used_without_argument():
    assert default_matrix().disk_types["pd-standard"] == [
        "e2-micro",
        "f1-micro",
        "n2-standard-8",
    ]
    assert get_supported_disk_types("f1-micro") == ["pd-standard"]
    assert is_compatible("e2-micro", "pd-balanced").compatible is True
    assert is_compatible("f1-micro", "pd-balanced").compatible is False
    assert sorted(get_all_disk_types()) == ["pd-balanced", "pd-standard"]