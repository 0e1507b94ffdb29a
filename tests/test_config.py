from pdmigrate.migrator.config import Config, SnapshotKmsParams


def test_no_kms_key_gives_no_params():
    config = Config(project_id="my-project", kms_key_ring="ring", kms_location="us")
    assert config.populate_kms_params() is None


def test_kms_project_defaults_to_project_id():
    config = Config(
        project_id="my-project",
        kms_key="key-1",
        kms_key_ring="ring-1",
        kms_location="us-central1",
    )
    assert config.populate_kms_params() == SnapshotKmsParams(
        kms_key="key-1",
        kms_key_ring="ring-1",
        kms_location="us-central1",
        kms_project="my-project",
    )


def test_explicit_kms_project_is_kept():
    config = Config(
        project_id="my-project",
        kms_key="key-1",
        kms_key_ring="ring-1",
        kms_location="europe-west1",
        kms_project="kms-host",
    )
    params = config.populate_kms_params()
    assert params.kms_project == "kms-host"
    assert params.kms_location == "europe-west1"


def test_location_prefers_zone():
    assert Config(zone="us-central1-a", region="us-central1").location() == "us-central1-a"


def test_location_falls_back_to_region():
    assert Config(region="us-central1").location() == "us-central1"
    assert Config().location() == ""


def test_instances_are_not_shared_between_configs():
    first = Config()
    second = Config()
    first.instances.append("vm-1")
    assert second.instances == []
    assert first.instances == ["vm-1"]