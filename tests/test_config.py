import json

import pytest

from zonedef.config import (
    DEFAULT_ADDRESS,
    DEFAULT_PATH,
    DEFAULT_SCHEME,
    ConfigLoader,
    ZoneDefinitionConfig,
)
from zonedef.core.domain.models import ConfigurationError


def test_defaults_build_local_endpoint() -> None:
    config = ZoneDefinitionConfig(key="k", secret="s", zone_name="Zone1").validated()

    assert config.scheme == DEFAULT_SCHEME
    assert config.address == DEFAULT_ADDRESS
    assert config.path == DEFAULT_PATH
    assert config.endpoint == "http://127.0.0.1:8080/client/api"


def test_empty_connection_fields_fall_back_to_defaults() -> None:
    config = ZoneDefinitionConfig(
        key="k", secret="s", zone_id="z1", scheme="", address="", path=""
    ).validated()

    assert config.endpoint == "http://127.0.0.1:8080/client/api"


def test_https_endpoint() -> None:
    config = ZoneDefinitionConfig(
        key="k",
        secret="s",
        zone_name="Zone1",
        scheme="https",
        address="cloud.example.com",
        path="/api",
    ).validated()

    assert config.endpoint == "https://cloud.example.com/api"


@pytest.mark.parametrize(
    ("fields", "message"),
    [
        ({"key": "", "secret": "s", "zone_name": "Zone1"}, "key cannot be empty"),
        ({"key": "k", "secret": "", "zone_name": "Zone1"}, "secret cannot be empty"),
        ({"key": "k", "secret": "s", "zone_name": "Zone1", "scheme": "ftp"}, "scheme must be http or https"),
        ({"key": "k", "secret": "s"}, "zone name or id must be populated"),
    ],
)
def test_validation_errors(fields: dict, message: str) -> None:
    with pytest.raises(ConfigurationError, match=message):
        ZoneDefinitionConfig(**fields).validated()


def test_key_checked_before_everything_else() -> None:
    config = ZoneDefinitionConfig(key="", secret="", scheme="gopher")

    with pytest.raises(ConfigurationError, match="key cannot be empty"):
        config.validated()


def test_configuration_error_is_value_error() -> None:
    with pytest.raises(ValueError):
        ZoneDefinitionConfig(secret="s", zone_name="Zone1").validated()


def test_loader_reads_yaml_with_camel_case_keys(tmp_path) -> None:
    path = tmp_path / "zone.yaml"
    path.write_text(
        "key: k\n"
        "secret: s\n"
        "scheme: https\n"
        "address: cloud.example.com:8443\n"
        "zoneName: Zone1\n"
    )

    config = ConfigLoader().load_from_file(path).validated()

    assert config.zone_name == "Zone1"
    assert config.endpoint == "https://cloud.example.com:8443/client/api"


def test_loader_reads_json_and_applies_overrides(tmp_path) -> None:
    path = tmp_path / "zone.json"
    path.write_text(json.dumps({"key": "k", "secret": "s", "zoneID": "z-file"}))

    config = ConfigLoader().load_from_file(path, zone_id="z-cli", secret=None)

    assert config.zone_id == "z-cli"
    assert config.secret == "s"


def test_loader_rejects_unknown_format(tmp_path) -> None:
    path = tmp_path / "zone.ini"
    path.write_text("key=k")

    with pytest.raises(ValueError, match="Unsupported file format"):
        ConfigLoader().load_from_file(path)


def test_loader_missing_file(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        ConfigLoader().load_from_file(tmp_path / "absent.yaml")


def test_loader_rejects_malformed_yaml(tmp_path) -> None:
    path = tmp_path / "zone.yml"
    path.write_text("key: [unclosed\n")

    with pytest.raises(ValueError, match="Invalid YAML"):
        ConfigLoader().load_from_file(path)


def test_loader_rejects_malformed_json(tmp_path) -> None:
    path = tmp_path / "zone.json"
    path.write_text('{"key": ')

    with pytest.raises(ValueError):
        ConfigLoader().load_from_file(path)
