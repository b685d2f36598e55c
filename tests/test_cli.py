import json

import pytest
import structlog
from click.testing import CliRunner

import zonedef.cli as cli_module
import zonedef.definition as definition_module
from zonedef.cli import main
from zonedef.core.adapters.memory_adapter import InMemoryCloudStackAdapter


@pytest.fixture
def client(monkeypatch) -> InMemoryCloudStackAdapter:
    fake = InMemoryCloudStackAdapter(
        {
            "listZones": [{"id": "z1", "name": "Zone1"}],
            "listPods": [{"id": "p1", "name": "pod1", "zoneid": "z1"}],
            "listPhysicalNetworks": [{"id": "pn1", "name": "physnet1", "zoneid": "z1"}],
            "listTrafficTypes": [{"id": "tt1", "traffictype": "Guest", "physicalnetworkid": "pn1"}],
            "listNetworks": [
                {"id": "n1", "name": "guest-net", "physicalnetworkid": "pn1", "traffictype": "Guest"}
            ],
        }
    )
    monkeypatch.setattr(definition_module, "create_client", lambda config: fake)
    # keep log lines out of captured stdout
    monkeypatch.setattr(
        cli_module,
        "setup_logging",
        lambda level: structlog.configure(logger_factory=structlog.ReturnLoggerFactory()),
    )
    yield fake
    structlog.reset_defaults()


def test_fetch_json_output(client: InMemoryCloudStackAdapter) -> None:
    runner = CliRunner()

    result = runner.invoke(
        main,
        ["fetch", "--key", "k", "--secret", "s", "--zone-name", "Zone1", "--format", "json"],
    )

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["zone"]["name"] == "Zone1"
    assert list(payload["pods"]) == ["pod1"]
    networks = payload["physical_networks"]["physnet1"]["traffic_types"]["Guest"]["networks"]
    assert list(networks) == ["guest-net"]
    assert client.closed is True


def test_fetch_table_output(client: InMemoryCloudStackAdapter) -> None:
    runner = CliRunner()

    result = runner.invoke(main, ["fetch", "--key", "k", "--secret", "s", "--zone-id", "z1"])

    assert result.exit_code == 0, result.output
    assert "Zone Zone1" in result.output
    assert "primary_storage_pools" in result.output
    assert "guest-net" in result.output


def test_fetch_reads_config_file(client: InMemoryCloudStackAdapter, tmp_path) -> None:
    config_path = tmp_path / "zone.yaml"
    config_path.write_text("key: k\nsecret: s\nzoneName: Zone1\n")
    runner = CliRunner()

    result = runner.invoke(main, ["fetch", "-c", str(config_path), "-f", "json"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["zone"]["id"] == "z1"


def test_fetch_reads_env_vars(client: InMemoryCloudStackAdapter) -> None:
    runner = CliRunner()

    result = runner.invoke(
        main,
        ["fetch", "-f", "json"],
        env={"ZONEDEF_KEY": "k", "ZONEDEF_SECRET": "s", "ZONEDEF_ZONE_NAME": "Zone1"},
    )

    assert result.exit_code == 0, result.output


def test_fetch_missing_key_exits_with_error(client: InMemoryCloudStackAdapter) -> None:
    runner = CliRunner()

    result = runner.invoke(
        main,
        ["fetch", "--secret", "s", "--zone-name", "Zone1"],
        env={"ZONEDEF_KEY": None},
    )

    assert result.exit_code == 1
    assert "key cannot be empty" in result.output
    assert client.calls == []


def test_fetch_missing_zone_exits_with_error(client: InMemoryCloudStackAdapter) -> None:
    runner = CliRunner()

    result = runner.invoke(main, ["fetch", "--key", "k", "--secret", "s", "--zone-name", "Missing"])

    assert result.exit_code == 1
    assert "zone Missing not found" in result.output


def test_info_lists_builtin_fetchers() -> None:
    runner = CliRunner()

    result = runner.invoke(main, ["info"])

    assert result.exit_code == 0
    assert "physical_networks" in result.output
    assert "global_configs" in result.output


def test_fetch_table_keeps_bracketed_names(client: InMemoryCloudStackAdapter) -> None:
    client.add("listPhysicalNetworks", {"id": "pn2", "name": "phys[/]net", "zoneid": "z1"})
    client.add("listTrafficTypes", {"id": "tt2", "traffictype": "Public", "physicalnetworkid": "pn2"})
    client.add(
        "listNetworks",
        {"id": "n2", "name": "guest[dmz]", "physicalnetworkid": "pn2", "traffictype": "Public"},
    )
    runner = CliRunner()

    result = runner.invoke(main, ["fetch", "--key", "k", "--secret", "s", "--zone-id", "z1"])

    assert result.exit_code == 0, result.output
    assert "phys[/]net" in result.output
    assert "guest[dmz]" in result.output


def test_fetch_malformed_yaml_exits_with_error(client: InMemoryCloudStackAdapter, tmp_path) -> None:
    config_path = tmp_path / "zone.yaml"
    config_path.write_text("key: [unclosed\n")
    runner = CliRunner()

    result = runner.invoke(main, ["fetch", "-c", str(config_path)])

    assert result.exit_code == 1
    assert "Invalid YAML" in result.output
    assert client.calls == []
