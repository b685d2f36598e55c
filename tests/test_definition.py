import pytest

import zonedef.definition as definition_module
from zonedef import (
    CloudStackApiError,
    ConfigurationError,
    ZoneDefinitionConfig,
    ZoneNotFoundError,
    fetch_definition,
    fetch_definition_sync,
    fetcher,
)
from zonedef.core.adapters.memory_adapter import InMemoryCloudStackAdapter
from zonedef.core.domain.models import BUILTIN_COLLECTIONS


def _zone_client() -> InMemoryCloudStackAdapter:
    return InMemoryCloudStackAdapter({"listZones": [{"id": "z1", "name": "Zone1"}]})


@pytest.mark.asyncio
async def test_empty_zone_scenario() -> None:
    client = _zone_client()
    config = ZoneDefinitionConfig(key="k", secret="s", zone_name="Zone1")

    definition = await fetch_definition(config, client=client)

    assert definition.zone.name == "Zone1"
    for name in BUILTIN_COLLECTIONS:
        assert getattr(definition, name) == {}


@pytest.mark.asyncio
async def test_empty_key_fails_before_any_call() -> None:
    client = _zone_client()
    config = ZoneDefinitionConfig(key="", secret="s", zone_name="Zone1")

    with pytest.raises(ConfigurationError, match="key cannot be empty"):
        await fetch_definition(config, client=client)

    assert client.calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "fields",
    [
        {"key": "k", "secret": "", "zone_name": "Zone1"},
        {"key": "k", "secret": "s", "zone_name": "Zone1", "scheme": "ws"},
        {"key": "k", "secret": "s"},
    ],
)
async def test_invalid_config_makes_no_call(fields: dict) -> None:
    client = _zone_client()

    with pytest.raises(ConfigurationError):
        await fetch_definition(ZoneDefinitionConfig(**fields), client=client)

    assert client.calls == []


@pytest.mark.asyncio
async def test_missing_zone_scenario() -> None:
    client = _zone_client()
    config = ZoneDefinitionConfig(key="k", secret="s", zone_name="Missing")

    with pytest.raises(ZoneNotFoundError, match="zone Missing not found"):
        await fetch_definition(config, client=client)

    assert [command for command, _ in client.calls] == ["listZones"]


@pytest.mark.asyncio
async def test_config_fetchers_run_after_builtins() -> None:
    client = _zone_client()
    client.add("listHosts", {"id": "h1", "name": "host1", "zoneid": "z1"})

    @fetcher("host_count")
    async def host_count(client, definition):
        return {"total": len(definition.hosts)}

    config = ZoneDefinitionConfig(
        key="k", secret="s", zone_id="z1", fetchers=[host_count]
    )

    definition = await fetch_definition(config, client=client)

    assert definition.extras["host_count"] == {"total": 1}


@pytest.mark.asyncio
async def test_given_client_is_left_open() -> None:
    client = _zone_client()

    await fetch_definition(
        ZoneDefinitionConfig(key="k", secret="s", zone_name="Zone1"), client=client
    )

    assert client.closed is False


@pytest.mark.asyncio
async def test_built_client_uses_config_and_is_closed_on_error(monkeypatch) -> None:
    client = InMemoryCloudStackAdapter(
        failures={"listZones": CloudStackApiError("listZones", "denied", error_code=401)}
    )
    seen = {}

    def _create_client(config):
        seen["endpoint"] = config.endpoint
        seen["key"] = config.key
        return client

    monkeypatch.setattr(definition_module, "create_client", _create_client)
    config = ZoneDefinitionConfig(
        key="k", secret="s", zone_name="Zone1", scheme="https", address="cloud:8443"
    )

    with pytest.raises(CloudStackApiError):
        await fetch_definition(config)

    assert seen == {"endpoint": "https://cloud:8443/client/api", "key": "k"}
    assert client.closed is True


def test_create_client_builds_http_adapter() -> None:
    config = ZoneDefinitionConfig(key="k", secret="s", zone_name="Zone1").validated()

    client = definition_module.create_client(config)

    assert client.endpoint == "http://127.0.0.1:8080/client/api"


def test_fetch_definition_sync() -> None:
    client = _zone_client()

    definition = fetch_definition_sync(
        ZoneDefinitionConfig(key="k", secret="s", zone_name="Zone1"), client=client
    )

    assert definition.zone.id == "z1"
    assert definition.to_dict()["zone"] == {"id": "z1", "name": "Zone1"}
