"""Built-in fetchers - one list call per zone collection."""

from collections.abc import Iterable
from typing import Any, TypeVar

import structlog

from zonedef.core.domain.models import (
    CloudStackRecord,
    Cluster,
    Configuration,
    DiskOffering,
    Host,
    ImageStore,
    Network,
    PhysicalNetwork,
    PhysicalNetworkRecord,
    Pod,
    ServiceOffering,
    StoragePool,
    TrafficType,
    TrafficTypeRecord,
    ZoneDefinition,
)
from zonedef.core.ports.inbound.fetcher import IFetcher
from zonedef.core.ports.outbound.cloudstack import ICloudStackPort

logger = structlog.get_logger(__name__)

R = TypeVar("R", bound=CloudStackRecord)


def index_records(records: Iterable[R], collection: str) -> dict[str, R]:
    """
    Key records by name.

    When two records share a name the later one wins and a warning
    is logged.

    Args:
        records: Records in API order
        collection: Collection name, for the log line

    Returns:
        Records keyed by ``record.key``
    """
    indexed: dict[str, R] = {}
    for record in records:
        if record.key in indexed:
            logger.warning(
                "duplicate_record_name",
                collection=collection,
                name=record.key,
                replaced_id=indexed[record.key].id,
                record_id=record.id,
            )
        indexed[record.key] = record
    return indexed


class ZoneListFetcher(IFetcher):
    """
    Fetch one zone-scoped list and key it by name.

    Covers every built-in collection except physical networks.
    """

    def __init__(
        self,
        collection: str,
        command: str,
        record_type: type[CloudStackRecord],
    ):
        """
        Args:
            collection: ZoneDefinition field this fetcher fills
            command: API list command
            record_type: Model used to parse each item
        """
        self.collection = collection
        self.command = command
        self.record_type = record_type

    async def fetch(
        self,
        client: ICloudStackPort,
        definition: ZoneDefinition,
    ) -> dict[str, Any]:
        items = await client.list_resources(self.command, zoneid=definition.zone.id)
        return index_records(
            (self.record_type.model_validate(item) for item in items),
            self.collection,
        )


class PhysicalNetworkFetcher(IFetcher):
    """
    Fetch physical networks with their traffic types and networks.

    Physical networks are listed per zone, traffic types per physical
    network, networks per physical network and traffic type.
    """

    collection = "physical_networks"

    async def fetch(
        self,
        client: ICloudStackPort,
        definition: ZoneDefinition,
    ) -> dict[str, PhysicalNetwork]:
        zone_id = definition.zone.id
        items = await client.list_resources("listPhysicalNetworks", zoneid=zone_id)
        records = index_records(
            (PhysicalNetworkRecord.model_validate(item) for item in items),
            self.collection,
        )

        physical_networks: dict[str, PhysicalNetwork] = {}
        for name, record in records.items():
            traffic_types = await self._fetch_traffic_types(client, zone_id, record)
            physical_networks[name] = PhysicalNetwork(
                record=record,
                traffic_types=traffic_types,
            )
        return physical_networks

    async def _fetch_traffic_types(
        self,
        client: ICloudStackPort,
        zone_id: str,
        physical_network: PhysicalNetworkRecord,
    ) -> dict[str, TrafficType]:
        items = await client.list_resources(
            "listTrafficTypes",
            physicalnetworkid=physical_network.id,
        )
        records = index_records(
            (TrafficTypeRecord.model_validate(item) for item in items),
            f"{physical_network.name}.traffic_types",
        )

        traffic_types: dict[str, TrafficType] = {}
        for key, record in records.items():
            networks = await client.list_resources(
                "listNetworks",
                zoneid=zone_id,
                physicalnetworkid=physical_network.id,
                traffictype=record.traffic_type,
            )
            traffic_types[key] = TrafficType(
                record=record,
                networks=index_records(
                    (Network.model_validate(item) for item in networks),
                    f"{physical_network.name}.{key}.networks",
                ),
            )
        return traffic_types


def builtin_fetchers() -> list[IFetcher]:
    """Built-in fetchers in execution order."""
    return [
        ZoneListFetcher("pods", "listPods", Pod),
        ZoneListFetcher("clusters", "listClusters", Cluster),
        ZoneListFetcher("hosts", "listHosts", Host),
        ZoneListFetcher("primary_storage_pools", "listStoragePools", StoragePool),
        ZoneListFetcher("secondary_storage_pools", "listImageStores", ImageStore),
        PhysicalNetworkFetcher(),
        ZoneListFetcher("compute_offerings", "listServiceOfferings", ServiceOffering),
        ZoneListFetcher("disk_offerings", "listDiskOfferings", DiskOffering),
        ZoneListFetcher("global_configs", "listConfigurations", Configuration),
    ]
