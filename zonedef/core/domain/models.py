"""Domain models for zone definitions."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class CloudStackRecord(BaseModel):
    """
    Base class for records returned by the management API.

    Fields are populated from the API's lowercase keys through aliases.
    Keys the model does not declare are kept as extra attributes.
    """

    model_config = ConfigDict(
        extra="allow",
        populate_by_name=True,
        frozen=True,
        coerce_numbers_to_str=True,
    )

    id: str = ""
    name: str = ""

    @property
    def key(self) -> str:
        """Key used when the record is indexed in a collection."""
        return self.name


class Zone(CloudStackRecord):
    """Top-level resource isolation boundary."""

    description: Optional[str] = None
    network_type: Optional[str] = Field(default=None, alias="networktype")
    allocation_state: Optional[str] = Field(default=None, alias="allocationstate")
    dns1: Optional[str] = None
    dns2: Optional[str] = None
    internal_dns1: Optional[str] = Field(default=None, alias="internaldns1")
    guest_cidr_address: Optional[str] = Field(default=None, alias="guestcidraddress")
    security_groups_enabled: Optional[bool] = Field(
        default=None, alias="securitygroupsenabled"
    )
    local_storage_enabled: Optional[bool] = Field(
        default=None, alias="localstorageenabled"
    )


class Pod(CloudStackRecord):
    """Subdivision of a zone grouping clusters."""

    zone_id: Optional[str] = Field(default=None, alias="zoneid")
    gateway: Optional[str] = None
    netmask: Optional[str] = None
    # a string or a list of strings depending on the API version
    start_ip: Optional[Any] = Field(default=None, alias="startip")
    end_ip: Optional[Any] = Field(default=None, alias="endip")
    allocation_state: Optional[str] = Field(default=None, alias="allocationstate")


class Cluster(CloudStackRecord):
    """Group of hosts sharing storage and network."""

    zone_id: Optional[str] = Field(default=None, alias="zoneid")
    pod_id: Optional[str] = Field(default=None, alias="podid")
    pod_name: Optional[str] = Field(default=None, alias="podname")
    hypervisor_type: Optional[str] = Field(default=None, alias="hypervisortype")
    cluster_type: Optional[str] = Field(default=None, alias="clustertype")
    allocation_state: Optional[str] = Field(default=None, alias="allocationstate")
    managed_state: Optional[str] = Field(default=None, alias="managedstate")


class Host(CloudStackRecord):
    """Physical compute node."""

    type: Optional[str] = None
    state: Optional[str] = None
    resource_state: Optional[str] = Field(default=None, alias="resourcestate")
    zone_id: Optional[str] = Field(default=None, alias="zoneid")
    pod_id: Optional[str] = Field(default=None, alias="podid")
    cluster_id: Optional[str] = Field(default=None, alias="clusterid")
    cluster_name: Optional[str] = Field(default=None, alias="clustername")
    ip_address: Optional[str] = Field(default=None, alias="ipaddress")
    hypervisor: Optional[str] = None
    cpu_number: Optional[int] = Field(default=None, alias="cpunumber")
    memory_total: Optional[int] = Field(default=None, alias="memorytotal")


class StoragePool(CloudStackRecord):
    """Primary storage backing running workloads."""

    type: Optional[str] = None
    scope: Optional[str] = None
    state: Optional[str] = None
    path: Optional[str] = None
    ip_address: Optional[str] = Field(default=None, alias="ipaddress")
    zone_id: Optional[str] = Field(default=None, alias="zoneid")
    pod_id: Optional[str] = Field(default=None, alias="podid")
    cluster_id: Optional[str] = Field(default=None, alias="clusterid")
    disk_size_total: Optional[int] = Field(default=None, alias="disksizetotal")
    tags: Optional[str] = None


class ImageStore(CloudStackRecord):
    """Secondary storage holding templates, ISOs and snapshots."""

    url: Optional[str] = None
    protocol: Optional[str] = None
    provider_name: Optional[str] = Field(default=None, alias="providername")
    scope: Optional[str] = None
    zone_id: Optional[str] = Field(default=None, alias="zoneid")
    read_only: Optional[bool] = Field(default=None, alias="readonly")


class PhysicalNetworkRecord(CloudStackRecord):
    """Physical network as reported by listPhysicalNetworks."""

    zone_id: Optional[str] = Field(default=None, alias="zoneid")
    state: Optional[str] = None
    vlan: Optional[str] = None
    isolation_methods: Optional[str] = Field(default=None, alias="isolationmethods")
    broadcast_domain_range: Optional[str] = Field(
        default=None, alias="broadcastdomainrange"
    )
    network_speed: Optional[str] = Field(default=None, alias="networkspeed")
    tags: Optional[str] = None


class TrafficTypeRecord(CloudStackRecord):
    """
    Traffic type carried by a physical network.

    The API has no name for traffic types; the traffic type itself
    (Guest, Management, Public, Storage) is the key.
    """

    traffic_type: str = Field(default="", alias="traffictype")
    physical_network_id: Optional[str] = Field(default=None, alias="physicalnetworkid")
    kvm_network_label: Optional[str] = Field(default=None, alias="kvmnetworklabel")
    vmware_network_label: Optional[str] = Field(
        default=None, alias="vmwarenetworklabel"
    )
    xen_network_label: Optional[str] = Field(default=None, alias="xennetworklabel")
    hyperv_network_label: Optional[str] = Field(
        default=None, alias="hypervnetworklabel"
    )

    @property
    def key(self) -> str:
        return self.traffic_type


class Network(CloudStackRecord):
    """Logical network exposed by a traffic type."""

    zone_id: Optional[str] = Field(default=None, alias="zoneid")
    physical_network_id: Optional[str] = Field(default=None, alias="physicalnetworkid")
    traffic_type: Optional[str] = Field(default=None, alias="traffictype")
    network_offering_id: Optional[str] = Field(default=None, alias="networkofferingid")
    display_text: Optional[str] = Field(default=None, alias="displaytext")
    cidr: Optional[str] = None
    gateway: Optional[str] = None
    netmask: Optional[str] = None
    broadcast_uri: Optional[str] = Field(default=None, alias="broadcasturi")
    vlan: Optional[str] = None
    state: Optional[str] = None


class ServiceOffering(CloudStackRecord):
    """Compute offering presented to tenants."""

    display_text: Optional[str] = Field(default=None, alias="displaytext")
    cpu_number: Optional[int] = Field(default=None, alias="cpunumber")
    cpu_speed: Optional[int] = Field(default=None, alias="cpuspeed")
    memory: Optional[int] = None
    storage_type: Optional[str] = Field(default=None, alias="storagetype")
    is_system: Optional[bool] = Field(default=None, alias="issystem")
    host_tags: Optional[str] = Field(default=None, alias="hosttags")


class DiskOffering(CloudStackRecord):
    """Disk offering presented to tenants."""

    display_text: Optional[str] = Field(default=None, alias="displaytext")
    disk_size: Optional[int] = Field(default=None, alias="disksize")
    storage_type: Optional[str] = Field(default=None, alias="storagetype")
    is_customized: Optional[bool] = Field(default=None, alias="iscustomized")
    tags: Optional[str] = None


class Configuration(CloudStackRecord):
    """Infrastructure level configuration parameter."""

    value: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None
    scope: Optional[str] = None


class TrafficType(BaseModel):
    """Traffic type record plus the networks it exposes, keyed by network name."""

    model_config = ConfigDict(frozen=True)

    record: TrafficTypeRecord
    networks: dict[str, Network] = Field(default_factory=dict)

    @property
    def name(self) -> str:
        return self.record.key


class PhysicalNetwork(BaseModel):
    """Physical network record plus its traffic types, keyed by traffic type."""

    model_config = ConfigDict(frozen=True)

    record: PhysicalNetworkRecord
    traffic_types: dict[str, TrafficType] = Field(default_factory=dict)

    @property
    def id(self) -> str:
        return self.record.id

    @property
    def name(self) -> str:
        return self.record.name


class ZoneDefinition(BaseModel):
    """
    Full resource topology of one zone.

    Built once per fetch by the topology aggregator. Every built-in
    collection maps a record name to its record. Collections produced
    by extension fetchers live in ``extras``.
    """

    model_config = ConfigDict(frozen=True)

    zone: Zone
    pods: dict[str, Pod] = Field(default_factory=dict)
    clusters: dict[str, Cluster] = Field(default_factory=dict)
    hosts: dict[str, Host] = Field(default_factory=dict)
    primary_storage_pools: dict[str, StoragePool] = Field(default_factory=dict)
    secondary_storage_pools: dict[str, ImageStore] = Field(default_factory=dict)
    physical_networks: dict[str, PhysicalNetwork] = Field(default_factory=dict)
    compute_offerings: dict[str, ServiceOffering] = Field(default_factory=dict)
    disk_offerings: dict[str, DiskOffering] = Field(default_factory=dict)
    global_configs: dict[str, Configuration] = Field(default_factory=dict)

    extras: dict[str, dict[str, Any]] = Field(default_factory=dict)

    def collection(self, name: str) -> dict[str, Any]:
        """
        Get a collection by name.

        Args:
            name: Built-in collection field name or extension collection name

        Returns:
            The keyed collection

        Raises:
            KeyError: If no such collection exists
        """
        if name in BUILTIN_COLLECTIONS:
            return getattr(self, name)
        return self.extras[name]

    def summary(self) -> dict[str, int]:
        """Record count per collection."""
        counts = {name: len(getattr(self, name)) for name in BUILTIN_COLLECTIONS}
        for name, items in self.extras.items():
            counts[name] = len(items)
        return counts

    def to_dict(self) -> dict[str, Any]:
        """JSON safe nested dict using the API's key names."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


BUILTIN_COLLECTIONS: tuple[str, ...] = (
    "pods",
    "clusters",
    "hosts",
    "primary_storage_pools",
    "secondary_storage_pools",
    "physical_networks",
    "compute_offerings",
    "disk_offerings",
    "global_configs",
)


# Exception classes
class ZoneDefinitionError(Exception):
    """Base exception for zone definition errors."""

    pass


class ConfigurationError(ZoneDefinitionError, ValueError):
    """Configuration rejected before any remote call."""

    pass


class ZoneNotFoundError(ZoneDefinitionError):
    """Zone lookup returned no match."""

    def __init__(self, selector: str):
        self.selector = selector
        super().__init__(f"zone {selector} not found")


class AmbiguousZoneError(ZoneDefinitionError):
    """Zone lookup returned more than one match."""

    def __init__(self, selector: str, count: int):
        self.selector = selector
        self.count = count
        super().__init__(f"zone {selector} is ambiguous: {count} matches")


class CloudStackApiError(ZoneDefinitionError):
    """Error reported by the management API."""

    def __init__(
        self,
        command: str,
        error_text: str,
        error_code: Optional[int] = None,
        status_code: Optional[int] = None,
    ):
        self.command = command
        self.error_text = error_text
        self.error_code = error_code
        self.status_code = status_code
        super().__init__(f"{command} failed ({error_code}): {error_text}")
