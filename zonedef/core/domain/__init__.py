"""Domain layer - business logic and models."""

from zonedef.core.domain.models import (
    BUILTIN_COLLECTIONS,
    AmbiguousZoneError,
    CloudStackApiError,
    CloudStackRecord,
    Cluster,
    Configuration,
    ConfigurationError,
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
    Zone,
    ZoneDefinition,
    ZoneDefinitionError,
    ZoneNotFoundError,
)

__all__ = [
    # Records
    "CloudStackRecord",
    "Zone",
    "Pod",
    "Cluster",
    "Host",
    "StoragePool",
    "ImageStore",
    "PhysicalNetworkRecord",
    "TrafficTypeRecord",
    "Network",
    "ServiceOffering",
    "DiskOffering",
    "Configuration",
    # Aggregates
    "ZoneDefinition",
    "PhysicalNetwork",
    "TrafficType",
    "BUILTIN_COLLECTIONS",
    # Errors
    "ZoneDefinitionError",
    "ConfigurationError",
    "ZoneNotFoundError",
    "AmbiguousZoneError",
    "CloudStackApiError",
]
