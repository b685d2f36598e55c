"""Core module - Hexagonal architecture ports, domain and adapters."""

# Domain models
from zonedef.core.domain import (
    BUILTIN_COLLECTIONS,
    PhysicalNetwork,
    TrafficType,
    Zone,
    ZoneDefinition,
)

# Domain services
from zonedef.core.domain.services import (
    TopologyAggregator,
    ZoneResolver,
    builtin_fetchers,
)

# Ports
from zonedef.core.ports import ICloudStackPort, IFetcher

# Adapters
from zonedef.core.adapters import (
    HttpCloudStackAdapter,
    InMemoryCloudStackAdapter,
)

__all__ = [
    # Domain Models
    "BUILTIN_COLLECTIONS",
    "PhysicalNetwork",
    "TrafficType",
    "Zone",
    "ZoneDefinition",
    # Domain Services
    "TopologyAggregator",
    "ZoneResolver",
    "builtin_fetchers",
    # Ports
    "ICloudStackPort",
    "IFetcher",
    # Adapters
    "HttpCloudStackAdapter",
    "InMemoryCloudStackAdapter",
]
