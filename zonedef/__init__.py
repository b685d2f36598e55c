"""
zonedef - CloudStack zone topology fetcher.

Resolves one zone through the management API and gathers its pods,
clusters, hosts, storage pools, physical networks, offerings and
global configuration into a single ZoneDefinition tree.
"""

__version__ = "0.1.0"

from zonedef.config import (
    DEFAULT_ADDRESS,
    DEFAULT_PATH,
    DEFAULT_SCHEME,
    ConfigLoader,
    ZoneDefinitionConfig,
)
from zonedef.core.adapters import HttpCloudStackAdapter, InMemoryCloudStackAdapter
from zonedef.core.domain.models import (
    AmbiguousZoneError,
    CloudStackApiError,
    ConfigurationError,
    PhysicalNetwork,
    TrafficType,
    Zone,
    ZoneDefinition,
    ZoneDefinitionError,
    ZoneNotFoundError,
)
from zonedef.core.domain.services import TopologyAggregator, ZoneResolver
from zonedef.core.ports import ICloudStackPort, IFetcher
from zonedef.definition import fetch_definition, fetch_definition_sync
from zonedef.sdk import FunctionFetcher, fetcher

__all__ = [
    # Main
    "fetch_definition",
    "fetch_definition_sync",
    # Config
    "ZoneDefinitionConfig",
    "ConfigLoader",
    "DEFAULT_SCHEME",
    "DEFAULT_ADDRESS",
    "DEFAULT_PATH",
    # Models
    "Zone",
    "ZoneDefinition",
    "PhysicalNetwork",
    "TrafficType",
    # Services
    "ZoneResolver",
    "TopologyAggregator",
    # Ports & adapters
    "ICloudStackPort",
    "IFetcher",
    "HttpCloudStackAdapter",
    "InMemoryCloudStackAdapter",
    # Extension fetchers
    "fetcher",
    "FunctionFetcher",
    # Errors
    "ZoneDefinitionError",
    "ConfigurationError",
    "ZoneNotFoundError",
    "AmbiguousZoneError",
    "CloudStackApiError",
]
