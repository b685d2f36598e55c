"""Domain services - pure business logic."""

from zonedef.core.domain.services.aggregator import TopologyAggregator
from zonedef.core.domain.services.fetchers import (
    PhysicalNetworkFetcher,
    ZoneListFetcher,
    builtin_fetchers,
    index_records,
)
from zonedef.core.domain.services.resolver import ZoneResolver

__all__ = [
    "ZoneResolver",
    "TopologyAggregator",
    "ZoneListFetcher",
    "PhysicalNetworkFetcher",
    "builtin_fetchers",
    "index_records",
]
