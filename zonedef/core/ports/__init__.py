"""Port interfaces for hexagonal architecture."""

from zonedef.core.ports.inbound.fetcher import IFetcher
from zonedef.core.ports.outbound.cloudstack import ICloudStackPort

__all__ = [
    "IFetcher",
    "ICloudStackPort",
]
