"""
Fetcher Port - one step of the zone topology aggregation.

A fetcher names the collection it produces, receives the client
handle and the definition built so far, and returns the collection.
The aggregator merges the result, so fetchers never mutate shared state.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from zonedef.core.domain.models import ZoneDefinition
from zonedef.core.ports.outbound.cloudstack import ICloudStackPort


class IFetcher(ABC):
    """
    Fetcher interface.

    Built-in fetchers only read ``definition.zone``. Extension fetchers
    run after every built-in and may read any collection already in
    the definition (e.g. to derive a new collection from hosts).

    Usage:
        ```python
        class RoutingHosts(IFetcher):
            collection = "routing_hosts"

            async def fetch(self, client, definition):
                return {
                    name: host
                    for name, host in definition.hosts.items()
                    if host.type == "Routing"
                }
        ```
    """

    collection: str = ""

    @abstractmethod
    async def fetch(
        self,
        client: ICloudStackPort,
        definition: ZoneDefinition,
    ) -> Mapping[str, Any]:
        """
        Produce this fetcher's collection.

        Args:
            client: API client handle for the current run
            definition: Read-only view of the definition built so far

        Returns:
            Records keyed by name
        """
        ...

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(collection={self.collection!r})"
