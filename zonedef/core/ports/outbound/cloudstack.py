"""
CloudStack Port - Outbound port for the cloud management API.

The port hides transport details (request signing, pagination, HTTP)
from the resolver and the fetchers. Everything the domain needs is a
single generic list call plus a raw command call.
"""

from abc import ABC, abstractmethod
from typing import Any


# listXxx command -> key holding the items inside the response payload
LIST_ITEM_KEYS: dict[str, str] = {
    "listZones": "zone",
    "listPods": "pod",
    "listClusters": "cluster",
    "listHosts": "host",
    "listStoragePools": "storagepool",
    "listImageStores": "imagestore",
    "listPhysicalNetworks": "physicalnetwork",
    "listTrafficTypes": "traffictype",
    "listNetworks": "network",
    "listServiceOfferings": "serviceoffering",
    "listDiskOfferings": "diskoffering",
    "listConfigurations": "configuration",
}


def item_key_for(command: str) -> str:
    """
    Get the payload key that holds the items of a list command.

    Falls back to the command name without its ``list`` prefix,
    lowercased and singularized, which is the API's convention.
    """
    if command in LIST_ITEM_KEYS:
        return LIST_ITEM_KEYS[command]
    key = command[4:] if command.startswith("list") else command
    key = key.lower()
    if key.endswith("ies"):
        return key[:-3] + "y"
    if key.endswith("s"):
        return key[:-1]
    return key


class ICloudStackPort(ABC):
    """
    CloudStack Port Interface.

    Driven port used by the zone resolver and the fetchers.

    Usage:
        ```python
        async with HttpCloudStackAdapter(endpoint, key, secret) as client:
            pods = await client.list_resources("listPods", zoneid=zone.id)
        ```
    """

    @abstractmethod
    async def request(self, command: str, **params: Any) -> dict[str, Any]:
        """
        Execute one API command.

        Args:
            command: API command name (e.g. ``listZones``)
            **params: Command parameters

        Returns:
            The command's response payload

        Raises:
            CloudStackApiError: If the API reports an error
        """
        ...

    @abstractmethod
    async def list_resources(self, command: str, **params: Any) -> list[dict[str, Any]]:
        """
        Execute a list command and collect every page.

        Args:
            command: List command name (e.g. ``listPods``)
            **params: Filter parameters (``zoneid``, ``physicalnetworkid``...)

        Returns:
            All raw items, in the order the API returned them
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """Release the underlying connections."""
        ...

    async def __aenter__(self) -> "ICloudStackPort":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()
