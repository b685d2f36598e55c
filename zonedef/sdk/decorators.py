"""Decorators for defining extension fetchers."""

import functools
import inspect
from collections.abc import Awaitable, Mapping
from typing import Any, Callable

from zonedef.core.domain.models import ZoneDefinition
from zonedef.core.ports.inbound.fetcher import IFetcher
from zonedef.core.ports.outbound.cloudstack import ICloudStackPort

FetchFunc = Callable[[ICloudStackPort, ZoneDefinition], Awaitable[Mapping[str, Any]]]


class FunctionFetcher(IFetcher):
    """IFetcher wrapping an async function."""

    def __init__(self, collection: str, func: FetchFunc):
        if not inspect.iscoroutinefunction(func):
            raise TypeError(f"Fetcher function {func.__name__} must be async")
        self.collection = collection
        self._func = func
        functools.update_wrapper(self, func)

    async def fetch(
        self,
        client: ICloudStackPort,
        definition: ZoneDefinition,
    ) -> Mapping[str, Any]:
        return await self._func(client, definition)


def fetcher(collection: str) -> Callable[[FetchFunc], FunctionFetcher]:
    """
    Decorator to turn an async function into an extension fetcher.

    Usage:
        @fetcher("routing_hosts")
        async def routing_hosts(client, definition):
            return {
                name: host
                for name, host in definition.hosts.items()
                if host.type == "Routing"
            }

        config = ZoneDefinitionConfig(..., fetchers=[routing_hosts])

    Args:
        collection: Name of the collection the function produces

    Returns:
        Decorator returning a FunctionFetcher
    """
    if not collection:
        raise ValueError("Fetcher collection name cannot be empty")

    def decorator(func: FetchFunc) -> FunctionFetcher:
        return FunctionFetcher(collection, func)

    return decorator
