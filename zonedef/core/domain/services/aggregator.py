"""Topology aggregation - runs fetchers and merges their collections."""

from collections.abc import Sequence
from typing import Any, Optional

import structlog

from zonedef.core.domain.models import BUILTIN_COLLECTIONS, Zone, ZoneDefinition
from zonedef.core.domain.services.fetchers import builtin_fetchers
from zonedef.core.ports.inbound.fetcher import IFetcher
from zonedef.core.ports.outbound.cloudstack import ICloudStackPort

logger = structlog.get_logger(__name__)


class TopologyAggregator:
    """
    Build a ZoneDefinition from an ordered list of fetchers.

    Fetchers run one after another. The first exception stops the run
    and propagates unchanged; nothing built so far is returned.
    Built-in fetchers run first, then the extension fetchers.

    Usage:
        aggregator = TopologyAggregator(client, extra_fetchers=[MyFetcher()])
        definition = await aggregator.aggregate(zone)
    """

    def __init__(
        self,
        client: ICloudStackPort,
        extra_fetchers: Sequence[IFetcher] = (),
        fetchers: Optional[Sequence[IFetcher]] = None,
    ):
        """
        Args:
            client: API client handle for the current run
            extra_fetchers: Extension fetchers, run after the built-ins
            fetchers: Replacement for the built-in list (defaults to builtin_fetchers())
        """
        self._client = client
        self._fetchers: list[IFetcher] = list(
            fetchers if fetchers is not None else builtin_fetchers()
        )
        self._fetchers.extend(extra_fetchers)

        for fetcher in self._fetchers:
            if not fetcher.collection:
                raise ValueError(f"Fetcher {fetcher!r} has no collection name")

    @property
    def fetchers(self) -> list[IFetcher]:
        """Fetchers in execution order."""
        return list(self._fetchers)

    async def aggregate(self, zone: Zone) -> ZoneDefinition:
        """
        Run every fetcher against the given zone.

        Args:
            zone: Resolved zone record

        Returns:
            The completed definition
        """
        collections: dict[str, dict[str, Any]] = {name: {} for name in BUILTIN_COLLECTIONS}
        extras: dict[str, dict[str, Any]] = {}

        for fetcher in self._fetchers:
            view = ZoneDefinition(zone=zone, extras=extras, **collections)
            result = dict(await fetcher.fetch(self._client, view))

            if fetcher.collection in collections:
                collections[fetcher.collection] = result
            else:
                extras[fetcher.collection] = result

            logger.debug(
                "collection_fetched",
                zone=zone.name,
                collection=fetcher.collection,
                count=len(result),
            )

        definition = ZoneDefinition(zone=zone, extras=extras, **collections)
        logger.info(
            "zone_definition_fetched",
            zone=zone.name,
            zone_id=zone.id,
            collections=definition.summary(),
        )
        return definition
