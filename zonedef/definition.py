"""Zone definition entry point - resolve the zone, then aggregate its topology."""

import asyncio
from typing import Optional

import structlog

from zonedef.config import ZoneDefinitionConfig
from zonedef.core.adapters.cloudstack_adapter import HttpCloudStackAdapter
from zonedef.core.domain.models import ZoneDefinition
from zonedef.core.domain.services.aggregator import TopologyAggregator
from zonedef.core.domain.services.resolver import ZoneResolver
from zonedef.core.ports.outbound.cloudstack import ICloudStackPort

logger = structlog.get_logger(__name__)


def create_client(config: ZoneDefinitionConfig) -> HttpCloudStackAdapter:
    """Build the HTTP client handle for a validated config."""
    return HttpCloudStackAdapter(
        endpoint=config.endpoint,
        api_key=config.key,
        secret=config.secret,
        timeout=config.timeout,
        page_size=config.page_size,
        verify_ssl=config.verify_ssl,
    )


async def fetch_definition(
    config: ZoneDefinitionConfig,
    client: Optional[ICloudStackPort] = None,
) -> ZoneDefinition:
    """
    Fetch the full topology of one zone.

    The config is validated before any remote call. When no client is
    given one is built from the config and closed when the run ends.
    A given client is left open.

    Args:
        config: Connection parameters, zone selector and extension fetchers
        client: Client handle to use instead of building one

    Returns:
        The populated ZoneDefinition

    Raises:
        ConfigurationError: If the config is rejected
        ZoneNotFoundError: If the zone does not exist
        AmbiguousZoneError: If the zone selector matches several zones
        CloudStackApiError: If the API reports an error
    """
    config = config.validated()

    owns_client = client is None
    if client is None:
        client = create_client(config)
        logger.debug("client_created", endpoint=config.endpoint)

    try:
        zone = await ZoneResolver(client).resolve(
            zone_id=config.zone_id,
            zone_name=config.zone_name,
        )
        aggregator = TopologyAggregator(client, extra_fetchers=config.fetchers)
        return await aggregator.aggregate(zone)
    finally:
        if owns_client:
            await client.close()


def fetch_definition_sync(
    config: ZoneDefinitionConfig,
    client: Optional[ICloudStackPort] = None,
) -> ZoneDefinition:
    """Blocking wrapper around fetch_definition for non-async callers."""
    return asyncio.run(fetch_definition(config, client))
