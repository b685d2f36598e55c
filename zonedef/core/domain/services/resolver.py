"""Zone resolution - turns a zone selector into one zone record."""

import structlog

from zonedef.core.domain.models import AmbiguousZoneError, Zone, ZoneNotFoundError
from zonedef.core.ports.outbound.cloudstack import ICloudStackPort

logger = structlog.get_logger(__name__)


class ZoneResolver:
    """
    Resolve a zone by id or by name.

    The id takes precedence: when both are given the name is ignored.
    """

    def __init__(self, client: ICloudStackPort):
        """
        Args:
            client: API client handle for the current run
        """
        self._client = client

    async def resolve(self, zone_id: str = "", zone_name: str = "") -> Zone:
        """
        Look up exactly one zone.

        Args:
            zone_id: Zone UUID
            zone_name: Zone name, used only when zone_id is empty

        Returns:
            The matching zone

        Raises:
            ZoneNotFoundError: If no zone matches
            AmbiguousZoneError: If more than one zone matches
        """
        if zone_id:
            logger.info("zone_fetch_attempt", zone_id=zone_id)
            selector, field = zone_id, "id"
            items = await self._client.list_resources("listZones", id=zone_id)
        else:
            logger.info("zone_fetch_attempt", zone_name=zone_name)
            selector, field = zone_name, "name"
            items = await self._client.list_resources("listZones", name=zone_name)

        # listZones name= is a keyword search, keep exact matches only
        matches = [item for item in items if item.get(field) == selector]

        if not matches:
            raise ZoneNotFoundError(selector)
        if len(matches) > 1:
            raise AmbiguousZoneError(selector, len(matches))

        return Zone.model_validate(matches[0])
