"""In-memory CloudStack adapter implementation."""

from typing import Any, Optional

import structlog

from zonedef.core.domain.models import CloudStackApiError
from zonedef.core.ports.outbound.cloudstack import ICloudStackPort, item_key_for

logger = structlog.get_logger(__name__)

# Paging and scoping parameters that never filter items
_NON_FILTER_PARAMS = {"page", "pagesize", "listall", "keyword"}


class InMemoryCloudStackAdapter(ICloudStackPort):
    """
    CloudStack adapter serving canned resources.

    Useful for tests and offline runs. Items are stored per list
    command and filtered by the call parameters: an item is kept when,
    for every parameter it carries, its value equals the requested one.

    Features:
    - Records every call in ``calls``
    - Injectable failures per command
    """

    def __init__(
        self,
        resources: Optional[dict[str, list[dict[str, Any]]]] = None,
        failures: Optional[dict[str, Exception]] = None,
    ):
        """
        Args:
            resources: List command -> raw items
            failures: Command -> exception raised when that command is called
        """
        self._resources: dict[str, list[dict[str, Any]]] = {
            command: list(items) for command, items in (resources or {}).items()
        }
        self._failures: dict[str, Exception] = dict(failures or {})
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.closed = False

    def add(self, command: str, *items: dict[str, Any]) -> None:
        """Add items served by a list command."""
        self._resources.setdefault(command, []).extend(items)

    def fail(self, command: str, error: Exception) -> None:
        """Make a command raise the given error."""
        self._failures[command] = error

    async def request(self, command: str, **params: Any) -> dict[str, Any]:
        self.calls.append((command, dict(params)))

        if command in self._failures:
            raise self._failures[command]

        if command not in self._resources and not command.startswith("list"):
            raise CloudStackApiError(command, "unknown command", error_code=432)

        items = [
            item
            for item in self._resources.get(command, [])
            if self._matches(item, params)
        ]
        return {"count": len(items), item_key_for(command): items}

    async def list_resources(self, command: str, **params: Any) -> list[dict[str, Any]]:
        payload = await self.request(command, **params)
        return list(payload[item_key_for(command)])

    async def close(self) -> None:
        self.closed = True

    @staticmethod
    def _matches(item: dict[str, Any], params: dict[str, Any]) -> bool:
        for key, value in params.items():
            if key in _NON_FILTER_PARAMS or value is None:
                continue
            if key in item and str(item[key]) != str(value):
                return False
        return True
