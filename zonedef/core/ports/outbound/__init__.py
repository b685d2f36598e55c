"""Outbound ports - interfaces for external services."""

from zonedef.core.ports.outbound.cloudstack import (
    LIST_ITEM_KEYS,
    ICloudStackPort,
    item_key_for,
)

__all__ = [
    "ICloudStackPort",
    "LIST_ITEM_KEYS",
    "item_key_for",
]
