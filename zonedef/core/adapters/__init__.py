"""Adapters - concrete implementations of ports."""

from zonedef.core.adapters.cloudstack_adapter import (
    HttpCloudStackAdapter,
    build_query,
    sign_request,
)
from zonedef.core.adapters.memory_adapter import InMemoryCloudStackAdapter

__all__ = [
    "HttpCloudStackAdapter",
    "InMemoryCloudStackAdapter",
    "build_query",
    "sign_request",
]
