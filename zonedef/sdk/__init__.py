"""SDK module - helpers for writing extension fetchers."""

from zonedef.sdk.decorators import FunctionFetcher, fetcher

__all__ = [
    "fetcher",
    "FunctionFetcher",
]
