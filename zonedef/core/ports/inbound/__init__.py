"""Inbound ports - steps driven by the aggregator."""

from zonedef.core.ports.inbound.fetcher import IFetcher

__all__ = ["IFetcher"]
