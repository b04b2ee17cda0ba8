"""Repository interfaces."""

from .gateway import PersistenceGateway, parse_snapshot

__all__ = ["PersistenceGateway", "parse_snapshot"]
