"""Services package."""

from .discovery_service import DiscoveryService

__all__ = ['DiscoveryService']
