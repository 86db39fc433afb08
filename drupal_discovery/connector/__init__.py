"""Connector package for the supported database dialects."""

from .base_connector import BaseConnector
from .connector_factory import ConnectorFactory

__all__ = ['BaseConnector', 'ConnectorFactory']
