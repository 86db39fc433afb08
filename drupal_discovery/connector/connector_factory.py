"""Factory for creating dialect-specific connectors."""

import logging
from typing import Optional

from .base_connector import BaseConnector
from .mysql.mysql_connector import MySQLConnector
from .postgres.postgres_connector import PostgreSQLConnector
from ..config import DatabaseConfig
from ..db.connection import DatabaseConnection
from ..errors import ConfigurationMissingError

logger = logging.getLogger(__name__)


class ConnectorFactory:
    """Factory for creating dialect-specific connectors."""

    _connectors = {
        'mysql': MySQLConnector,
        'postgresql': PostgreSQLConnector,
    }

    @classmethod
    def create_connector(cls, config: DatabaseConfig,
                         db_connection: Optional[DatabaseConnection] = None) -> BaseConnector:
        """Create a connector for the configured driver.

        Args:
            config: Database connection configuration
            db_connection: Existing connection to reuse

        Returns:
            Connector instance

        Raises:
            ConfigurationMissingError: If the driver is not supported
        """
        driver = config.driver.lower()

        if driver not in cls._connectors:
            logger.error(f"Unsupported database driver: {driver}")
            raise ConfigurationMissingError(
                f"Unsupported database driver: {driver}",
                details={"supported": cls.get_supported_drivers()}
            )

        connector_class = cls._connectors[driver]
        return connector_class(config, db_connection)

    @classmethod
    def get_supported_drivers(cls) -> list:
        """Get list of supported driver names."""
        return list(cls._connectors.keys())

    @classmethod
    def register_connector(cls, driver: str, connector_class: type):
        """Register a new connector type.

        Args:
            driver: Driver identifier
            connector_class: Connector class that implements BaseConnector
        """
        if not issubclass(connector_class, BaseConnector):
            raise ValueError("Connector class must inherit from BaseConnector")

        cls._connectors[driver.lower()] = connector_class
        logger.info(f"Registered connector for driver: {driver}")
