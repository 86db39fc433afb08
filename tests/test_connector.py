"""Tests for schema inspection connectors."""

from unittest.mock import Mock

import pytest

from drupal_discovery.config import DatabaseConfig
from drupal_discovery.connector import BaseConnector, ConnectorFactory
from drupal_discovery.connector.mysql import MySQLConnector
from drupal_discovery.connector.postgres import PostgreSQLConnector
from drupal_discovery.errors import ConfigurationMissingError


def _config(driver: str = "mysql") -> DatabaseConfig:
    return DatabaseConfig(driver=driver, host="localhost", database="drupal", user="u", password="p")


class TestMySQLConnector:
    """Test MySQLConnector class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.db_connection = Mock()
        self.connector = MySQLConnector(_config(), self.db_connection)

    def test_list_tables(self):
        """Test tables come back as a set and are memoized."""
        self.db_connection.fetch_all.return_value = [
            {"table_name": "node"}, {"table_name": "field_data_body"}
        ]

        assert self.connector.list_tables() == {"node", "field_data_body"}
        assert self.connector.has_table("node")
        assert not self.connector.has_table("redirect")
        assert self.db_connection.fetch_all.call_count == 1

    def test_list_columns_deduplicates(self):
        """Test duplicate column names are removed, order kept."""
        self.db_connection.fetch_all.return_value = [
            {"column_name": "entity_id"},
            {"column_name": "body_value"},
            {"column_name": "entity_id"},
        ]

        assert self.connector.list_columns("field_data_body") == ["entity_id", "body_value"]
        self.db_connection.fetch_all.assert_called_once_with(
            self.connector.columns_query(), ("field_data_body",)
        )

    def test_list_columns_of_missing_table(self):
        """Test a missing table yields no columns rather than an error."""
        self.db_connection.fetch_all.return_value = []
        assert self.connector.list_columns("field_data_missing") == []

    def test_quote_identifier(self):
        """Test MySQL quoting uses backticks."""
        assert self.connector.quote_identifier("system") == "`system`"
        assert "`system`" in self.connector.queries.get_version()

    def test_connection_info(self):
        """Test connection info."""
        self.db_connection.get_server_version.return_value = "8.0.36"
        self.db_connection.test_connection.return_value = True

        info = self.connector.get_connection_info()

        assert info["source_type"] == "mysql"
        assert info["server_version"] == "8.0.36"
        assert info["connection_status"] == "connected"


class TestPostgreSQLConnector:
    """Test PostgreSQLConnector class."""

    def test_quote_identifier(self):
        connector = PostgreSQLConnector(_config("postgresql"), Mock())
        assert connector.quote_identifier("system") == '"system"'
        assert "current_schema()" in connector.tables_query()


class TestConnectorFactory:
    """Test ConnectorFactory class."""

    def test_create_connector(self):
        """Test connectors are chosen by driver."""
        assert isinstance(ConnectorFactory.create_connector(_config("mysql"), Mock()), MySQLConnector)
        assert isinstance(
            ConnectorFactory.create_connector(_config("postgresql"), Mock()), PostgreSQLConnector
        )

    def test_unsupported_driver(self):
        """Test unknown drivers are a configuration error."""
        with pytest.raises(ConfigurationMissingError):
            ConnectorFactory.create_connector(_config("sqlite"), Mock())

    def test_register_connector_requires_base_class(self):
        """Test only BaseConnector subclasses can be registered."""
        with pytest.raises(ValueError):
            ConnectorFactory.register_connector("custom", object)

    def test_supported_drivers(self):
        assert set(ConnectorFactory.get_supported_drivers()) >= {"mysql", "postgresql"}
        assert issubclass(MySQLConnector, BaseConnector)
