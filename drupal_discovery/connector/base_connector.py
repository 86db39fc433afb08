"""Base classes for Drupal database connectors."""

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Any, Optional, Sequence, Set

from ..config import DatabaseConfig
from ..db.connection import DatabaseConnection
from ..db.queries import DrupalQueries

logger = logging.getLogger(__name__)


class BaseConnector(ABC):
    """Abstract base class for database connectors.

    A connector is the schema inspector of one invocation: it lists the
    tables and columns of the connected database and runs the Drupal
    queries through the shared connection. Listings are memoized on the
    instance, which lives no longer than one command.
    """

    def __init__(self, config: DatabaseConfig, db_connection: Optional[DatabaseConnection] = None):
        """Initialize connector.

        Args:
            config: Database connection configuration
            db_connection: Existing connection to reuse, created when omitted
        """
        self.config = config
        self.db_connection = db_connection or DatabaseConnection(config)
        self.queries = DrupalQueries(self.quote_identifier)
        self._tables: Optional[Set[str]] = None
        self._columns: Dict[str, List[str]] = {}

    @abstractmethod
    def tables_query(self) -> str:
        """SQL listing the base tables of the current database."""
        pass

    @abstractmethod
    def columns_query(self) -> str:
        """SQL listing the columns of one table, parameterized by table name."""
        pass

    @abstractmethod
    def quote_identifier(self, name: str) -> str:
        """Quote an identifier for this dialect."""
        pass

    def fetch_all(self, query: str, params: Optional[Sequence[Any]] = None) -> List[Dict[str, Any]]:
        return self.db_connection.fetch_all(query, params)

    def fetch_one(self, query: str, params: Optional[Sequence[Any]] = None) -> Optional[Dict[str, Any]]:
        return self.db_connection.fetch_one(query, params)

    def list_tables(self) -> Set[str]:
        """Get every table name in the connected database.

        Returns:
            Set of table names
        """
        if self._tables is None:
            rows = self.fetch_all(self.tables_query())
            self._tables = {row["table_name"] for row in rows}
            logger.info(f"Found {len(self._tables)} tables")
        return self._tables

    def has_table(self, table_name: str) -> bool:
        return table_name in self.list_tables()

    def list_columns(self, table_name: str) -> List[str]:
        """Get the column names of a table.

        Args:
            table_name: Name of the table

        Returns:
            Ordered, de-duplicated column names. Empty when the table does not exist.
        """
        if table_name not in self._columns:
            rows = self.fetch_all(self.columns_query(), (table_name,))
            columns = []
            for row in rows:
                if row["column_name"] not in columns:
                    columns.append(row["column_name"])
            if not columns:
                logger.debug(f"No columns found for table {table_name}")
            self._columns[table_name] = columns
        return self._columns[table_name]

    def test_connection(self) -> bool:
        """Test the connection to the database."""
        return self.db_connection.test_connection()

    def get_connection_info(self) -> Dict[str, Any]:
        """Get information about the connection.

        Returns:
            Dictionary with connection information
        """
        try:
            return {
                'source_type': self.config.driver,
                'host': self.config.host,
                'port': self.config.get_port(),
                'database': self.config.database,
                'server_version': self.db_connection.get_server_version(),
                'connection_status': 'connected' if self.test_connection() else 'disconnected'
            }
        except Exception as e:
            logger.error(f"Failed to get connection info: {e}")
            return {
                'source_type': self.config.driver,
                'connection_status': 'error',
                'error': str(e)
            }

    def close(self) -> None:
        self.db_connection.close()
