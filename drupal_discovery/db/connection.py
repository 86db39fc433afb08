"""Database connection management."""

import logging
from contextlib import contextmanager
from typing import Optional, Dict, Any, List, Sequence

import psycopg
import pymysql
import pymysql.cursors
from psycopg.rows import dict_row

from ..config import DatabaseConfig

logger = logging.getLogger(__name__)


class DatabaseConnection:
    """Read-only connection to the Drupal database.

    One connection is opened lazily and reused for every query of the
    invocation. Both supported drivers use the ``%s`` paramstyle, so query
    text is shared between them.
    """

    def __init__(self, config: DatabaseConfig):
        """Initialize database connection.

        Args:
            config: Database connection configuration
        """
        self.config = config
        self._connection = None

    @property
    def driver(self) -> str:
        return self.config.driver

    def _connect(self):
        if self.driver == "postgresql":
            connection = psycopg.connect(
                self.config.get_connection_string(),
                row_factory=dict_row,
                connect_timeout=self.config.connect_timeout
            )
            # Applies to the transaction psycopg opens on the first query.
            connection.read_only = True
            return connection

        connection = pymysql.connect(
            cursorclass=pymysql.cursors.DictCursor,
            autocommit=True,
            **self.config.get_connect_kwargs()
        )
        with connection.cursor() as cur:
            cur.execute("SET SESSION TRANSACTION READ ONLY")
        return connection

    @contextmanager
    def get_connection(self):
        """Get the shared database connection as context manager."""
        if self._connection is None:
            logger.debug(f"Opening {self.driver} connection to {self.config.host or 'dsn'}")
            self._connection = self._connect()
        try:
            yield self._connection
        except Exception as e:
            logger.error(f"Database connection error: {e}")
            raise

    def fetch_all(self, query: str, params: Optional[Sequence[Any]] = None) -> List[Dict[str, Any]]:
        """Run a query and return every row as a dictionary.

        Args:
            query: SQL query text
            params: Query parameters

        Returns:
            List of row dictionaries
        """
        logger.debug(f"SQL: {' '.join(query.split())} params={params}")
        with self.get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(query, params)
                return [dict(row) for row in cur.fetchall()]

    def fetch_one(self, query: str, params: Optional[Sequence[Any]] = None) -> Optional[Dict[str, Any]]:
        """Run a query and return the first row, or None."""
        rows = self.fetch_all(query, params)
        return rows[0] if rows else None

    def test_connection(self) -> bool:
        """Test database connection.

        Returns:
            True if connection successful, False otherwise
        """
        try:
            result = self.fetch_one("SELECT 1 AS ok")
            return result is not None and result["ok"] == 1
        except Exception as e:
            logger.error(f"Connection test failed: {e}")
            return False

    def get_server_version(self) -> Optional[str]:
        """Get database server version.

        Returns:
            Server version string or None if failed
        """
        try:
            result = self.fetch_one("SELECT version() AS version")
            return result["version"] if result else None
        except Exception as e:
            logger.error(f"Failed to get server version: {e}")
            return None

    def close(self) -> None:
        """Close the shared connection if it was opened."""
        if self._connection is not None:
            self._connection.close()
            self._connection = None

    def __enter__(self) -> "DatabaseConnection":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
