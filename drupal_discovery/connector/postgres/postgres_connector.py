"""PostgreSQL connector implementation."""

import logging

from ..base_connector import BaseConnector

logger = logging.getLogger(__name__)


class PostgreSQLConnector(BaseConnector):
    """PostgreSQL connector for Drupal sites installed on pgsql."""

    def tables_query(self) -> str:
        return """
            SELECT table_name
            FROM information_schema.tables
            WHERE table_schema = current_schema()
            AND table_type = 'BASE TABLE'
            ORDER BY table_name
        """

    def columns_query(self) -> str:
        return """
            SELECT column_name
            FROM information_schema.columns
            WHERE table_schema = current_schema()
            AND table_name = %s
            ORDER BY ordinal_position
        """

    def quote_identifier(self, name: str) -> str:
        return '"' + name.replace('"', '""') + '"'
