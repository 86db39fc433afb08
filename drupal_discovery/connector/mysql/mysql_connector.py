"""MySQL connector implementation."""

import logging

from ..base_connector import BaseConnector

logger = logging.getLogger(__name__)


class MySQLConnector(BaseConnector):
    """MySQL / MariaDB connector, the usual home of a Drupal 7 site."""

    def tables_query(self) -> str:
        return """
            SELECT table_name AS table_name
            FROM information_schema.tables
            WHERE table_schema = DATABASE()
            AND table_type = 'BASE TABLE'
            ORDER BY table_name
        """

    def columns_query(self) -> str:
        return """
            SELECT column_name AS column_name
            FROM information_schema.columns
            WHERE table_schema = DATABASE()
            AND table_name = %s
            ORDER BY ordinal_position
        """

    def quote_identifier(self, name: str) -> str:
        return "`" + name.replace("`", "``") + "`"
