"""MySQL connector package."""

from .mysql_connector import MySQLConnector

__all__ = ['MySQLConnector']
