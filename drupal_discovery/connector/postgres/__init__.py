"""PostgreSQL connector package."""

from .postgres_connector import PostgreSQLConnector

__all__ = ['PostgreSQLConnector']
