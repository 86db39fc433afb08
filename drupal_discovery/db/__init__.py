# Database connection and query modules

from .connection import DatabaseConnection
from .queries import DrupalQueries

__all__ = ['DatabaseConnection', 'DrupalQueries']
