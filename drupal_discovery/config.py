"""Configuration management for drupal-discovery."""

import os
import logging
from pathlib import Path
from typing import Dict, List, Optional, Any
import yaml
from dataclasses import dataclass, field

from .errors import ConfigurationMissingError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "config.yml"

SUPPORTED_DRIVERS = ("mysql", "postgresql")

DEFAULT_PORTS = {
    "mysql": 3306,
    "postgresql": 5432,
}

# MySQL refuses queries joining more than 61 tables.
DEFAULT_CHUNK_LIMIT = 60
MAX_RECOMMENDED_CHUNK_LIMIT = 60


@dataclass
class DatabaseConfig:
    """Drupal database connection configuration."""
    driver: str = "mysql"
    dsn: Optional[str] = None
    host: Optional[str] = None
    port: Optional[int] = None
    database: Optional[str] = None
    user: Optional[str] = None
    password: Optional[str] = None
    charset: str = "utf8mb4"
    connect_timeout: int = 10

    def missing_parameters(self) -> List[str]:
        """List required connection parameters that are not set."""
        if self.driver == "postgresql" and self.dsn:
            return []

        missing = [
            name for name in ("host", "database", "user")
            if not getattr(self, name)
        ]
        if self.password is None:
            missing.append("password")
        return missing

    def validate(self) -> None:
        """Fail fast when the connection cannot possibly be opened."""
        if self.driver not in SUPPORTED_DRIVERS:
            raise ConfigurationMissingError(
                f"Unsupported database driver: {self.driver}",
                details={"supported": list(SUPPORTED_DRIVERS)}
            )

        missing = self.missing_parameters()
        if missing:
            raise ConfigurationMissingError(
                f"Missing required database connection parameters: {', '.join(missing)}",
                details={"missing": missing}
            )

    def get_port(self) -> int:
        """Get the configured port or the driver default."""
        return self.port or DEFAULT_PORTS.get(self.driver, 3306)

    def get_connection_string(self) -> str:
        """Get the PostgreSQL connection string."""
        if self.dsn:
            return self.dsn

        self.validate()
        return f"postgresql://{self.user}:{self.password}@{self.host}:{self.get_port()}/{self.database}"

    def get_connect_kwargs(self) -> Dict[str, Any]:
        """Get keyword arguments for the MySQL driver."""
        self.validate()
        return {
            "host": self.host,
            "port": self.get_port(),
            "user": self.user,
            "password": self.password,
            "database": self.database,
            "charset": self.charset,
            "connect_timeout": self.connect_timeout,
        }


@dataclass
class DiscoveryConfig:
    """Field discovery and query synthesis configuration."""
    chunk_limit: int = DEFAULT_CHUNK_LIMIT
    alias_language: str = "en"
    docs_dir: str = "docs"
    node_directory: str = "1.node"
    taxonomy_directory: str = "2.taxonomy"

    def __post_init__(self):
        if self.chunk_limit < 1:
            raise ValueError(f"chunk_limit must be at least 1, got {self.chunk_limit}")
        if self.chunk_limit > MAX_RECOMMENDED_CHUNK_LIMIT:
            logger.warning(
                f"chunk_limit {self.chunk_limit} exceeds {MAX_RECOMMENDED_CHUNK_LIMIT}, "
                "generated queries may hit join limits"
            )


@dataclass
class OutputConfig:
    """Output configuration."""
    format: str = "markdown"


@dataclass
class AppConfig:
    """Main application configuration."""
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    discovery: DiscoveryConfig = field(default_factory=DiscoveryConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    @classmethod
    def from_file(cls, config_path: str) -> "AppConfig":
        """Load configuration from YAML file."""
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, 'r') as f:
            config_data = yaml.safe_load(f) or {}

        return cls.from_dict(config_data)

    @classmethod
    def from_dict(cls, config_data: Dict[str, Any]) -> "AppConfig":
        """Build configuration from already parsed data."""
        db_config = config_data.get('database') or {}
        database = DatabaseConfig(
            driver=str(db_config.get('driver', 'mysql')).lower(),
            dsn=db_config.get('dsn'),
            host=db_config.get('host'),
            port=db_config.get('port'),
            database=db_config.get('database'),
            user=db_config.get('user'),
            password=db_config.get('password'),
            charset=db_config.get('charset', 'utf8mb4'),
            connect_timeout=db_config.get('connect_timeout', 10)
        )

        discovery_data = config_data.get('discovery') or {}
        discovery = DiscoveryConfig(
            chunk_limit=int(discovery_data.get('chunk_limit', DEFAULT_CHUNK_LIMIT)),
            alias_language=discovery_data.get('alias_language', 'en'),
            docs_dir=discovery_data.get('docs_dir', 'docs'),
            node_directory=discovery_data.get('node_directory', '1.node'),
            taxonomy_directory=discovery_data.get('taxonomy_directory', '2.taxonomy')
        )

        output_data = config_data.get('output') or {}
        output = OutputConfig(
            format=output_data.get('format', 'markdown')
        )

        return cls(
            database=database,
            discovery=discovery,
            output=output
        )

    @classmethod
    def load(cls, config_path: Optional[str] = DEFAULT_CONFIG_FILE) -> "AppConfig":
        """Load configuration, overlay environment variables and validate it.

        A missing default config file falls back to defaults so the tool can
        run from environment variables alone. A missing file that was asked
        for explicitly is an error.
        """
        if config_path and Path(config_path).exists():
            config = cls.from_file(config_path)
        elif config_path and config_path != DEFAULT_CONFIG_FILE:
            raise FileNotFoundError(f"Configuration file not found: {config_path}")
        else:
            config = cls()

        config.load_environment_variables()
        config.database.validate()
        return config

    def load_environment_variables(self) -> None:
        """Load configuration from environment variables if not set in config file."""
        driver = os.getenv('DRUPAL_DB_DRIVER')
        if driver:
            self.database.driver = driver.lower()

        if not self.database.dsn and not self.database.host:
            self.database.host = os.getenv('DRUPAL_DB_HOST')
            port = os.getenv('DRUPAL_DB_PORT')
            if port:
                self.database.port = int(port)
            self.database.database = self.database.database or os.getenv('DRUPAL_DB_NAME')
            self.database.user = self.database.user or os.getenv('DRUPAL_DB_USER')
            if self.database.password is None:
                self.database.password = os.getenv('DRUPAL_DB_PASSWORD')

            # Check for DSN format
            dsn = os.getenv('DRUPAL_DB_DSN')
            if dsn:
                self.database.dsn = dsn

        chunk_limit = os.getenv('DRUPAL_CHUNK_LIMIT')
        if chunk_limit:
            self.discovery = DiscoveryConfig(
                chunk_limit=int(chunk_limit),
                alias_language=self.discovery.alias_language,
                docs_dir=self.discovery.docs_dir,
                node_directory=self.discovery.node_directory,
                taxonomy_directory=self.discovery.taxonomy_directory
            )
