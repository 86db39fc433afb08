"""Discovery service owning the collaborators of one CLI invocation."""

import logging
from typing import Any, Dict, List, Optional, Tuple

from ..config import AppConfig, DiscoveryConfig
from ..connector import BaseConnector, ConnectorFactory
from ..extractor import (
    SiteInspector, FieldCatalog, MultiplicityCache, MultiplicityDetector, FieldResolver
)
from ..models.discovery_models import FieldDescriptor, QuerySet, ENTITY_TYPES
from ..synthesis import QuerySynthesizer

logger = logging.getLogger(__name__)


class DiscoveryService:
    """Wire the connector, inspectors, resolver and synthesizer together.

    The service lives for one command. Its multiplicity cache starts empty
    and is discarded on ``close()`` together with the connection.
    """

    def __init__(self, config: AppConfig, connector: Optional[BaseConnector] = None,
                 discovery: Optional[DiscoveryConfig] = None):
        """Initialize discovery service.

        Args:
            config: Application configuration
            connector: Connector to use, created from the configuration when omitted
            discovery: Overrides ``config.discovery`` (e.g. a CLI chunk limit)
        """
        self.config = config
        self.discovery = discovery or config.discovery
        self.connector = connector or ConnectorFactory.create_connector(config.database)
        self.cache = MultiplicityCache()

        self.site = SiteInspector(self.connector)
        self.catalog = FieldCatalog(self.connector)
        self.detector = MultiplicityDetector(self.connector, self.cache)
        self.resolver = FieldResolver(self.connector, self.catalog, self.detector)
        self.synthesizer = QuerySynthesizer(self.connector, self.site, self.resolver, self.discovery)

    def get_version(self) -> str:
        return self.site.get_version()

    def get_info(self) -> Dict[str, Any]:
        """Collect the site overview."""
        return {
            "version": self.site.get_version(),
            "node_types": list(self.site.get_node_types().values()),
            "taxonomies": list(self.site.get_taxonomies().values()),
            "media_types": self.site.get_media_types(),
            "languages": self.site.get_languages(),
        }

    def get_content_type_names(self) -> Tuple[List[str], List[str]]:
        """Get node bundle names and vocabulary names."""
        return list(self.site.get_node_types()), list(self.site.get_taxonomies())

    def entity_type(self, content_type: str) -> Optional[str]:
        """Entity type of a bundle, or None when the name is unknown."""
        return ENTITY_TYPES.get(self.site.classify(content_type))

    def describe_fields(self, content_type: str) -> List[FieldDescriptor]:
        return self.resolver.resolve(content_type, self.entity_type(content_type))

    def describe_entity(self, content_type: str) -> Tuple[List[FieldDescriptor], QuerySet]:
        """Resolve the fields of a bundle and generate its queries.

        Fields are resolved once and shared by the field table and the
        synthesizer.
        """
        fields = self.resolver.resolve(content_type, self.entity_type(content_type))
        query_set = self.synthesizer.build_queries(content_type, fields)
        return fields, query_set

    def list_tables(self) -> List[str]:
        return sorted(self.connector.list_tables())

    def list_columns(self, table_name: str) -> List[str]:
        return self.connector.list_columns(table_name)

    def close(self) -> None:
        """Discard per-invocation state and close the connection."""
        self.cache.clear()
        self.connector.close()

    def __enter__(self) -> "DiscoveryService":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
