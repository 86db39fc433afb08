"""Site-level facts about a Drupal database."""

import logging
from typing import Dict, List, Any, Optional

from ..connector.base_connector import BaseConnector
from ..models.discovery_models import ContentType, NODE_KIND, TAXONOMY_KIND
from .serialization import maybe_unserialize

logger = logging.getLogger(__name__)

VERSION_MODULE_PATTERN = "%/field.module"


class SiteInspector:
    """Read the version, bundles, vocabularies, media and languages of a site."""

    def __init__(self, connector: BaseConnector):
        """Initialize site inspector.

        Args:
            connector: Connector of the current invocation
        """
        self.connector = connector
        self.queries = connector.queries
        self._node_types: Optional[Dict[str, ContentType]] = None
        self._taxonomies: Optional[Dict[str, ContentType]] = None

    def get_version(self) -> str:
        """Get the Drupal version from the field module's info blob.

        Returns:
            Version string, or "" when it cannot be found
        """
        if not self.connector.has_table("system"):
            return ""

        result = self.connector.fetch_one(self.queries.get_version(), (VERSION_MODULE_PATTERN,))
        if not result:
            return ""

        info = maybe_unserialize(result.get("info"))
        if not isinstance(info, dict):
            return ""

        return str(info.get("version") or "")

    def get_node_types(self) -> Dict[str, ContentType]:
        """Get node bundles with instance counts and a sample URL alias.

        Returns:
            Mapping of bundle name to content type, ordered by name
        """
        if self._node_types is not None:
            return self._node_types

        self._node_types = {}
        if not self.connector.has_table("node"):
            logger.warning("No node table found")
            return self._node_types

        has_aliases = self.connector.has_table("url_alias")
        for row in self.connector.fetch_all(self.queries.get_node_types()):
            alias = ""
            if has_aliases and row.get("first_nid") is not None:
                alias_row = self.connector.fetch_one(
                    self.queries.get_url_alias(), (f"node/{row['first_nid']}",)
                )
                alias = alias_row["alias"] if alias_row else ""

            self._node_types[row["type"]] = ContentType(
                name=row["type"],
                count=int(row["count"]),
                kind=NODE_KIND,
                url_alias=alias
            )

        return self._node_types

    def get_taxonomies(self) -> Dict[str, ContentType]:
        """Get taxonomy vocabularies with term counts.

        Returns:
            Mapping of vocabulary machine name to content type
        """
        if self._taxonomies is not None:
            return self._taxonomies

        self._taxonomies = {}
        if not self.connector.has_table("taxonomy_vocabulary"):
            logger.warning("No taxonomy_vocabulary table found")
            return self._taxonomies

        for row in self.connector.fetch_all(self.queries.get_taxonomies()):
            self._taxonomies[row["type"]] = ContentType(
                name=row["type"],
                count=int(row["count"] or 0),
                kind=TAXONOMY_KIND
            )

        return self._taxonomies

    def get_media_types(self) -> List[Dict[str, Any]]:
        """Get managed file MIME types with counts."""
        if not self.connector.has_table("file_managed"):
            return []

        return [
            {"type": row["type"], "count": int(row["count"])}
            for row in self.connector.fetch_all(self.queries.get_media_types())
        ]

    def get_languages(self) -> List[Dict[str, Any]]:
        """Get the languages enabled on the site."""
        if not self.connector.has_table("languages"):
            return []

        return [
            {
                "language": row["language"],
                "name": row.get("name") or "",
                "domain": row.get("domain") or "",
            }
            for row in self.connector.fetch_all(self.queries.get_languages())
        ]

    def classify(self, content_type: str) -> str:
        """Tell whether a name is a node bundle or a vocabulary.

        Returns:
            NODE_KIND, TAXONOMY_KIND, or "" when it is neither
        """
        if content_type in self.get_node_types():
            return NODE_KIND
        if content_type in self.get_taxonomies():
            return TAXONOMY_KIND
        return ""
