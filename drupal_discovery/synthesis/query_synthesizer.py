"""Generation of migration SQL for a content type.

Every single-valued field of a bundle is LEFT JOINed onto the base query
so one row comes out per entity. Wide bundles are split into chunks of at
most ``chunk_limit`` fields; each chunk gets its own copy of the base
query, and the resulting queries are meant to be run one after another
and stitched together on the entity id. Multi-valued fields would repeat
the entity row, so each of them gets a standalone query instead.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from ..config import DiscoveryConfig
from ..connector.base_connector import BaseConnector
from ..db.identifiers import ensure_identifier, quote_literal, column_alias
from ..extractor.field_resolver import FieldResolver
from ..extractor.site_inspector import SiteInspector
from ..models.discovery_models import FieldDescriptor, QuerySet, NODE_KIND, ENTITY_TYPES

logger = logging.getLogger(__name__)

INDENT = "    "
UNDEFINED_LANGUAGE = "und"


@dataclass
class QuerySkeleton:
    """Fragments of one SELECT statement."""
    select: List[str] = field(default_factory=list)
    sources: List[str] = field(default_factory=list)
    where: List[str] = field(default_factory=list)
    order_by: List[str] = field(default_factory=list)
    distinct: bool = False

    def copy(self) -> "QuerySkeleton":
        return QuerySkeleton(
            select=list(self.select),
            sources=list(self.sources),
            where=list(self.where),
            order_by=list(self.order_by),
            distinct=self.distinct
        )

    def render(self) -> str:
        """Concatenate the fragments into one statement."""
        lines = ["SELECT DISTINCT" if self.distinct else "SELECT"]
        lines.append(",\n".join(INDENT + item for item in self.select))
        lines.extend(self.sources)
        if self.where:
            lines.append("WHERE " + "\nAND ".join(self.where))
        if self.order_by:
            lines.append("ORDER BY " + ", ".join(self.order_by))
        return "\n".join(lines) + ";"


def chunked(items: List[FieldDescriptor], size: int) -> List[List[FieldDescriptor]]:
    """Split items into consecutive chunks of at most ``size``."""
    return [items[start:start + size] for start in range(0, len(items), size)]


class QuerySynthesizer:
    """Build the main and multi-valued field queries of a content type."""

    def __init__(self, connector: BaseConnector, site: SiteInspector,
                 resolver: FieldResolver, config: DiscoveryConfig):
        """Initialize query synthesizer.

        Args:
            connector: Connector used as schema inspector
            site: Site inspector, source of the known bundles and vocabularies
            resolver: Field resolver
            config: Discovery configuration (chunk limit, alias language)
        """
        self.connector = connector
        self.site = site
        self.resolver = resolver
        self.config = config

    def build_queries(self, content_type: str,
                      fields: Optional[List[FieldDescriptor]] = None) -> QuerySet:
        """Generate the SQL of a node bundle or vocabulary.

        Args:
            content_type: Bundle or vocabulary machine name
            fields: Already resolved fields of the bundle, resolved here when omitted

        Returns:
            QuerySet, empty when the name is neither a bundle nor a vocabulary
        """
        kind = self.site.classify(content_type)
        if not kind:
            logger.warning(f"{content_type} is neither a content type nor a taxonomy")
            return QuerySet()

        known = set(self.site.get_node_types()) | set(self.site.get_taxonomies())
        ensure_identifier(content_type, known, "content type")

        if fields is None:
            fields = self.resolver.resolve(content_type, ENTITY_TYPES[kind])

        if kind == NODE_KIND:
            base = self._node_skeleton(content_type)
        else:
            base = self._taxonomy_skeleton(content_type)

        stored = [item for item in fields if item.table]
        query_set = QuerySet()

        for chunk in chunked(stored, self.config.chunk_limit):
            query = base.copy()
            for descriptor in chunk:
                fragments = self._select_fragments(descriptor)
                join_condition = self._join_condition(kind, descriptor.table)

                if descriptor.multiple:
                    query_set.multiple[descriptor.name] = self._multiple_query(
                        kind, content_type, descriptor.table, fragments, join_condition
                    )
                    continue

                query.select.extend(fragments)
                query.sources.append(f"LEFT JOIN {descriptor.table} ON {join_condition}")

            query_set.main.append(query.render())

        logger.info(
            f"Built {len(query_set.main)} main and {len(query_set.multiple)} "
            f"multi-valued queries for {content_type}"
        )
        return query_set

    def _node_skeleton(self, content_type: str) -> QuerySkeleton:
        select = [
            "node.nid",
            "node.vid",
            "node.language",
            "node.type",
            "node.status",
            "node.title",
            "node.created",
            "node.changed",
            "node.comment",
        ]

        if self.connector.has_table("redirect"):
            select.append(
                "(SELECT COUNT(1) FROM redirect "
                "WHERE redirect.redirect = CONCAT('node/', node.nid)) AS redirect_count"
            )

        if self.connector.has_table("url_alias"):
            language = quote_literal(self.config.alias_language)
            select.append(
                "(SELECT url_alias.alias FROM url_alias "
                "WHERE url_alias.source = CONCAT('node/', node.nid) "
                f"AND url_alias.language = {language} LIMIT 1) AS url_alias"
            )

        return QuerySkeleton(
            select=select,
            sources=["FROM node"],
            where=[f"node.type = {quote_literal(content_type)}"]
        )

    def _taxonomy_skeleton(self, content_type: str) -> QuerySkeleton:
        select = [
            "taxonomy_term_data.*",
            "taxonomy_vocabulary.machine_name AS vocabulary",
            "taxonomy_term_hierarchy.parent",
        ]

        if self.connector.has_table("url_alias"):
            select.append(
                "(SELECT url_alias.alias FROM url_alias "
                "WHERE url_alias.source = CONCAT('taxonomy/term/', taxonomy_term_data.tid) "
                "LIMIT 1) AS url_alias"
            )

        return QuerySkeleton(
            select=select,
            sources=[
                "FROM taxonomy_term_data",
                "INNER JOIN taxonomy_vocabulary ON taxonomy_vocabulary.vid = taxonomy_term_data.vid",
                "INNER JOIN taxonomy_term_hierarchy ON taxonomy_term_hierarchy.tid = taxonomy_term_data.tid",
            ],
            where=[f"taxonomy_vocabulary.machine_name = {quote_literal(content_type)}"],
            order_by=["taxonomy_term_hierarchy.parent ASC"]
        )

    def _select_fragments(self, descriptor: FieldDescriptor) -> List[str]:
        table = ensure_identifier(descriptor.table, self.connector.list_tables(), "table")
        known_columns = self.connector.list_columns(table)
        # Aliases such as "order" or "group" are reserved words.
        quote = self.connector.quote_identifier

        fragments = []
        for column in descriptor.columns:
            ensure_identifier(column, known_columns, "column")
            fragments.append(f"{table}.{column} AS {quote(column_alias(column))}")

            if descriptor.is_taxonomy_reference and column.endswith("_tid"):
                fragments.append(
                    "(SELECT term.name FROM taxonomy_term_data term "
                    f"WHERE term.tid = {table}.{column}) AS {quote(column + '_name')}"
                )
        return fragments

    def _join_condition(self, kind: str, table: str) -> str:
        entity_type = f"{table}.entity_type = {quote_literal(ENTITY_TYPES[kind])}"
        if kind == NODE_KIND:
            return (
                f"{table}.entity_id = node.nid "
                f"AND {entity_type} "
                f"AND {table}.bundle = node.type "
                f"AND {table}.language = node.language"
            )

        undefined = quote_literal(UNDEFINED_LANGUAGE)
        if "language" in self.connector.list_columns("taxonomy_term_data"):
            language = f"{table}.language IN (taxonomy_term_data.language, {undefined})"
        else:
            language = f"{table}.language = {undefined}"

        return (
            f"{table}.entity_id = taxonomy_term_data.tid "
            f"AND {entity_type} "
            f"AND {table}.bundle = taxonomy_vocabulary.machine_name "
            f"AND {language}"
        )

    def _multiple_query(self, kind: str, content_type: str, table: str,
                        fragments: List[str], join_condition: str) -> str:
        """One row per distinct value of a multi-valued field."""
        if kind == NODE_KIND:
            query = QuerySkeleton(
                select=["node.nid", "node.language"] + fragments,
                sources=["FROM node"],
                where=[f"node.type = {quote_literal(content_type)}"],
                order_by=["node.nid"],
                distinct=True
            )
        else:
            query = QuerySkeleton(
                select=["taxonomy_term_data.tid"] + fragments,
                sources=[
                    "FROM taxonomy_term_data",
                    "INNER JOIN taxonomy_vocabulary ON taxonomy_vocabulary.vid = taxonomy_term_data.vid",
                ],
                where=[f"taxonomy_vocabulary.machine_name = {quote_literal(content_type)}"],
                order_by=["taxonomy_term_data.tid"],
                distinct=True
            )

        query.sources.append(f"INNER JOIN {table} ON {join_condition}")
        return query.render()
