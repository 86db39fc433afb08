"""SQL queries against the Drupal 7 schema."""

from typing import Callable


def backtick(name: str) -> str:
    """Quote an identifier the MySQL way."""
    return f"`{name}`"


class DrupalQueries:
    """Collection of SQL queries for reading Drupal metadata.

    Table names that are reserved words in some dialects are quoted with
    the connector's quoting function.
    """

    def __init__(self, quote: Callable[[str], str] = backtick):
        self.quote = quote

    def get_version(self) -> str:
        """Get the serialized info blob of the field module."""
        return f"""
            SELECT info
            FROM {self.quote('system')}
            WHERE filename LIKE %s
            LIMIT 1
        """

    def get_node_types(self) -> str:
        """Get node bundles with instance counts and the first node id."""
        return """
            SELECT
                node.type AS type,
                COUNT(1) AS count,
                MIN(node.nid) AS first_nid
            FROM node
            GROUP BY node.type
            ORDER BY node.type
        """

    def get_url_alias(self) -> str:
        """Get the alias of a system path."""
        return """
            SELECT alias
            FROM url_alias
            WHERE source = %s
            ORDER BY pid
            LIMIT 1
        """

    def get_taxonomies(self) -> str:
        """Get vocabularies with their term counts."""
        return """
            SELECT
                taxonomy_vocabulary.machine_name AS type,
                (
                    SELECT COUNT(1)
                    FROM taxonomy_term_data
                    WHERE taxonomy_term_data.vid = taxonomy_vocabulary.vid
                ) AS count
            FROM taxonomy_vocabulary
            ORDER BY taxonomy_vocabulary.machine_name
        """

    def get_media_types(self) -> str:
        """Get managed file MIME types with counts."""
        return """
            SELECT
                filemime AS type,
                COUNT(1) AS count
            FROM file_managed
            GROUP BY filemime
            ORDER BY filemime
        """

    def get_languages(self) -> str:
        """Get installed languages."""
        return """
            SELECT language, name, domain
            FROM languages
            ORDER BY weight, language
        """

    def get_field_instances(self) -> str:
        """Get field instances of a bundle joined to their storage config."""
        return """
            SELECT
                field_config_instance.field_name AS field_name,
                field_config_instance.entity_type AS entity_type,
                field_config_instance.bundle AS bundle,
                field_config_instance.data AS instance_data,
                field_config.type AS field_type,
                field_config.module AS module,
                field_config.cardinality AS cardinality,
                field_config.data AS field_data
            FROM field_config_instance
            LEFT JOIN field_config ON field_config.id = field_config_instance.field_id
            WHERE field_config_instance.bundle = %s
            AND field_config_instance.deleted = 0
            ORDER BY field_config_instance.id
        """

    def get_field_type(self) -> str:
        """Get the storage type of a field."""
        return """
            SELECT type
            FROM field_config
            WHERE field_name = %s
            LIMIT 1
        """

    def get_max_values_per_entity(self, table_name: str) -> str:
        """Get the largest number of stored values for one entity and locale.

        Parameterized by bundle and entity type; node and term ids overlap
        when a node type and a vocabulary share a machine name.

        ``table_name`` must already be validated against the live schema.
        """
        return f"""
            SELECT
                entity_id,
                language,
                COUNT(1) AS value_count
            FROM {table_name}
            WHERE bundle = %s
            AND entity_type = %s
            GROUP BY entity_id, language
            ORDER BY value_count DESC
            LIMIT 1
        """
