"""Assembly of the markdown documents printed by the CLI."""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Sequence

from ..config import DiscoveryConfig
from ..models.discovery_models import ContentType, FieldDescriptor, QuerySet
from .csv_exporter import to_csv
from .markdown_exporter import to_table

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("markdown", "csv")
NONE_FOUND = "_None found._\n"
PROGRAM = "drupal-discovery"


class DocumentExporter:
    """Render discovery results as documents."""

    def __init__(self, output_format: str = "markdown"):
        """Initialize document exporter.

        Args:
            output_format: Table format, markdown or csv
        """
        if output_format not in OUTPUT_FORMATS:
            raise ValueError(f"Unsupported output format: {output_format}")
        self.output_format = output_format

    def render_table(self, rows: Sequence[Mapping[str, Any]]) -> str:
        """Render records as a table, or a placeholder when there are none."""
        if not rows:
            return NONE_FOUND
        if self.output_format == "csv":
            return to_csv(rows)
        return to_table(rows)

    def version_document(self, version: str) -> str:
        return f"Drupal version: {version}\n"

    def info_document(self, version: str,
                      node_types: Iterable[ContentType],
                      taxonomies: Iterable[ContentType],
                      media_types: List[Dict[str, Any]],
                      languages: List[Dict[str, Any]]) -> str:
        """Overview of a site: bundles, vocabularies, media and languages."""
        language_rows = [
            {
                "language": item["language"],
                "name": item["name"],
                "domain": item["domain"],
                "target_site": "",
                "notes": "",
            }
            for item in languages
        ]
        total_media = sum(int(item["count"]) for item in media_types)

        parts = [
            f"\n{self.version_document(version)}\n",
            "### Node Types\n\n",
            self.render_table([item.to_dict() for item in node_types]),
            "\n\n### Taxonomies\n\n",
            self.render_table([item.to_dict() for item in taxonomies]),
            "\n\n### Media Types\n\n",
            self.render_table(media_types),
            f"\n#### Total Media Types : {total_media}\n",
            "\n\n### Languages\n\n",
            self.render_table(language_rows),
        ]
        return "".join(parts)

    def fields_document(self, content_type: str, fields: List[FieldDescriptor]) -> str:
        """Heading and field table of a bundle."""
        return "".join([
            f"## {content_type}\n",
            "\n#### Fields\n\n",
            self.render_table([item.to_dict() for item in fields]),
        ])

    def entity_document(self, content_type: str, fields: List[FieldDescriptor],
                        query_set: QuerySet) -> str:
        """Field table followed by the generated queries of a bundle."""
        parts = [self.fields_document(content_type, fields), "\n\n#### Main Query\n"]

        for query in query_set.main:
            parts.append(f"\n```sql\n{query}\n```\n")

        if query_set.multiple:
            parts.append("\n#### Multi selection field query : \n")
            for field_name, query in query_set.multiple.items():
                parts.append(f"\n##### {field_name}\n")
                parts.append(f"\n```sql\n{query}\n```\n")

        return "".join(parts)

    def commands_document(self, node_types: Iterable[str], taxonomies: Iterable[str],
                          config: DiscoveryConfig) -> str:
        """Shell checklist that documents every bundle and vocabulary."""
        docs = config.docs_dir
        parts = [
            "\n```shell\n",
            f"{PROGRAM} info > {docs}/A.md\n",
            "\n```\n",
        ]

        for directory, names in ((config.node_directory, node_types),
                                 (config.taxonomy_directory, taxonomies)):
            parts.append(f"\n{directory}\n\n```shell\n")
            for name in names:
                parts.append(f"{PROGRAM} entity-fields {name} > {docs}/{directory}/{name}.md\n")
            parts.append("\n```\n")

        return "".join(parts)
