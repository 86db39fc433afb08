"""Resolution of raw field configuration into field descriptors."""

import logging
from typing import Dict, List, Any, Optional

from ..connector.base_connector import BaseConnector
from ..models.discovery_models import RawFieldConfig, FieldDescriptor, NODE_ENTITY_TYPE
from .field_catalog import FieldCatalog
from .multiplicity import MultiplicityDetector

logger = logging.getLogger(__name__)

DATA_TABLE_PREFIX = "field_data_"
NO_ENTITY_NAME = "No Entity Name"
TAXONOMY_TERM_REFERENCE = "taxonomy_term_reference"


def _display_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, dict):
        return ", ".join(_display_value(item) for item in value.values() if item not in (None, ""))
    if isinstance(value, (list, tuple)):
        return ", ".join(_display_value(item) for item in value if item not in (None, ""))
    return str(value)


def _truthy(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip() not in ("", "0")
    return bool(value)


def _keys(value: Any) -> List[str]:
    """Names from a PHP option array: keys of a map, items of a list."""
    if isinstance(value, dict):
        return [str(key) for key, enabled in value.items() if _truthy(enabled)]
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value if _truthy(item)]
    return []


class FieldResolver:
    """Combine field configuration, schema and sampled data into descriptors."""

    def __init__(self, connector: BaseConnector, catalog: FieldCatalog, detector: MultiplicityDetector):
        """Initialize field resolver.

        Args:
            connector: Connector used as schema inspector
            catalog: Field catalog
            detector: Multiplicity detector with the invocation's cache
        """
        self.connector = connector
        self.catalog = catalog
        self.detector = detector

    def resolve(self, content_type: str,
                entity_type: Optional[str] = None) -> List[FieldDescriptor]:
        """Get one descriptor per field of a bundle.

        Args:
            content_type: Bundle machine name
            entity_type: Entity type of the bundle, all types when omitted

        Returns:
            Field descriptors in instance order
        """
        tables = self.connector.list_tables()
        descriptors = []

        for raw in self.catalog.fields_for(content_type, entity_type):
            descriptor = self._describe(raw, tables)
            if descriptor.table:
                descriptor.multiple = self.detector.is_multiple(
                    content_type, descriptor.name, descriptor.table,
                    entity_type or raw.entity_type or NODE_ENTITY_TYPE
                )
            descriptors.append(descriptor)

        return descriptors

    def _describe(self, raw: RawFieldConfig, tables) -> FieldDescriptor:
        field_name = raw.field_name
        table = DATA_TABLE_PREFIX + field_name
        if table not in tables:
            logger.debug(f"Field {field_name} has no data table")
            table = ""

        columns = []
        if table:
            columns = [
                column for column in self.connector.list_columns(table)
                if field_name in column
            ]

        instance = raw.instance_settings
        if instance is None:
            # Unreadable configuration still yields a row for the field.
            return FieldDescriptor(
                name=field_name,
                table=table,
                columns=columns,
                cardinality=raw.cardinality
            )

        field_type = raw.field_type or self.catalog.field_type(field_name)
        descriptor = FieldDescriptor(
            name=field_name,
            label=str(instance.get("label") or ""),
            type=field_type,
            table=table,
            columns=columns,
            required=_truthy(instance.get("required")),
            default_value=_display_value(instance.get("default_value")),
            cardinality=raw.cardinality
        )

        if descriptor.is_reference:
            settings = (raw.field_settings or {}).get("settings") or {}
            descriptor.entity_type, descriptor.entity_name = self._reference_target(
                field_type, settings
            )

        return descriptor

    def _reference_target(self, field_type: str, settings: Dict[str, Any]):
        """Get the referenced entity type and bundle names of a reference field."""
        if field_type.lower() == TAXONOMY_TERM_REFERENCE:
            vocabularies = [
                str(item.get("vocabulary"))
                for item in (settings.get("allowed_values") or [])
                if isinstance(item, dict) and item.get("vocabulary")
            ]
            return field_type, ",".join(vocabularies) or NO_ENTITY_NAME

        entity_type = settings.get("target_type")
        if not entity_type and field_type.lower().endswith("_reference"):
            entity_type = field_type.lower()[:-len("_reference")]

        handler_settings = settings.get("handler_settings") or {}
        bundles = _keys(handler_settings.get("target_bundles"))
        if not bundles:
            bundles = _keys(settings.get("referenceable_types"))

        return str(entity_type or ""), ",".join(bundles) or NO_ENTITY_NAME
