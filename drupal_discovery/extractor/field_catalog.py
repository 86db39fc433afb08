"""Field instance configuration of a bundle."""

import logging
from typing import Dict, List, Any, Optional

from ..connector.base_connector import BaseConnector
from ..models.discovery_models import RawFieldConfig
from .serialization import maybe_unserialize

logger = logging.getLogger(__name__)


def _settings(value: Any) -> Optional[Dict[str, Any]]:
    decoded = maybe_unserialize(value)
    return decoded if isinstance(decoded, dict) else None


class FieldCatalog:
    """List the fields attached to a bundle."""

    def __init__(self, connector: BaseConnector):
        """Initialize field catalog.

        Args:
            connector: Connector of the current invocation
        """
        self.connector = connector
        self.queries = connector.queries

    def fields_for(self, content_type: str,
                   entity_type: Optional[str] = None) -> List[RawFieldConfig]:
        """Get the raw configuration of every field instance of a bundle.

        Settings blobs that cannot be unserialized are kept as ``None``
        rather than failing the whole listing.

        Args:
            content_type: Bundle machine name
            entity_type: Keep only instances of this entity type when given

        Returns:
            Field configurations in instance order
        """
        if not self.connector.has_table("field_config_instance"):
            logger.warning("No field_config_instance table found")
            return []

        rows = self.connector.fetch_all(self.queries.get_field_instances(), (content_type,))

        fields = []
        seen = set()
        for row in rows:
            field_name = row["field_name"]
            # A bundle name can be shared by a node type and a vocabulary.
            if entity_type and row.get("entity_type") != entity_type:
                continue
            if field_name in seen:
                continue
            seen.add(field_name)

            instance_settings = _settings(row.get("instance_data"))
            if instance_settings is None:
                logger.warning(f"Could not read instance settings of field {field_name}")

            cardinality = row.get("cardinality")
            fields.append(RawFieldConfig(
                field_name=field_name,
                entity_type=row.get("entity_type") or "",
                bundle=row.get("bundle") or "",
                field_type=row.get("field_type") or "",
                module=row.get("module") or "",
                cardinality=int(cardinality) if cardinality is not None else None,
                instance_settings=instance_settings,
                field_settings=_settings(row.get("field_data"))
            ))

        logger.info(f"Found {len(fields)} fields for {content_type}")
        return fields

    def field_type(self, field_name: str) -> str:
        """Get the declared storage type of a field, or "" when unknown."""
        row = self.connector.fetch_one(self.queries.get_field_type(), (field_name,))
        return (row or {}).get("type") or ""
