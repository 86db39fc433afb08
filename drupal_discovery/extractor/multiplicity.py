"""Detection of fields that store more than one value per entity."""

import logging
from typing import Dict, Optional, Tuple

from ..connector.base_connector import BaseConnector
from ..db.identifiers import ensure_identifier
from ..models.discovery_models import NODE_ENTITY_TYPE

logger = logging.getLogger(__name__)


class MultiplicityCache:
    """Multiplicity results of one invocation, keyed by entity type and bundle, then field."""

    def __init__(self):
        self._results: Dict[Tuple[str, str], Dict[str, bool]] = {}

    def get(self, content_type: str, field_name: str,
            entity_type: str = NODE_ENTITY_TYPE) -> Optional[bool]:
        return self._results.get((entity_type, content_type), {}).get(field_name)

    def set(self, content_type: str, field_name: str, multiple: bool,
            entity_type: str = NODE_ENTITY_TYPE) -> None:
        self._results.setdefault((entity_type, content_type), {})[field_name] = multiple

    def for_content_type(self, content_type: str,
                         entity_type: str = NODE_ENTITY_TYPE) -> Dict[str, bool]:
        return dict(self._results.get((entity_type, content_type), {}))

    def clear(self) -> None:
        self._results.clear()

    def __len__(self) -> int:
        return sum(len(fields) for fields in self._results.values())


class MultiplicityDetector:
    """Sample field data to find multi-valued fields.

    The largest value count of any single entity and locale decides, so a
    field that repeats for only a few entities is still flagged.
    """

    def __init__(self, connector: BaseConnector, cache: MultiplicityCache):
        """Initialize multiplicity detector.

        Args:
            connector: Connector of the current invocation
            cache: Result cache scoped to the current invocation
        """
        self.connector = connector
        self.queries = connector.queries
        self.cache = cache

    def is_multiple(self, content_type: str, field_name: str, table_name: str,
                    entity_type: str = NODE_ENTITY_TYPE) -> bool:
        """Tell whether any entity of the bundle has several values for a field.

        Args:
            content_type: Bundle machine name
            field_name: Field machine name
            table_name: Backing data table of the field
            entity_type: Entity type of the bundle, ``node`` or ``taxonomy_term``

        Returns:
            True if at least one entity stores more than one value
        """
        cached = self.cache.get(content_type, field_name, entity_type)
        if cached is not None:
            return cached

        if not table_name:
            self.cache.set(content_type, field_name, False, entity_type)
            return False

        table_name = ensure_identifier(table_name, self.connector.list_tables(), "table")
        row = self.connector.fetch_one(
            self.queries.get_max_values_per_entity(table_name), (content_type, entity_type)
        )

        if not row:
            # No stored values at all, most likely an unused field.
            multiple = False
        else:
            multiple = int(row["value_count"]) > 1

        logger.debug(f"{entity_type}.{content_type}.{field_name} multiple={multiple}")
        self.cache.set(content_type, field_name, multiple, entity_type)
        return multiple
