"""Data models for schema discovery."""

from typing import Dict, List, Any, Optional, Tuple, Mapping, Sequence
from dataclasses import dataclass, field

from ..errors import EmptyResultSetError, ReportShapeError

NODE_KIND = "node"
TAXONOMY_KIND = "taxonomy"

# entity_type values stored in field_data_* tables, per kind.
NODE_ENTITY_TYPE = "node"
TERM_ENTITY_TYPE = "taxonomy_term"
ENTITY_TYPES = {
    NODE_KIND: NODE_ENTITY_TYPE,
    TAXONOMY_KIND: TERM_ENTITY_TYPE,
}


@dataclass(frozen=True)
class ContentType:
    """A node bundle or a taxonomy vocabulary with its instance count."""
    name: str
    count: int
    kind: str = NODE_KIND
    url_alias: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to report record."""
        record = {"type": self.name, "count": self.count}
        if self.kind == NODE_KIND:
            record["url_alias"] = self.url_alias
        return record


@dataclass
class RawFieldConfig:
    """Field instance configuration as stored by Drupal."""
    field_name: str
    entity_type: str = ""
    bundle: str = ""
    field_type: str = ""
    module: str = ""
    cardinality: Optional[int] = None
    instance_settings: Optional[Dict[str, Any]] = None
    field_settings: Optional[Dict[str, Any]] = None


@dataclass
class FieldDescriptor:
    """Resolved description of one field attached to a bundle."""
    name: str
    label: str = ""
    type: str = ""
    entity_type: str = ""
    entity_name: str = ""
    table: str = ""
    columns: List[str] = field(default_factory=list)
    required: bool = False
    default_value: str = ""
    cardinality: Optional[int] = None
    multiple: bool = False

    def __post_init__(self):
        if self.columns and not self.table:
            raise ValueError(f"Field {self.name} has columns but no backing table")

    @property
    def is_taxonomy_reference(self) -> bool:
        return self.type.lower() == "taxonomy_term_reference"

    @property
    def is_reference(self) -> bool:
        return "reference" in self.type.lower()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to report record."""
        return {
            "label": self.label,
            "name": self.name,
            "type": self.type,
            "entity_type": self.entity_type,
            "entity_name": self.entity_name,
            "table": self.table,
            "columns": list(self.columns),
            "required": "Yes" if self.required else "No",
            "default_value": self.default_value,
            "cardinality": "" if self.cardinality is None else str(self.cardinality),
            "multiple": "Yes" if self.multiple else "No",
        }


@dataclass
class QuerySet:
    """Generated SQL for one content type.

    ``main`` holds one query per chunk of fields; ``multiple`` maps each
    multi-valued field name to its standalone query.
    """
    main: List[str] = field(default_factory=list)
    multiple: Dict[str, str] = field(default_factory=dict)

    def is_empty(self) -> bool:
        return not self.main and not self.multiple


def _cell(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return ", ".join(str(item) for item in value)
    if value is None:
        return ""
    return str(value)


@dataclass(frozen=True)
class ReportTable:
    """Uniform rows ready for rendering.

    The column keys are fixed by the first record; every row carries a
    display string for each of them.
    """
    columns: Tuple[str, ...]
    rows: Tuple[Tuple[str, ...], ...]

    @classmethod
    def from_records(cls, records: Sequence[Mapping[str, Any]]) -> "ReportTable":
        """Build a table from same-shaped mappings.

        List-valued cells are joined with ", ".

        Raises:
            EmptyResultSetError: If there are no records
            ReportShapeError: If records do not share the first record's keys
        """
        if not records:
            raise EmptyResultSetError("Cannot build a report from an empty result set")

        columns = tuple(records[0].keys())
        rows = []
        for index, record in enumerate(records):
            if tuple(record.keys()) != columns:
                raise ReportShapeError(
                    f"Row {index} does not match the report columns",
                    details={"expected": list(columns), "actual": list(record.keys())}
                )
            rows.append(tuple(_cell(record[key]) for key in columns))

        return cls(columns=columns, rows=tuple(rows))

    @property
    def heading(self) -> Tuple[str, ...]:
        """Column titles: underscores become spaces, words are title-cased."""
        return tuple(_title(key.replace("_", " ")) for key in self.columns)


def _title(text: str) -> str:
    # Only the first letter of each word changes, so "URL" stays "URL".
    return " ".join(word[:1].upper() + word[1:] for word in text.split(" "))
