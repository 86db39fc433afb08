"""Data models package."""

from .discovery_models import (
    ContentType,
    RawFieldConfig,
    FieldDescriptor,
    QuerySet,
    ReportTable,
    NODE_KIND,
    TAXONOMY_KIND,
    NODE_ENTITY_TYPE,
    TERM_ENTITY_TYPE,
    ENTITY_TYPES
)

__all__ = [
    'ContentType',
    'RawFieldConfig',
    'FieldDescriptor',
    'QuerySet',
    'ReportTable',
    'NODE_KIND',
    'TAXONOMY_KIND',
    'NODE_ENTITY_TYPE',
    'TERM_ENTITY_TYPE',
    'ENTITY_TYPES'
]
