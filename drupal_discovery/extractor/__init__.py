"""Drupal metadata extraction package."""

from .site_inspector import SiteInspector
from .field_catalog import FieldCatalog
from .multiplicity import MultiplicityCache, MultiplicityDetector
from .field_resolver import FieldResolver

__all__ = [
    'SiteInspector',
    'FieldCatalog',
    'MultiplicityCache',
    'MultiplicityDetector',
    'FieldResolver'
]
