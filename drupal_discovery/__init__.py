"""Schema discovery for legacy Drupal databases."""

__version__ = "0.1.0"
