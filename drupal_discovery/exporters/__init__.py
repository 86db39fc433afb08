"""Report and document rendering package."""

from .markdown_exporter import to_table
from .csv_exporter import to_csv
from .document_exporter import DocumentExporter

__all__ = ['to_table', 'to_csv', 'DocumentExporter']
