"""Main CLI application for Drupal schema discovery."""

import logging
from contextlib import contextmanager
from dataclasses import replace
from typing import Optional

import typer
from rich.console import Console

from .config import AppConfig, DEFAULT_CONFIG_FILE
from .errors import DiscoveryError
from .exporters import DocumentExporter
from .services import DiscoveryService
from .utils import setup_logging

# Initialize Typer app
app = typer.Typer(
    name="drupal-discovery",
    help="Document a legacy Drupal database and draft its migration queries",
    add_completion=False
)

# Status and errors go to stderr, documents to stdout.
console = Console(stderr=True)

logger = logging.getLogger(__name__)

ConfigOption = typer.Option(DEFAULT_CONFIG_FILE, "--config", "-c", help="Path to configuration file")
VerboseOption = typer.Option(False, "--verbose", "-v", help="Enable verbose logging")
LogFileOption = typer.Option(None, "--log-file", help="Log file path")
FormatOption = typer.Option(None, "--format", "-f", help="Table format (markdown, csv)")


@contextmanager
def discovery_service(config_file: str, verbose: bool, log_file: Optional[str],
                      chunk_limit: Optional[int] = None):
    """Load configuration and yield the service of this invocation.

    Every failure is reported on stderr and turned into exit code 1.
    """
    setup_logging("DEBUG" if verbose else "WARNING", log_file)

    try:
        config = AppConfig.load(config_file)
        discovery = config.discovery
        if chunk_limit is not None:
            discovery = replace(discovery, chunk_limit=chunk_limit)

        with DiscoveryService(config, discovery=discovery) as service:
            yield service

    except typer.Exit:
        raise
    except FileNotFoundError as e:
        console.print(f"❌ Configuration file not found: {e}", style="red")
        raise typer.Exit(1)
    except DiscoveryError as e:
        logger.debug(f"{e.code}: {e.details}")
        console.print(f"❌ {e.message}", style="red")
        raise typer.Exit(1)
    except Exception as e:
        logger.error(f"Error during discovery: {e}")
        console.print(f"❌ Error: {e}", style="red")
        raise typer.Exit(1)


def _exporter(config_format: str, output_format: Optional[str]) -> DocumentExporter:
    try:
        return DocumentExporter(output_format or config_format)
    except ValueError as e:
        console.print(f"❌ {e}", style="red")
        raise typer.Exit(1)


def _normalize_name(name: str) -> str:
    return name.strip().lower()


@app.command()
def version(
    config_file: str = ConfigOption,
    verbose: bool = VerboseOption,
    log_file: Optional[str] = LogFileOption
):
    """Print the Drupal version."""
    with discovery_service(config_file, verbose, log_file) as service:
        document = DocumentExporter().version_document(service.get_version())

    typer.echo(document, nl=False)


@app.command()
def info(
    output_format: Optional[str] = FormatOption,
    config_file: str = ConfigOption,
    verbose: bool = VerboseOption,
    log_file: Optional[str] = LogFileOption
):
    """Print node types, taxonomies, media types and languages.

    Sections without rows print "None found." instead of a table.
    """
    with discovery_service(config_file, verbose, log_file) as service:
        exporter = _exporter(service.config.output.format, output_format)
        document = exporter.info_document(**service.get_info())

    typer.echo(document, nl=False)


@app.command("entity-fields")
def entity_fields(
    content_type: str = typer.Argument(..., help="Node type or vocabulary machine name"),
    output_format: Optional[str] = FormatOption,
    chunk_limit: Optional[int] = typer.Option(None, "--chunk-limit", help="Maximum fields joined per main query"),
    config_file: str = ConfigOption,
    verbose: bool = VerboseOption,
    log_file: Optional[str] = LogFileOption
):
    """Print the fields of a content type and its migration queries."""
    content_type = _normalize_name(content_type)

    with discovery_service(config_file, verbose, log_file, chunk_limit) as service:
        exporter = _exporter(service.config.output.format, output_format)
        fields, query_set = service.describe_entity(content_type)

        if not fields and query_set.is_empty() and not service.site.classify(content_type):
            console.print(f"⚠️  Unknown content type or taxonomy: {content_type}", style="yellow")
            raise typer.Exit(1)

        document = exporter.entity_document(content_type, fields, query_set)

    typer.echo(document, nl=False)


@app.command("taxonomy-fields")
def taxonomy_fields(
    vocabulary: str = typer.Argument(..., help="Vocabulary machine name"),
    output_format: Optional[str] = FormatOption,
    config_file: str = ConfigOption,
    verbose: bool = VerboseOption,
    log_file: Optional[str] = LogFileOption
):
    """Print the fields of a taxonomy vocabulary.

    A vocabulary without fields prints "None found." instead of a table.
    """
    vocabulary = _normalize_name(vocabulary)

    with discovery_service(config_file, verbose, log_file) as service:
        exporter = _exporter(service.config.output.format, output_format)
        document = exporter.fields_document(vocabulary, service.describe_fields(vocabulary))

    typer.echo(document, nl=False)


@app.command()
def commands(
    config_file: str = ConfigOption,
    verbose: bool = VerboseOption,
    log_file: Optional[str] = LogFileOption
):
    """Print the shell commands that document every content type and taxonomy."""
    with discovery_service(config_file, verbose, log_file) as service:
        node_types, taxonomies = service.get_content_type_names()
        document = DocumentExporter().commands_document(node_types, taxonomies, service.discovery)

    typer.echo(document, nl=False)


@app.command()
def tables(
    config_file: str = ConfigOption,
    verbose: bool = VerboseOption,
    log_file: Optional[str] = LogFileOption
):
    """List the tables of the Drupal database."""
    with discovery_service(config_file, verbose, log_file) as service:
        names = service.list_tables()

    for name in names:
        typer.echo(name)


@app.command()
def columns(
    table_name: str = typer.Argument(..., help="Table name"),
    config_file: str = ConfigOption,
    verbose: bool = VerboseOption,
    log_file: Optional[str] = LogFileOption
):
    """List the columns of one table."""
    with discovery_service(config_file, verbose, log_file) as service:
        names = service.list_columns(table_name)

    if not names:
        console.print(f"⚠️  No columns found for table: {table_name}", style="yellow")
        raise typer.Exit(1)

    for name in names:
        typer.echo(name)


def main():
    """Main entry point for the application."""
    app()


if __name__ == "__main__":
    main()
