"""Utility helpers."""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level: str = "WARNING", log_file: Optional[str] = None) -> None:
    """Configure logging.

    Log records go to stderr so that stdout only carries the generated
    document and can be redirected into a file.

    Args:
        level: Logging level name
        log_file: Optional path of a log file
    """
    handlers = [
        RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=True)
    ]

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        handlers.append(file_handler)

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(message)s",
        datefmt="[%X]",
        handlers=handlers,
        force=True
    )
