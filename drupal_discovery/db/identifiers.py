"""Helpers for interpolating names into generated SQL."""

import re
from typing import Iterable

from ..errors import UnknownIdentifierError

IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def ensure_identifier(name: str, known: Iterable[str], kind: str = "identifier") -> str:
    """Check a table or column name before it is written into SQL text.

    Args:
        name: Name to check
        known: Names present in the live schema
        kind: What the name is, for the error message

    Returns:
        The name unchanged

    Raises:
        UnknownIdentifierError: If the name is malformed or not in the schema
    """
    if not IDENTIFIER_PATTERN.match(name or ""):
        raise UnknownIdentifierError(f"Invalid {kind} name: {name!r}")
    if name not in known:
        raise UnknownIdentifierError(f"Unknown {kind}: {name}")
    return name


def quote_literal(value: str) -> str:
    """Quote a string literal for SQL text.

    Only names already checked against the live schema reach this, so
    doubling single quotes is enough for both dialects.
    """
    return "'" + value.replace("'", "''") + "'"


def column_alias(column: str) -> str:
    """Display alias of a field column: field_tags_tid -> tags_tid, field_body_value -> body."""
    alias = column
    if alias.startswith("field_"):
        alias = alias[len("field_"):]
    if alias.endswith("_value"):
        alias = alias[:-len("_value")]
    return alias
