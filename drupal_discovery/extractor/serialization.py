"""Decoding of PHP-serialized blobs stored by Drupal."""

import logging
from typing import Any

import phpserialize

logger = logging.getLogger(__name__)


def _normalize(value: Any) -> Any:
    """Turn PHP arrays with keys 0..n-1 into lists, recursively."""
    if isinstance(value, dict):
        normalized = {key: _normalize(item) for key, item in value.items()}
        if normalized and list(normalized.keys()) == list(range(len(normalized))):
            return list(normalized.values())
        return normalized
    if isinstance(value, (list, tuple)):
        return [_normalize(item) for item in value]
    return value


def maybe_unserialize(value: Any) -> Any:
    """Unserialize a stored value when it is PHP-serialized.

    Anything that is not valid serialized data is returned verbatim, as a
    string when it was bytes.

    Args:
        value: Raw column value

    Returns:
        The decoded structure, or the original value
    """
    if value is None:
        return None

    if isinstance(value, memoryview):
        value = value.tobytes()

    if isinstance(value, str):
        raw = value.encode("utf-8")
    elif isinstance(value, (bytes, bytearray)):
        raw = bytes(value)
    else:
        return value

    try:
        return _normalize(phpserialize.loads(raw, decode_strings=True))
    except (ValueError, TypeError, IndexError, KeyError, UnicodeDecodeError) as e:
        logger.debug(f"Value is not PHP-serialized, keeping it verbatim: {e}")
        return raw.decode("utf-8", errors="replace")
