"""Filename helpers for tree nodes and generated archives."""

import re
from datetime import datetime
from typing import Optional


_INVALID_CHARS = re.compile(r'[<>:"/\\|?*\ud800-\udfff]')
_WHITESPACE = re.compile(r"\s+")
_REPEATED_UNDERSCORES = re.compile(r"_{2,}")


def sanitize_filename(filename: str) -> str:
    """
    Replace characters that are invalid in filenames.

    Reserved characters and whitespace runs become ``_``, repeated
    underscores collapse, and leading/trailing underscores are dropped.
    """
    result = _INVALID_CHARS.sub("_", filename)
    result = _WHITESPACE.sub("_", result)
    result = _REPEATED_UNDERSCORES.sub("_", result)
    return result.strip("_")


def generate_unique_filename(base_name: str = "converted", extension: str = "zip",
                             now: Optional[datetime] = None) -> str:
    """
    Build a timestamped filename such as ``converted_2024-01-01T10-00-00-000000.zip``.

    Args:
        base_name: Leading part of the name
        extension: Extension without the dot
        now: Timestamp to use (defaults to the current time)
    """
    timestamp = (now or datetime.now()).isoformat().replace(":", "-").replace(".", "-")
    return f"{base_name}_{timestamp}.{extension}"
