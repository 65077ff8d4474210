"""Codec for ``key=value`` catalog property files."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Mapping

from .errors import MalformedCatalog

LINE_SEPARATOR = "\n"
KEY_VALUE_SEPARATOR = "="


def serialize_properties(properties: Mapping[str, str]) -> str:
    """Render properties as ``key=value`` lines joined by ``\\n``.

    Entries keep the mapping's iteration order. Keys must be non-empty and
    free of ``=`` and newlines; values must be free of newlines.
    """
    lines = []
    for key, value in properties.items():
        if not isinstance(key, str) or not key:
            raise MalformedCatalog(f"Invalid property name: {key!r}")
        if KEY_VALUE_SEPARATOR in key or LINE_SEPARATOR in key:
            raise MalformedCatalog(f"Property name may not contain '=' or newline: {key!r}")
        if not isinstance(value, str):
            raise MalformedCatalog(f"Property {key} must have a string value")
        if LINE_SEPARATOR in value:
            raise MalformedCatalog(f"Property {key} value may not contain a newline")
        lines.append(f"{key}{KEY_VALUE_SEPARATOR}{value}")
    return LINE_SEPARATOR.join(lines)


def parse_properties(body: str) -> Dict[str, str]:
    """Parse a catalog body. Lines split on the first ``=``; blank lines are skipped."""
    properties: Dict[str, str] = {}
    for line_number, line in enumerate(body.split(LINE_SEPARATOR), start=1):
        if not line:
            continue
        key, sep, value = line.partition(KEY_VALUE_SEPARATOR)
        if not sep:
            raise MalformedCatalog("Property line has no '=' separator", line_number)
        if not key:
            raise MalformedCatalog("Property line has an empty name", line_number)
        properties[key] = value
    return properties


def load_properties(path: Path | str) -> Dict[str, str]:
    """Read and parse a catalog file (UTF-8)."""
    try:
        body = Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise MalformedCatalog(f"Catalog file {path} is not valid UTF-8") from exc
    return parse_properties(body)
