"""Identifier sanitizing for generated resource accessors.

Filesystem names may contain dots, dashes, spaces, unicode or leading digits. Every
character outside ``[A-Za-z0-9]`` separates segments; the segments are re-cased into
camelCase for members (files) and PascalCase for containers (folders).
"""

from __future__ import annotations

import keyword
import re
from typing import List

from .errors import IdentifierError

_SEPARATOR_RE = re.compile(r"[^A-Za-z0-9]+")
_IDENTIFIER_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def to_member_identifier(raw_name: str) -> str:
    """Return the camelCase attribute name used for a resource file."""
    segments = _segments(raw_name)
    parts = [
        segment.lower() if index == 0 else _capitalise(segment)
        for index, segment in enumerate(segments)
    ]
    return _finalise("".join(parts), raw_name)


def to_container_identifier(raw_name: str) -> str:
    """Return the PascalCase class name used for a resource folder."""
    segments = _segments(raw_name)
    return _finalise("".join(_capitalise(segment) for segment in segments), raw_name)


def is_valid_identifier(name: str) -> bool:
    """True when ``name`` can be emitted verbatim as a class or attribute name."""
    return bool(_IDENTIFIER_RE.fullmatch(name)) and not keyword.iskeyword(name)


def _segments(raw_name: str) -> List[str]:
    if not raw_name:
        raise IdentifierError("Cannot derive an identifier from an empty name")
    return [segment for segment in _SEPARATOR_RE.split(raw_name) if segment]


def _capitalise(segment: str) -> str:
    return segment[:1].upper() + segment[1:].lower()


def _finalise(identifier: str, raw_name: str) -> str:
    if not identifier:
        # Nothing alphanumeric survived; spell out the code points instead.
        identifier = "_" + "_".join(f"{ord(char):x}" for char in raw_name)
    elif identifier[0].isdigit():
        identifier = f"_{identifier}"
    if keyword.iskeyword(identifier):
        identifier = f"{identifier}_"
    return identifier


__all__ = [
    "is_valid_identifier",
    "to_container_identifier",
    "to_member_identifier",
]
