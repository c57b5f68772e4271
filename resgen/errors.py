"""Error types raised while generating resource accessors."""

from __future__ import annotations

from typing import Sequence


class ResgenError(RuntimeError):
    """Base class for every failure surfaced to the generation driver."""


class ConfigurationError(ResgenError):
    """Raised when settings are missing, malformed or produce invalid names."""


class IdentifierError(ResgenError, ValueError):
    """Raised when a raw name cannot be turned into an identifier."""


class ScanError(ResgenError):
    """Raised when the resource directory cannot be traversed."""


class SymlinkCycleError(ScanError):
    """Raised when a symbolic link leads back into one of its own ancestors."""

    def __init__(self, path: str, target: str) -> None:
        super().__init__(
            f"Symlink cycle detected: '{path}' resolves to ancestor directory '{target}'"
        )
        self.path = path
        self.target = target


class NamingCollisionError(ResgenError):
    """Raised when sibling entries sanitize to the same identifier."""

    def __init__(self, container: str, identifier: str, names: Sequence[str]) -> None:
        location = f"'{container}'" if container else "the resource root"
        if len(names) == 1:
            message = (
                f"Identifier '{identifier}' derived from '{names[0]}' in {location} "
                "clashes with a reserved name"
            )
        else:
            joined = ", ".join(f"'{name}'" for name in names)
            message = (
                f"Identifier '{identifier}' in {location} is produced by more than one entry: {joined}"
            )
        super().__init__(message)
        self.container = container
        self.identifier = identifier
        self.names = list(names)


class GenerationError(ResgenError):
    """Raised when the generated module cannot be written."""


__all__ = [
    "ConfigurationError",
    "GenerationError",
    "IdentifierError",
    "NamingCollisionError",
    "ResgenError",
    "ScanError",
    "SymlinkCycleError",
]
