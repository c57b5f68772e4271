"""Typed accessors that mirror resource directories."""

from .errors import ResgenError
from .runtime import RFile, RFolder, ResourceNamespace

__all__ = ["RFile", "RFolder", "ResgenError", "ResourceNamespace"]
