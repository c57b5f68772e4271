"""Value types referenced by generated resource modules.

Generated modules only import the names defined here. The types carry path metadata;
reading resource contents is left to the caller (``open(file.resolve(root))``).
"""

from __future__ import annotations

import os
from pathlib import Path


class ResourceNamespace:
    """Base for generated containers; containers are namespaces and never instantiated."""

    __slots__ = ()

    def __new__(cls, *args: object, **kwargs: object) -> "ResourceNamespace":
        raise TypeError(f"{cls.__name__} is a resource namespace and cannot be instantiated")


class RFile:
    """A resource file addressed by its slash-separated path from the resource root."""

    __slots__ = ("_resource_path", "_file_name")

    def __init__(self, resource_path: str) -> None:
        self._resource_path = resource_path[1:] if resource_path.startswith("/") else resource_path
        if not self._resource_path:
            raise ValueError("Resource path cannot be empty")
        self._file_name = self._resource_path.rsplit("/", 1)[-1]

    @property
    def resource_path(self) -> str:
        return self._resource_path

    @property
    def resource_path_with_slash(self) -> str:
        return f"/{self._resource_path}"

    @property
    def file_name(self) -> str:
        return self._file_name

    @property
    def base_name(self) -> str:
        stem, dot, _ = self._file_name.rpartition(".")
        return stem if dot else self._file_name

    @property
    def extension(self) -> str:
        """Extension without the dot, or an empty string."""
        _, dot, suffix = self._file_name.rpartition(".")
        return suffix if dot else ""

    @property
    def parent_path(self) -> str:
        parent, _, _ = self._resource_path.rpartition("/")
        return parent

    def resolve(self, root: str | os.PathLike[str]) -> Path:
        """Return the filesystem location of this resource below ``root``."""
        return Path(root).joinpath(*self._resource_path.split("/"))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RFile):
            return NotImplemented
        return self._resource_path == other._resource_path

    def __hash__(self) -> int:
        return hash(("RFile", self._resource_path))

    def __repr__(self) -> str:
        return f"RFile({self._resource_path!r})"

    def __str__(self) -> str:
        return self._resource_path


class RFolder:
    """A resource folder with its own name and its path from the resource root."""

    __slots__ = ("_name", "_resource_path")

    def __init__(self, name: str, resource_path: str) -> None:
        if not name:
            raise ValueError("Folder name cannot be empty")
        if not resource_path:
            raise ValueError("Folder path cannot be empty")
        self._name = name
        self._resource_path = resource_path

    @property
    def name(self) -> str:
        return self._name

    @property
    def resource_path(self) -> str:
        return self._resource_path

    def resolve(self, root: str | os.PathLike[str]) -> Path:
        return Path(root).joinpath(*self._resource_path.split("/"))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RFolder):
            return NotImplemented
        return (self._name, self._resource_path) == (other._name, other._resource_path)

    def __hash__(self) -> int:
        return hash(("RFolder", self._name, self._resource_path))

    def __repr__(self) -> str:
        return f"RFolder({self._name!r}, {self._resource_path!r})"

    def __str__(self) -> str:
        return self._resource_path


__all__ = ["RFile", "RFolder", "ResourceNamespace"]
