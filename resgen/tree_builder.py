"""Resource directory scanning into an ordered ResourceNode tree."""

from __future__ import annotations

import os
from pathlib import Path
from typing import FrozenSet

from .errors import ScanError, SymlinkCycleError
from .logging import get_logger
from .models import ResourceLeaf, ResourceNode


class ResourceTreeBuilder:
    """Walks a resource directory and mirrors it as folders and files.

    Entries are kept in the order the filesystem enumerates them; nothing is sorted,
    filtered or hidden. Symbolic links are followed unless ``follow_symlinks`` is off,
    in which case they are skipped. A link resolving to one of its own ancestors raises
    ``SymlinkCycleError``; ``max_depth`` optionally bounds folder nesting.
    """

    def __init__(self, *, follow_symlinks: bool = True, max_depth: int | None = None) -> None:
        if max_depth is not None and max_depth < 0:
            raise ValueError("max_depth must be zero or positive")
        self.follow_symlinks = follow_symlinks
        self.max_depth = max_depth
        self.logger = get_logger("tree_builder")

    def build(self, root: str | os.PathLike[str]) -> ResourceNode:
        """Return the tree for ``root``; a missing root yields an empty tree."""
        root_path = Path(root).expanduser()
        tree = ResourceNode()
        if not root_path.is_dir():
            self.logger.warning(
                "Resource directory %s does not exist or is not a directory; generating an empty tree",
                root_path,
            )
            return tree

        self.logger.debug("Scanning resources under %s", root_path)
        self._scan(root_path, tree, frozenset({os.path.realpath(root_path)}), depth=0)
        self.logger.debug(
            "Discovered %d files in %d folders", tree.leaf_count(), tree.folder_count()
        )
        return tree

    def _scan(
        self,
        directory: Path,
        node: ResourceNode,
        ancestors: FrozenSet[str],
        *,
        depth: int,
    ) -> None:
        try:
            with os.scandir(directory) as iterator:
                entries = list(iterator)
        except OSError as exc:
            raise ScanError(f"Failed to read resource directory '{directory}': {exc}") from exc

        for entry in entries:
            try:
                is_link = entry.is_symlink()
                if is_link and not self.follow_symlinks:
                    self.logger.debug("Skipping symbolic link %s", entry.path)
                    continue
                is_file = entry.is_file()
                is_dir = not is_file and entry.is_dir()
            except OSError as exc:
                raise ScanError(f"Failed to inspect '{entry.path}': {exc}") from exc

            relative_path = node.child_path(entry.name)
            if is_file:
                node.leaves.append(ResourceLeaf(name=entry.name, relative_path=relative_path))
            elif is_dir:
                real_path = os.path.realpath(entry.path)
                if real_path in ancestors:
                    raise SymlinkCycleError(relative_path, real_path)
                if self.max_depth is not None and depth + 1 > self.max_depth:
                    raise ScanError(
                        f"Folder '{relative_path}' exceeds the maximum scan depth of {self.max_depth}"
                    )
                child = ResourceNode(name=entry.name, relative_path=relative_path)
                node.children[entry.name] = child
                self._scan(Path(entry.path), child, ancestors | {real_path}, depth=depth + 1)
            else:
                self.logger.debug("Skipping non-regular entry %s", entry.path)


__all__ = ["ResourceTreeBuilder"]
