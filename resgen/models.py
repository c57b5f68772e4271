"""Core data models shared across resgen components."""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List


@dataclass(frozen=True)
class ResourceLeaf:
    """A single resource file and its slash-separated path from the scan root."""

    name: str
    relative_path: str


@dataclass
class ResourceNode:
    """A resource folder with its sub-folders and files in discovery order."""

    name: str = ""
    relative_path: str = ""
    children: Dict[str, "ResourceNode"] = field(default_factory=dict)
    leaves: List[ResourceLeaf] = field(default_factory=list)

    def child_path(self, name: str) -> str:
        return f"{self.relative_path}/{name}" if self.relative_path else name

    def is_empty(self) -> bool:
        return not self.children and not self.leaves

    def walk(self) -> Iterator["ResourceNode"]:
        """Yield this node and every descendant folder, depth-first in discovery order."""
        yield self
        for child in self.children.values():
            yield from child.walk()

    def leaf_count(self) -> int:
        return sum(len(node.leaves) for node in self.walk())

    def folder_count(self) -> int:
        # The root itself is the scan directory, not a resource folder.
        return sum(1 for _ in self.walk()) - 1
