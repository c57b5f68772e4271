"""Renders a resource tree as a Python module of nested namespace classes."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Sequence, Tuple

from jinja2 import Environment, FileSystemLoader

from .errors import ConfigurationError, NamingCollisionError
from .logging import get_logger
from .models import ResourceNode
from .naming import is_valid_identifier, to_container_identifier, to_member_identifier

DEFAULT_CONTAINER_NAME = "R"
DEFAULT_IMPORTS = "from resgen.runtime import RFile, RFolder, ResourceNamespace"
MODULE_TEMPLATE = "module.py.j2"
SELF_ATTRIBUTE = "_self"
COLLISION_POLICIES = ("error", "suffix")

# Names every generated class body must leave untouched.
_RESERVED_NAMES = (SELF_ATTRIBUTE, "RFile", "RFolder", "ResourceNamespace")


@dataclass
class EmitOptions:
    """Boilerplate and naming policy applied around the emitted tree."""

    header: str = ""
    imports: str = DEFAULT_IMPORTS
    collision_policy: str = "error"
    indent: str = "    "


class HierarchicalEmitter:
    """Turns a ResourceNode tree into module text, one class per folder.

    Files become ``RFile`` attributes, folders become nested ``ResourceNamespace``
    subclasses holding a ``_self`` ``RFolder`` value. Output depends only on the tree
    and the options, so unchanged input renders byte-identical text.
    """

    def __init__(self, templates_dir: Path | None = None) -> None:
        self.templates_dir = templates_dir
        self._env = self._create_env(templates_dir)
        self.logger = get_logger("emitter")

    def emit(
        self,
        root: ResourceNode,
        container_name: str = DEFAULT_CONTAINER_NAME,
        options: EmitOptions | None = None,
    ) -> str:
        options = options or EmitOptions()
        if not is_valid_identifier(container_name):
            raise ConfigurationError(
                f"Container name {container_name!r} is not a valid Python identifier"
            )
        if options.collision_policy not in COLLISION_POLICIES:
            raise ConfigurationError(
                f"Unknown collision policy {options.collision_policy!r}; "
                f"expected one of {', '.join(COLLISION_POLICIES)}"
            )

        lines: List[str] = []
        self._render_node(root, 1, lines, options, include_self=False)
        while lines and not lines[0]:
            lines.pop(0)

        template = self._env.get_template(MODULE_TEMPLATE)
        rendered = template.render(
            header=options.header.rstrip("\n"),
            imports=options.imports.strip(),
            container_name=container_name,
            body="\n".join(lines),
        )
        return rendered.rstrip() + "\n"

    def _render_node(
        self,
        node: ResourceNode,
        depth: int,
        lines: List[str],
        options: EmitOptions,
        *,
        include_self: bool,
    ) -> None:
        pad = options.indent * depth
        leaf_names, child_names = self._assign_identifiers(node, options.collision_policy)

        if include_self:
            lines.append(
                f"{pad}{SELF_ATTRIBUTE} = RFolder({node.name!r}, {node.relative_path!r})"
            )
        for leaf, identifier in zip(node.leaves, leaf_names):
            lines.append(f"{pad}{identifier} = RFile({leaf.relative_path!r})")
        for child, identifier in zip(node.children.values(), child_names):
            lines.append("")
            lines.append(f"{pad}class {identifier}(ResourceNamespace):")
            self._render_node(child, depth + 1, lines, options, include_self=True)

    def _assign_identifiers(
        self, node: ResourceNode, policy: str
    ) -> Tuple[List[str], List[str]]:
        """Return identifiers for leaves and children, resolving sibling clashes.

        Leaves and nested classes share one class namespace, so both are checked
        against each other and against the reserved names, in emission order.
        """
        taken: Dict[str, str | None] = {name: None for name in _RESERVED_NAMES}

        def assign(raw_names: Sequence[str], sanitize: Callable[[str], str]) -> List[str]:
            assigned: List[str] = []
            for raw_name in raw_names:
                identifier = sanitize(raw_name)
                if identifier in taken:
                    previous = taken[identifier]
                    if policy == "error":
                        raise NamingCollisionError(
                            node.relative_path,
                            identifier,
                            [raw_name] if previous is None else [previous, raw_name],
                        )
                    identifier = self._next_free(identifier, taken)
                    self.logger.warning(
                        "Renamed '%s' in %s to '%s' to avoid an identifier clash",
                        raw_name,
                        node.relative_path or "the resource root",
                        identifier,
                    )
                taken[identifier] = raw_name
                assigned.append(identifier)
            return assigned

        leaf_names = assign([leaf.name for leaf in node.leaves], to_member_identifier)
        child_names = assign(list(node.children), to_container_identifier)
        return leaf_names, child_names

    @staticmethod
    def _next_free(identifier: str, taken: Dict[str, str | None]) -> str:
        counter = 2
        while f"{identifier}_{counter}" in taken:
            counter += 1
        return f"{identifier}_{counter}"

    @staticmethod
    def _create_env(templates_dir: Path | None) -> Environment:
        directories = []
        if templates_dir:
            directories.append(str(templates_dir))
        default_dir = str(Path(__file__).with_name("templates"))
        if default_dir not in directories:
            directories.append(default_dir)
        loader = FileSystemLoader(directories)
        return Environment(loader=loader, autoescape=False, trim_blocks=True, lstrip_blocks=True)


__all__ = [
    "COLLISION_POLICIES",
    "DEFAULT_CONTAINER_NAME",
    "DEFAULT_IMPORTS",
    "EmitOptions",
    "HierarchicalEmitter",
    "SELF_ATTRIBUTE",
]
