"""Generation driver: load settings, scan resources, render and write the module."""

from __future__ import annotations

import difflib
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

from .config import ResgenConfig, apply_overrides, load_config
from .emitter import EmitOptions, HierarchicalEmitter
from .errors import GenerationError
from .logging import get_logger
from .tree_builder import ResourceTreeBuilder


@dataclass
class GenerationResult:
    """Outcome of a generation run."""

    path: Path
    content: str
    changed: bool
    written: bool
    leaf_count: int
    folder_count: int
    diff: str = ""


class Generator:
    """Coordinates the tree builder and emitter for one project."""

    def __init__(
        self,
        *,
        builder: ResourceTreeBuilder | None = None,
        emitter: HierarchicalEmitter | None = None,
    ) -> None:
        self._builder = builder
        self._emitter = emitter
        self.logger = get_logger("generator")

    def run(
        self,
        path: str | os.PathLike[str],
        *,
        overrides: Mapping[str, Any] | None = None,
        output_dir: str | os.PathLike[str] | None = None,
        dry_run: bool = False,
        check: bool = False,
    ) -> GenerationResult:
        """Generate the accessor module for the project rooted at ``path``.

        ``dry_run`` and ``check`` render without touching the filesystem; the result's
        ``changed`` flag tells whether the module on disk differs from the rendering.
        """
        project_root = Path(path).expanduser().resolve()
        config = load_config(project_root)
        if overrides:
            config = apply_overrides(config, **overrides)

        base_dir = (
            (config.root / Path(output_dir).expanduser()).resolve()
            if output_dir
            else config.output_base_path
        )
        target = base_dir.joinpath(*config.package_parts, f"{config.module_name}.py")
        self.logger.info("Generating resource accessors for %s", config.resources_path)

        tree = self._resolve_builder(config).build(config.resources_path)
        options = EmitOptions(
            header=config.header if config.header is not None else _default_header(config),
            collision_policy=config.naming.collision_policy,
        )
        content = self._resolve_emitter(config).emit(tree, config.container_name, options)

        existing = self._read_existing(target)
        changed = existing != content
        result = GenerationResult(
            path=target,
            content=content,
            changed=changed,
            written=False,
            leaf_count=tree.leaf_count(),
            folder_count=tree.folder_count(),
            diff=_render_diff(existing or "", content, target.name) if changed else "",
        )

        if dry_run or check:
            self.logger.info(
                "%s completed; %s not written", "Check" if check else "Dry-run", target
            )
            return result
        if not changed:
            self.logger.info("%s is up to date; skipping write", target)
            return result

        self._ensure_package(base_dir, config.package_parts)
        self._write_atomic(target, content)
        result.written = True
        self.logger.info(
            "Generated %s (%d files, %d folders)",
            target,
            result.leaf_count,
            result.folder_count,
        )
        return result

    def _resolve_builder(self, config: ResgenConfig) -> ResourceTreeBuilder:
        if self._builder is not None:
            return self._builder
        return ResourceTreeBuilder(
            follow_symlinks=config.scan.follow_symlinks,
            max_depth=config.scan.max_depth,
        )

    def _resolve_emitter(self, config: ResgenConfig) -> HierarchicalEmitter:
        if self._emitter is not None:
            return self._emitter
        return HierarchicalEmitter(config.templates_path)

    def _read_existing(self, target: Path) -> Optional[str]:
        try:
            return target.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise GenerationError(f"Failed to read existing module {target}: {exc}") from exc

    def _ensure_package(self, base_dir: Path, package_parts: Sequence[str]) -> None:
        """Create the package directories, each with an ``__init__.py`` when missing."""
        try:
            base_dir.mkdir(parents=True, exist_ok=True)
            current = base_dir
            for part in package_parts:
                current = current / part
                current.mkdir(exist_ok=True)
                init_file = current / "__init__.py"
                if not init_file.exists():
                    init_file.write_text("", encoding="utf-8")
                    self.logger.debug("Created package marker %s", init_file)
        except OSError as exc:
            raise GenerationError(f"Failed to create output directory {base_dir}: {exc}") from exc

    def _write_atomic(self, target: Path, content: str) -> None:
        tmp = target.with_name(target.name + ".tmp")
        try:
            tmp.write_text(content, encoding="utf-8")
            os.replace(tmp, target)
        except OSError as exc:
            tmp.unlink(missing_ok=True)
            raise GenerationError(f"Failed to write {target}: {exc}") from exc


def _default_header(config: ResgenConfig) -> str:
    package = config.package_name or "(top level)"
    return (
        f"# Generated by resgen from '{config.resources_dir.as_posix()}' into package '{package}'.\n"
        "# Do not edit by hand; rerun `resgen generate` instead."
    )


def _render_diff(original: str, updated: str, name: str) -> str:
    diff = difflib.unified_diff(
        original.splitlines(keepends=True),
        updated.splitlines(keepends=True),
        fromfile=f"{name} (current)",
        tofile=f"{name} (generated)",
    )
    return "".join(diff)


__all__ = ["GenerationResult", "Generator"]
