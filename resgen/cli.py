"""CLI entrypoints for resgen commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List

from .config import apply_overrides, load_config
from .emitter import COLLISION_POLICIES
from .errors import ResgenError
from .generator import Generator
from .logging import configure_logging
from .models import ResourceNode
from .tree_builder import ResourceTreeBuilder


def _add_logging_options(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    # Subcommands repeat the options with SUPPRESS so a value given before the
    # subcommand is not reset by the subparser defaults.
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS if suppress_default else False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=argparse.SUPPRESS if suppress_default else None,
        help="Also append log records to this file.",
    )


def _add_project_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the project root holding .resgen.yml (defaults to current directory).",
    )
    parser.add_argument(
        "--resources-dir",
        help="Resource directory to scan, relative to the project root.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="resgen",
        description="Generate typed accessors that mirror a resource directory.",
    )
    _add_logging_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Scan the resource directory and write the accessor module.",
    )
    _add_logging_options(generate_parser, suppress_default=True)
    _add_project_options(generate_parser)
    generate_parser.add_argument("--package-name", help="Dotted package for the module.")
    generate_parser.add_argument("--container-name", help="Name of the top-level class.")
    generate_parser.add_argument("--module-name", help="File stem of the generated module.")
    generate_parser.add_argument(
        "--output-dir",
        help="Base source directory to write into, relative to the project root.",
    )
    generate_parser.add_argument(
        "--collision-policy",
        choices=COLLISION_POLICIES,
        help="How to handle sibling names that map to the same identifier.",
    )
    mode = generate_parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the generated module instead of writing it.",
    )
    mode.add_argument(
        "--check",
        action="store_true",
        help="Exit with status 1 when the module on disk is out of date.",
    )

    tree_parser = subparsers.add_parser(
        "tree",
        help="Print the resource tree as it will be mirrored.",
    )
    _add_logging_options(tree_parser, suppress_default=True)
    _add_project_options(tree_parser)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for resgen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        configure_logging(verbose=bool(args.verbose), log_file=args.log_file)
    except OSError as exc:
        parser.exit(1, f"resgen: cannot open log file {args.log_file}: {exc}\n")

    if args.command == "generate":
        overrides = {
            "resources_dir": args.resources_dir,
            "package_name": args.package_name,
            "container_name": args.container_name,
            "module_name": args.module_name,
            "collision_policy": args.collision_policy,
        }
        try:
            result = Generator().run(
                args.path,
                overrides=overrides,
                output_dir=args.output_dir,
                dry_run=bool(args.dry_run),
                check=bool(args.check),
            )
        except ResgenError as exc:
            parser.exit(1, f"resgen generate failed: {exc}\nRun with --verbose for more details.\n")
        rel_path = _relativize(result.path)
        if args.dry_run:
            sys.stdout.write(result.content)
        elif args.check:
            if result.changed:
                parser.exit(1, f"{rel_path} is out of date; run `resgen generate`.\n")
            print(f"{rel_path} is up to date")
        elif result.written:
            print(f"Resource accessors written to {rel_path}")
        else:
            print(f"{rel_path} already up to date")
    elif args.command == "tree":
        try:
            config = load_config(Path(args.path))
            config = apply_overrides(config, resources_dir=args.resources_dir)
            tree = ResourceTreeBuilder(
                follow_symlinks=config.scan.follow_symlinks,
                max_depth=config.scan.max_depth,
            ).build(config.resources_path)
        except ResgenError as exc:
            parser.exit(1, f"resgen tree failed: {exc}\n")
        for line in _render_tree(tree):
            print(line)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _render_tree(node: ResourceNode, depth: int = 0) -> List[str]:
    lines: List[str] = []
    pad = "  " * depth
    for leaf in node.leaves:
        lines.append(f"{pad}{leaf.name}")
    for name, child in node.children.items():
        lines.append(f"{pad}{name}/")
        lines.extend(_render_tree(child, depth + 1))
    return lines


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
