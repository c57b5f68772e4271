"""Configuration loading for resgen (.resgen.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .emitter import COLLISION_POLICIES, DEFAULT_CONTAINER_NAME
from .errors import ConfigurationError
from .naming import is_valid_identifier

CONFIG_FILENAME = ".resgen.yml"


@dataclass
class ScanConfig:
    """Directory traversal settings."""

    follow_symlinks: bool = True
    max_depth: Optional[int] = None


@dataclass
class NamingConfig:
    """Identifier policy for generated members and classes."""

    collision_policy: str = "error"


@dataclass
class ResgenConfig:
    """Represents the settings defined in .resgen.yml.

    Directory fields are relative to ``root`` unless given as absolute paths.
    """

    root: Path
    resources_dir: Path = Path("resources")
    package_name: str = "generated"
    container_name: str = DEFAULT_CONTAINER_NAME
    module_name: str = "r"
    keep_in_project_files: bool = True
    output_src_dir: Path = Path("src")
    output_target_dir: Path = Path("build/generated/resgen")
    header: Optional[str] = None
    templates_dir: Optional[Path] = None
    scan: ScanConfig = field(default_factory=ScanConfig)
    naming: NamingConfig = field(default_factory=NamingConfig)

    @property
    def resources_path(self) -> Path:
        return self.root / self.resources_dir

    @property
    def output_base_path(self) -> Path:
        base = self.output_src_dir if self.keep_in_project_files else self.output_target_dir
        return self.root / base

    @property
    def package_parts(self) -> list[str]:
        return [part for part in self.package_name.split(".") if part]

    @property
    def templates_path(self) -> Optional[Path]:
        return self.root / self.templates_dir if self.templates_dir else None


def load_config(config_path: Path) -> ResgenConfig:
    """Load configuration from disk, falling back to defaults when the file is absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return ResgenConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigurationError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = ResgenConfig(root=root)
    resources_dir = _as_str(data.get("resources_dir"))
    if resources_dir:
        config.resources_dir = Path(resources_dir)
    package_name = _as_str(data.get("package_name"))
    if package_name is not None:
        config.package_name = package_name
    container_name = _as_str(data.get("container_name"))
    if container_name:
        config.container_name = container_name
    module_name = _as_str(data.get("module_name"))
    if module_name:
        config.module_name = module_name
    keep = _as_bool(data.get("keep_in_project_files"))
    if keep is not None:
        config.keep_in_project_files = keep
    output_src_dir = _as_str(data.get("output_src_dir"))
    if output_src_dir:
        config.output_src_dir = Path(output_src_dir)
    output_target_dir = _as_str(data.get("output_target_dir"))
    if output_target_dir:
        config.output_target_dir = Path(output_target_dir)
    config.header = _as_str(data.get("header"))
    templates_dir = _as_str(data.get("templates_dir"))
    config.templates_dir = Path(templates_dir) if templates_dir else None

    scan_data = _as_dict(data.get("scan"))
    if scan_data:
        follow = _as_bool(scan_data.get("follow_symlinks"))
        if follow is not None:
            config.scan.follow_symlinks = follow
        config.scan.max_depth = _as_int(scan_data.get("max_depth"))

    naming_data = _as_dict(data.get("naming"))
    if naming_data:
        policy = _as_str(naming_data.get("collision_policy"))
        if policy:
            config.naming.collision_policy = policy.strip().lower()

    validate_config(config)
    return config


def apply_overrides(config: ResgenConfig, **overrides: Any) -> ResgenConfig:
    """Return a copy of ``config`` with non-``None`` command-line overrides applied."""
    values = {key: value for key, value in overrides.items() if value is not None}
    policy = values.pop("collision_policy", None)
    for key in ("resources_dir", "templates_dir"):
        if key in values:
            values[key] = Path(values[key])
    updated = replace(config, **values)
    if policy is not None:
        updated.naming = replace(config.naming, collision_policy=policy)
    validate_config(updated)
    return updated


def validate_config(config: ResgenConfig) -> None:
    """Raise ConfigurationError when a setting would produce an unusable module."""
    if not is_valid_identifier(config.container_name):
        raise ConfigurationError(
            f"container_name {config.container_name!r} is not a valid Python identifier"
        )
    if not is_valid_identifier(config.module_name):
        raise ConfigurationError(
            f"module_name {config.module_name!r} is not a valid Python module name"
        )
    if config.package_name and not all(
        is_valid_identifier(part) for part in config.package_name.split(".")
    ):
        raise ConfigurationError(
            f"package_name {config.package_name!r} is not a dotted Python package name"
        )
    if config.naming.collision_policy not in COLLISION_POLICIES:
        raise ConfigurationError(
            f"naming.collision_policy must be one of {', '.join(COLLISION_POLICIES)}, "
            f"got {config.naming.collision_policy!r}"
        )
    if config.scan.max_depth is not None and config.scan.max_depth < 0:
        raise ConfigurationError("scan.max_depth must be zero or positive")


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


__all__ = [
    "CONFIG_FILENAME",
    "NamingConfig",
    "ResgenConfig",
    "ScanConfig",
    "apply_overrides",
    "load_config",
    "validate_config",
]
