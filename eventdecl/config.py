"""Configuration loading for eventdecl (.eventdecl.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

import yaml

CONFIG_FILENAME = ".eventdecl.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class OutputConfig:
    """Where the declaration document is written and what it references."""

    directory: Path
    filename: str = "events.d.ts"
    references: List[str] = field(default_factory=lambda: ["globals.d.ts", "registries.d.ts"])

    @property
    def path(self) -> Path:
        return self.directory / self.filename


@dataclass
class EmitConfig:
    """Rendering knobs for declaration blocks."""

    indent: int = 4
    default_extra_type: str = "string"
    namespace: Optional[str] = "Internal"


@dataclass
class OverrideConfig:
    """Members served by the built-in override providers, as ``Group.member``."""

    registry: Optional[str] = "StartupEvents.registry"
    tags: Optional[str] = "ServerEvents.tags"


@dataclass
class EventDeclConfig:
    """Represents the settings defined in .eventdecl.yml."""

    root: Path
    output: OutputConfig
    emit: EmitConfig = field(default_factory=EmitConfig)
    overrides: OverrideConfig = field(default_factory=OverrideConfig)

    @classmethod
    def defaults(cls, root: Path) -> "EventDeclConfig":
        return cls(root=root, output=OutputConfig(directory=root / "generated"))


def load_config(config_path: Path) -> EventDeclConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(Path(config_path))
    root = config_file.parent.resolve()

    if not config_file.exists():
        return EventDeclConfig.defaults(root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = EventDeclConfig.defaults(root)

    output_data = _as_dict(data.get("output"))
    if output_data:
        directory = _as_str(output_data.get("directory"))
        if directory:
            config.output.directory = (root / directory).resolve()
        filename = _as_str(output_data.get("filename"))
        if filename:
            config.output.filename = filename
        if "references" in output_data:
            config.output.references = _as_str_list(output_data.get("references"))

    emit_data = _as_dict(data.get("emit"))
    if emit_data:
        if "indent" in emit_data:
            indent = _as_int(emit_data.get("indent"))
            if indent is None or indent < 0:
                raise ConfigError("emit.indent must be a non-negative integer")
            config.emit.indent = indent
        extra_type = _require_str(
            emit_data.get("default_extra_type"), "emit.default_extra_type"
        )
        if extra_type:
            config.emit.default_extra_type = extra_type
        if "namespace" in emit_data:
            namespace = _require_str(emit_data.get("namespace"), "emit.namespace")
            config.emit.namespace = namespace or None

    override_data = _as_dict(data.get("overrides"))
    if override_data:
        if "registry" in override_data:
            config.overrides.registry = _as_member_key(override_data.get("registry"))
        if "tags" in override_data:
            config.overrides.tags = _as_member_key(override_data.get("tags"))

    return config


def split_member_key(key: str) -> Tuple[str, str]:
    """Split ``Group.member`` into its two parts."""
    group, _, member = key.partition(".")
    if not group or not member:
        raise ConfigError(f"Override target must look like 'Group.member', got '{key}'")
    return group, member


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_member_key(value: Any) -> Optional[str]:
    key = _as_str(value)
    if not key:
        return None
    split_member_key(key)
    return key


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _require_str(value: Any, label: str) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    raise ConfigError(f"{label} must be a string")


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


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "EmitConfig",
    "EventDeclConfig",
    "OutputConfig",
    "OverrideConfig",
    "load_config",
    "split_member_key",
]
