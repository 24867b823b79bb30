"""Configuration loading for codecrumbs (.codecrumbs.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".codecrumbs.yml"

FORMAT_MARKDOWN = "markdown"
FORMAT_JSON = "json"
OUTPUT_FORMATS = (FORMAT_MARKDOWN, FORMAT_JSON)


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class CrumbsConfig:
    """Represents the settings defined in .codecrumbs.yml."""

    root: Path
    project: Optional[str] = None
    entry: Optional[str] = None
    source_prefix: str = ""
    marker: Optional[str] = None
    format: str = FORMAT_MARKDOWN
    output: Optional[Path] = None
    include: List[str] = field(default_factory=list)
    exclude: List[str] = field(default_factory=list)

    @property
    def project_name(self) -> str:
        return self.project or self.root.name or "Project"

    def merged(self, **overrides: Any) -> "CrumbsConfig":
        """Return a copy where every non-empty override replaces the file value."""
        values = {key: value for key, value in overrides.items() if value not in (None, [], "")}
        if "output" in values:
            values["output"] = Path(values["output"])
        return replace(self, **values)


def load_config(config_path: Path) -> CrumbsConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return CrumbsConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    output_format = (_as_str(data.get("format")) or FORMAT_MARKDOWN).lower()
    if output_format not in OUTPUT_FORMATS:
        raise ConfigError(
            f"Unsupported output format '{output_format}' in {CONFIG_FILENAME}"
        )

    output = _as_str(data.get("output"))

    return CrumbsConfig(
        root=root,
        project=_as_str(data.get("project")),
        entry=_as_str(data.get("entry")),
        source_prefix=_as_str(data.get("source_prefix")) or "",
        marker=_as_str(data.get("marker")),
        format=output_format,
        output=root / output if output else None,
        include=_as_str_list(data.get("include")),
        exclude=_as_str_list(data.get("exclude")),
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "CrumbsConfig",
    "FORMAT_JSON",
    "FORMAT_MARKDOWN",
    "OUTPUT_FORMATS",
    "load_config",
]
