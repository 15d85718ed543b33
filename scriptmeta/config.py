"""Configuration management for scriptmeta.toml."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomli
import tomli_w

from scriptmeta.constants import (
    CONFIG_FILENAME,
    DEFAULT_EXCLUDES,
    DEFAULT_SCRIPT_ENGINE_MAPPINGS,
    DEFAULT_SEARCH_PATHS,
    DEFAULT_SOURCE_DIRECTORIES,
)
from scriptmeta.exceptions import ConfigNotFoundError, ConfigParseError, ConfigValidationError


def _string_list(data: dict[str, Any], key: str, default: tuple[str, ...]) -> list[str]:
    value = data.get(key, list(default))
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ConfigValidationError(f"'{key}' must be a list of strings")
    return [item.strip() for item in value if item.strip()]


@dataclass
class ScanConfig:
    """Configuration from scriptmeta.toml.

    Example:
        search_paths = ["/libs", "/apps"]
        missing_requirements_optional = true

        [script_engines]
        ftl = "freemarker"
    """

    path: Path | None = None
    search_paths: list[str] = field(default_factory=lambda: list(DEFAULT_SEARCH_PATHS))
    script_engines: dict[str, str] = field(default_factory=dict)  # merged over the defaults
    missing_requirements_optional: bool = True
    source_directories: list[str] = field(default_factory=lambda: list(DEFAULT_SOURCE_DIRECTORIES))
    includes: list[str] = field(default_factory=list)
    excludes: list[str] = field(default_factory=list)

    @property
    def script_engine_mappings(self) -> dict[str, str]:
        """Default extension to script engine mappings with the configured overrides applied."""
        mappings = dict(DEFAULT_SCRIPT_ENGINE_MAPPINGS)
        mappings.update(self.script_engines)
        return mappings

    @property
    def effective_search_paths(self) -> list[str]:
        return self.search_paths or list(DEFAULT_SEARCH_PATHS)

    @property
    def effective_excludes(self) -> list[str]:
        return self.excludes or list(DEFAULT_EXCLUDES)

    @classmethod
    def load(cls, path: Path) -> "ScanConfig":
        """Load configuration from scriptmeta.toml.

        Args:
            path: Path to the scriptmeta.toml file

        Returns:
            Parsed ScanConfig

        Raises:
            ConfigNotFoundError: If the file doesn't exist
            ConfigParseError: If the file cannot be parsed
            ConfigValidationError: If the configuration is invalid
        """
        if not path.exists():
            raise ConfigNotFoundError(f"Config file not found: {path}")

        try:
            with open(path, "rb") as f:
                data = tomli.load(f)
        except tomli.TOMLDecodeError as e:
            raise ConfigParseError(f"Failed to parse {path}: {e}")

        return cls._from_dict(path, data)

    @classmethod
    def _from_dict(cls, path: Path | None, data: dict[str, Any]) -> "ScanConfig":
        """Create a ScanConfig from a parsed TOML dict."""
        engines = data.get("script_engines", {})
        if not isinstance(engines, dict):
            raise ConfigValidationError(
                f"'script_engines' must be a table, got {type(engines).__name__}"
            )
        for extension, engine in engines.items():
            if not isinstance(engine, str) or not engine.strip():
                raise ConfigValidationError(
                    f"Script engine for extension '{extension}' must be a non-empty string"
                )

        optional = data.get("missing_requirements_optional", True)
        if not isinstance(optional, bool):
            raise ConfigValidationError("'missing_requirements_optional' must be true or false")

        return cls(
            path=path,
            search_paths=_string_list(data, "search_paths", DEFAULT_SEARCH_PATHS),
            script_engines={extension.strip(): engine.strip() for extension, engine in engines.items()},
            missing_requirements_optional=optional,
            source_directories=_string_list(data, "source_directories", DEFAULT_SOURCE_DIRECTORIES),
            includes=_string_list(data, "includes", ()),
            excludes=_string_list(data, "excludes", ()),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a TOML-serializable dict."""
        result: dict[str, Any] = {
            "search_paths": self.search_paths,
            "missing_requirements_optional": self.missing_requirements_optional,
            "source_directories": self.source_directories,
            "includes": self.includes,
            "excludes": self.excludes,
        }
        if self.script_engines:
            result["script_engines"] = dict(self.script_engines)
        return result

    def save(self, path: Path | None = None) -> None:
        """Save configuration to scriptmeta.toml."""
        save_path = path or self.path
        if save_path is None:
            raise ValueError("No path specified for saving config")

        with open(save_path, "wb") as f:
            tomli_w.dump(self.to_dict(), f)
        self.path = save_path


def find_config(start_path: Path | None = None) -> Path | None:
    """Find scriptmeta.toml by walking up from start_path.

    Args:
        start_path: Directory to start from (defaults to cwd)

    Returns:
        Path to scriptmeta.toml if found, None otherwise
    """
    current = (start_path or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        if current.parent == current:
            return None
        current = current.parent


def parse_engine_mapping(value: str) -> tuple[str, str]:
    """Parse an ``extension=engine`` pair.

    Raises:
        ConfigValidationError: If the value is not exactly one non-empty pair
    """
    parts = value.split("=")
    if len(parts) != 2 or not parts[0].strip() or not parts[1].strip():
        raise ConfigValidationError(f"Invalid script engine mapping: {value}")
    return parts[0].strip(), parts[1].strip()
