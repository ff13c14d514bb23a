"""Configuration and data models for the sync system."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from ..errors import ConfigurationError
from .naming import (
    FileNamingFromFormat,
    Format,
    NamingStrategy,
    default_folder_naming,
    format_from_name,
    naming_strategy_from_dict,
    naming_strategy_to_dict,
)

DEFAULT_CONFIG_FILENAME = "sentiary.yaml"
DEFAULT_CACHE_FILE = "build/sentiary/last-modified"
DEFAULT_PROJECT_INFO_FILE = "build/sentiary/project-info.json"


def _resolve_path(base_dir: Path, value: str | Path) -> Path:
    """Resolve a configured path relative to the config file's directory."""
    path = Path(value).expanduser()
    return path if path.is_absolute() else base_dir / path


def _as_int(value: Any, key: str) -> int:
    """Convert a numeric setting, reporting bad values as configuration errors."""
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"'{key}' must be an integer, got {value!r}") from e


@dataclass(frozen=True)
class LanguageOverride:
    """A language that derives its content from another language.

    The override's name is its key in ``SyncConfig.language_overrides``.
    """

    name: str
    fallback_to: str | None = None  # Language to copy content from
    fetch: bool = True  # False removes the language from the output entirely

    @classmethod
    def from_dict(cls, name: str, data: dict[str, Any] | None) -> "LanguageOverride":
        """Create from dictionary."""
        data = data or {}
        return cls(
            name=name,
            fallback_to=data.get("fallback_to"),
            fetch=data.get("fetch", True),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for YAML serialization."""
        data: dict[str, Any] = {}
        if self.fallback_to is not None:
            data["fallback_to"] = self.fallback_to
        if not self.fetch:
            data["fetch"] = False
        return data


@dataclass(frozen=True)
class OutputTarget:
    """One exported tree of localization files, in a single format."""

    name: str
    format: Format
    output_dir: Path
    folder_naming: NamingStrategy = default_folder_naming
    file_naming: NamingStrategy | None = None  # Defaults to the format's file name

    def __post_init__(self) -> None:
        if self.file_naming is None:
            object.__setattr__(self, "file_naming", FileNamingFromFormat(self.format))

    @classmethod
    def from_dict(cls, name: str, data: dict[str, Any], base_dir: Path) -> "OutputTarget":
        """Create from dictionary."""
        if "format" not in data or "output_dir" not in data:
            raise ConfigurationError(f"Output '{name}' requires 'format' and 'output_dir'")

        fmt = format_from_name(data["format"])
        return cls(
            name=name,
            format=fmt,
            output_dir=_resolve_path(base_dir, data["output_dir"]),
            folder_naming=naming_strategy_from_dict(data.get("folder_naming"), fmt, "folder"),
            file_naming=naming_strategy_from_dict(data.get("file_naming"), fmt, "file"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for YAML serialization."""
        return {
            "format": self.format.api_name,
            "output_dir": str(self.output_dir),
            "folder_naming": naming_strategy_to_dict(self.folder_naming),
            "file_naming": naming_strategy_to_dict(self.file_naming),  # type: ignore[arg-type]
        }


@dataclass(frozen=True)
class CacheConfiguration:
    """Cache policy for skipping downloads when nothing changed remotely."""

    cache_file: Path
    enabled: bool = True


@dataclass
class SyncSettings:
    """Sync operation settings."""

    max_workers: int = 4
    verbose: bool = False
    project_info_file: Path = Path(DEFAULT_PROJECT_INFO_FILE)


@dataclass
class SyncConfig:
    """Main configuration for the sync system.

    Credentials are not part of this file; see ``SentiaryAuth``.
    """

    default_language: str = "en-US"
    disabled_languages: frozenset[str] = frozenset()
    language_overrides: dict[str, LanguageOverride] = field(default_factory=dict)
    outputs: dict[str, OutputTarget] = field(default_factory=dict)
    caching: CacheConfiguration = field(
        default_factory=lambda: CacheConfiguration(cache_file=Path(DEFAULT_CACHE_FILE))
    )
    settings: SyncSettings = field(default_factory=SyncSettings)
    base_url: str | None = None
    project_id: str | None = None
    request_timeout_millis: int | None = None  # Falls back to SENTIARY_REQUEST_TIMEOUT_MILLIS

    def validate(self) -> None:
        """Check invariants that span several entries.

        Raises:
            ConfigurationError: If two outputs share a directory
        """
        seen: dict[Path, str] = {}
        for target in self.outputs.values():
            key = target.output_dir.resolve()
            if key in seen:
                raise ConfigurationError(
                    f"Outputs '{seen[key]}' and '{target.name}' share the output directory {target.output_dir}"
                )
            seen[key] = target.name

        for name, override in self.language_overrides.items():
            if override.name != name:
                raise ConfigurationError(f"Override key '{name}' does not match its name '{override.name}'")

    @classmethod
    def load(cls, config_path: Path) -> "SyncConfig":
        """Load configuration from YAML file."""
        config_path = Path(config_path)
        base_dir = config_path.resolve().parent

        try:
            with open(config_path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Expected a mapping at the top of {config_path}")

        overrides = {
            name: LanguageOverride.from_dict(name, override_data)
            for name, override_data in (data.get("language_overrides") or {}).items()
        }

        outputs = {
            name: OutputTarget.from_dict(name, output_data or {}, base_dir)
            for name, output_data in (data.get("outputs") or {}).items()
        }

        caching_data = data.get("caching") or {}
        caching = CacheConfiguration(
            cache_file=_resolve_path(base_dir, caching_data.get("cache_file", DEFAULT_CACHE_FILE)),
            enabled=caching_data.get("enabled", True),
        )

        settings_data = data.get("settings") or {}
        settings = SyncSettings(
            max_workers=_as_int(settings_data.get("max_workers", 4), "max_workers"),
            verbose=settings_data.get("verbose", False),
            project_info_file=_resolve_path(
                base_dir, settings_data.get("project_info_file", DEFAULT_PROJECT_INFO_FILE)
            ),
        )

        config = cls(
            default_language=data.get("default_language", "en-US"),
            disabled_languages=frozenset(data.get("disabled_languages") or []),
            language_overrides=overrides,
            outputs=outputs,
            caching=caching,
            settings=settings,
            base_url=data.get("base_url"),
            project_id=data.get("project_id"),
            request_timeout_millis=(
                _as_int(data["request_timeout_millis"], "request_timeout_millis")
                if data.get("request_timeout_millis") is not None
                else None
            ),
        )
        config.validate()
        return config

    def save(self, config_path: Path) -> None:
        """Save configuration to YAML file."""
        data: dict[str, Any] = {}

        if self.base_url:
            data["base_url"] = self.base_url
        if self.project_id:
            data["project_id"] = self.project_id

        data["default_language"] = self.default_language
        if self.request_timeout_millis is not None:
            data["request_timeout_millis"] = self.request_timeout_millis

        if self.disabled_languages:
            data["disabled_languages"] = sorted(self.disabled_languages)

        if self.language_overrides:
            data["language_overrides"] = {
                name: override.to_dict() for name, override in self.language_overrides.items()
            }

        data["outputs"] = {name: target.to_dict() for name, target in self.outputs.items()}

        data["caching"] = {
            "enabled": self.caching.enabled,
            "cache_file": str(self.caching.cache_file),
        }

        data["settings"] = {
            "max_workers": self.settings.max_workers,
            "verbose": self.settings.verbose,
            "project_info_file": str(self.settings.project_info_file),
        }

        with open(config_path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)
